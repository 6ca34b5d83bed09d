"""
Embeddings Router

Triggers the embedding pipeline. The request blocks until the run
finishes; a second request while a run is active gets 409.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.core.services import Services, get_services

router = APIRouter()


class GenerateEmbeddingsRequest(BaseModel):
    batch_size: int = Field(default=5, ge=1)
    clear: bool = True


class GenerateEmbeddingsResponse(BaseModel):
    status: str
    total_vectors: int


@router.post("/generate", response_model=GenerateEmbeddingsResponse)
async def generate_embeddings(
    services: Annotated[Services, Depends(get_services)],
    body: GenerateEmbeddingsRequest | None = None,
):
    """Rebuild container embeddings (full replace unless clear=false)."""
    body = body or GenerateEmbeddingsRequest()
    total = await services.pipeline.run(
        batch_size=body.batch_size,
        clear_existing=body.clear,
    )
    return GenerateEmbeddingsResponse(status="completed", total_vectors=total)
