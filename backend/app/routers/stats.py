from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.core.services import Services, get_services
from app.services.store.base import (
    CONTAINER_VECTORS,
    CONTAINERS,
    QUESTION_INSTANCES,
    VIDEO_INSTANCES,
)

router = APIRouter()


class StatsResponse(BaseModel):
    containers: int
    container_vectors: int
    question_instances: int
    video_instances: int


@router.get("", response_model=StatsResponse)
async def get_stats(services: Annotated[Services, Depends(get_services)]):
    """Document counts per collection."""
    store = services.store
    return StatsResponse(
        containers=await store.count_documents(CONTAINERS),
        container_vectors=await store.count_documents(CONTAINER_VECTORS),
        question_instances=await store.count_documents(QUESTION_INSTANCES),
        video_instances=await store.count_documents(VIDEO_INSTANCES),
    )
