"""
RAG Chat Router

One endpoint per retrieval strategy, so the caller always chooses which
one answers:
- POST /api/rag/chat        vector similarity search
- POST /api/rag/naive/chat  LLM keyword search over playlist names
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.core.services import Services, get_services
from app.models.results import NaiveRAGAnswer, RAGAnswer

router = APIRouter()

ServicesDep = Annotated[Services, Depends(get_services)]


class ChatRequest(BaseModel):
    question: str | None = None
    top_k: int = Field(default=5, ge=1, le=50)


@router.post("/chat", response_model=RAGAnswer)
async def chat(body: ChatRequest, services: ServicesDep):
    """Answer a question using vector search over container embeddings."""
    return await services.vector_retriever.query(body.question, top_k=body.top_k)


@router.post("/naive/chat", response_model=NaiveRAGAnswer)
async def naive_chat(body: ChatRequest, services: ServicesDep):
    """Answer a question using LLM-extracted keywords matched against playlist names."""
    return await services.naive_retriever.query(body.question, top_k=body.top_k)
