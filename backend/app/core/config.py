from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    service_name: str = "rag-poc"

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "rag_poc"
    mongodb_timeout_ms: int = 30_000  # applies to every driver operation

    # OpenAI
    openai_api_key: str = ""
    openai_embedding_model: str = "text-embedding-3-small"
    openai_chat_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = 60.0
    # Leave unset to take the dimension from the embedding model registry
    embedding_dimensions: int | None = None

    # Vector search (Atlas $vectorSearch)
    vector_index_name: str = "container_vector_index"
    vector_candidate_ratio: int = 20
    vector_min_candidates: int = 100
    min_relevance_score: float = 0.0

    # Retrieval / ingestion defaults
    default_top_k: int = 5
    ingest_batch_size: int = 20

    # Server
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost"]
    server_host: str = "0.0.0.0"
    server_port: int = 8080

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
