from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContainerVector(BaseModel):
    """Stored embedding of one container's enriched text."""

    container_id: str
    short_id: str | None = None
    name: str = ""
    text: str
    embedding: list[float] = Field(default_factory=list)  # empty when the provider returned nothing
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
