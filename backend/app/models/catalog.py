"""
Catalog documents: learning playlists ("containers") and the question and
video instances they link to.

Field aliases are the keys used by the stored documents.
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _as_id(value):
    return value if value is None else str(value)


def _null_as(default):
    """Stored nulls fall back to the field's default."""
    return BeforeValidator(lambda value: default if value is None else value)


DocumentId = Annotated[str, BeforeValidator(_as_id)]
Count = Annotated[int, _null_as(0)]
Seconds = Annotated[float, _null_as(0)]
Text = Annotated[str, _null_as("")]


class InstanceType(str, Enum):
    QUESTION = "question"
    VIDEO = "video"


class ContentInstance(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str | None = None
    id: DocumentId | None = Field(default=None, alias="_id")


class InstancesSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_questions: Count = Field(default=0, alias="total-questions")
    total_duration_seconds: Seconds = Field(default=0, alias="total-duration-seconds")


class Container(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: DocumentId = Field(alias="_id")
    name: Text = ""
    description: str | None = ""
    short_id: str | None = Field(default=None, alias="short-id")
    content_instances: Annotated[list[ContentInstance], _null_as([])] = Field(
        default_factory=list, alias="content-instances"
    )
    instances_summary: InstancesSummary | None = Field(
        default=None, alias="instances-summary"
    )

    def instance_ids(self, instance_type: InstanceType) -> list[str]:
        """IDs of linked instances of one type, in playlist order."""
        return [
            inst.id
            for inst in self.content_instances
            if inst.type == instance_type.value and inst.id is not None
        ]


class QuestionInstance(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: DocumentId = Field(alias="_id")
    question_text: str | None = Field(default=None, alias="question-text")
    explanation_text: str | None = Field(default=None, alias="explanation-text")


class VideoInstance(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: DocumentId = Field(alias="_id")
    title: str | None = None
