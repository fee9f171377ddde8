from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional, Union

Id = Union[int, str]


class _Record(BaseModel):
    # dataset rows keep any extra keys so responses echo the JSON files as-is
    model_config = ConfigDict(extra="allow", frozen=True)


class Symptom(_Record):
    id: Id
    name: str


class Condition(_Record):
    id: Id
    name: str


class Recommendation(_Record):
    id: Id
    condition_id: Id


class Resource(_Record):
    id: Id
    type: str


class DiagnosisRequest(BaseModel):
    """Body of POST /api/diagnose. Values of the wrong JSON type count as absent."""
    model_config = ConfigDict(populate_by_name=True)

    selected_symptom_ids: Optional[List[Any]] = Field(default=None, alias="selectedSymptomIds")
    chat_input: Optional[str] = Field(default=None, alias="chatInput")

    @field_validator("selected_symptom_ids", mode="before")
    @classmethod
    def _ids_must_be_list(cls, v):
        return v if isinstance(v, list) else None

    @field_validator("chat_input", mode="before")
    @classmethod
    def _chat_must_be_text(cls, v):
        return v if isinstance(v, str) else None


class StructuredData(BaseModel):
    recommendations: List[Recommendation]
    resources: List[Resource]


class DiagnosisResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ai_response: str = Field(alias="aiResponse")
    structured_data: StructuredData = Field(alias="structuredData")
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None
