from typing import Literal, Optional

from pydantic import BaseModel, Field, StrictStr

from classify_api.core.models import ClassificationResult


class ClassificationRequest(BaseModel):
    """
    DTO for incoming classification requests.
    """
    text: StrictStr = Field(..., min_length=1, description="Free-form text to extract fields from")


class ClassificationResponse(ClassificationResult):
    """
    DTO for the classification result. Every field is always present.
    """


class HealthResponse(BaseModel):
    status: str = "ok"
    mode: Literal["ai", "fallback"]
    provider: Optional[str] = Field(None, description="Active LLM provider, if any")
