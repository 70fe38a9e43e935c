import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ClassificationResult(BaseModel):
    """
    The four extracted fields. An empty string means "not found".
    """

    zip: str = ""
    brand: str = ""
    category: str = ""
    time_pref: str = ""


def _render(value: Any) -> str:
    # Falsy values (None, "", 0, []) collapse to "not found"
    if not value:
        return ""
    if isinstance(value, str):
        return value
    # Numbers, booleans and nested objects keep their JSON spelling
    return json.dumps(value, ensure_ascii=False)


class ExtractionPayload(BaseModel):
    """
    Structural contract for the JSON object returned by the model.
    All four keys must be present; their values are not type-checked.
    """

    model_config = ConfigDict(extra="ignore")

    zip: Any
    brand: Any
    category: Any
    time_pref: Any

    def to_result(self) -> ClassificationResult:
        return ClassificationResult(
            **{name: _render(value) for name, value in self.model_dump().items()}
        )


class FailureKind(str, Enum):
    REMOTE_CALL_FAILURE = "remote_call_failure"
    EMPTY_RESPONSE = "empty_response"
    NO_JSON_FOUND = "no_json_found"
    MALFORMED_JSON = "malformed_json"
    SCHEMA_VIOLATION = "schema_violation"


@dataclass(frozen=True)
class AttemptOutcome(Generic[T]):
    """
    Tagged result of a single attempt: either a value or a failure kind.
    """

    value: Optional[T] = None
    failure: Optional[FailureKind] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "AttemptOutcome[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, failure: FailureKind, reason: str = "") -> "AttemptOutcome[T]":
        return cls(failure=failure, reason=reason)
