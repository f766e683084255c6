"""
Validation Errors

Local, pre-submission failures. These never reach the backend.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ValidationKind(str, Enum):
    """Why a field was rejected."""

    EMPTY = "empty"
    TOO_SHORT = "too_short"
    MISSING = "missing"
    TOO_LARGE = "too_large"


class ValidationFailure(BaseModel):
    """A rejected field and the message shown to the user."""

    model_config = ConfigDict(frozen=True)

    field: str
    kind: ValidationKind
    message: str
