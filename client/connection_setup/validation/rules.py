"""
Validation Rules

Side-effect-free field checks. Each rule returns None when the value passes
and a ValidationFailure otherwise.
"""

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from connection_setup.validation.errors import ValidationFailure, ValidationKind

if TYPE_CHECKING:
    from connection_setup.creation.files import UploadedFile

DEFAULT_MAX_FILE_SIZE = 500 * 1024 * 1024
DEFAULT_MIN_PROMPT_LENGTH = 10

Rule = Callable[[], ValidationFailure | None]


def require_name(name: str | None) -> ValidationFailure | None:
    if not (name or "").strip():
        return ValidationFailure(
            field="name", kind=ValidationKind.EMPTY, message="Please add a name"
        )
    return None


def require_dsn(dsn: str | None) -> ValidationFailure | None:
    if not (dsn or "").strip():
        return ValidationFailure(
            field="dsn",
            kind=ValidationKind.EMPTY,
            message="Please enter a dsn for this connection",
        )
    return None


def require_file(file: "UploadedFile | None") -> ValidationFailure | None:
    if file is None:
        return ValidationFailure(
            field="file", kind=ValidationKind.MISSING, message="Please add a file"
        )
    return None


def require_file_size_limit(
    file: "UploadedFile", max_size: int = DEFAULT_MAX_FILE_SIZE
) -> ValidationFailure | None:
    if file.size > max_size:
        limit_mb = max_size // (1024 * 1024)
        return ValidationFailure(
            field="file",
            kind=ValidationKind.TOO_LARGE,
            message=f"File size exceeds {limit_mb}MB limit",
        )
    return None


def require_system_prompt(
    text: str | None, min_length: int = DEFAULT_MIN_PROMPT_LENGTH
) -> ValidationFailure | None:
    """The prompt is trimmed before both checks."""
    prompt = (text or "").strip()
    if not prompt:
        return ValidationFailure(
            field="system_prompt",
            kind=ValidationKind.EMPTY,
            message=(
                "System prompt is required. Please provide instructions "
                "for the AI to understand your database."
            ),
        )
    if len(prompt) < min_length:
        return ValidationFailure(
            field="system_prompt",
            kind=ValidationKind.TOO_SHORT,
            message=(
                f"System prompt should have at least {min_length} characters. "
                "Please provide more detailed instructions."
            ),
        )
    return None


def first_failure(rules: Iterable[Rule]) -> ValidationFailure | None:
    """Run rules in order and stop at the first failure."""
    for rule in rules:
        failure = rule()
        if failure is not None:
            return failure
    return None
