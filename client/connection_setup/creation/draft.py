"""
Connection Draft

Form state for a connection that has not been created yet.
"""

import logging
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from connection_setup.connections.schemas import FILE_TYPE_LABELS, DatabaseFileType, SampleName
from connection_setup.creation.files import UploadedFile
from connection_setup.validation.errors import ValidationFailure, ValidationKind
from connection_setup.validation.rules import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MIN_PROMPT_LENGTH,
    first_failure,
    require_dsn,
    require_file,
    require_file_size_limit,
    require_name,
    require_system_prompt,
)

logger = logging.getLogger(__name__)


class UnsetMode(BaseModel):
    """No data source type chosen yet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unset"] = "unset"


class DatabaseMode(BaseModel):
    """Network database reached through a DSN."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["database"] = "database"
    dsn: str = ""


class FileMode(BaseModel):
    """Uploaded data file."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    type: DatabaseFileType
    file: UploadedFile | None = None

    @property
    def label(self) -> str:
        return FILE_TYPE_LABELS[self.type]


class SampleMode(BaseModel):
    """Bundled sample dataset."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["sample"] = "sample"
    sample: SampleName


DraftMode = Annotated[
    UnsetMode | DatabaseMode | FileMode | SampleMode,
    Field(discriminator="kind"),
]


class ConnectionDraft(BaseModel):
    """Schema for a new connection while the user fills in the form."""

    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    system_prompt: str = ""
    mode: DraftMode = Field(default_factory=UnsetMode)

    def select_database(self) -> None:
        if not isinstance(self.mode, DatabaseMode):
            self.mode = DatabaseMode()

    def set_dsn(self, dsn: str) -> None:
        if not isinstance(self.mode, DatabaseMode):
            raise ValueError("a DSN can only be set in database mode")
        self.mode = DatabaseMode(dsn=dsn)

    def select_file_type(self, type: DatabaseFileType) -> None:
        """Switch to file mode. A file already bound stays bound."""
        file = self.mode.file if isinstance(self.mode, FileMode) else None
        self.mode = FileMode(type=type, file=file)

    def bind_file(self, file: UploadedFile) -> None:
        if not isinstance(self.mode, FileMode):
            raise ValueError("choose a file type before adding a file")
        self.mode = self.mode.model_copy(update={"file": file})

    def clear_file(self) -> None:
        if isinstance(self.mode, FileMode):
            self.mode = self.mode.model_copy(update={"file": None})

    def select_sample(self, sample: SampleName) -> None:
        self.mode = SampleMode(sample=sample)

    def validate_for_submit(
        self,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        min_prompt_length: int = DEFAULT_MIN_PROMPT_LENGTH,
    ) -> ValidationFailure | None:
        """
        Check the draft in submission order: name, then the source
        (DSN, or file and its size), then the system prompt.
        Returns the first failure, if any.
        """
        rules = [lambda: require_name(self.name)]
        match self.mode:
            case UnsetMode():
                return ValidationFailure(
                    field="mode",
                    kind=ValidationKind.MISSING,
                    message="Please choose a data source type",
                )
            case DatabaseMode(dsn=dsn):
                rules.append(lambda: require_dsn(dsn))
            case FileMode(file=file):
                rules.append(lambda: require_file(file))
                rules.append(lambda: require_file_size_limit(file, max_file_size))
            case SampleMode():
                pass
        rules.append(lambda: require_system_prompt(self.system_prompt, min_prompt_length))

        failure = first_failure(rules)
        if failure is not None:
            logger.debug(f"Draft rejected on {failure.field}: {failure.kind.value}")
        return failure
