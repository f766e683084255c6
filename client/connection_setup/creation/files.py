"""
Uploaded Files

Handle for a file picked by the user for a file-backed connection.
"""

import io
from pathlib import Path
from typing import BinaryIO

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UploadedFile(BaseModel):
    """A user-supplied file, either on disk or already in memory."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., min_length=1)
    size: int = Field(..., ge=0)
    path: Path | None = None
    content: bytes | None = None

    @model_validator(mode="after")
    def _check_source(self) -> "UploadedFile":
        if self.path is None and self.content is None:
            raise ValueError("an uploaded file needs a path or in-memory content")
        return self

    @classmethod
    def from_path(cls, path: str | Path) -> "UploadedFile":
        path = Path(path)
        return cls(filename=path.name, size=path.stat().st_size, path=path)

    @classmethod
    def from_bytes(cls, filename: str, content: bytes) -> "UploadedFile":
        return cls(filename=filename, size=len(content), content=content)

    def open(self) -> BinaryIO:
        """Open the file for reading. The caller closes the stream."""
        if self.content is not None:
            return io.BytesIO(self.content)
        return self.path.open("rb")
