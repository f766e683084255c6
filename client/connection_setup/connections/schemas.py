"""
Connection Schemas

Pydantic models for connections, their schema options and the payloads
exchanged with the backend.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class DatabaseFileType(str, Enum):
    """File formats accepted for a file-backed connection."""

    SQLITE = "sqlite"
    CSV = "csv"
    EXCEL = "excel"
    SAS7BDAT = "sas7bdat"


FILE_TYPE_LABELS: dict[DatabaseFileType, str] = {
    DatabaseFileType.SQLITE: "SQLite data file",
    DatabaseFileType.CSV: "CSV file",
    DatabaseFileType.EXCEL: "Excel file",
    DatabaseFileType.SAS7BDAT: "sas7bdat file",
}


class SampleName(str, Enum):
    """Bundled sample datasets."""

    TITANIC = "titanic"
    DVDRENTAL = "dvdrental"
    SPOTIFY = "spotify"
    NETFLIX = "netflix"


class TableOption(BaseModel):
    """A table exposed to the assistant."""

    model_config = ConfigDict(frozen=True)

    name: str
    enabled: bool = True


class SchemaOption(BaseModel):
    """A schema and its tables, in backend order."""

    model_config = ConfigDict(frozen=True)

    name: str
    enabled: bool = True
    tables: tuple[TableOption, ...] = ()


class ConnectionOptions(BaseModel):
    """Schema selection attached to a connection."""

    model_config = ConfigDict(frozen=True)

    schemas: tuple[SchemaOption, ...] = ()


class Connection(BaseModel):
    """Schema for a connection as returned by the backend."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    dialect: str = ""
    type: str = ""
    database: str = ""
    dsn: str | None = None
    is_sample: bool = False
    system_prompt: str = ""
    options: ConnectionOptions | None = None


class ConnectionUpdate(BaseModel):
    """Schema for a partial connection update. Unset fields are not sent."""

    name: str | None = None
    dsn: str | None = None
    options: ConnectionOptions | None = None
    system_prompt: str | None = None


class ConversationRef(BaseModel):
    """The part of a conversation needed to count a connection's dependents."""

    model_config = ConfigDict(extra="ignore")

    id: str
    connection_id: str
