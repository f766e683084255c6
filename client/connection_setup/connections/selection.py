"""
Schema Selection

Pure transforms over a connection's schema options. Every function returns
a new ConnectionOptions and leaves its input untouched.
"""

from connection_setup.connections.schemas import (
    ConnectionOptions,
    SchemaOption,
    TableOption,
)


def _schema_at(options: ConnectionOptions, schema_index: int) -> SchemaOption:
    if not 0 <= schema_index < len(options.schemas):
        raise IndexError(f"schema index {schema_index} out of range")
    return options.schemas[schema_index]


def _replace_schema(
    options: ConnectionOptions, schema_index: int, schema: SchemaOption
) -> ConnectionOptions:
    schemas = list(options.schemas)
    schemas[schema_index] = schema
    return options.model_copy(update={"schemas": tuple(schemas)})


def set_schema_enabled(
    options: ConnectionOptions, schema_index: int, enabled: bool
) -> ConnectionOptions:
    """
    Enable or disable a schema together with all of its tables.

    Table flags are overwritten, not gated: re-enabling a schema enables
    every table under it regardless of earlier per-table choices.
    """
    schema = _schema_at(options, schema_index)
    tables = tuple(table.model_copy(update={"enabled": enabled}) for table in schema.tables)
    return _replace_schema(
        options,
        schema_index,
        schema.model_copy(update={"enabled": enabled, "tables": tables}),
    )


def set_table_enabled(
    options: ConnectionOptions, schema_index: int, table_index: int, enabled: bool
) -> ConnectionOptions:
    """Enable or disable a single table. The schema flag and siblings are kept."""
    schema = _schema_at(options, schema_index)
    if not 0 <= table_index < len(schema.tables):
        raise IndexError(f"table index {table_index} out of range for schema '{schema.name}'")

    tables = list(schema.tables)
    tables[table_index] = tables[table_index].model_copy(update={"enabled": enabled})
    return _replace_schema(options, schema_index, schema.model_copy(update={"tables": tuple(tables)}))


def is_table_active(schema: SchemaOption, table: TableOption) -> bool:
    """A table is only visible to the assistant when its schema is enabled too."""
    return schema.enabled and table.enabled


def visible_schemas(options: ConnectionOptions) -> list[tuple[int, SchemaOption]]:
    """
    Schemas to show for toggling, with their index in the full tree.

    Empty schemas are hidden here but still persisted as part of options.
    """
    return [(index, schema) for index, schema in enumerate(options.schemas) if schema.tables]


def enabled_tables(options: ConnectionOptions) -> list[tuple[str, str]]:
    """(schema, table) pairs that are effectively active."""
    return [
        (schema.name, table.name)
        for schema in options.schemas
        for table in schema.tables
        if is_table_active(schema, table)
    ]
