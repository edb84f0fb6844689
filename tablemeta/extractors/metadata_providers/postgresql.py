"""
PostgreSQL metadata provider for tablemeta.

information_schema.columns on PostgreSQL has no full column type string,
so columns are fetched with a placeholder type and then enriched from a
zero-row select on the table itself: its cursor description gives
one type code per result column, resolved to a type name via pg_type.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import bindparam, text

from tablemeta.extractors.errors import UnsupportedOperationError
from tablemeta.extractors.metadata_providers.base import (
    MetadataProviderFactory,
    TableMetadataProvider,
)
from tablemeta.models.schema import Column, Index
from tablemeta.utils.logger import get_logger

logger = get_logger(__name__)

PLACEHOLDER_COLUMN_TYPE = "varchar"

COLUMN_QUERY = f"""
    SELECT
        column_name AS column_name,
        '' AS column_comment,
        data_type AS data_type,
        is_nullable AS is_nullable,
        '' AS column_key,
        '{PLACEHOLDER_COLUMN_TYPE}' AS column_type,
        column_default AS column_default,
        '' AS extra
    FROM information_schema.columns
    WHERE table_schema = :schema AND table_name = :table_name
    ORDER BY ordinal_position
"""

TYPE_NAME_QUERY = text(
    "SELECT oid, typname FROM pg_catalog.pg_type WHERE oid IN :oids"
).bindparams(bindparam("oids", expanding=True))


@dataclass(frozen=True)
class ColumnTypeDescriptor:
    """Type reported for one result column by the query engine."""

    name: str
    type_name: str | None = None


def apply_column_types(
    columns: Iterable[Column], descriptors: Iterable[ColumnTypeDescriptor]
) -> list[Column]:
    """
    Return new columns whose column_type comes from matching descriptors.

    Matching is by exact column name. Descriptors without a match or
    without a resolved type name are ignored, leaving the placeholder.
    """
    type_names = {d.name: d.type_name for d in descriptors if d.type_name}
    enriched = []
    for column in columns:
        type_name = type_names.get(column.column_name)
        if type_name:
            enriched.append(column.model_copy(update={"column_type": type_name}))
        else:
            enriched.append(column.model_copy())
    return enriched


class PostgreSQLMetadataProvider(TableMetadataProvider):
    """
    PostgreSQL-specific metadata provider.

    Handles:
    - Columns via information_schema.columns
    - Column types via a zero-row select on the table
    Index lookup is not implemented for this dialect.
    """

    dialect = "postgresql"
    supports_indexes = False

    def fetch_columns(self, schema: str, table_name: str) -> list[Column]:
        """Get columns, then enrich their column_type from the result description."""
        rows = self._fetch_rows(COLUMN_QUERY, {"schema": schema, "table_name": table_name})
        columns = [Column.model_validate(dict(row)) for row in rows]
        logger.debug(f"Fetched {len(columns)} columns for {schema}.{table_name}")

        descriptors = self.describe_column_types(schema, table_name)
        return apply_column_types(columns, descriptors)

    def describe_column_types(self, schema: str, table_name: str) -> list[ColumnTypeDescriptor]:
        """
        Read column type descriptors from a zero-row select on the table.

        Args:
            schema: Schema name
            table_name: Table name

        Returns:
            One descriptor per result column, in result order
        """
        query = f"SELECT * FROM {self._quote_table(schema, table_name)} LIMIT 0"
        result = self.connection.execute(text(query))
        try:
            description = list(result.cursor.description or [])
        finally:
            result.close()

        type_names = self._resolve_type_names({entry[1] for entry in description})
        return [
            ColumnTypeDescriptor(name=entry[0], type_name=type_names.get(entry[1]))
            for entry in description
        ]

    def _resolve_type_names(self, type_codes: set) -> dict:
        """Map type OIDs from a cursor description to upper-cased pg_type names (INT4, VARCHAR)."""
        oids = sorted(code for code in type_codes if code is not None)
        if not oids:
            return {}
        result = self.connection.execute(TYPE_NAME_QUERY, {"oids": oids})
        return {row["oid"]: row["typname"].upper() for row in result.mappings().all()}

    def fetch_indexes(self, schema: str, table_name: str) -> list[Index]:
        raise UnsupportedOperationError(self.dialect, "fetch_indexes")


# Register the provider with the factory
MetadataProviderFactory.register("postgresql", PostgreSQLMetadataProvider)
