"""
MySQL metadata provider for tablemeta.

Reads columns from information_schema.COLUMNS and index membership
from information_schema.STATISTICS.
"""

from tablemeta.extractors.metadata_providers.base import (
    MetadataProviderFactory,
    TableMetadataProvider,
)
from tablemeta.models.schema import Column, Index
from tablemeta.utils.logger import get_logger

logger = get_logger(__name__)

COLUMN_QUERY = """
    SELECT
        COLUMN_NAME AS column_name,
        COLUMN_COMMENT AS column_comment,
        DATA_TYPE AS data_type,
        IS_NULLABLE AS is_nullable,
        COLUMN_KEY AS column_key,
        COLUMN_TYPE AS column_type,
        COLUMN_DEFAULT AS column_default,
        EXTRA AS extra
    FROM information_schema.COLUMNS
    WHERE TABLE_SCHEMA = :schema AND TABLE_NAME = :table_name
    ORDER BY ORDINAL_POSITION
"""

INDEX_QUERY = """
    SELECT
        TABLE_NAME AS table_name,
        COLUMN_NAME AS column_name,
        INDEX_NAME AS index_name,
        SEQ_IN_INDEX AS seq_in_index,
        NON_UNIQUE AS non_unique
    FROM information_schema.STATISTICS
    WHERE TABLE_SCHEMA = :schema AND TABLE_NAME = :table_name
    ORDER BY INDEX_NAME, SEQ_IN_INDEX
"""


class MySQLMetadataProvider(TableMetadataProvider):
    """
    MySQL-specific metadata provider.

    Both catalogs expose everything the canonical model needs,
    so rows map one to one onto Column and Index.
    """

    dialect = "mysql"

    def fetch_columns(self, schema: str, table_name: str) -> list[Column]:
        """Get columns from information_schema.COLUMNS."""
        rows = self._fetch_rows(COLUMN_QUERY, {"schema": schema, "table_name": table_name})
        logger.debug(f"Fetched {len(rows)} columns for {schema}.{table_name}")
        return [Column.model_validate(dict(row)) for row in rows]

    def fetch_indexes(self, schema: str, table_name: str) -> list[Index]:
        """Get index membership from information_schema.STATISTICS."""
        rows = self._fetch_rows(INDEX_QUERY, {"schema": schema, "table_name": table_name})
        logger.debug(f"Fetched {len(rows)} index rows for {schema}.{table_name}")
        return [Index.model_validate(dict(row)) for row in rows]


# Register the provider with the factory
MetadataProviderFactory.register("mysql", MySQLMetadataProvider)
MetadataProviderFactory.register("mariadb", MySQLMetadataProvider)
