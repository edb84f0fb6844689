"""
SQLite metadata provider for tablemeta.

SQLite has no information_schema; the table-valued pragma functions
are shaped into the same columns the MySQL catalog returns.
"""

from tablemeta.extractors.metadata_providers.base import (
    MetadataProviderFactory,
    TableMetadataProvider,
)
from tablemeta.models.schema import PRIMARY_INDEX_NAME, Column, Index
from tablemeta.utils.logger import get_logger

logger = get_logger(__name__)

COLUMN_QUERY = """
    SELECT
        name AS column_name,
        '' AS column_comment,
        lower(
            CASE WHEN instr(type, '(') > 0
                THEN trim(substr(type, 1, instr(type, '(') - 1))
                ELSE type
            END
        ) AS data_type,
        CASE WHEN "notnull" = 0 AND pk = 0 THEN 'YES' ELSE 'NO' END AS is_nullable,
        CASE WHEN pk > 0 THEN 'PRI' ELSE '' END AS column_key,
        type AS column_type,
        dflt_value AS column_default,
        '' AS extra
    FROM pragma_table_info(:table_name, :schema)
    ORDER BY cid
"""

INDEX_QUERY = f"""
    SELECT * FROM (
        SELECT
            :table_name AS table_name,
            ii.name AS column_name,
            CASE WHEN il.origin = 'pk' THEN '{PRIMARY_INDEX_NAME}' ELSE il.name END AS index_name,
            ii.seqno + 1 AS seq_in_index,
            CASE WHEN il."unique" = 1 THEN 0 ELSE 1 END AS non_unique
        FROM pragma_index_list(:table_name, :schema) AS il
        JOIN pragma_index_info(il.name, :schema) AS ii
        WHERE ii.name IS NOT NULL

        UNION ALL

        -- rowid alias (INTEGER PRIMARY KEY) has no index of its own
        SELECT
            :table_name AS table_name,
            ti.name AS column_name,
            '{PRIMARY_INDEX_NAME}' AS index_name,
            ti.pk AS seq_in_index,
            0 AS non_unique
        FROM pragma_table_info(:table_name, :schema) AS ti
        WHERE ti.pk > 0
          AND NOT EXISTS (
              SELECT 1 FROM pragma_index_list(:table_name, :schema) WHERE origin = 'pk'
          )
    )
    ORDER BY index_name, seq_in_index
"""


class SQLiteMetadataProvider(TableMetadataProvider):
    """
    SQLite-specific metadata provider.

    Handles:
    - Columns via pragma_table_info (declared type kept as column_type)
    - Indexes via pragma_index_list / pragma_index_info
    The primary key is always reported as a PRIMARY index, including a
    rowid alias that SQLite does not index separately.
    """

    dialect = "sqlite"

    def fetch_columns(self, schema: str, table_name: str) -> list[Column]:
        """Get columns from pragma_table_info."""
        rows = self._fetch_rows(COLUMN_QUERY, {"schema": schema, "table_name": table_name})
        logger.debug(f"Fetched {len(rows)} columns for {schema}.{table_name}")
        return [Column.model_validate(dict(row)) for row in rows]

    def fetch_indexes(self, schema: str, table_name: str) -> list[Index]:
        """Get index membership from the index pragmas."""
        rows = self._fetch_rows(INDEX_QUERY, {"schema": schema, "table_name": table_name})
        logger.debug(f"Fetched {len(rows)} index rows for {schema}.{table_name}")
        return [Index.model_validate(dict(row)) for row in rows]


# Register the provider with the factory
MetadataProviderFactory.register("sqlite", SQLiteMetadataProvider)
