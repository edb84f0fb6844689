"""
Table column/index extraction for tablemeta.

Selects the metadata provider for a connection's database product, fetches
the table's columns and, when asked, attaches index membership to them.
"""

from typing import TYPE_CHECKING

from tablemeta.extractors.errors import ConnectionMissingError, UnsupportedOperationError
from tablemeta.extractors.metadata_providers import (
    MetadataProviderFactory,
    TableMetadataProvider,
)
from tablemeta.models.schema import Column, group_by_column
from tablemeta.utils.logger import get_logger

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

logger = get_logger(__name__)


def select_provider(connection: "Connection") -> TableMetadataProvider:
    """
    Create the metadata provider matching the connection's dialect.

    Args:
        connection: Open SQLAlchemy connection

    Returns:
        Provider bound to the connection

    Raises:
        ConnectionMissingError: If connection is None
        UnsupportedDialectError: If the dialect has no registered provider
    """
    if connection is None:
        raise ConnectionMissingError()
    return MetadataProviderFactory.create(connection.dialect.name, connection)


def get_columns_with_indexes(
    connection: "Connection",
    schema: str,
    table_name: str,
    include_indexes: bool = False,
) -> list[Column]:
    """
    Get a table's columns, optionally with their index membership.

    Column fetch errors propagate. Index lookup is best effort: if the query
    fails a warning is logged and the columns are returned without indexes.
    A provider that has no index lookup at all raises
    UnsupportedOperationError; check provider.supports_indexes to avoid it.

    Args:
        connection: Open SQLAlchemy connection (borrowed, not closed)
        schema: Schema/database name
        table_name: Table name
        include_indexes: Whether to attach Index entries to each column

    Returns:
        Columns in ordinal position order

    Raises:
        ConnectionMissingError: If connection is None
        UnsupportedDialectError: If the dialect has no registered provider
        UnsupportedOperationError: If indexes are requested from a provider without index lookup
    """
    provider = select_provider(connection)

    columns = provider.fetch_columns(schema, table_name)
    if not include_indexes or not columns:
        return columns

    try:
        indexes = provider.fetch_indexes(schema, table_name)
    except UnsupportedOperationError:
        raise
    except Exception as e:
        logger.warning(f"Failed to fetch indexes for {table_name}: {e}")
        return columns

    if not indexes:
        return columns

    grouped = group_by_column(indexes)
    return [
        column.model_copy(update={"indexes": list(grouped.get(column.column_name, []))})
        for column in columns
    ]
