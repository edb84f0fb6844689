"""
Base metadata provider interface for tablemeta.

Defines the abstract base class for database-specific metadata providers
and the factory for creating appropriate provider instances.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import text

from tablemeta.extractors.errors import UnsupportedDialectError
from tablemeta.models.schema import Column, Index
from tablemeta.utils.logger import get_logger

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

logger = get_logger(__name__)


class TableMetadataProvider(ABC):
    """
    Abstract base class for database-specific metadata providers.

    Translates a database product's own catalog into the canonical
    Column and Index shapes. The connection is borrowed from the caller:
    providers run queries on it but never commit, roll back or close it.
    """

    dialect: str = ""
    supports_indexes: bool = True

    def __init__(self, connection: "Connection"):
        """
        Initialize the metadata provider.

        Args:
            connection: Open SQLAlchemy connection owned by the caller
        """
        self.connection = connection

    @abstractmethod
    def fetch_columns(self, schema: str, table_name: str) -> list[Column]:
        """
        Get the columns of a table in ordinal position order.

        Args:
            schema: Schema/database name
            table_name: Table name

        Returns:
            List of Column objects with empty index lists
        """
        ...

    @abstractmethod
    def fetch_indexes(self, schema: str, table_name: str) -> list[Index]:
        """
        Get index membership rows for a table.

        Args:
            schema: Schema/database name
            table_name: Table name

        Returns:
            One Index per (index, column) pair

        Raises:
            UnsupportedOperationError: If the dialect has no index lookup
        """
        ...

    def _fetch_rows(self, query: str, params: Mapping[str, Any]) -> list[Mapping[str, Any]]:
        """Run a catalog query and return its rows as mappings."""
        result = self.connection.execute(text(query), dict(params))
        return list(result.mappings().all())

    def _quote_table(self, schema: str, table_name: str) -> str:
        """Quote a schema-qualified table name for the connection's dialect."""
        preparer = self.connection.dialect.identifier_preparer
        if schema:
            return f"{preparer.quote_schema(schema)}.{preparer.quote(table_name)}"
        return preparer.quote(table_name)


class MetadataProviderFactory:
    """
    Factory for creating database-specific metadata providers.

    Uses the Factory pattern to instantiate the appropriate
    provider based on database type.
    """

    _providers: dict[str, type[TableMetadataProvider]] = {}

    @classmethod
    def register(cls, db_type: str, provider_class: type[TableMetadataProvider]) -> None:
        """
        Register a metadata provider class for a database type.

        Args:
            db_type: Database type identifier (e.g., 'mysql', 'postgresql')
            provider_class: Provider class to register
        """
        cls._providers[db_type.lower()] = provider_class
        logger.debug(f"Registered metadata provider for {db_type}: {provider_class.__name__}")

    @classmethod
    def create(cls, db_type: str, connection: "Connection") -> TableMetadataProvider:
        """
        Create a metadata provider instance for the given database type.

        Args:
            db_type: Database type identifier
            connection: SQLAlchemy connection

        Returns:
            Appropriate metadata provider instance

        Raises:
            UnsupportedDialectError: If no provider is registered for the database type
        """
        db_type_lower = (db_type or "").lower()

        if db_type_lower not in cls._providers:
            raise UnsupportedDialectError(db_type, cls.get_supported_types())

        provider_class = cls._providers[db_type_lower]
        logger.debug(f"Creating {provider_class.__name__} for {db_type}")
        return provider_class(connection)

    @classmethod
    def get_supported_types(cls) -> list[str]:
        """Get list of supported database types."""
        return list(cls._providers.keys())
