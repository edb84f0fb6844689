"""
Database-specific metadata providers for tablemeta.

Each provider translates one product's catalog into the canonical
Column and Index models and registers itself with the factory on import.
"""

from tablemeta.extractors.metadata_providers.base import (
    MetadataProviderFactory,
    TableMetadataProvider,
)
from tablemeta.extractors.metadata_providers.mysql import MySQLMetadataProvider
from tablemeta.extractors.metadata_providers.postgresql import (
    ColumnTypeDescriptor,
    PostgreSQLMetadataProvider,
    apply_column_types,
)
from tablemeta.extractors.metadata_providers.sqlite import SQLiteMetadataProvider

__all__ = [
    "TableMetadataProvider",
    "MetadataProviderFactory",
    "MySQLMetadataProvider",
    "PostgreSQLMetadataProvider",
    "SQLiteMetadataProvider",
    "ColumnTypeDescriptor",
    "apply_column_types",
]
