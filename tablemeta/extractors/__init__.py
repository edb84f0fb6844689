"""Extractors package for tablemeta."""

from tablemeta.extractors.errors import (
    ConnectionMissingError,
    IntrospectionError,
    UnsupportedDialectError,
    UnsupportedOperationError,
)
from tablemeta.extractors.metadata_providers import (
    MetadataProviderFactory,
    TableMetadataProvider,
)
from tablemeta.extractors.table_info import get_columns_with_indexes, select_provider

__all__ = [
    "ConnectionMissingError",
    "IntrospectionError",
    "UnsupportedDialectError",
    "UnsupportedOperationError",
    "MetadataProviderFactory",
    "TableMetadataProvider",
    "get_columns_with_indexes",
    "select_provider",
]
