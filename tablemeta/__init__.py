"""
tablemeta - Dialect-independent table metadata

Reads column and index metadata for a table from MySQL, PostgreSQL or
SQLite catalogs and returns one uniform model for code generation.
"""

__version__ = "0.1.0"

from tablemeta.extractors import get_columns_with_indexes, select_provider
from tablemeta.models import Column, Index

__all__ = ["Column", "Index", "get_columns_with_indexes", "select_provider", "__version__"]
