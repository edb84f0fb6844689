"""Models package for tablemeta."""

from tablemeta.models.base import BaseModel
from tablemeta.models.schema import Column, Index, group_by_column

__all__ = [
    "BaseModel",
    "Column",
    "Index",
    "group_by_column",
]
