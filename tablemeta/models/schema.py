"""
Table metadata models for tablemeta.

Defines the dialect-independent shapes produced by the metadata providers:
- Column: one table column as described by the column catalog
- Index: one column's membership in one named index
"""

from collections.abc import Iterable
from typing import Any

from pydantic import Field, field_validator

from tablemeta.models.base import BaseModel

PRIMARY_INDEX_NAME = "PRIMARY"
PRIMARY_KEY_ROLE = "PRI"


class Index(BaseModel):
    """
    Index membership model.

    A composite index yields one Index per participating column, ordered
    within the index by ``seq_in_index``.
    """

    table_name: str = Field(..., description="Owning table name")
    column_name: str = Field(..., min_length=1, description="Indexed column name")
    index_name: str = Field(..., description="Index name")
    seq_in_index: int = Field(default=1, description="Position of the column within the index")
    non_unique: bool = Field(default=True, description="False when the index enforces uniqueness")

    @property
    def is_unique(self) -> bool:
        return not self.non_unique

    @property
    def is_primary_key(self) -> bool:
        return self.index_name == PRIMARY_INDEX_NAME


class Column(BaseModel):
    """
    Column metadata model.

    Field names follow the column catalog (information_schema.COLUMNS) so
    catalog rows can be validated directly. ``column_name`` is the join key
    against Index.column_name and is compared case-sensitively.
    """

    column_name: str = Field(..., min_length=1, description="Column name")
    column_comment: str = Field(default="", description="Column comment")
    data_type: str = Field(..., description="Raw data type (e.g., varchar)")
    is_nullable: bool = Field(default=True, description="Is nullable")
    column_key: str = Field(default="", description="Key role (PRI, UNI, MUL or empty)")
    column_type: str = Field(..., description="Full column type (e.g., varchar(255))")
    column_default: str | None = Field(default=None, description="Default value")
    extra: str = Field(default="", description="Extra attributes (e.g., auto_increment)")
    indexes: list[Index] = Field(default_factory=list, description="Indexes the column belongs to")

    @field_validator("column_comment", "column_key", "extra", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("is_nullable", mode="before")
    @classmethod
    def _parse_nullable(cls, v: Any) -> Any:
        # information_schema reports YES/NO
        if isinstance(v, str):
            return v.strip().upper() in {"YES", "Y", "TRUE", "1"}
        return v

    @field_validator("column_default", mode="before")
    @classmethod
    def _stringify_default(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, bytes):
            return v.decode("utf-8", errors="replace")
        return str(v)

    @property
    def is_primary_key(self) -> bool:
        return self.column_key == PRIMARY_KEY_ROLE

    @property
    def is_auto_increment(self) -> bool:
        return "auto_increment" in self.extra.lower()

    @property
    def has_index(self) -> bool:
        return bool(self.indexes)

    @property
    def has_unique_index(self) -> bool:
        return any(idx.is_unique for idx in self.indexes)


def group_by_column(indexes: Iterable[Index]) -> dict[str, list[Index]]:
    """
    Group index entries by column name.

    Fetch order is preserved inside each group, so a column taking part in
    several indexes keeps them in the order the catalog returned them.
    """
    grouped: dict[str, list[Index]] = {}
    for index in indexes:
        grouped.setdefault(index.column_name, []).append(index)
    return grouped
