from __future__ import annotations

import pytest
from pydantic import ValidationError

from tablemeta.models import Column, Index, group_by_column


def _index(column: str, name: str, seq: int = 1, non_unique: bool = True) -> Index:
    return Index(
        table_name="orders",
        column_name=column,
        index_name=name,
        seq_in_index=seq,
        non_unique=non_unique,
    )


def test_column_from_catalog_row() -> None:
    column = Column.model_validate(
        {
            "column_name": "id",
            "column_comment": None,
            "data_type": "bigint",
            "is_nullable": "NO",
            "column_key": "PRI",
            "column_type": "bigint unsigned",
            "column_default": None,
            "extra": "auto_increment",
        }
    )

    assert column.column_comment == ""
    assert column.is_nullable is False
    assert column.is_primary_key
    assert column.is_auto_increment
    assert column.indexes == []
    assert not column.has_index


def test_column_nullable_and_default_coercion() -> None:
    column = Column(
        column_name="qty",
        data_type="int",
        is_nullable="YES",
        column_type="int(11)",
        column_default=0,
    )

    assert column.is_nullable is True
    assert column.column_default == "0"
    assert not column.is_primary_key


def test_column_name_is_kept_verbatim() -> None:
    column = Column(column_name=" Status ", data_type="varchar", column_type="varchar(8)")
    assert column.column_name == " Status "


def test_column_name_must_not_be_empty() -> None:
    with pytest.raises(ValidationError):
        Column(column_name="", data_type="varchar", column_type="varchar(8)")


def test_index_uniqueness_flags() -> None:
    primary = Index.model_validate(
        {
            "table_name": "orders",
            "column_name": "id",
            "index_name": "PRIMARY",
            "seq_in_index": 1,
            "non_unique": 0,
        }
    )
    secondary = _index("status", "ix_status")

    assert primary.is_unique
    assert primary.is_primary_key
    assert not secondary.is_unique
    assert not secondary.is_primary_key


def test_group_by_column_preserves_fetch_order() -> None:
    first = _index("a", "ix_ab", seq=1)
    second = _index("a", "uq_a", non_unique=False)
    third = _index("c", "ix_c")

    grouped = group_by_column([first, third, second])

    assert list(grouped) == ["a", "c"]
    assert grouped["a"] == [first, second]
    assert grouped["c"] == [third]
    assert "b" not in grouped


def test_column_with_indexes_reports_unique() -> None:
    column = Column(
        column_name="ref",
        data_type="varchar",
        column_type="varchar(20)",
        indexes=[_index("ref", "uq_ref", non_unique=False)],
    )

    assert column.has_index
    assert column.has_unique_index
    assert column.to_dict()["indexes"][0]["index_name"] == "uq_ref"
