"""Tests for column sorting."""

from collections.abc import Callable

import pytest
from pydantic import ValidationError

from imovel_search.filters.sorting import sort_by
from imovel_search.models import PropertyRecord, SortDirection, SortSpec

MakeRecord = Callable[..., PropertyRecord]


class TestSortBy:
    def test_none_spec_preserves_order(self, sample_records: list[PropertyRecord]) -> None:
        assert sort_by(sample_records, None) == sample_records

    def test_desc_puts_null_last(self, make_record: MakeRecord) -> None:
        records = [
            make_record(area_priv=None),
            make_record(area_priv=50),
            make_record(area_priv=200),
        ]
        result = sort_by(records, SortSpec(field="area_priv", direction="desc"))
        assert [r.area_priv for r in result] == [200, 50, None]

    def test_asc_puts_null_last(self, make_record: MakeRecord) -> None:
        records = [
            make_record(area_priv=None),
            make_record(area_priv=200),
            make_record(area_priv=50),
        ]
        result = sort_by(records, SortSpec(field="area_priv"))
        assert [r.area_priv for r in result] == [50, 200, None]

    def test_strings_case_insensitive(self, make_record: MakeRecord) -> None:
        records = [
            make_record(cidade="parnamirim"),
            make_record(cidade="Natal"),
            make_record(cidade="Extremoz"),
        ]
        result = sort_by(records, SortSpec(field="cidade"))
        assert [r.cidade for r in result] == ["Extremoz", "Natal", "parnamirim"]

    def test_stable_for_equal_keys_both_directions(self, make_record: MakeRecord) -> None:
        first = make_record(id="first", quartos=2)
        second = make_record(id="second", quartos=2)
        bigger = make_record(id="bigger", quartos=3)
        records = [first, second, bigger]

        asc = sort_by(records, SortSpec(field="quartos", direction=SortDirection.ASC))
        desc = sort_by(records, SortSpec(field="quartos", direction=SortDirection.DESC))

        assert [r.id for r in asc] == ["first", "second", "bigger"]
        assert [r.id for r in desc] == ["bigger", "first", "second"]

    def test_nulls_keep_input_order(self, make_record: MakeRecord) -> None:
        a = make_record(id="a", valor_venda=None)
        b = make_record(id="b", valor_venda=None)
        c = make_record(id="c", valor_venda=1)
        result = sort_by([a, b, c], SortSpec(field="valor_venda", direction="desc"))
        assert [r.id for r in result] == ["c", "a", "b"]

    def test_does_not_mutate_input(self, make_record: MakeRecord) -> None:
        records = [make_record(quartos=3), make_record(quartos=1)]
        snapshot = list(records)
        sort_by(records, SortSpec(field="quartos"))
        assert records == snapshot


class TestSortSpec:
    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SortSpec(field="not_a_field")

    def test_photos_not_sortable(self) -> None:
        with pytest.raises(ValidationError):
            SortSpec(field="fotos")

    def test_bad_direction_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SortSpec(field="quartos", direction="sideways")
