"""Tests for keyset conditions."""

import pytest

from keypage.core.conditions import (
    build_relative_condition,
    combine_conditions,
    comparison_op,
    filter_condition,
    make_anchor,
)
from keypage.core.dsl import Anchor, FilterClause, FilterOp, SortDirection, SortSpec

ID_ASC = SortSpec(field="id", dir=SortDirection.ASC)
ID_DESC = SortSpec(field="id", dir=SortDirection.DESC)
PRICE_ASC = SortSpec(field="price", dir=SortDirection.ASC)
PRICE_DESC = SortSpec(field="price", dir=SortDirection.DESC)


class TestComparisonOp:
    @pytest.mark.parametrize(
        "sort, want_after, expected",
        [
            (ID_ASC, True, FilterOp.GT),
            (ID_ASC, False, FilterOp.LT),
            (ID_DESC, True, FilterOp.LT),
            (ID_DESC, False, FilterOp.GT),
        ],
    )
    def test_operator_choice(self, sort, want_after, expected):
        assert comparison_op(sort, want_after) == expected


class TestBuildRelativeCondition:
    def test_no_anchor_matches_everything(self):
        assert build_relative_condition(PRICE_ASC, None, want_after=True) == {}

    def test_anchor_without_id_matches_everything(self):
        assert build_relative_condition(PRICE_ASC, Anchor(id=None), want_after=True) == {}

    def test_identifier_sort_is_single_comparison(self):
        condition = build_relative_condition(ID_ASC, Anchor(id=100), want_after=True)

        assert condition == {"field": "id", "op": "gt", "value": 100}

    def test_identifier_sort_descending_before(self):
        condition = build_relative_condition(ID_DESC, Anchor(id=100), want_after=False)

        assert condition == {"field": "id", "op": "gt", "value": 100}

    def test_tuple_comparison_for_other_fields(self):
        """(price > v) OR (price = v AND id > anchor_id)"""
        condition = build_relative_condition(
            PRICE_ASC, Anchor(id=7, sort_value=10.0), want_after=True
        )

        assert condition == {
            "or": [
                {"field": "price", "op": "gt", "value": 10.0},
                {
                    "and": [
                        {"field": "price", "op": "eq", "value": 10.0},
                        {"field": "id", "op": "gt", "value": 7},
                    ]
                },
            ]
        }

    def test_tuple_comparison_descending_before(self):
        condition = build_relative_condition(
            PRICE_DESC, Anchor(id=7, sort_value=10.0), want_after=False
        )

        assert condition["or"][0]["op"] == "gt"
        assert condition["or"][1]["and"][1] == {"field": "id", "op": "gt", "value": 7}

    def test_custom_id_field(self):
        condition = build_relative_condition(
            SortSpec(field="_id"), Anchor(id=5), want_after=True, id_field="_id"
        )

        assert condition == {"field": "_id", "op": "gt", "value": 5}


class TestCombining:
    def test_filter_condition(self):
        condition = filter_condition([
            FilterClause(field="category", op=FilterOp.EQ, value="books"),
            FilterClause(field="price", op=FilterOp.LT, value=50),
        ])

        assert condition == {
            "and": [
                {"field": "category", "op": "eq", "value": "books"},
                {"field": "price", "op": "lt", "value": 50},
            ]
        }

    def test_empty_filter(self):
        assert filter_condition([]) == {}

    def test_combine_drops_empty_parts(self):
        leaf = {"field": "id", "op": "gt", "value": 1}

        assert combine_conditions({}, leaf, {}) == leaf
        assert combine_conditions({}, {}) == {}
        assert combine_conditions(leaf, leaf) == {"and": [leaf, leaf]}


class TestMakeAnchor:
    def test_identifier_sort_omits_sort_value(self):
        anchor = make_anchor({"id": 3, "price": 9.5}, ID_ASC)

        assert anchor == Anchor(id=3, sort_value=None)

    def test_field_sort_captures_value(self):
        anchor = make_anchor({"id": 3, "price": 9.5}, PRICE_DESC)

        assert anchor == Anchor(id=3, sort_value=9.5)
