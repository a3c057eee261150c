"""
Tests pour SortKey, Page et le calcul d'offset.
"""

import pytest

from shadowcrawler.core.value_objects.catalog import SortKey, page_offset


class TestSortKey:
    @pytest.mark.parametrize("value", [key.value for key in SortKey])
    def test_parse_known_values(self, value):
        assert SortKey.parse(value).value == value

    @pytest.mark.parametrize("value", [None, "", "random", "NAME_ASC"])
    def test_unknown_values_fall_back(self, value):
        assert SortKey.parse(value) is SortKey.CREATION_DATE_DESC

    def test_parse_enum_passthrough(self):
        assert SortKey.parse(SortKey.SIZE_ASC) is SortKey.SIZE_ASC


class TestPageOffset:
    @pytest.mark.parametrize("page, size, expected", [(1, 20, 0), (3, 20, 40), (2, 7, 7)])
    def test_offset(self, page, size, expected):
        assert page_offset(page, size) == expected

    @pytest.mark.parametrize("page, size", [(0, 20), (1, 0)])
    def test_invalid(self, page, size):
        with pytest.raises(ValueError):
            page_offset(page, size)
