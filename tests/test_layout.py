"""Tests for tool_result_view.core.layout — content budget derivation."""

import pytest

from tool_result_view.core.layout import LayoutBudget, LayoutConfig, content_budget, effective_height


class TestLayoutBudget:
    def test_unbounded_by_default(self):
        budget = LayoutBudget(80)
        assert budget.available_height is None
        assert not budget.bounded

    @pytest.mark.parametrize("width", [0, -5])
    def test_rejects_non_positive_width(self, width):
        with pytest.raises(ValueError):
            LayoutBudget(width)

    def test_rejects_non_positive_height(self):
        with pytest.raises(ValueError):
            LayoutBudget(80, 0)


class TestEffectiveHeight:
    def test_reserves_chrome_rows(self):
        # 10 - 1 (static) - 5 (reserved) = 4
        assert effective_height(10) == 4

    def test_floor_applies(self):
        assert effective_height(4) == 3
        assert effective_height(1) == 3

    @pytest.mark.parametrize("raw", [None, 0, -3])
    def test_missing_height_is_unbounded(self, raw):
        assert effective_height(raw) is None

    def test_custom_constants(self):
        config = LayoutConfig(static_reserved_rows=0, context_reserved_rows=2, minimum_floor=0)
        assert effective_height(10, config) == 8
        assert effective_height(2, config) == 1


class TestContentBudget:
    def test_subtracts_padding(self):
        budget = content_budget(10, 11)
        assert budget.render_width == 6
        assert budget.available_height == 5

    def test_width_never_below_one(self):
        assert content_budget(2).render_width == 1

    def test_no_height(self):
        assert content_budget(80).available_height is None
