"""Tests for Tool, CostInfo and advice output models."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from stack_advisor.models.advice import OverlapGroup, Suggestion, SuggestionAction
from stack_advisor.models.tool import CostInfo, Tool


class TestTool:
    def test_field_names_and_aliases_both_accepted(self):
        a = Tool(id="1", name="X", confirmed_category="Sales")
        b = Tool.model_validate({"id": "1", "name": "X", "confirmedCategory": "Sales"})
        assert a == b

    def test_frozen(self):
        tool = Tool(id="1", name="X")
        with pytest.raises(ValidationError):
            tool.category = "Sales"

    def test_confidence_not_range_checked(self):
        assert Tool(id="1", name="X", confidence=180).confidence == 180

    def test_integer_id_coerced(self):
        assert Tool.model_validate({"id": 42, "name": "X"}).id == "42"

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Tool(id="1")


class TestCostInfo:
    @pytest.mark.parametrize(
        "raw, expected",
        [(150, 150.0), ("49.5", 49.5), ("abc", None), (None, None), (math.inf, None), (True, None)],
    )
    def test_cost_coercion(self, raw, expected):
        assert CostInfo(cost_mo=raw).cost_mo == expected

    def test_unresolved(self):
        info = CostInfo.unresolved()
        assert (info.cost_mo, info.cost_basis, info.source) == (None, None, None)


class TestAdviceModels:
    def test_overlap_group_requires_subdomain(self):
        with pytest.raises(ValidationError, match="non-empty"):
            OverlapGroup(subdomain="", tools=())

    def test_overlap_group_size(self):
        tools = (Tool(id="1", name="A"), Tool(id="2", name="B"))
        assert OverlapGroup(subdomain="CRM", tools=tools).size == 2

    def test_suggestion_actions_immutable(self):
        s = Suggestion(
            id="x",
            prompt="?",
            actions=[SuggestionAction(label="Add A", name="A", category="ERP")],
        )
        assert isinstance(s.actions, tuple)
        with pytest.raises(ValidationError):
            s.actions[0].name = "B"
