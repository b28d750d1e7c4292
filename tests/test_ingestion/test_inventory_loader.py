"""Tests for stack_advisor/ingestion/inventory_loader.py."""

from __future__ import annotations

import json

import pytest

from stack_advisor.ingestion.inventory_loader import (
    InventoryLoadError,
    load_costs,
    load_inventory,
    parse_inventory,
)


class TestParseInventory:
    def test_bare_list(self):
        tools = parse_inventory([{"id": "1", "name": "Slack", "category": "Comms"}])
        assert tools[0].name == "Slack"

    def test_camel_case_fields(self):
        tools = parse_inventory(
            [
                {
                    "id": 7,
                    "name": "Zendesk",
                    "category": "Support",
                    "confirmedCategory": "Service",
                    "logoUrl": "z.png",
                    "manualRecommendation": "Evaluate",
                    "confidence": 72,
                }
            ]
        )
        tool = tools[0]
        assert tool.id == "7"
        assert tool.confirmed_category == "Service"
        assert tool.logo_url == "z.png"
        assert tool.manual_recommendation == "Evaluate"

    def test_missing_optional_fields(self):
        tool = parse_inventory([{"id": "1", "name": "Legacy", "category": None}])[0]
        assert tool.category == ""
        assert tool.description is None
        assert tool.confidence is None

    def test_wrong_top_level_shape(self):
        with pytest.raises(InventoryLoadError, match="must be a list"):
            parse_inventory({"items": []})

    def test_invalid_rows_reported_together(self):
        with pytest.raises(InventoryLoadError, match="2 invalid row"):
            parse_inventory([{"id": "1"}, {"name": "no id"}, {"id": "3", "name": "ok"}])

    def test_duplicate_ids(self):
        with pytest.raises(InventoryLoadError, match="duplicate id '1'"):
            parse_inventory([{"id": "1", "name": "A"}, {"id": "1", "name": "B"}])

    def test_bad_manual_recommendation(self):
        with pytest.raises(InventoryLoadError):
            parse_inventory([{"id": "1", "name": "A", "manualRecommendation": "Drop"}])


class TestLoadInventory:
    def test_loads_fixture(self, inventory_file):
        tools = load_inventory(inventory_file)
        assert [t.name for t in tools] == ["Mailchimp", "HubSpot", "Slack", "Intercom"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_inventory(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InventoryLoadError, match="Invalid JSON"):
            load_inventory(path)


class TestLoadCosts:
    def test_mapping_format(self, costs_file):
        costs = load_costs(costs_file)
        assert costs["mailchimp"].cost_mo == 20
        assert costs["hubspot"].cost_mo == 800.5
        assert costs["intercom"].cost_mo is None

    def test_list_format(self, tmp_path):
        path = tmp_path / "costs.json"
        path.write_text(
            json.dumps([{"name": "Zendesk", "cost_mo": "49", "source": "category"}]),
            encoding="utf-8",
        )
        costs = load_costs(path)
        assert costs["zendesk"].cost_mo == 49.0
        assert costs["zendesk"].source == "category"

    def test_unparseable_cost_becomes_none(self, tmp_path):
        path = tmp_path / "costs.json"
        path.write_text(json.dumps({"Figma": {"cost_mo": "n/a"}}), encoding="utf-8")
        assert load_costs(path)["figma"].cost_mo is None

    def test_missing_name_in_list(self, tmp_path):
        path = tmp_path / "costs.json"
        path.write_text(json.dumps([{"cost_mo": 5}]), encoding="utf-8")
        with pytest.raises(InventoryLoadError, match="missing tool name"):
            load_costs(path)

    def test_bad_source(self, tmp_path):
        path = tmp_path / "costs.json"
        path.write_text(json.dumps({"A": {"cost_mo": 5, "source": "guess"}}), encoding="utf-8")
        with pytest.raises(InventoryLoadError):
            load_costs(path)
