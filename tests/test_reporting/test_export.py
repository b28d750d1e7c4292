"""Tests for stack_advisor/reporting/export.py."""

from __future__ import annotations

import csv
import json

from stack_advisor.pipeline.advise import run_advisory
from stack_advisor.reporting.export import (
    export_report_json,
    export_to_csv,
    export_to_json,
    flatten_analysis_for_export,
)


class TestExportToCsv:
    def test_writes_header_and_rows(self, tmp_path):
        path = export_to_csv([{"a": 1, "b": 2}, {"a": 3, "b": 4}], tmp_path / "out" / "x.csv")
        with path.open(encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]

    def test_empty_records(self, tmp_path):
        path = export_to_csv([], tmp_path / "empty.csv")
        assert path.read_text(encoding="utf-8") == ""


class TestExportToJson:
    def test_round_trip(self, tmp_path):
        path = export_to_json({"k": [1, 2]}, tmp_path / "nested" / "x.json")
        assert json.loads(path.read_text(encoding="utf-8")) == {"k": [1, 2]}

    def test_report(self, sample_inventory, default_config, tmp_path):
        path = export_report_json(run_advisory(sample_inventory, default_config), tmp_path / "r.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert len(data["tools"]) == len(sample_inventory)


class TestFlattenAnalysis:
    def test_one_row_per_tool(self, make_tool, default_config):
        tools = [
            make_tool("Mailchimp", "Marketing", confidence=90),
            make_tool("Klaviyo", "Marketing"),
            make_tool("Figma", "Design", confidence=85),
        ]
        rows = flatten_analysis_for_export(run_advisory(tools, default_config))
        assert [r["name"] for r in rows] == ["Mailchimp", "Klaviyo", "Figma"]
        assert rows[0]["overlap_subdomain"] == "Email Marketing"
        assert rows[2]["overlap_subdomain"] == ""
        assert rows[1]["confidence"] == ""
        assert rows[1]["needs_review"] is True
        assert rows[0]["action"] == "Evaluate"
