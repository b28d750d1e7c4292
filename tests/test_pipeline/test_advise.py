"""
Tests for stack_advisor/pipeline/advise.py.

What we test
------------
  - run_advisory() produces one resolution and one analysis row per tool.
  - Config thresholds and caps flow through to every component.
  - End-to-end Mailchimp + HubSpot scenario.
  - report_to_dict() is JSON-serialisable and stable across runs.
"""

from __future__ import annotations

import json

from stack_advisor.config import AppConfig, EngineConfig
from stack_advisor.models.tool import CostInfo
from stack_advisor.pipeline.advise import report_to_dict, resolve_tools, run_advisory


class TestResolveTools:
    def test_rows_follow_inventory(self, sample_inventory, default_config):
        rows = resolve_tools(sample_inventory, default_config)
        assert [r.name for r in rows] == [t.name for t in sample_inventory]

    def test_values(self, sample_inventory, default_config):
        rows = {r.name: r for r in resolve_tools(sample_inventory, default_config)}
        assert rows["HubSpot"].resolved_category == "Marketing"
        assert rows["HubSpot"].needs_review is False
        assert rows["Salesforce"].resolved_category == "Other"
        assert rows["Salesforce"].confidence_band == "moderate"
        assert rows["Legacy Intranet"].needs_review is True
        assert rows["Legacy Intranet"].confidence_band == "unscored"
        assert rows["Zendesk"].resolved_category == "Service"
        assert rows["Zendesk"].needs_review is False

    def test_threshold_from_config(self, sample_inventory):
        config = AppConfig(engine=EngineConfig(confidence_threshold=50))
        rows = {r.name: r for r in resolve_tools(sample_inventory, config)}
        assert rows["Salesforce"].resolved_category == "Sales"

    def test_other_category_from_config(self, sample_inventory):
        config = AppConfig(engine=EngineConfig(other_category="Unsorted"))
        rows = {r.name: r for r in resolve_tools(sample_inventory, config)}
        assert rows["Salesforce"].resolved_category == "Unsorted"
        assert rows["Salesforce"].needs_review is True
        assert rows["HubSpot"].resolved_category == "Marketing"
        assert rows["HubSpot"].needs_review is False


class TestRunAdvisory:
    def test_mailchimp_hubspot_scenario(self, make_tool, default_config):
        tools = [make_tool("Mailchimp", "Marketing"), make_tool("HubSpot", "Marketing")]
        report = run_advisory(tools, default_config)

        assert [s.id for s in report.suggestions] == ["erp-missing", "cdp-segment"]
        assert len(report.overlaps) == 1
        assert report.overlaps[0].subdomain == "Email Marketing"
        assert report.overlaps[0].size == 2
        assert report.review_count == 2

    def test_cap_from_config(self, make_tool):
        tools = [make_tool("HubSpot", "Marketing"), make_tool("AWS", "Dev/IT"), make_tool("Slack", "Comms")]
        config = AppConfig(engine=EngineConfig(suggestion_cap=1))
        assert [s.id for s in run_advisory(tools, config).suggestions] == ["erp-missing"]

    def test_costs_and_summary(self, sample_inventory, default_config):
        costs = {"hubspot": CostInfo(cost_mo=800), "aws": CostInfo(cost_mo=1200)}
        report = run_advisory(sample_inventory, default_config, costs_by_name=costs)
        assert len(report.analysis) == len(sample_inventory)
        assert report.summary.estimated_monthly_spend == 2000.0

    def test_empty_inventory(self, default_config):
        report = run_advisory([], default_config)
        assert report.resolutions == ()
        assert report.overlaps == ()
        assert [s.id for s in report.suggestions] == ["erp-missing"]

    def test_report_is_fresh_each_run(self, sample_inventory, default_config):
        first = report_to_dict(run_advisory(sample_inventory, default_config))
        second = report_to_dict(run_advisory(sample_inventory, default_config))
        first.pop("generated_at")
        second.pop("generated_at")
        assert first == second


class TestReportToDict:
    def test_json_serialisable(self, sample_inventory, default_config):
        data = report_to_dict(run_advisory(sample_inventory, default_config))
        parsed = json.loads(json.dumps(data, default=str))
        assert set(parsed) == {"generated_at", "tools", "overlaps", "suggestions", "analysis", "summary"}
        assert parsed["suggestions"][0]["actions"][0]["category"] == "ERP"


def test_other_category_labels_uncategorized_overlap(make_tool):
    tools = [make_tool("Zapier", ""), make_tool("Notion", "")]
    config = AppConfig(engine=EngineConfig(other_category="Unsorted"))
    report = run_advisory(tools, config)
    assert [g.subdomain for g in report.overlaps] == ["Unsorted"]
    assert [r.resolved_category for r in report.resolutions] == ["Unsorted", "Unsorted"]
