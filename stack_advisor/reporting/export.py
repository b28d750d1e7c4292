"""
Export helpers for spreadsheets and downstream tooling.

All functions write to disk and return the written ``Path``.

CSV exports are flat (no nested dicts) so they open directly in Excel or
pandas.  ``flatten_analysis_for_export()`` joins each tool's classification
row with its stack-analyzer verdict.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

from stack_advisor.pipeline.advise import AdvisoryReport, report_to_dict


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file (parent dirs created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def export_report_json(report: AdvisoryReport, path: Path) -> Path:
    """Write the full advisory report as JSON."""
    return export_to_json(report_to_dict(report), path)


def flatten_analysis_for_export(report: AdvisoryReport) -> list[dict]:
    """One flat row per tool: classification plus stack-analyzer verdict.

    Rows pair ``report.resolutions[i]`` with ``report.analysis[i]``; both are
    produced in inventory order by the same run.  ``overlap_subdomain`` is
    set only when the tool belongs to a reported overlap group.
    """
    overlapping = {
        tool.id: group.subdomain
        for group in report.overlaps
        for tool in group.tools
    }
    rows: list[dict] = []
    for res, item in zip(report.resolutions, report.analysis):
        rows.append(
            {
                "id":                res.tool_id,
                "name":              res.name,
                "category":          res.category,
                "resolved_category": res.resolved_category,
                "confidence":        "" if res.confidence is None else res.confidence,
                "confidence_band":   res.confidence_band,
                "needs_review":      res.needs_review,
                "subdomain":         res.subdomain,
                "overlap_subdomain": overlapping.get(res.tool_id, ""),
                "action":            item.action,
                "reason":            item.reason,
                "suggested_alt":     item.suggested_alt or "",
                "cost_mo":           "" if item.cost_mo is None else item.cost_mo,
            }
        )
    return rows
