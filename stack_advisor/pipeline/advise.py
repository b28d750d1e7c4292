"""
Advisory run - recompute every piece of advice for one inventory snapshot.

Advisory flow
-------------
  1. Resolve each tool's category and review flag (category_resolver).
  2. Derive each tool's subdomain and group overlaps (overlap).
  3. Evaluate the suggestion rule table (suggestion_rules).
  4. Run the stack analyzer with any resolved costs (stack_analyzer).

Nothing is cached between runs: the caller passes a snapshot and receives a
fresh ``AdvisoryReport``.  Re-running after every inventory edit is the
intended usage.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from stack_advisor.classification.category_resolver import (
    confidence_band,
    needs_review,
    resolve_category,
)
from stack_advisor.classification.overlap import compute_overlap, derive_subdomain
from stack_advisor.config import AppConfig
from stack_advisor.models.advice import (
    AnalyzedItem,
    ConsolidationSummary,
    OverlapGroup,
    Suggestion,
)
from stack_advisor.models.tool import CostInfo, Tool
from stack_advisor.recommendations.stack_analyzer import analyze_stack, summarize_analysis
from stack_advisor.recommendations.suggestion_rules import (
    build_suggestion_rules,
    get_suggestions,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResolution:
    """Per-tool classification row.

    Attributes:
        tool_id:           Inventory id.
        name:              Tool name.
        category:          Category as assigned.
        resolved_category: Output of ``resolve_category``.
        confidence:        Raw confidence, ``None`` if unscored.
        confidence_band:   strong / moderate / weak / unscored.
        needs_review:      Output of ``needs_review``.
        subdomain:         Output of ``derive_subdomain``.
    """

    tool_id:           str
    name:              str
    category:          str
    resolved_category: str
    confidence:        Optional[float]
    confidence_band:   str
    needs_review:      bool
    subdomain:         str


@dataclass(frozen=True)
class AdvisoryReport:
    """All advice computed for one inventory snapshot."""

    resolutions: tuple[ToolResolution, ...]
    overlaps:    tuple[OverlapGroup, ...]
    suggestions: tuple[Suggestion, ...]
    analysis:    tuple[AnalyzedItem, ...]
    summary:     ConsolidationSummary
    generated_at: datetime = field(
        default_factory=lambda: datetime.now(tz=timezone.utc)
    )

    @property
    def review_count(self) -> int:
        return sum(1 for r in self.resolutions if r.needs_review)


def resolve_tools(tools: Sequence[Tool], config: AppConfig) -> list[ToolResolution]:
    """Build one ToolResolution per tool, in input order."""
    threshold = config.engine.confidence_threshold
    other = config.engine.other_category
    return [
        ToolResolution(
            tool_id=tool.id,
            name=tool.name,
            category=tool.category,
            resolved_category=resolve_category(tool, threshold, other),
            confidence=tool.confidence,
            confidence_band=confidence_band(tool.confidence, threshold),
            needs_review=needs_review(tool, threshold, other),
            subdomain=derive_subdomain(tool, other_category=other),
        )
        for tool in tools
    ]


def run_advisory(
    tools:         Sequence[Tool],
    config:        AppConfig,
    costs_by_name: Mapping[str, CostInfo] | None = None,
) -> AdvisoryReport:
    """Compute the full advisory report for an inventory snapshot.

    Args:
        tools:         Inventory snapshot; not modified.
        config:        Application config (thresholds and catalogs).
        costs_by_name: Optional cost lookup keyed by lower-cased tool name.

    Returns:
        AdvisoryReport.
    """
    snapshot = tuple(tools)

    resolutions = resolve_tools(snapshot, config)
    overlaps = compute_overlap(
        snapshot,
        min_group_size=config.engine.overlap_min_group_size,
        other_category=config.engine.other_category,
    )
    suggestions = get_suggestions(
        snapshot,
        rules=build_suggestion_rules(config.catalog),
        max_suggestions=config.engine.suggestion_cap,
    )
    analysis = analyze_stack(
        snapshot,
        costs_by_name=costs_by_name,
        key_categories=config.analysis.key_categories,
    )
    summary = summarize_analysis(analysis)

    report = AdvisoryReport(
        resolutions=tuple(resolutions),
        overlaps=tuple(overlaps),
        suggestions=tuple(suggestions),
        analysis=tuple(analysis),
        summary=summary,
    )
    logger.info(
        "Advisory run: %d tools, %d need review, %d overlap groups, %d suggestions",
        len(snapshot),
        report.review_count,
        len(report.overlaps),
        len(report.suggestions),
    )
    return report


def report_to_dict(report: AdvisoryReport) -> dict[str, Any]:
    """Serialise an AdvisoryReport to a JSON-ready dict."""
    return {
        "generated_at": report.generated_at.isoformat(),
        "tools": [
            {
                "id":                r.tool_id,
                "name":              r.name,
                "category":          r.category,
                "resolved_category": r.resolved_category,
                "confidence":        r.confidence,
                "confidence_band":   r.confidence_band,
                "needs_review":      r.needs_review,
                "subdomain":         r.subdomain,
            }
            for r in report.resolutions
        ],
        "overlaps": [
            {
                "subdomain": g.subdomain,
                "size":      g.size,
                "tools":     [t.name for t in g.tools],
            }
            for g in report.overlaps
        ],
        "suggestions": [s.model_dump() for s in report.suggestions],
        "analysis":    [item.model_dump() for item in report.analysis],
        "summary":     report.summary.model_dump(),
    }
