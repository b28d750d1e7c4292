"""
ASCII terminal formatters for CLI advisory commands.

All formatters take engine outputs and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

from collections.abc import Sequence

from stack_advisor.models.advice import (
    AnalyzedItem,
    ConsolidationSummary,
    OverlapGroup,
    Suggestion,
)
from stack_advisor.pipeline.advise import AdvisoryReport, ToolResolution


def _fmt_confidence(confidence: float | None) -> str:
    return "-" if confidence is None else f"{confidence:.0f}"


def _fmt_cost(cost: float | None) -> str:
    return "-" if cost is None else f"${cost:,.2f}"


# ── Category review ───────────────────────────────────────────────────────────


def format_review_table(
    resolutions: Sequence[ToolResolution],
    only_flagged: bool = False,
) -> str:
    """Format resolved categories with their review flags.

    Example::

        Tool                  Category        Resolved        Conf  Band      Review
        ---------------------------------------------------------------------------
        HubSpot               Marketing       Marketing         92  strong
        Legacy CRM            Sales           Other              -  unscored  YES

    Args:
        resolutions:  Output of ``resolve_tools()``.
        only_flagged: Show only tools that need review.

    Returns:
        Multi-line string.
    """
    rows = [r for r in resolutions if r.needs_review] if only_flagged else list(resolutions)
    flagged = sum(1 for r in resolutions if r.needs_review)

    lines: list[str] = []
    lines.append("")
    lines.append("=== Category Review ===")
    lines.append(f"  Tools: {len(resolutions)}   Needs review: {flagged}")

    if not rows:
        lines.append("")
        lines.append("  (nothing to review)" if only_flagged else "  (inventory is empty)")
        return "\n".join(lines)

    header = (
        f"    {'Tool':<24}  {'Category':<16}  {'Resolved':<16}  "
        f"{'Conf':>4}  {'Band':<9}  {'Review':<6}"
    )
    lines.append("")
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))
    for r in rows:
        lines.append(
            f"    {r.name[:24]:<24}  {(r.category or '-')[:16]:<16}  "
            f"{r.resolved_category[:16]:<16}  {_fmt_confidence(r.confidence):>4}  "
            f"{r.confidence_band:<9}  {'YES' if r.needs_review else '':<6}"
        )
    return "\n".join(lines)


# ── Overlaps ──────────────────────────────────────────────────────────────────


def format_overlap_groups(groups: Sequence[OverlapGroup]) -> str:
    """Format overlap groups, largest first, one block per subdomain."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Overlapping Tools ===")

    if not groups:
        lines.append("")
        lines.append("  (no overlaps detected)")
        return "\n".join(lines)

    for group in groups:
        lines.append("")
        lines.append(f"  [{group.subdomain.upper()}]  {group.size} tools")
        for tool in group.tools:
            lane = tool.confirmed_category or tool.category or "-"
            lines.append(f"    - {tool.name}  ({lane})")
    return "\n".join(lines)


# ── Suggestions ───────────────────────────────────────────────────────────────


def format_suggestions(suggestions: Sequence[Suggestion]) -> str:
    """Format suggestions in priority order with their add-tool actions."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Suggestions ===")

    if not suggestions:
        lines.append("")
        lines.append("  (no suggestions: the inventory covers every rule)")
        return "\n".join(lines)

    for rank, suggestion in enumerate(suggestions, start=1):
        lines.append("")
        lines.append(f"  {rank}. {suggestion.prompt}  [{suggestion.id}]")
        for action in suggestion.actions:
            lines.append(f"       -> {action.label:<20} lane: {action.category}")
    return "\n".join(lines)


# ── Stack analysis ────────────────────────────────────────────────────────────


def format_stack_analysis(
    items:   Sequence[AnalyzedItem],
    summary: ConsolidationSummary,
) -> str:
    """Format Replace/Evaluate/Keep verdicts with a spend summary header."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Stack Consolidation ===")
    spend = (
        _fmt_cost(summary.estimated_monthly_spend) if summary.priced_tools else "-"
    )
    lines.append(f"  Estimated monthly spend: {spend}  ({summary.priced_tools} priced tools)")
    lines.append(
        f"  Replace: {summary.replace_count}   Evaluate: {summary.evaluate_count}   "
        f"Keep: {summary.keep_count}"
    )

    if not items:
        lines.append("")
        lines.append("  (inventory is empty)")
        return "\n".join(lines)

    header = (
        f"    {'Tool':<24}  {'Category':<16}  {'Cost/mo':>10}  {'Action':<8}  Reason"
    )
    lines.append("")
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4 + 30))
    for item in items:
        reason = item.reason
        if item.suggested_alt:
            reason = f"{reason} (alt: {item.suggested_alt})"
        lines.append(
            f"    {item.name[:24]:<24}  {(item.category or '-')[:16]:<16}  "
            f"{_fmt_cost(item.cost_mo):>10}  {item.action:<8}  {reason}"
        )
    return "\n".join(lines)


# ── Full report ───────────────────────────────────────────────────────────────


def format_advisory_report(report: AdvisoryReport) -> str:
    """All sections of an advisory report, in CLI order."""
    generated = report.generated_at.strftime("%Y-%m-%dT%H:%M:%SZ")
    return "\n".join(
        [
            f"Stack advisory generated at {generated}",
            format_review_table(report.resolutions),
            format_overlap_groups(report.overlaps),
            format_suggestions(report.suggestions),
            format_stack_analysis(report.analysis, report.summary),
        ]
    )
