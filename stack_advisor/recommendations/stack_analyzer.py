"""
Stack analyzer: per-tool Replace / Evaluate / Keep verdicts with cost.

Decision order for each tool
----------------------------
    1. MANUAL   : tool.manual_recommendation set        -> that action
    2. REPLACE  : a ReplacementRule names the tool       -> Replace + alternative
    3. EVALUATE : more than one tool shares its lane     -> Evaluate
    4. KEEP     : only tool in a key category            -> Keep (noted)
    5. KEEP     : all other cases

Lanes are compared case-insensitively after trimming, on the tool's
effective lane (confirmed category if set).  Costs are joined by lower-cased
tool name; a tool without a cost entry gets ``cost_mo=None``.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from stack_advisor.classification.category_resolver import effective_lane
from stack_advisor.config import AnalysisConfig
from stack_advisor.models.advice import AnalyzedItem, ConsolidationSummary
from stack_advisor.models.tool import CostInfo, Tool

DEFAULT_REASON = "No issues detected in initial pass."


@dataclass(frozen=True)
class ReplacementRule:
    """A known overlap that warrants replacing the named tools.

    Attributes:
        names:         Lower-case tool names the rule applies to (exact match).
        reason:        Reason when only one of ``names`` is present.
        suggested_alt: Consolidated product to move to.
        joint_reason:  Reason used instead when every name in ``names`` is
                       present; ``None`` to always use ``reason``.
    """

    names:         tuple[str, ...]
    reason:        str
    suggested_alt: str
    joint_reason:  str | None = None

    def reason_for(self, present: set[str]) -> str:
        if self.joint_reason and all(n in present for n in self.names):
            return self.joint_reason
        return self.reason


REPLACEMENT_RULES: tuple[ReplacementRule, ...] = (
    ReplacementRule(
        names=("intercom", "zendesk"),
        reason="Overlaps with other service tools; consider consolidation.",
        suggested_alt="HubSpot Service Hub",
        joint_reason=(
            "Intercom and Zendesk overlap in support/messaging. Consider consolidating."
        ),
    ),
    ReplacementRule(
        names=("marketo",),
        reason="Marketo overlaps with full-stack marketing platforms.",
        suggested_alt="HubSpot Marketing Hub",
    ),
)


def _normalize(value: str) -> str:
    return value.strip().lower()


def analyze_stack(
    tools:          Sequence[Tool],
    costs_by_name:  Mapping[str, CostInfo] | None = None,
    key_categories: Sequence[str] | None = None,
    rules:          Sequence[ReplacementRule] = REPLACEMENT_RULES,
) -> list[AnalyzedItem]:
    """Analyze every tool in the inventory.

    Args:
        tools:          Inventory snapshot.
        costs_by_name:  Cost lookup keyed by lower-cased tool name.
        key_categories: Lower-case lanes where a single tool is worth keeping.
                        Defaults to ``AnalysisConfig().key_categories``.
        rules:          Ordered known-overlap table.

    Returns:
        One AnalyzedItem per tool, in input order.
    """
    costs = costs_by_name or {}
    keys = set(key_categories if key_categories is not None else AnalysisConfig().key_categories)

    present = {_normalize(t.name) for t in tools}
    lane_counts = Counter(_normalize(effective_lane(t) or "other") for t in tools)

    results: list[AnalyzedItem] = []
    for tool in tools:
        name_key = _normalize(tool.name)
        lane = effective_lane(tool)
        lane_key = _normalize(lane or "other")
        cost = costs.get(name_key)
        base = {
            "name":     tool.name,
            "category": lane,
            "cost_mo":  cost.cost_mo if cost is not None else None,
        }

        if tool.manual_recommendation is not None:
            results.append(
                AnalyzedItem(**base, action=tool.manual_recommendation, reason="Manual override")
            )
            continue

        rule = next((r for r in rules if name_key in r.names), None)
        if rule is not None:
            results.append(
                AnalyzedItem(
                    **base,
                    action="Replace",
                    reason=rule.reason_for(present),
                    suggested_alt=rule.suggested_alt,
                )
            )
            continue

        if lane_counts[lane_key] > 1:
            results.append(
                AnalyzedItem(
                    **base,
                    action="Evaluate",
                    reason=f"Multiple tools in category '{lane}' -> redundancy potential",
                )
            )
            continue

        if lane_key in keys:
            results.append(
                AnalyzedItem(**base, action="Keep", reason=f"Single tool in key category '{lane}'")
            )
            continue

        results.append(AnalyzedItem(**base, action="Keep", reason=DEFAULT_REASON))

    return results


def summarize_analysis(items: Sequence[AnalyzedItem]) -> ConsolidationSummary:
    """Count verdicts and total the known monthly cost."""
    actions = Counter(item.action for item in items)
    priced = [item.cost_mo for item in items if item.cost_mo is not None]
    return ConsolidationSummary(
        replace_count=actions["Replace"],
        evaluate_count=actions["Evaluate"],
        keep_count=actions["Keep"],
        estimated_monthly_spend=round(sum(priced), 2),
        priced_tools=len(priced),
    )
