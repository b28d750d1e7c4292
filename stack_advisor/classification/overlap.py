"""
Subdomain classification and overlap detection.

Usage flow
----------
1. derive_subdomain(tool)
   -> label of the first matching rule in SUBDOMAIN_RULES, else the tool's
      category (or "Other" when the category is empty)

2. compute_overlap(tools)
   -> list[OverlapGroup], one per subdomain holding >= 2 tools, ordered by
      size descending then label ascending

Subdomains are derived from text alone and are independent of the category
resolver: a low-confidence tool still contributes its raw category text.
"""

from __future__ import annotations

from collections.abc import Sequence

from stack_advisor.config import OTHER_CATEGORY, OVERLAP_MIN_GROUP_SIZE
from stack_advisor.models.advice import OverlapGroup
from stack_advisor.models.tool import Tool
from stack_advisor.taxonomy.subdomain_taxonomy import SUBDOMAIN_RULES, SubdomainRule


def search_text(tool: Tool) -> str:
    """Lower-cased ``name category description`` string used for matching."""
    return f"{tool.name} {tool.category} {tool.description or ''}".lower()


def derive_subdomain(
    tool:           Tool,
    rules:          Sequence[SubdomainRule] = SUBDOMAIN_RULES,
    other_category: str = OTHER_CATEGORY,
) -> str:
    """Classify ``tool`` into a subdomain; the first matching rule wins."""
    text = search_text(tool)
    for rule in rules:
        if rule.matches(text):
            return str(rule.label)
    return tool.category or other_category


def compute_overlap(
    tools:          Sequence[Tool],
    rules:          Sequence[SubdomainRule] = SUBDOMAIN_RULES,
    min_group_size: int = OVERLAP_MIN_GROUP_SIZE,
    other_category: str = OTHER_CATEGORY,
) -> list[OverlapGroup]:
    """Group tools that share a subdomain.

    Tools keep their input order inside each group.  Groups smaller than
    ``min_group_size`` are dropped.  Groups are sorted by size descending;
    equal sizes are ordered by subdomain label ascending so the result does
    not depend on inventory order.

    Args:
        tools:          Inventory snapshot.
        rules:          Ordered classification table.
        min_group_size: Smallest group reported as an overlap.
        other_category: Label for tools with no keyword match and no category.

    Returns:
        List of OverlapGroup (empty for empty or singleton input).
    """
    buckets: dict[str, list[Tool]] = {}
    for tool in tools:
        buckets.setdefault(derive_subdomain(tool, rules, other_category), []).append(tool)

    groups = [
        OverlapGroup(subdomain=subdomain, tools=tuple(members))
        for subdomain, members in buckets.items()
        if len(members) >= min_group_size
    ]
    # Primary sort: size descending. Secondary: label ascending.
    return sorted(groups, key=lambda g: (-g.size, g.subdomain))
