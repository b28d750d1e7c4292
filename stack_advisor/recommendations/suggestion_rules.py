"""
Suggestion rule engine: proposes the next tools to add to an inventory.

The engine is an ordered table of ``SuggestionRule`` entries.  Each rule
pairs a trigger (a pure predicate over the inventory) with the suggestion it
contributes.  ``get_suggestions()`` walks the table once in declared order,
keeps every triggered suggestion, and truncates to the cap.  Declaration order
is the priority; results are never re-sorted.

Default rule table (priority order)
-----------------------------------
    1. erp-missing : no tool in the ERP lane
    2. cdp-segment : marketing-automation product present, no CDP product
    3. monitoring  : cloud provider present, no monitoring product
    4. helpdesk    : Comms lane occupied, Service lane empty

Product names and lane labels come from ``ProductCatalogConfig`` so a
deployment can swap the catalog without touching the rules.  Adding a rule
means adding an entry to the table built by ``build_suggestion_rules()``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from stack_advisor.classification.category_resolver import effective_lane
from stack_advisor.config import SUGGESTION_CAP, ProductCatalogConfig
from stack_advisor.models.advice import Suggestion, SuggestionAction
from stack_advisor.models.tool import Tool

Trigger = Callable[[Sequence[Tool]], bool]


# ── Predicates ────────────────────────────────────────────────────────────────


def has_name(tools: Sequence[Tool], candidates: Sequence[str]) -> bool:
    """True if any tool name contains any candidate (case-insensitive)."""
    lowered = [c.lower() for c in candidates]
    return any(
        candidate in tool.name.lower()
        for tool in tools
        for candidate in lowered
    )


def has_lane(tools: Sequence[Tool], lane: str) -> bool:
    """True if any tool's effective lane equals ``lane`` exactly."""
    return any(effective_lane(tool) == lane for tool in tools)


# ── Rule table ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SuggestionRule:
    """One entry of the rule table.

    Attributes:
        rule_id:    Stable identifier; equals ``suggestion.id``.
        trigger:    Pure predicate over the inventory.
        suggestion: Suggestion contributed when the trigger fires.
    """

    rule_id:    str
    trigger:    Trigger
    suggestion: Suggestion

    def fires(self, tools: Sequence[Tool]) -> bool:
        return bool(self.trigger(tools))


def _add_actions(products: Sequence[str], lane: str) -> tuple[SuggestionAction, ...]:
    return tuple(
        SuggestionAction(label=f"Add {name}", name=name, category=lane)
        for name in products
    )


def _join_or(names: Sequence[str]) -> str:
    """``["A", "B", "C"]`` -> ``"A, B, or C"``."""
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f"{names[0]} or {names[1]}"
    return f"{', '.join(names[:-1])}, or {names[-1]}"


def build_suggestion_rules(
    catalog: ProductCatalogConfig | None = None,
) -> tuple[SuggestionRule, ...]:
    """Build the default rule table from a product catalog.

    Args:
        catalog: Product lists and lane labels. Defaults to the built-in catalog.

    Returns:
        Rules in priority order.
    """
    catalog = catalog or ProductCatalogConfig()

    erp        = list(catalog.erp_products)
    automation = list(catalog.marketing_automation_products)
    cdp        = list(catalog.cdp_products)
    clouds     = list(catalog.cloud_providers)
    monitoring = list(catalog.monitoring_products)
    helpdesk   = list(catalog.helpdesk_products)

    return (
        SuggestionRule(
            rule_id="erp-missing",
            trigger=lambda tools: not has_lane(tools, catalog.erp_lane),
            suggestion=Suggestion(
                id="erp-missing",
                prompt=f"I don't see an ERP. Are you using {_join_or(erp)}?",
                actions=_add_actions(erp, catalog.erp_lane),
            ),
        ),
        SuggestionRule(
            rule_id="cdp-segment",
            trigger=lambda tools: has_name(tools, automation) and not has_name(tools, cdp),
            suggestion=Suggestion(
                id="cdp-segment",
                prompt=(
                    f"Marketing has {automation[0]}, do you also use a CDP ({cdp[0]})?"
                ),
                actions=_add_actions(cdp[:1], catalog.data_lane),
            ),
        ),
        SuggestionRule(
            rule_id="monitoring",
            trigger=lambda tools: has_name(tools, clouds) and not has_name(tools, monitoring),
            suggestion=Suggestion(
                id="monitoring",
                prompt=f"Cloud is present. Do you use {monitoring[0]} for monitoring?",
                actions=_add_actions(monitoring[:1], catalog.devit_lane),
            ),
        ),
        SuggestionRule(
            rule_id="helpdesk",
            trigger=lambda tools: (
                has_lane(tools, catalog.comms_lane)
                and not has_lane(tools, catalog.service_lane)
            ),
            suggestion=Suggestion(
                id="helpdesk",
                prompt=(
                    f"You have {catalog.comms_lane} tools. "
                    f"Do you also use a helpdesk ({helpdesk[0]})?"
                ),
                actions=_add_actions(helpdesk[:1], catalog.service_lane),
            ),
        ),
    )


DEFAULT_RULES: tuple[SuggestionRule, ...] = build_suggestion_rules()


def get_suggestions(
    tools:           Sequence[Tool],
    rules:           Sequence[SuggestionRule] | None = None,
    max_suggestions: int = SUGGESTION_CAP,
) -> list[Suggestion]:
    """Evaluate the rule table against an inventory.

    Args:
        tools:           Inventory snapshot; never modified.
        rules:           Ordered rule table. Defaults to ``DEFAULT_RULES``.
        max_suggestions: Cap on the number of suggestions returned.

    Returns:
        Triggered suggestions in table order, at most ``max_suggestions``.
    """
    table = DEFAULT_RULES if rules is None else rules
    triggered = [rule.suggestion for rule in table if rule.fires(tools)]
    return triggered[:max_suggestions]


def apply_suggestion_action(
    tools:   Sequence[Tool],
    action:  SuggestionAction,
    tool_id: str,
) -> tuple[Tool, ...]:
    """Return a new inventory with the tool offered by ``action`` appended.

    The added tool is placed in the action's lane as a confirmed category,
    since the user chose it explicitly.
    """
    added = Tool(
        id=tool_id,
        name=action.name,
        category=action.category,
        confirmed_category=action.category,
    )
    return (*tools, added)
