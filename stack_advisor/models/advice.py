"""
Advice output models.

``OverlapGroup`` - two or more tools sharing a functional subdomain.
``Suggestion``   - a rule-triggered "add this tool to this lane" offer.
``AnalyzedItem`` - per-tool Replace/Evaluate/Keep verdict from the stack analyzer.

These are values produced by one engine call over a caller-supplied inventory.
They are frozen and use tuples for their collections so consumers cannot
mutate a result in place.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from stack_advisor.models.tool import RecommendationAction, Tool


class OverlapGroup(BaseModel):
    """Tools that share a subdomain, in inventory order."""

    model_config = ConfigDict(frozen=True)

    subdomain: str
    tools: tuple[Tool, ...]

    @field_validator("subdomain")
    @classmethod
    def validate_subdomain(cls, v: str) -> str:
        if not v:
            raise ValueError("OverlapGroup.subdomain must be non-empty.")
        return v

    @property
    def size(self) -> int:
        return len(self.tools)


class SuggestionAction(BaseModel):
    """One concrete offer: add tool ``name`` into lane ``category``."""

    model_config = ConfigDict(frozen=True)

    label: str
    name: str
    category: str


class Suggestion(BaseModel):
    """A recommendation produced by one suggestion rule.

    Attributes:
        id: Stable identifier of the rule that produced it, e.g. ``"erp-missing"``.
        prompt: Question shown to the user.
        actions: Ordered, non-empty list of add-tool offers.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    prompt: str
    actions: tuple[SuggestionAction, ...]

    @field_validator("actions")
    @classmethod
    def validate_actions(cls, v: tuple[SuggestionAction, ...]) -> tuple[SuggestionAction, ...]:
        if not v:
            raise ValueError("Suggestion.actions must contain at least one action.")
        return v


class AnalyzedItem(BaseModel):
    """Stack analyzer verdict for one tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    category: str
    cost_mo: Optional[float] = None
    action: RecommendationAction
    reason: str
    suggested_alt: Optional[str] = None


class ConsolidationSummary(BaseModel):
    """Counts per action and the known monthly spend of the analyzed stack."""

    model_config = ConfigDict(frozen=True)

    replace_count: int = 0
    evaluate_count: int = 0
    keep_count: int = 0
    estimated_monthly_spend: float = 0.0
    priced_tools: int = 0
