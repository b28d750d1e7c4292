"""
Category resolution under uncertain, AI-derived metadata.

Decision order for ``resolve_category()``
-----------------------------------------
    1. confirmed_category set (non-empty)  → returned verbatim (human wins)
    2. confidence is not None and >= 80    → category as assigned (AI trusted)
    3. otherwise                           → "Other"

Case 3 covers both low-confidence AI output and legacy tools with no
confidence at all.  ``needs_review()`` is derived from the same inputs on
every call; it is never stored on the tool, so a later override clears it
without any bookkeeping.

Also here: helpers for the enrichment boundary - the fallback substituted
when the enrichment call fails, the reconciliation between an AI category and
a user-suggested one, and the confidence band shown next to a category.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from stack_advisor.config import CONFIDENCE_THRESHOLD, OTHER_CATEGORY
from stack_advisor.models.tool import EnrichmentResult, Tool

ConfidenceBand = Literal["strong", "moderate", "weak", "unscored"]

# Band edges for display; the trust threshold itself is CONFIDENCE_THRESHOLD.
MODERATE_CONFIDENCE: float = 50

# Below this an AI category always yields to a user-suggested one.
SUGGESTION_OVERRIDE_CONFIDENCE: float = 70

MANUAL_DESCRIPTION_SUFFIX = "Please add description manually"


def effective_lane(tool: Tool) -> str:
    """Lane a tool currently occupies: the override if set, else its category."""
    return tool.confirmed_category or tool.category


def resolve_category(
    tool:           Tool,
    threshold:      float = CONFIDENCE_THRESHOLD,
    other_category: str = OTHER_CATEGORY,
) -> str:
    """Return the category the tool should be finalized under.

    Args:
        tool:           Tool to resolve.
        threshold:      Minimum confidence (inclusive) for trusting ``tool.category``.
        other_category: Catch-all returned for untrusted tools.

    Returns:
        ``confirmed_category`` if set, ``category`` if trusted, else
        ``other_category``.
    """
    if tool.confirmed_category:
        return tool.confirmed_category
    if tool.confidence is not None and tool.confidence >= threshold:
        return tool.category
    return other_category


def needs_review(
    tool:           Tool,
    threshold:      float = CONFIDENCE_THRESHOLD,
    other_category: str = OTHER_CATEGORY,
) -> bool:
    """True when the tool should be offered for a manual category check.

    Flags tools that resolve to ``other_category`` and every unscored tool,
    whatever its resolved category.
    """
    resolved = resolve_category(tool, threshold, other_category)
    return tool.confidence is None or resolved == other_category


def confidence_band(
    confidence: Optional[float],
    threshold:  float = CONFIDENCE_THRESHOLD,
) -> ConfidenceBand:
    """Bucket a confidence score for display."""
    if confidence is None:
        return "unscored"
    if confidence >= threshold:
        return "strong"
    if confidence >= MODERATE_CONFIDENCE:
        return "moderate"
    return "weak"


# ── Enrichment boundary ───────────────────────────────────────────────────────


def enrichment_fallback(tool_name: str) -> EnrichmentResult:
    """Result to use in place of a failed enrichment call."""
    return EnrichmentResult(
        category=OTHER_CATEGORY,
        description=f"{tool_name} - {MANUAL_DESCRIPTION_SUFFIX}",
        logo_url="",
        confidence=0,
    )


def apply_enrichment(tool: Tool, result: EnrichmentResult) -> Tool:
    """Return a copy of ``tool`` carrying the enrichment's metadata.

    ``confirmed_category`` is left untouched: an existing human decision is
    never replaced by an enrichment.
    """
    return tool.model_copy(
        update={
            "category":    result.category,
            "description": result.description or tool.description,
            "logo_url":    result.logo_url or tool.logo_url,
            "confidence":  (
                result.confidence if result.confidence is not None else tool.confidence
            ),
        }
    )


@dataclass(frozen=True)
class CategoryDecision:
    """Outcome of reconciling an AI category with a user suggestion.

    ``confirmed_category`` is set only when the user's suggestion was taken.
    """

    category:           str
    confirmed_category: Optional[str] = None


def reconcile_suggested_category(
    ai_category:   str,
    ai_confidence: float,
    suggested:     Optional[str],
    threshold:     float = CONFIDENCE_THRESHOLD,
) -> CategoryDecision:
    """Decide between the AI's category and one the user proposed.

    Rules (in order):
      - No suggestion: keep the AI category, unconfirmed.
      - AI said "Other" or confidence < 70: take the suggestion.
      - Confidence >= threshold and the AI disagrees (case-insensitive):
        keep the AI category, unconfirmed.
      - Otherwise take the suggestion.

    A taken suggestion is returned as both category and confirmed category.
    """
    if not suggested:
        return CategoryDecision(category=ai_category)

    if ai_category == OTHER_CATEGORY or ai_confidence < SUGGESTION_OVERRIDE_CONFIDENCE:
        return CategoryDecision(category=suggested, confirmed_category=suggested)

    if ai_confidence >= threshold and ai_category.lower() != suggested.lower():
        return CategoryDecision(category=ai_category)

    return CategoryDecision(category=suggested, confirmed_category=suggested)
