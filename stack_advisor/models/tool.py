"""
Tool inventory models.

``Tool`` is one inventoried software product.  Its ``category`` may come from
a human or from an AI enrichment call; ``confirmed_category`` is a human
override that always wins.  ``confidence`` is optional on purpose: ``None``
means a legacy/unscored record and is a different state from ``0``.

``EnrichmentResult`` and ``CostInfo`` are the shapes returned by the external
enrichment and cost collaborators.  Both are produced outside the engine; the
engine only consumes them.

All models are frozen.  JSON input may use the camelCase keys the inventory
store writes (``confirmedCategory``, ``logoUrl``, ``manualRecommendation``).
"""

from __future__ import annotations

import math
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

RecommendationAction = Literal["Replace", "Evaluate", "Keep"]

CostSource = Literal["tool", "category"]


class Tool(BaseModel):
    """One inventoried tool.

    Attributes:
        id: Opaque identifier assigned by the inventory store.
        name: Display name; case-insensitive matching key for rules.
        category: Category as last assigned (human or AI). May be empty.
        confirmed_category: Human override; authoritative when non-empty.
        description: Free text, extra matching signal only.
        confidence: 0–100 trust in ``category`` when AI-assigned; ``None`` for
            legacy/unscored tools. Not range-checked.
        logo_url: Logo carried through from enrichment; unused by the engine.
        manual_recommendation: User's Replace/Evaluate/Keep override for the
            stack analyzer.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    category: str = ""
    confirmed_category: Optional[str] = Field(default=None, alias="confirmedCategory")
    description: Optional[str] = None
    confidence: Optional[float] = None
    logo_url: Optional[str] = Field(default=None, alias="logoUrl")
    manual_recommendation: Optional[RecommendationAction] = Field(
        default=None, alias="manualRecommendation"
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        # Stores hand out both integer and UUID keys.
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("category", mode="before")
    @classmethod
    def none_category_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class EnrichmentResult(BaseModel):
    """Result of the AI enrichment collaborator for one tool name."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: str
    description: str = ""
    logo_url: str = Field(default="", alias="logoUrl")
    confidence: Optional[float] = None


class CostInfo(BaseModel):
    """Monthly cost resolved for a tool by the cost collaborator.

    All fields are ``None`` when resolution failed.

    Attributes:
        cost_mo: Monthly cost; numeric strings are parsed, non-finite → ``None``.
        cost_basis: Free-text basis, e.g. ``"per user"``.
        source: ``"tool"`` when priced per product, ``"category"`` when the
            price is a category average.
    """

    model_config = ConfigDict(frozen=True)

    cost_mo: Optional[float] = None
    cost_basis: Optional[str] = None
    source: Optional[CostSource] = None

    @field_validator("cost_mo", mode="before")
    @classmethod
    def coerce_cost(cls, v: Any) -> Optional[float]:
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return float(v) if math.isfinite(v) else None
        if isinstance(v, str):
            try:
                parsed = float(v)
            except ValueError:
                return None
            return parsed if math.isfinite(parsed) else None
        return None

    @classmethod
    def unresolved(cls) -> "CostInfo":
        """The shape substituted when the cost lookup fails."""
        return cls()
