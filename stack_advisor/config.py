"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      - committed static defaults
  2. ``config/local.toml``        - optional local overrides (gitignored)
  3. ``.env``                     - local secrets and env overrides (gitignored)
  4. Environment variables        - ``STACK_ADVISOR_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The engine thresholds (confidence trust level, overlap group size, suggestion
cap) and the product catalogs used by the suggestion rules live here as named
values.  CLI commands pass an ``AppConfig`` down; the engine functions take the
individual values as parameters with the same defaults.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Engine constants ──────────────────────────────────────────────────────────

CONFIDENCE_THRESHOLD: float = 80
OVERLAP_MIN_GROUP_SIZE: int = 2
SUGGESTION_CAP: int = 3
OTHER_CATEGORY: str = "Other"


# ── Sub-config models ─────────────────────────────────────────────────────────


class EngineConfig(BaseModel):
    """Decision thresholds for the advisory engine."""

    model_config = ConfigDict(frozen=True)

    confidence_threshold: float = CONFIDENCE_THRESHOLD
    overlap_min_group_size: int = OVERLAP_MIN_GROUP_SIZE
    suggestion_cap: int = SUGGESTION_CAP
    other_category: str = OTHER_CATEGORY

    @field_validator("overlap_min_group_size")
    @classmethod
    def validate_group_size(cls, v: int) -> int:
        if v < 2:
            raise ValueError(f"overlap_min_group_size must be >= 2, got {v}.")
        return v

    @field_validator("suggestion_cap")
    @classmethod
    def validate_cap(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"suggestion_cap must be >= 1, got {v}.")
        return v

    @field_validator("other_category")
    @classmethod
    def validate_other_category(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("other_category must be non-empty.")
        return v


class ProductCatalogConfig(BaseModel):
    """Static product lists and lane names consumed by the suggestion rules.

    The lists are matched as case-insensitive substrings of tool names; the
    first entry of each "add" list is the product offered when only one
    action is generated.
    """

    model_config = ConfigDict(frozen=True)

    erp_lane: str = "ERP"
    data_lane: str = "Data"
    devit_lane: str = "Dev/IT"
    comms_lane: str = "Comms"
    service_lane: str = "Service"

    erp_products: list[str] = ["NetSuite", "SAP", "Odoo"]
    marketing_automation_products: list[str] = ["HubSpot"]
    cdp_products: list[str] = ["Segment"]
    cloud_providers: list[str] = ["AWS", "Azure", "GCP", "Google Cloud"]
    monitoring_products: list[str] = ["Datadog"]
    helpdesk_products: list[str] = ["Zendesk"]

    @field_validator(
        "erp_products",
        "marketing_automation_products",
        "cdp_products",
        "cloud_providers",
        "monitoring_products",
        "helpdesk_products",
    )
    @classmethod
    def validate_non_empty(cls, v: list[str]) -> list[str]:
        cleaned = [name.strip() for name in v if name and name.strip()]
        if not cleaned:
            raise ValueError("Product catalog lists must contain at least one name.")
        return cleaned


class AnalysisConfig(BaseModel):
    """Stack analyzer settings."""

    model_config = ConfigDict(frozen=True)

    key_categories: list[str] = [
        "crm",
        "customer support",
        "helpdesk",
        "service",
        "marketing automation",
        "marketing",
    ]

    @field_validator("key_categories")
    @classmethod
    def normalize_categories(cls, v: list[str]) -> list[str]:
        return [c.strip().lower() for c in v if c.strip()]


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration - the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    engine: EngineConfig = EngineConfig()
    catalog: ProductCatalogConfig = ProductCatalogConfig()
    analysis: AnalysisConfig = AnalysisConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default file is
            absent the built-in defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicitly given ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            raw = _read_toml(default_path)
            config_dir = default_path.parent
        else:
            config_dir = None
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        raw = _read_toml(config_path)
        config_dir = config_path.parent

    # Also merge local.toml if present (gitignored local overrides)
    if config_dir is not None:
        local_config_path = config_dir / "local.toml"
        if local_config_path.exists():
            raw = _deep_merge(raw, _read_toml(local_config_path))

    # 3. Apply STACK_ADVISOR_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply STACK_ADVISOR_* env vars to the raw config dict.

    Supported overrides:
      STACK_ADVISOR_LOG_LEVEL             → raw["logging"]["level"]
      STACK_ADVISOR_CONFIDENCE_THRESHOLD  → raw["engine"]["confidence_threshold"]
      STACK_ADVISOR_SUGGESTION_CAP        → raw["engine"]["suggestion_cap"]
      STACK_ADVISOR_DEBUG                 → raw["debug"]
    """
    if log_level := os.environ.get("STACK_ADVISOR_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if threshold := os.environ.get("STACK_ADVISOR_CONFIDENCE_THRESHOLD"):
        raw.setdefault("engine", {})["confidence_threshold"] = float(threshold)

    if cap := os.environ.get("STACK_ADVISOR_SUGGESTION_CAP"):
        raw.setdefault("engine", {})["suggestion_cap"] = int(cap)

    if debug := os.environ.get("STACK_ADVISOR_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        engine=EngineConfig(**raw.get("engine", {})),
        catalog=ProductCatalogConfig(**raw.get("catalog", {})),
        analysis=AnalysisConfig(**raw.get("analysis", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
