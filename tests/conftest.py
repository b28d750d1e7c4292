"""
Shared pytest fixtures for the Stack Advisor test suite.

Provides:
  - ``make_tool``: factory for ``Tool`` objects with sensible defaults.
  - ``sample_inventory``: a small mixed inventory (trusted, low-confidence,
    legacy and overridden tools).
  - ``default_config``: ``AppConfig`` built from model defaults only.
  - ``inventory_file`` / ``costs_file``: the same data written to JSON files.
"""

from __future__ import annotations

import itertools
import json
from pathlib import Path
from typing import Callable

import pytest

from stack_advisor.config import AppConfig
from stack_advisor.models.tool import Tool


@pytest.fixture
def make_tool() -> Callable[..., Tool]:
    """Return a factory producing Tools with unique ids."""
    counter = itertools.count(1)

    def _make(name: str = "Tool", category: str = "Marketing", **kwargs) -> Tool:
        kwargs.setdefault("id", f"t{next(counter)}")
        return Tool(name=name, category=category, **kwargs)

    return _make


@pytest.fixture
def sample_inventory(make_tool) -> list[Tool]:
    """Six tools covering every resolver branch."""
    return [
        make_tool("HubSpot", "Marketing", confidence=92),
        make_tool("Mailchimp", "Marketing", confidence=85),
        make_tool("Salesforce", "Sales", confidence=60),
        make_tool("Legacy Intranet", "Comms"),
        make_tool("Zendesk", "Support", confirmed_category="Service", confidence=30),
        make_tool("AWS", "Dev/IT", confidence=99),
    ]


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def inventory_file(tmp_path: Path) -> Path:
    path = tmp_path / "tools.json"
    path.write_text(
        json.dumps(
            {
                "tools": [
                    {"id": "1", "name": "Mailchimp", "category": "Marketing", "confidence": 90},
                    {"id": "2", "name": "HubSpot", "category": "Marketing", "confidence": 95},
                    {"id": "3", "name": "Slack", "category": "Comms"},
                    {
                        "id": "4",
                        "name": "Intercom",
                        "category": "Service",
                        "confirmedCategory": "Service",
                        "confidence": 40,
                    },
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def costs_file(tmp_path: Path) -> Path:
    path = tmp_path / "costs.json"
    path.write_text(
        json.dumps(
            {
                "Mailchimp": {"cost_mo": 20, "cost_basis": "flat", "source": "tool"},
                "HubSpot": {"cost_mo": "800.50", "cost_basis": "per seat", "source": "tool"},
                "Intercom": {"cost_mo": None, "cost_basis": None, "source": None},
            }
        ),
        encoding="utf-8",
    )
    return path
