"""
JSON loaders for tool inventories and resolved costs.

Inventory format - either a bare list or an object with a ``tools`` key::

    [
      {"id": "1", "name": "HubSpot", "category": "Marketing", "confidence": 92},
      {"id": "2", "name": "Zendesk", "category": "Service",
       "confirmedCategory": "Service"}
    ]

Cost format - an object keyed by tool name, or a list of rows with a
``name`` field::

    {"Salesforce": {"cost_mo": 150, "cost_basis": "per user", "source": "tool"}}

All rows are validated before anything is returned.  If any row fails, one
``InventoryLoadError`` is raised listing the first 10 failures.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from stack_advisor.models.tool import CostInfo, Tool

logger = logging.getLogger(__name__)

_MAX_REPORTED_ERRORS = 10


class InventoryLoadError(ValueError):
    """Raised when an inventory or cost file cannot be parsed or validated."""


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InventoryLoadError(f"Invalid JSON in {path}: {exc}") from exc


def _raise_if_errors(errors: list[str], path: Path) -> None:
    if not errors:
        return
    shown = "\n".join(f"  {e}" for e in errors[:_MAX_REPORTED_ERRORS])
    more = len(errors) - _MAX_REPORTED_ERRORS
    suffix = f"\n  ... and {more} more" if more > 0 else ""
    raise InventoryLoadError(f"{len(errors)} invalid row(s) in {path}:\n{shown}{suffix}")


def parse_inventory(records: Any, source: str = "<memory>") -> list[Tool]:
    """Validate raw inventory records into ``Tool`` objects.

    Args:
        records: List of dicts, or a dict with a ``tools`` list.
        source:  Label used in error messages.

    Returns:
        Tools in input order.

    Raises:
        InventoryLoadError: On a wrong top-level shape, invalid rows, or
            duplicate ids.
    """
    if isinstance(records, dict):
        records = records.get("tools")
    if not isinstance(records, list):
        raise InventoryLoadError(
            f"Inventory in {source} must be a list of tools or an object with a 'tools' list."
        )

    tools: list[Tool] = []
    errors: list[str] = []
    seen: set[str] = set()

    for idx, record in enumerate(records):
        try:
            tool = Tool.model_validate(record)
        except ValidationError as exc:
            errors.append(f"row {idx}: {exc.errors()[0]['loc']} {exc.errors()[0]['msg']}")
            continue
        if tool.id in seen:
            errors.append(f"row {idx}: duplicate id '{tool.id}'")
            continue
        seen.add(tool.id)
        tools.append(tool)

    _raise_if_errors(errors, Path(source))
    return tools


def load_inventory(path: Path) -> list[Tool]:
    """Load and validate an inventory JSON file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        InventoryLoadError: If the file is not valid JSON or any row is invalid.
    """
    path = Path(path)
    tools = parse_inventory(_read_json(path), source=str(path))
    logger.info("Loaded %d tools from %s", len(tools), path)
    return tools


def load_costs(path: Path) -> dict[str, CostInfo]:
    """Load resolved costs keyed by lower-cased tool name.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        InventoryLoadError: If the file is not valid JSON or any row is invalid.
    """
    path = Path(path)
    raw = _read_json(path)

    if isinstance(raw, dict):
        rows = [(str(name), value) for name, value in raw.items()]
    elif isinstance(raw, list):
        rows = [
            (str(row.get("name", "")), row) if isinstance(row, dict) else ("", row)
            for row in raw
        ]
    else:
        raise InventoryLoadError(f"Costs in {path} must be an object or a list.")

    costs: dict[str, CostInfo] = {}
    errors: list[str] = []
    for idx, (name, value) in enumerate(rows):
        if not name.strip():
            errors.append(f"row {idx}: missing tool name")
            continue
        if not isinstance(value, dict):
            errors.append(f"row {idx}: cost entry for '{name}' must be an object")
            continue
        fields = {k: v for k, v in value.items() if k != "name"}
        try:
            costs[name.strip().lower()] = CostInfo.model_validate(fields)
        except ValidationError as exc:
            errors.append(f"row {idx}: {exc.errors()[0]['loc']} {exc.errors()[0]['msg']}")

    _raise_if_errors(errors, path)
    logger.info("Loaded %d cost entries from %s", len(costs), path)
    return costs
