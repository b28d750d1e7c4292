"""
Stack Advisor - CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate the inventory (and optional cost) JSON files.
  4. Run the engine.
  5. Report result to stdout.

Install and run::

    pip install -e .
    stack-advisor --help
    stack-advisor validate-config
    stack-advisor review   --inventory tools.json --flagged
    stack-advisor overlap  --inventory tools.json
    stack-advisor suggest  --inventory tools.json
    stack-advisor analyze  --inventory tools.json --costs costs.json
    stack-advisor advise   --inventory tools.json --output out/advice.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="stack-advisor",
    help="Tool inventory advisor - category review, overlaps and gap suggestions.",
    add_completion=False,
)

_INVENTORY_HELP = "Path to the inventory JSON file (list of tools or {'tools': [...]})."
_CONFIG_HELP = "Path to TOML config file (default: config/default.toml)."


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from stack_advisor.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from stack_advisor.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_inventory_or_exit(inventory_path: str):
    """Load the inventory, printing a friendly error and exiting on failure."""
    from stack_advisor.ingestion.inventory_loader import InventoryLoadError, load_inventory

    try:
        return load_inventory(Path(inventory_path))
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except InventoryLoadError as exc:
        typer.echo(f"[ERROR] Inventory validation failed:\n{exc}", err=True)
        raise typer.Exit(code=1)


def _load_costs_or_exit(costs_path: Optional[str]):
    """Load cost data if a path was given; ``None`` otherwise."""
    if not costs_path:
        return None
    from stack_advisor.ingestion.inventory_loader import InventoryLoadError, load_costs

    try:
        return load_costs(Path(costs_path))
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except InventoryLoadError as exc:
        typer.echo(f"[ERROR] Cost file validation failed:\n{exc}", err=True)
        raise typer.Exit(code=1)


def _prepare(config_path: Optional[str], inventory_path: str):
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    tools = _load_inventory_or_exit(inventory_path)
    return config, tools


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Confidence threshold: {config.engine.confidence_threshold:g}")
    typer.echo(f"  Overlap min group:    {config.engine.overlap_min_group_size}")
    typer.echo(f"  Suggestion cap:       {config.engine.suggestion_cap}")
    typer.echo(f"  ERP products:         {', '.join(config.catalog.erp_products)}")
    typer.echo(f"  Log level:            {config.logging.level}")
    typer.echo(f"  Debug mode:           {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("review")
def review(
    inventory_path: str = typer.Option(..., "--inventory", "-i", help=_INVENTORY_HELP),
    flagged: bool = typer.Option(
        False,
        "--flagged",
        help="Show only tools that need a manual category review.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Show each tool's resolved category and whether it needs review."""
    from stack_advisor.pipeline.advise import resolve_tools
    from stack_advisor.reporting.formatters import format_review_table

    config, tools = _prepare(config_path, inventory_path)
    typer.echo(format_review_table(resolve_tools(tools, config), only_flagged=flagged))


@app.command("overlap")
def overlap(
    inventory_path: str = typer.Option(..., "--inventory", "-i", help=_INVENTORY_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """List groups of tools that share a functional subdomain."""
    from stack_advisor.classification.overlap import compute_overlap
    from stack_advisor.reporting.formatters import format_overlap_groups

    config, tools = _prepare(config_path, inventory_path)
    groups = compute_overlap(
        tools,
        min_group_size=config.engine.overlap_min_group_size,
        other_category=config.engine.other_category,
    )
    typer.echo(format_overlap_groups(groups))


@app.command("suggest")
def suggest(
    inventory_path: str = typer.Option(..., "--inventory", "-i", help=_INVENTORY_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Suggest the next tools to add, in rule priority order."""
    from stack_advisor.recommendations.suggestion_rules import (
        build_suggestion_rules,
        get_suggestions,
    )
    from stack_advisor.reporting.formatters import format_suggestions

    config, tools = _prepare(config_path, inventory_path)
    suggestions = get_suggestions(
        tools,
        rules=build_suggestion_rules(config.catalog),
        max_suggestions=config.engine.suggestion_cap,
    )
    typer.echo(format_suggestions(suggestions))


@app.command("analyze")
def analyze(
    inventory_path: str = typer.Option(..., "--inventory", "-i", help=_INVENTORY_HELP),
    costs_path: Optional[str] = typer.Option(
        None,
        "--costs",
        help="Optional JSON file of resolved monthly costs keyed by tool name.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Replace / Evaluate / Keep verdict for every tool, with spend summary."""
    from stack_advisor.recommendations.stack_analyzer import analyze_stack, summarize_analysis
    from stack_advisor.reporting.formatters import format_stack_analysis

    config, tools = _prepare(config_path, inventory_path)
    costs = _load_costs_or_exit(costs_path)
    items = analyze_stack(
        tools,
        costs_by_name=costs,
        key_categories=config.analysis.key_categories,
    )
    typer.echo(format_stack_analysis(items, summarize_analysis(items)))


@app.command("advise")
def advise(
    inventory_path: str = typer.Option(..., "--inventory", "-i", help=_INVENTORY_HELP),
    costs_path: Optional[str] = typer.Option(
        None,
        "--costs",
        help="Optional JSON file of resolved monthly costs keyed by tool name.",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the full report as JSON to this path.",
    ),
    csv_path: Optional[str] = typer.Option(
        None,
        "--csv",
        help="Write one flat row per tool as CSV to this path.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON instead of tables.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Run every advisor over the inventory and print the combined report."""
    from stack_advisor.pipeline.advise import report_to_dict, run_advisory
    from stack_advisor.reporting.export import (
        export_report_json,
        export_to_csv,
        flatten_analysis_for_export,
    )
    from stack_advisor.reporting.formatters import format_advisory_report

    config, tools = _prepare(config_path, inventory_path)
    costs = _load_costs_or_exit(costs_path)
    report = run_advisory(tools, config, costs_by_name=costs)

    if as_json:
        typer.echo(json.dumps(report_to_dict(report), indent=2, default=str))
    else:
        typer.echo(format_advisory_report(report))

    if output_path:
        written = export_report_json(report, Path(output_path))
        typer.echo(f"[OK] Report written to {written}", err=as_json)
    if csv_path:
        written = export_to_csv(flatten_analysis_for_export(report), Path(csv_path))
        typer.echo(f"[OK] CSV written to {written}", err=as_json)


if __name__ == "__main__":
    app()
