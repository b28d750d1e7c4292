"""
stack_advisor.reporting - CLI formatting and flat-file export.

Modules:
  formatters - ASCII terminal formatters for Typer CLI commands.
  export     - CSV/JSON export helpers.
"""
