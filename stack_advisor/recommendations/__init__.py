"""
Recommendation engines over a tool inventory.

Modules
-------
suggestion_rules : SuggestionRule table + get_suggestions() - "add this tool
                   to this lane" offers, capped, in declared priority order.
stack_analyzer   : analyze_stack() + summarize_analysis() - per-tool
                   Replace / Evaluate / Keep verdicts with spend totals.
"""
