"""
Tool classification: category resolution and subdomain overlap detection.

Modules
-------
category_resolver : resolve_category() + needs_review() + enrichment boundary
                    helpers - pure functions, no I/O.
overlap           : derive_subdomain() + compute_overlap() over the ordered
                    SUBDOMAIN_RULES table.
"""
