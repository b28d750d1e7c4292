"""
Inventory ingestion.

Modules
-------
inventory_loader : load_inventory() / load_costs() - JSON files validated into
                   Tool and CostInfo models.
"""
