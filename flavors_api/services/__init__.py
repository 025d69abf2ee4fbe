# Services package init
"""
Flavors API — Services Layer
=============================

What:  Data access sitting between routes (HTTP) and the database.

Service Inventory:
    - FlavorRepository: the five single-statement flavor operations
"""
