# Routes package init
"""
Flavors API — Routes Package
=============================

Route Inventory:
    - flavors.py:  GET/POST        /api/flavors
                   GET/PUT/DELETE  /api/flavors/{id}
    - health.py:   GET             /health

Routes stay thin: extract path/body, call the repository, return the model.
Error-to-status mapping lives in main.register_exception_handlers.
"""
