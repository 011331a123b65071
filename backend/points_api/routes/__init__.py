# Routes package init
"""
Points API — API Routes Package
=================================

What:  HTTP route handlers for the ASGI deployment.

Route Inventory:
    - points.py:  POST /points   (create a points record if absent)
                  GET  /points   (list every points record)

Routes stay thin: they read the request, call PointsService and return
JSON. Status mapping for failures lives in main.py's exception handlers.
"""
