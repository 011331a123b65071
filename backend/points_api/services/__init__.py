# Services package init
"""
Points API — Services Layer
=============================

What:  Business logic sitting between the request surfaces and DynamoDB.
How:   Services accept raw request data, apply the points rules, and return
       plain dicts or raise typed exceptions from points_api.exceptions.

Service Inventory:
    - payload_service.py: JSON parsing and PointsRecord validation
    - points_store.py:    PointsStore, the DynamoDB table accessor
    - points_service.py:  PointsService (add_points, list_points)
"""
