"""
Points API — Application Package Initializer
==============================================

What:  One points record per user, stored in DynamoDB, served over HTTP.

Architecture Note:

    ┌───────────────────────────────────────────────┐
    │  Surfaces: handlers.py (Lambda) │ main.py (ASGI)│  ← HTTP concerns only
    ├───────────────────────────────────────────────┤
    │        responses.py (Response Mapper)         │  ← status, headers, body
    ├───────────────────────────────────────────────┤
    │     services/ (Validation, Points Service)    │  ← business rules
    ├───────────────────────────────────────────────┤
    │  services/points_store.py + database.py       │  ← DynamoDB access
    └───────────────────────────────────────────────┘

    Both surfaces call the same PointsService and share the error mapping,
    so a request behaves identically behind API Gateway and under uvicorn.
"""

__version__ = "1.0.0"
