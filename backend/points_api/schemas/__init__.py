# Schemas package init
"""
Points API — Schemas Package
==============================

What:  Pydantic models for the PointsRecord wire format and the error bodies.

Schema Inventory:
    - points.py: PointsRecord, ValidationErrorResponse, ConflictResponse
"""
