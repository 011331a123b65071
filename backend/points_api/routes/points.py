"""
Points API — Points Route Handlers
====================================

What:  POST /points (insert if absent) and GET /points (list all).
How:   Reads the raw body, delegates to PointsService in the threadpool
       (boto3 is blocking), and returns JSON. Failures raise and are
       formatted by the exception handlers registered in main.py.
Who:   Local development and container hosting; the Lambda deployment
       uses handlers.py with the same service.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from points_api.schemas.points import (
    ConflictResponse,
    PointsRecord,
    ValidationErrorResponse,
)
from points_api.services.points_service import PointsService, get_points_service

router = APIRouter(tags=["Points"])


@router.post(
    "/points",
    status_code=201,
    responses={
        201: {"description": "Points record created", "model": PointsRecord},
        400: {
            "description": (
                "Body does not match the record shape ({\"errors\": [...]}), "
                "or is not JSON ({\"error\": \"invalid request body format : ...\"})"
            ),
            "model": ValidationErrorResponse,
        },
        409: {"description": "User already has a points record", "model": ConflictResponse},
    },
    summary="Create a points record for a new user",
)
async def add_points(
    request: Request,
    service: PointsService = Depends(get_points_service),
) -> JSONResponse:
    """
    Insert {"userId", "points"} unless the user already has a record.

    The body is read raw rather than as a pydantic body parameter, so the
    malformed-JSON and validation responses match the Lambda deployment.
    """
    body = await request.body()
    record: Dict[str, Any] = await run_in_threadpool(service.add_points, body)
    return JSONResponse(status_code=201, content=record)


@router.get(
    "/points",
    responses={
        200: {"description": "All points records, unordered", "model": List[PointsRecord]},
    },
    summary="List every points record",
)
async def list_points(
    service: PointsService = Depends(get_points_service),
) -> JSONResponse:
    """Full table scan; no pagination or ordering."""
    items: List[Dict[str, Any]] = await run_in_threadpool(service.list_points)
    return JSONResponse(status_code=200, content=items)
