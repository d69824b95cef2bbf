"""Routing endpoints."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import JSONResponse, PlainTextResponse

from ...schemas.routing import RoutingReportResponse, RoutingRequest, RoutingResponse
from ...services.outputs.routing_formatter import route_to_csv, route_to_json
from ...services.routing.service import build_report, optimize_routes, run_optimization

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=RoutingResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RoutingRequest) -> RoutingResponse:
    try:
        return optimize_routes(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing routes: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize routes: {str(exc)}"
        ) from exc


@router.post("/report", response_model=RoutingReportResponse, status_code=status.HTTP_200_OK)
def report(payload: RoutingRequest) -> RoutingReportResponse:
    """Optimize and return the route together with its summary report."""
    try:
        return build_report(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error generating route report: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate route report: {str(exc)}"
        ) from exc


@router.post("/export", status_code=status.HTTP_200_OK)
def export(
    payload: RoutingRequest,
    format: Literal["csv", "json"] = Query(default="csv", description="Export format"),
):
    """Optimize and return the route as a CSV or JSON download."""
    try:
        route = run_optimization(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error exporting route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export route: {str(exc)}"
        ) from exc

    if format == "json":
        return JSONResponse(
            route_to_json(route),
            headers={"Content-Disposition": 'attachment; filename="optimized_route.json"'},
        )
    return PlainTextResponse(
        route_to_csv(route),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="optimized_route.csv"'},
    )
