"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...persistence import database
from ...persistence.database import DatabaseNotConfiguredError
from ...schemas.routing import (
    OptimizationResponse,
    OptimizeRequest,
    RouteAnalyticsCreate,
    RouteCreate,
    RouteUpdate,
    RouteWaypointCreate,
    RouteWaypointUpdate,
    SampleRoutesResponse,
)
from ...services.routing.service import generate_sample_routes, optimize_waypoints

router = APIRouter(prefix="/routes", tags=["routes"])

logger = logging.getLogger(__name__)


def _unavailable(exc: DatabaseNotConfiguredError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


def _failed(action: str, exc: Exception) -> HTTPException:
    logger.exception(f"Error trying to {action}: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}: {str(exc)}",
    )


@router.post(
    "/optimize",
    response_model=OptimizationResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def optimize(payload: OptimizeRequest) -> OptimizationResponse:
    try:
        return optimize_waypoints(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        raise _failed("optimize route", exc) from exc


@router.post("/generate-sample", response_model=SampleRoutesResponse, status_code=status.HTTP_200_OK)
def generate_sample() -> SampleRoutesResponse:
    """Create optimized sample routes for active vehicles."""
    try:
        return generate_sample_routes()
    except DatabaseNotConfiguredError as exc:
        raise _unavailable(exc) from exc
    except Exception as exc:
        raise _failed("generate sample routes", exc) from exc


@router.get("", status_code=status.HTTP_200_OK)
def list_routes() -> list[dict]:
    try:
        return database.get_routes()
    except Exception as exc:
        raise _failed("retrieve routes", exc) from exc


@router.post("", status_code=status.HTTP_201_CREATED)
def create_route(payload: RouteCreate) -> dict:
    try:
        return database.create_route(payload.model_dump())
    except DatabaseNotConfiguredError as exc:
        raise _unavailable(exc) from exc
    except Exception as exc:
        raise _failed("create route", exc) from exc


@router.get("/{route_id}", status_code=status.HTTP_200_OK)
def get_route(route_id: str) -> dict:
    try:
        route = database.get_route_by_id(route_id)
    except Exception as exc:
        raise _failed("retrieve route", exc) from exc
    if route is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Route {route_id} not found")
    return route


@router.patch("/{route_id}", status_code=status.HTTP_200_OK)
def update_route(route_id: str, payload: RouteUpdate) -> dict:
    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    try:
        route = database.update_route(route_id, updates)
    except DatabaseNotConfiguredError as exc:
        raise _unavailable(exc) from exc
    except Exception as exc:
        raise _failed("update route", exc) from exc
    if route is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Route {route_id} not found")
    return route


@router.delete("/{route_id}", status_code=status.HTTP_200_OK)
def delete_route(route_id: str) -> dict:
    try:
        deleted = database.delete_route(route_id)
    except DatabaseNotConfiguredError as exc:
        raise _unavailable(exc) from exc
    except Exception as exc:
        raise _failed("delete route", exc) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Route {route_id} not found")
    return {"success": True, "message": f"Route {route_id} deleted"}


@router.get("/{route_id}/waypoints", status_code=status.HTTP_200_OK)
def list_waypoints(route_id: str) -> list[dict]:
    try:
        return database.get_route_waypoints(route_id)
    except Exception as exc:
        raise _failed("retrieve route waypoints", exc) from exc


@router.post("/{route_id}/waypoints", status_code=status.HTTP_201_CREATED)
def create_waypoint(route_id: str, payload: RouteWaypointCreate) -> dict:
    try:
        return database.create_route_waypoint({"route_id": route_id, **payload.model_dump()})
    except DatabaseNotConfiguredError as exc:
        raise _unavailable(exc) from exc
    except Exception as exc:
        raise _failed("create route waypoint", exc) from exc


@router.patch("/waypoints/{waypoint_id}", status_code=status.HTTP_200_OK)
def update_waypoint(waypoint_id: str, payload: RouteWaypointUpdate) -> dict:
    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    try:
        waypoint = database.update_route_waypoint(waypoint_id, updates)
    except DatabaseNotConfiguredError as exc:
        raise _unavailable(exc) from exc
    except Exception as exc:
        raise _failed("update route waypoint", exc) from exc
    if waypoint is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Waypoint {waypoint_id} not found")
    return waypoint


@router.delete("/waypoints/{waypoint_id}", status_code=status.HTTP_200_OK)
def delete_waypoint(waypoint_id: str) -> dict:
    try:
        deleted = database.delete_route_waypoint(waypoint_id)
    except DatabaseNotConfiguredError as exc:
        raise _unavailable(exc) from exc
    except Exception as exc:
        raise _failed("delete route waypoint", exc) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Waypoint {waypoint_id} not found")
    return {"success": True, "message": f"Waypoint {waypoint_id} deleted"}


@router.get("/{route_id}/analytics", status_code=status.HTTP_200_OK)
def list_analytics(route_id: str) -> list[dict]:
    try:
        return database.get_route_analytics(route_id)
    except Exception as exc:
        raise _failed("retrieve route analytics", exc) from exc


@router.post("/{route_id}/analytics", status_code=status.HTTP_201_CREATED)
def create_analytics(route_id: str, payload: RouteAnalyticsCreate) -> list[dict]:
    try:
        return database.create_route_analytics({"route_id": route_id, **payload.model_dump()})
    except DatabaseNotConfiguredError as exc:
        raise _unavailable(exc) from exc
    except Exception as exc:
        raise _failed("create route analytics", exc) from exc
