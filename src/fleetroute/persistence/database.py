"""Database persistence for routes, waypoints and route analytics."""

from __future__ import annotations

import logging
from typing import Any

from ..db.supabase import get_supabase_client

ROUTES_TABLE = "routes"
WAYPOINTS_TABLE = "route_waypoints"
ANALYTICS_TABLE = "route_analytics"
VEHICLES_TABLE = "vehicles"
DRIVERS_TABLE = "drivers"

logger = logging.getLogger(__name__)


class DatabaseNotConfiguredError(RuntimeError):
    """Raised when a write is attempted without Supabase credentials."""


def _require_client():
    supabase = get_supabase_client()
    if not supabase:
        raise DatabaseNotConfiguredError(
            "Supabase not configured. Set FLEET_SUPABASE_URL and FLEET_SUPABASE_KEY environment variables."
        )
    return supabase


def _first_row(response: Any) -> dict[str, Any] | None:
    rows = response.data or []
    return rows[0] if rows else None


def get_routes() -> list[dict[str, Any]]:
    """Return all routes, newest first. Empty when the database is not configured."""
    supabase = get_supabase_client()
    if not supabase:
        logger.warning("Supabase not configured - returning no routes")
        return []

    response = supabase.table(ROUTES_TABLE).select("*").order("created_at", desc=True).execute()
    return response.data or []


def get_route_by_id(route_id: str) -> dict[str, Any] | None:
    supabase = get_supabase_client()
    if not supabase:
        return None

    response = supabase.table(ROUTES_TABLE).select("*").eq("id", route_id).limit(1).execute()
    return _first_row(response)


def create_route(record: dict[str, Any]) -> dict[str, Any]:
    """Insert a route row and return it with its generated id.

    ``distance_miles`` defaults to 0 because the column is NOT NULL.
    """
    supabase = _require_client()
    payload = {"distance_miles": 0, **{key: value for key, value in record.items() if value is not None}}

    response = supabase.table(ROUTES_TABLE).insert(payload).execute()
    row = _first_row(response)
    if row is None:
        raise ValueError(f"Route insert returned no row for '{payload.get('route_name')}'")
    logger.info(f"Created route {row.get('id')} ({payload.get('route_name')})")
    return row


def update_route(route_id: str, updates: dict[str, Any]) -> dict[str, Any] | None:
    supabase = _require_client()
    response = supabase.table(ROUTES_TABLE).update(updates).eq("id", route_id).execute()
    return _first_row(response)


def delete_route(route_id: str) -> bool:
    """Delete a route. Returns False when no row matched."""
    supabase = _require_client()
    response = supabase.table(ROUTES_TABLE).delete().eq("id", route_id).execute()
    deleted = bool(response.data)
    if deleted:
        logger.info(f"Deleted route {route_id}")
    return deleted


def get_route_waypoints(route_id: str) -> list[dict[str, Any]]:
    """Return the waypoint rows of a route in visiting order."""
    supabase = get_supabase_client()
    if not supabase:
        return []

    response = (
        supabase.table(WAYPOINTS_TABLE)
        .select("*")
        .eq("route_id", route_id)
        .order("sequence_number")
        .execute()
    )
    return response.data or []


def create_route_waypoint(record: dict[str, Any]) -> dict[str, Any]:
    supabase = _require_client()
    response = supabase.table(WAYPOINTS_TABLE).insert(record).execute()
    row = _first_row(response)
    if row is None:
        raise ValueError(f"Waypoint insert returned no row for route '{record.get('route_id')}'")
    return row


def update_route_waypoint(waypoint_id: str, updates: dict[str, Any]) -> dict[str, Any] | None:
    supabase = _require_client()
    response = supabase.table(WAYPOINTS_TABLE).update(updates).eq("id", waypoint_id).execute()
    return _first_row(response)


def delete_route_waypoint(waypoint_id: str) -> bool:
    supabase = _require_client()
    response = supabase.table(WAYPOINTS_TABLE).delete().eq("id", waypoint_id).execute()
    return bool(response.data)


def get_route_analytics(route_id: str) -> list[dict[str, Any]]:
    supabase = get_supabase_client()
    if not supabase:
        return []

    response = supabase.table(ANALYTICS_TABLE).select("*").eq("route_id", route_id).execute()
    return response.data or []


def create_route_analytics(records: dict[str, Any] | list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Insert one analytics row or a batch of them in a single request."""
    supabase = _require_client()
    batch = records if isinstance(records, list) else [records]
    if not batch:
        return []

    response = supabase.table(ANALYTICS_TABLE).insert(batch).execute()
    return response.data or []


def _active_ids(table: str, limit: int) -> list[str]:
    supabase = get_supabase_client()
    if not supabase:
        logger.warning(f"Supabase not configured - no active {table} available")
        return []

    response = supabase.table(table).select("id").eq("status", "active").limit(limit).execute()
    return [row["id"] for row in (response.data or []) if row.get("id") is not None]


def get_active_vehicle_ids(limit: int = 3) -> list[str]:
    return _active_ids(VEHICLES_TABLE, limit)


def get_active_driver_ids(limit: int = 3) -> list[str]:
    return _active_ids(DRIVERS_TABLE, limit)
