"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and route storage status."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set FLEET_SUPABASE_URL and FLEET_SUPABASE_KEY environment variables.",
            "routes_count": 0,
        }

    try:
        response = supabase.table("routes").select("id", count="exact").limit(1).execute()
        routes_count = response.count or 0
        return {
            "configured": True,
            "connected": True,
            "routes_count": routes_count,
            "message": f"Database connected. Found {routes_count} routes in database.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
