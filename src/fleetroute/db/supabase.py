"""Supabase client for the fleet backend."""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
        return client
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


# Example usage patterns:
#
# from .db.supabase import get_supabase_client
#
# # Insert a route and read back the stored row
# result = get_supabase_client().table('routes').insert({
#     'route_name': 'Downtown Delivery Route',
#     'distance_miles': 12.4,
#     'status': 'planned',
# }).execute()
#
# # Waypoints for a route in visiting order
# result = get_supabase_client().table('route_waypoints') \
#     .select('*') \
#     .eq('route_id', route_id) \
#     .order('sequence_number') \
#     .execute()
