"""GeoJSON/WKT export utilities for optimized routes."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from shapely.geometry import LineString, mapping

from ...models.domain import OptimizedWaypoint
from ..routing.models import OptimizationResult


ROUTE_COLOR = "#13aae0"


def linestring_to_wkt(coordinates: List[List[float]]) -> str:
    """Convert linestring coordinates to WKT format.

    Args:
        coordinates: List of [lat, lon] pairs

    Returns:
        WKT LINESTRING string
    """
    if not coordinates or len(coordinates) < 2:
        raise ValueError("LineString must have at least 2 coordinates")

    # WKT uses lon,lat order (x,y)
    coord_pairs = [f"{lon} {lat}" for lat, lon in coordinates]
    return f"LINESTRING({','.join(coord_pairs)})"


def _path_geometry(waypoints: Sequence[OptimizedWaypoint]) -> LineString:
    return LineString([(wp.lng, wp.lat) for wp in waypoints])


def route_overlay_feature(
    result: OptimizationResult,
    name: str = "Optimized Route",
) -> Dict[str, Any] | None:
    """Build a GeoJSON Feature for the optimized path, or None for fewer than 2 stops."""
    waypoints = result.optimized_waypoints
    if len(waypoints) < 2:
        return None

    return {
        "type": "Feature",
        "geometry": mapping(_path_geometry(waypoints)),
        "properties": {
            "name": name,
            "color": ROUTE_COLOR,
            "stops": [{"sequence": wp.sequence, "name": wp.name} for wp in waypoints],
            "totalDistance": result.total_distance,
            "estimatedDuration": result.estimated_duration,
            "optimizationScore": result.optimization_score,
        },
    }


def save_feature_collection(features: List[Dict[str, Any]], output_path: Path) -> None:
    """Save features as a GeoJSON FeatureCollection.

    Args:
        features: List of feature objects
        output_path: Path to save JSON file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump({"type": "FeatureCollection", "features": features}, f, indent=2, ensure_ascii=False)
