"""Serializers for route optimization outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ..geospatial import haversine_miles
from ..routing.models import OptimizationResult


def optimization_result_to_json(result: OptimizationResult) -> dict:
    return {
        "optimized_waypoints": [asdict(wp) for wp in result.optimized_waypoints],
        "total_distance": result.total_distance,
        "estimated_duration": result.estimated_duration,
        "optimization_score": result.optimization_score,
        "baseline_distance": result.baseline_distance,
        "fuel_savings": result.fuel_savings,
        "time_savings": result.time_savings,
        "distance_saved": result.distance_saved,
    }


def optimization_result_to_csv(result: OptimizationResult) -> str:
    buffer = io.StringIO()
    fieldnames = ["sequence", "name", "lat", "lng", "distance_from_prev_miles"]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames, lineterminator="\n")
    writer.writeheader()

    previous = None
    for wp in result.optimized_waypoints:
        leg = haversine_miles(previous.lat, previous.lng, wp.lat, wp.lng) if previous else 0.0
        writer.writerow(
            {
                "sequence": wp.sequence,
                "name": wp.name,
                "lat": wp.lat,
                "lng": wp.lng,
                "distance_from_prev_miles": round(leg, 3),
            }
        )
        previous = wp
    return buffer.getvalue()
