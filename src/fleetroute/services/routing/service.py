"""Routing orchestration service."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from ...config import settings
from ...models.domain import Waypoint
from ...persistence import database
from ...persistence.filesystem import FileStorage, run_slug
from ...schemas.routing import OptimizationResponse, OptimizeRequest, SampleRoutesResponse
from ..export.geojson import linestring_to_wkt, route_overlay_feature, save_feature_collection
from ..outputs.routing_formatter import optimization_result_to_csv, optimization_result_to_json
from .models import OptimizationResult, OptimizerConfig
from .optimizer import optimize

MIN_WAYPOINTS = 2
# Fixed improvement figure recorded for the fuel_efficiency analytics row
FUEL_EFFICIENCY_IMPROVEMENT = 10

SAMPLE_ROUTES: tuple[dict[str, Any], ...] = (
    {
        "name": "Downtown Delivery Route",
        "waypoints": (
            Waypoint("Warehouse", 40.7128, -74.0060),
            Waypoint("Store A", 40.7589, -73.9851),
            Waypoint("Store B", 40.7614, -73.9776),
            Waypoint("Store C", 40.7489, -73.9680),
            Waypoint("Return to Warehouse", 40.7128, -74.0060),
        ),
    },
    {
        "name": "Cross-City Express",
        "waypoints": (
            Waypoint("Distribution Center", 34.0522, -118.2437),
            Waypoint("Client Site 1", 34.0689, -118.4452),
            Waypoint("Client Site 2", 33.9806, -118.4517),
            Waypoint("Return", 34.0522, -118.2437),
        ),
    },
    {
        "name": "Regional Logistics Run",
        "waypoints": (
            Waypoint("Hub", 41.8781, -87.6298),
            Waypoint("Stop 1", 41.9742, -87.9073),
            Waypoint("Stop 2", 42.0451, -87.6877),
            Waypoint("Stop 3", 41.9802, -87.6847),
            Waypoint("Stop 4", 41.9395, -87.6507),
            Waypoint("Back to Hub", 41.8781, -87.6298),
        ),
    },
)

logger = logging.getLogger(__name__)


def _build_config(payload: OptimizeRequest) -> OptimizerConfig:
    base = OptimizerConfig.from_settings()
    overrides = payload.assumptions
    if not overrides:
        return base
    return replace(
        base,
        average_speed_mph=overrides.average_speed_mph
        if overrides.average_speed_mph is not None
        else base.average_speed_mph,
        avg_mpg=overrides.avg_mpg if overrides.avg_mpg is not None else base.avg_mpg,
        cost_per_gallon=overrides.cost_per_gallon
        if overrides.cost_per_gallon is not None
        else base.cost_per_gallon,
    )


def _persist_run(result: OptimizationResult, payload: OptimizeRequest, overlay: dict | None) -> None:
    storage = FileStorage()
    label = run_slug(payload.run_label)
    run_dir = storage.make_run_directory(prefix=f"route_{label}")

    summary = optimization_result_to_json(result)
    coordinates = [[wp.lat, wp.lng] for wp in result.optimized_waypoints]
    if len(coordinates) >= 2:
        summary["path_wkt"] = linestring_to_wkt(coordinates)
    storage.write_json(run_dir / "summary.json", summary)
    storage.write_csv(run_dir / "waypoints.csv", optimization_result_to_csv(result))
    if overlay:
        save_feature_collection([overlay], run_dir / "route.geojson")
    logger.info(f"Saved optimization run to {run_dir}")


def optimize_waypoints(payload: OptimizeRequest) -> OptimizationResponse:
    if len(payload.waypoints) < MIN_WAYPOINTS:
        raise ValueError(f"At least {MIN_WAYPOINTS} waypoints required")

    config = _build_config(payload)
    waypoints = [wp.to_domain() for wp in payload.waypoints]
    result = optimize(waypoints, config)
    logger.info(
        f"Optimized route with {len(waypoints)} waypoints: "
        f"{result.total_distance} mi (baseline {result.baseline_distance} mi, score {result.optimization_score})"
    )

    overlay = route_overlay_feature(result, name=payload.run_label or "Optimized Route") if payload.include_overlay else None

    if payload.persist:
        _persist_run(result, payload, overlay)

    return OptimizationResponse.from_result(result, map_overlay=overlay)


def _route_record(name: str, waypoints: tuple[Waypoint, ...], result: OptimizationResult) -> dict[str, Any]:
    return {
        "route_name": name,
        "origin": waypoints[0].name,
        "destination": waypoints[-1].name,
        "distance_miles": result.total_distance,
        "estimated_duration_hours": result.estimated_duration / 60,
        "optimized": True,
        "fuel_savings_estimate": result.fuel_savings,
        "status": "planned",
    }


def _analytics_records(route_id: str, result: OptimizationResult) -> list[dict[str, Any]]:
    return [
        {
            "route_id": route_id,
            "metric_type": "distance_optimization",
            "baseline_value": result.baseline_distance,
            "optimized_value": result.total_distance,
            "improvement_percentage": result.improvement_percentage,
        },
        {
            "route_id": route_id,
            "metric_type": "time_savings",
            "baseline_value": 0,
            "optimized_value": result.time_savings,
            "improvement_percentage": result.time_savings,
        },
        {
            "route_id": route_id,
            "metric_type": "fuel_efficiency",
            "baseline_value": 0,
            "optimized_value": result.fuel_savings,
            "improvement_percentage": FUEL_EFFICIENCY_IMPROVEMENT,
        },
    ]


def generate_sample_routes() -> SampleRoutesResponse:
    """Create optimized demo routes for the first active vehicles and drivers.

    Each template is optimized, stored as a ``routes`` row, and followed by its
    ``route_waypoints`` and ``route_analytics`` rows. A template whose route
    insert fails is skipped; failed waypoint or analytics inserts are logged
    and the route is still reported. Nothing already written is rolled back.
    """
    limit = settings.sample_route_limit
    vehicle_ids = database.get_active_vehicle_ids(limit=limit)
    driver_ids = database.get_active_driver_ids(limit=limit)

    if not vehicle_ids:
        return SampleRoutesResponse(success=False, message="No active vehicles found")

    config = OptimizerConfig.from_settings()
    created: list[dict[str, Any]] = []

    for index, (template, vehicle_id) in enumerate(zip(SAMPLE_ROUTES, vehicle_ids)):
        waypoints = template["waypoints"]
        result = optimize(waypoints, config)

        record = _route_record(template["name"], waypoints, result)
        record["vehicle_id"] = vehicle_id
        record["driver_id"] = driver_ids[index] if index < len(driver_ids) else None

        try:
            route = database.create_route(record)
        except database.DatabaseNotConfiguredError:
            raise
        except Exception as exc:
            logger.error(f"Error creating route '{template['name']}': {exc}")
            continue

        for wp in result.optimized_waypoints:
            try:
                database.create_route_waypoint(
                    {
                        "route_id": route["id"],
                        "sequence_number": wp.sequence,
                        "name": wp.name,
                        "address": f"{wp.lat}, {wp.lng}",
                        "latitude": wp.lat,
                        "longitude": wp.lng,
                        "status": "pending",
                    }
                )
            except Exception as exc:
                logger.error(f"Error saving waypoint {wp.sequence} of route {route['id']}: {exc}")

        try:
            database.create_route_analytics(_analytics_records(route["id"], result))
        except Exception as exc:
            logger.error(f"Error saving analytics for route {route['id']}: {exc}")

        created.append(route)

    logger.info(f"Created {len(created)} sample routes")
    return SampleRoutesResponse(
        success=True,
        message=f"Created {len(created)} sample routes",
        routes=created,
    )
