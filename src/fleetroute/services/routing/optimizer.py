"""Nearest-neighbour waypoint ordering for single-vehicle routes.

The first and last waypoints are fixed as start/end anchors and the interior
stops are reordered greedily by great-circle distance. Derived metrics compare
the reordered path against the caller's original order.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ...models.domain import OptimizedWaypoint, Waypoint
from ..geospatial import haversine_miles, is_valid_coordinate, path_length_miles
from .models import OptimizationResult, OptimizerConfig

SCORE_FLOOR = 70.0
SCORE_CEILING = 95.0
TRIVIAL_ROUTE_SCORE = 100.0

logger = logging.getLogger(__name__)


class InvalidWaypointError(ValueError):
    """Raised in strict mode when a waypoint lies outside the valid lat/lng ranges."""


def _round_half_up(value: float, digits: int = 0) -> float:
    if not math.isfinite(value):
        return value
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _distance(a: Waypoint, b: Waypoint) -> float:
    return haversine_miles(a.lat, a.lng, b.lat, b.lng)


def _path_length(path: Sequence[Waypoint]) -> float:
    return path_length_miles((wp.lat, wp.lng) for wp in path)


def _minutes(distance: float, config: OptimizerConfig) -> float:
    return distance / config.average_speed_mph * 60


def _check_coordinates(waypoints: Sequence[Waypoint]) -> None:
    for index, wp in enumerate(waypoints):
        if not is_valid_coordinate(wp.lat, wp.lng):
            raise InvalidWaypointError(
                f"Waypoint {index} ('{wp.name}') has out-of-range coordinates: lat={wp.lat}, lng={wp.lng}"
            )


def nearest_neighbor_order(start: Waypoint, stops: Sequence[Waypoint]) -> list[Waypoint]:
    """Order ``stops`` by repeatedly visiting the closest remaining one.

    Ties go to the candidate that appears first in the remaining list.
    """
    remaining = list(stops)
    ordered: list[Waypoint] = []
    current = start

    while remaining:
        nearest_index = 0
        nearest_distance = _distance(current, remaining[0])
        for index in range(1, len(remaining)):
            distance = _distance(current, remaining[index])
            if distance < nearest_distance:
                nearest_distance = distance
                nearest_index = index

        current = remaining.pop(nearest_index)
        ordered.append(current)

    return ordered


def _sequenced(path: Sequence[Waypoint]) -> list[OptimizedWaypoint]:
    return [OptimizedWaypoint.from_waypoint(wp, sequence) for sequence, wp in enumerate(path, start=1)]


def optimize(waypoints: Sequence[Waypoint], config: OptimizerConfig | None = None) -> OptimizationResult:
    """Reorder interior waypoints to shorten the route and summarise the gain.

    Args:
        waypoints: Ordered stops; the first and last are kept in place when
            three or more are given.
        config: Speed and fuel assumptions. Defaults to application settings.

    Returns:
        OptimizationResult with distances in miles, durations in minutes and
        fuel savings in USD.
    """
    config = config or OptimizerConfig.from_settings()
    waypoints = list(waypoints)

    if config.strict_coordinates:
        _check_coordinates(waypoints)

    if not waypoints:
        return OptimizationResult()

    if len(waypoints) <= 2:
        distance = _path_length(waypoints)
        total_distance = _round_half_up(distance, 2)
        return OptimizationResult(
            optimized_waypoints=_sequenced(waypoints),
            total_distance=total_distance,
            estimated_duration=_round_half_up(_minutes(distance, config)),
            optimization_score=TRIVIAL_ROUTE_SCORE,
            baseline_distance=total_distance,
        )

    start, middle, end = waypoints[0], waypoints[1:-1], waypoints[-1]
    path = [start, *nearest_neighbor_order(start, middle), end]

    total_distance = _path_length(path)
    baseline_distance = _path_length(waypoints)
    saved = baseline_distance - total_distance

    improvement = saved / baseline_distance * 100 if baseline_distance else 0.0
    score = max(SCORE_FLOOR, min(SCORE_CEILING, SCORE_FLOOR + improvement))

    estimated_duration = _minutes(total_distance, config)
    time_savings = max(0.0, _minutes(baseline_distance, config) - estimated_duration)
    fuel_savings = saved / config.avg_mpg * config.cost_per_gallon

    logger.debug(
        "Optimized %d waypoints: %.2f mi -> %.2f mi (score %.2f)",
        len(waypoints),
        baseline_distance,
        total_distance,
        score,
    )

    return OptimizationResult(
        optimized_waypoints=_sequenced(path),
        total_distance=_round_half_up(total_distance, 2),
        estimated_duration=_round_half_up(estimated_duration),
        optimization_score=_round_half_up(score, 2),
        baseline_distance=_round_half_up(baseline_distance, 2),
        fuel_savings=_round_half_up(fuel_savings, 2),
        time_savings=_round_half_up(time_savings),
        distance_saved=_round_half_up(saved, 2),
    )
