"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ...models.domain import OptimizedWaypoint


@dataclass(frozen=True, slots=True)
class OptimizerConfig:
    """Fleet-average assumptions behind the optimizer's derived metrics."""

    average_speed_mph: float = 45.0
    avg_mpg: float = 7.0
    cost_per_gallon: float = 3.45
    strict_coordinates: bool = False

    def __post_init__(self) -> None:
        if self.average_speed_mph <= 0:
            raise ValueError("average_speed_mph must be positive.")
        if self.avg_mpg <= 0:
            raise ValueError("avg_mpg must be positive.")

    @classmethod
    def from_settings(cls) -> "OptimizerConfig":
        from ...config import settings

        return cls(
            average_speed_mph=settings.average_speed_mph,
            avg_mpg=settings.avg_mpg,
            cost_per_gallon=settings.cost_per_gallon,
            strict_coordinates=settings.strict_coordinates,
        )


@dataclass(slots=True)
class OptimizationResult:
    optimized_waypoints: List[OptimizedWaypoint] = field(default_factory=list)
    total_distance: float = 0.0
    estimated_duration: float = 0.0
    optimization_score: float = 0.0
    baseline_distance: float = 0.0
    fuel_savings: float = 0.0
    time_savings: float = 0.0
    distance_saved: float = 0.0

    @property
    def improvement_percentage(self) -> float:
        """Percent of the baseline distance removed by reordering (0 for a zero baseline)."""
        if not self.baseline_distance:
            return 0.0
        return (self.baseline_distance - self.total_distance) / self.baseline_distance * 100
