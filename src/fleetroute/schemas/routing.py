"""Routing request/response schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.domain import Waypoint
from ..services.routing.models import OptimizationResult


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WaypointModel(CamelModel):
    name: str
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    def to_domain(self) -> Waypoint:
        return Waypoint(name=self.name, lat=self.lat, lng=self.lng)


class OptimizedWaypointModel(WaypointModel):
    sequence: int


class OptimizerAssumptions(CamelModel):
    """Per-request overrides for the fleet-average assumptions."""
    average_speed_mph: Optional[float] = Field(None, gt=0)
    avg_mpg: Optional[float] = Field(None, gt=0)
    cost_per_gallon: Optional[float] = Field(None, ge=0)


class OptimizeRequest(CamelModel):
    waypoints: List[WaypointModel] = Field(default_factory=list)
    assumptions: Optional[OptimizerAssumptions] = None
    include_overlay: bool = Field(
        default=False,
        description="Attach a GeoJSON LineString of the optimized path to the response.",
    )
    persist: bool = Field(default=False, description="Write the run summary and waypoint CSV to the data root.")
    run_label: Optional[str] = Field(default=None, description="Friendly name for persisted outputs.")


class OptimizationResponse(CamelModel):
    optimized_waypoints: List[OptimizedWaypointModel]
    total_distance: float
    estimated_duration: float
    optimization_score: float
    baseline_distance: float
    fuel_savings: float
    time_savings: float
    distance_saved: float
    map_overlay: Optional[Dict[str, Any]] = None

    @classmethod
    def from_result(cls, result: OptimizationResult, map_overlay: dict | None = None) -> "OptimizationResponse":
        return cls(
            optimized_waypoints=[
                OptimizedWaypointModel(name=wp.name, lat=wp.lat, lng=wp.lng, sequence=wp.sequence)
                for wp in result.optimized_waypoints
            ],
            total_distance=result.total_distance,
            estimated_duration=result.estimated_duration,
            optimization_score=result.optimization_score,
            baseline_distance=result.baseline_distance,
            fuel_savings=result.fuel_savings,
            time_savings=result.time_savings,
            distance_saved=result.distance_saved,
            map_overlay=map_overlay,
        )


class SampleRoutesResponse(BaseModel):
    success: bool
    message: str
    routes: List[Dict[str, Any]] = Field(default_factory=list)


class RouteCreate(BaseModel):
    route_name: str
    origin: Optional[str] = None
    destination: Optional[str] = None
    distance_miles: float = Field(default=0.0, ge=0)
    estimated_duration_hours: Optional[float] = Field(default=None, ge=0)
    optimized: bool = False
    fuel_savings_estimate: Optional[float] = None
    status: str = "planned"
    vehicle_id: Optional[str] = None
    driver_id: Optional[str] = None
    organization_id: Optional[str] = None


class RouteUpdate(BaseModel):
    route_name: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    distance_miles: Optional[float] = Field(default=None, ge=0)
    estimated_duration_hours: Optional[float] = Field(default=None, ge=0)
    optimized: Optional[bool] = None
    fuel_savings_estimate: Optional[float] = None
    status: Optional[str] = None
    vehicle_id: Optional[str] = None
    driver_id: Optional[str] = None


class RouteWaypointCreate(BaseModel):
    sequence_number: int = Field(..., ge=1)
    name: str
    address: Optional[str] = None
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    status: str = "pending"


class RouteWaypointUpdate(BaseModel):
    sequence_number: Optional[int] = Field(default=None, ge=1)
    name: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    status: Optional[str] = None


class RouteAnalyticsCreate(BaseModel):
    metric_type: str
    baseline_value: float
    optimized_value: float
    improvement_percentage: float
