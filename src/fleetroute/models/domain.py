"""Domain models for route stops."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Waypoint:
    """A named geographic point that a route must visit."""

    name: str
    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class OptimizedWaypoint:
    """A waypoint placed at its 1-based position in an optimized route."""

    name: str
    lat: float
    lng: float
    sequence: int

    @classmethod
    def from_waypoint(cls, waypoint: Waypoint, sequence: int) -> "OptimizedWaypoint":
        return cls(name=waypoint.name, lat=waypoint.lat, lng=waypoint.lng, sequence=sequence)

    def as_waypoint(self) -> Waypoint:
        return Waypoint(name=self.name, lat=self.lat, lng=self.lng)
