"""Export services."""

from .geojson import (
    linestring_to_wkt,
    route_overlay_feature,
    save_feature_collection,
)

__all__ = [
    "linestring_to_wkt",
    "route_overlay_feature",
    "save_feature_collection",
]
