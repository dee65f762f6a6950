"""Concrete collaborators for the snapping feature."""
from snapline.features.snapping.infrastructure.location_list import LocationList
from snapline.features.snapping.infrastructure.state import (
    StaticDisplayState,
    StaticEditSurface,
    StaticTransport,
)
from snapline.features.snapping.infrastructure.tempo_map import ConstantTempoMap
from snapline.features.snapping.infrastructure.track_model import TrackRegionModel

__all__ = [
    'LocationList',
    'StaticDisplayState',
    'StaticEditSurface',
    'StaticTransport',
    'ConstantTempoMap',
    'TrackRegionModel',
]
