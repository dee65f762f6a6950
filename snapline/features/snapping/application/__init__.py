"""
Snapping application layer.

Contents:
- grid_dispatcher.py: musical and scale grid rounding
- region_boundary_index.py: lazily rebuilt region boundary set
- snap_engine.py: candidate aggregation and magnetic threshold
- edit_point_resolver.py: which input an edit command acts at
- snap_service.py: facade over all of the above
"""
from snapline.features.snapping.application.edit_point_resolver import (
    EditPointResolver,
    EditPositionRequest,
)
from snapline.features.snapping.application.grid_dispatcher import snap_to_grid, snap_to_musical_grid
from snapline.features.snapping.application.region_boundary_index import (
    ALL_BOUNDARY_KINDS,
    RegionBoundaryIndex,
)
from snapline.features.snapping.application.snap_engine import SnapEngine, pick_neighbor
from snapline.features.snapping.application.snap_service import SnapService

__all__ = [
    'EditPointResolver',
    'EditPositionRequest',
    'snap_to_grid',
    'snap_to_musical_grid',
    'ALL_BOUNDARY_KINDS',
    'RegionBoundaryIndex',
    'SnapEngine',
    'pick_neighbor',
    'SnapService',
]
