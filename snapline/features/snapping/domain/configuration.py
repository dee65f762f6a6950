"""
Snap Configuration

Explicit configuration and external-state snapshot passed into every
resolution call, so that a snap is a pure function of
(position, configuration, snapshot).
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional

from .interfaces import DisplayState, MarkerSource, TempoMap, TransportState
from .timebase import SessionTimebase
from .types import EditPoint, GridType, RegionBoundaryKind, SnapTarget


@dataclass(frozen=True)
class SnapConfiguration:
    """
    Snap behaviour configuration.

    Attributes:
        grid_type: Active grid granularity
        musical_grid: Explicit "musical grid active" flag; None derives it
            from grid_type. May be forced on alongside a non-musical grid.
        snap_target: Role of the grid among snap sources
        snap_to_marks: Markers participate (ANY_VISUAL only)
        snap_to_playhead: Playhead participates when the transport is stopped
        snap_to_region_start: Region starts participate
        snap_to_region_end: Region ends participate
        snap_to_region_sync: Region sync points participate
        snap_threshold_px: Magnetic threshold in display pixels
        snap_threshold_max_seconds: Optional clamp on the converted threshold
        edit_point: Preferred edit point source
    """
    grid_type: GridType = GridType.NONE
    musical_grid: Optional[bool] = None
    snap_target: SnapTarget = SnapTarget.BOTH
    snap_to_marks: bool = True
    snap_to_playhead: bool = False
    snap_to_region_start: bool = True
    snap_to_region_end: bool = True
    snap_to_region_sync: bool = True
    snap_threshold_px: int = 25
    snap_threshold_max_seconds: Optional[float] = None
    edit_point: EditPoint = EditPoint.MOUSE

    @property
    def grid_enabled(self) -> bool:
        return self.grid_type is not GridType.NONE

    @property
    def grid_musical(self) -> bool:
        if self.musical_grid is not None:
            return self.musical_grid
        return self.grid_type.is_musical

    @property
    def musical_divisions(self) -> int:
        """Subdivisions for the musical stage; beats when forced on a non-musical grid."""
        if self.grid_type.is_musical:
            return self.grid_type.divisions
        return 1

    @property
    def region_boundary_kinds(self) -> FrozenSet[RegionBoundaryKind]:
        kinds = set()
        if self.snap_to_region_start:
            kinds.add(RegionBoundaryKind.START)
        if self.snap_to_region_end:
            kinds.add(RegionBoundaryKind.END)
        if self.snap_to_region_sync:
            kinds.add(RegionBoundaryKind.SYNC)
        return frozenset(kinds)

    @property
    def snaps_to_regions(self) -> bool:
        return bool(self.region_boundary_kinds)


@dataclass(frozen=True)
class SnapContext:
    """
    Read-only snapshot of collaborator state for one resolution.

    Attributes:
        timebase: Session sample rate and timecode parameters
        display: Zoom and displayed ruler scales
        tempo_map: Required for musical grids and BEATS-domain input
        markers: Marker source (None disables marker snapping)
        transport: Transport state (None disables playhead snapping)
    """
    timebase: SessionTimebase
    display: DisplayState
    tempo_map: Optional[TempoMap] = None
    markers: Optional[MarkerSource] = None
    transport: Optional[TransportState] = None
