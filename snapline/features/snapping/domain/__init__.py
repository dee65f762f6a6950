"""
Snapping domain.

Value types, enums, collaborator protocols and the pure scale rounding
functions. Nothing in here holds mutable state.
"""
from snapline.features.snapping.domain.configuration import SnapConfiguration, SnapContext
from snapline.features.snapping.domain.entities import Location, Region, Track
from snapline.features.snapping.domain.errors import InvalidTimeBase, SnapError
from snapline.features.snapping.domain.interfaces import (
    DisplayState,
    EditSurface,
    MarkerSource,
    RegionSource,
    TempoMap,
    TransportState,
)
from snapline.features.snapping.domain.ruler_scale import (
    choose_minsec_ruler_scale,
    choose_timecode_ruler_scale,
)
from snapline.features.snapping.domain.scale_rounding import (
    ScaleParams,
    round_samples,
    snap_to_cd_frames,
    snap_to_minsec,
    snap_to_timecode,
)
from snapline.features.snapping.domain.time_position import (
    TICKS_PER_BEAT,
    TimeDomain,
    TimePosition,
)
from snapline.features.snapping.domain.timebase import SessionTimebase
from snapline.features.snapping.domain.types import (
    EditIgnoreOption,
    EditPoint,
    GridType,
    MinsecRulerScale,
    RegionBoundaryKind,
    RoundMode,
    SnapPreference,
    SnapTarget,
    TimecodeRulerScale,
)

__all__ = [
    'SnapConfiguration',
    'SnapContext',
    'Location',
    'Region',
    'Track',
    'InvalidTimeBase',
    'SnapError',
    'DisplayState',
    'EditSurface',
    'MarkerSource',
    'RegionSource',
    'TempoMap',
    'TransportState',
    'choose_minsec_ruler_scale',
    'choose_timecode_ruler_scale',
    'ScaleParams',
    'round_samples',
    'snap_to_cd_frames',
    'snap_to_minsec',
    'snap_to_timecode',
    'TICKS_PER_BEAT',
    'TimeDomain',
    'TimePosition',
    'SessionTimebase',
    'EditIgnoreOption',
    'EditPoint',
    'GridType',
    'MinsecRulerScale',
    'RegionBoundaryKind',
    'RoundMode',
    'SnapPreference',
    'SnapTarget',
    'TimecodeRulerScale',
]
