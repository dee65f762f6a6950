"""
Grid Dispatcher

Chooses which rounding applies for the active grid:

1. Musical grid active -> round to bar/beat through the tempo map
2. Grid type TIMECODE / MINSEC / CD_FRAME -> round the result of step 1 with
   that scale
3. Neither -> position unchanged

Both stages run when a musical grid flag is forced on alongside a
non-musical grid type (double rounding, kept as-is).
"""

from snapline.features.snapping.domain.configuration import SnapConfiguration, SnapContext
from snapline.features.snapping.domain.errors import InvalidTimeBase, SnapError
from snapline.features.snapping.domain.scale_rounding import (
    ScaleParams,
    snap_to_cd_frames,
    snap_to_minsec,
    snap_to_timecode,
)
from snapline.features.snapping.domain.time_position import TimePosition
from snapline.features.snapping.domain.types import GridType, RoundMode, SnapPreference
from snapline.utils.message import Log


def scale_params_for(context: SnapContext) -> ScaleParams:
    """Build scale rounding inputs from the current display snapshot."""
    return ScaleParams(
        timebase=context.timebase,
        timecode_scale=context.display.timecode_ruler_scale(),
        minsec_scale=context.display.minsec_ruler_scale(),
    )


def snap_to_musical_grid(samples: int, mode: RoundMode, config: SnapConfiguration, context: SnapContext) -> int:
    """Round to the bar/beat grid of the tempo map."""
    tempo_map = context.tempo_map
    if tempo_map is None:
        raise SnapError("Musical grid snapping requires a tempo map")

    divisions = config.musical_divisions
    if divisions == 0:
        return tempo_map.round_to_bar(samples, mode)
    return tempo_map.round_to_subdivision(samples, divisions, mode)


def snap_to_grid(
    pos: TimePosition,
    mode: RoundMode,
    pref: SnapPreference,
    config: SnapConfiguration,
    context: SnapContext
) -> TimePosition:
    """
    Round a position to the active grid.

    Args:
        pos: Position to round (BEATS positions are converted through the tempo map)
        mode: Rounding direction policy
        pref: GRID_UNSCALED bypasses the displayed ruler scale
        config: Snap configuration
        context: External state snapshot

    Returns:
        Rounded position in the AUDIO domain (unchanged when no grid applies)

    Raises:
        InvalidTimeBase: If the session timebase cannot produce a rounding unit
        SnapError: If a musical grid is active without a tempo map
    """
    samples = pos.to_samples(context.tempo_map)
    result = TimePosition.from_samples(samples)
    unscaled = pref is SnapPreference.GRID_UNSCALED

    if config.grid_musical:
        result = TimePosition.from_samples(snap_to_musical_grid(samples, mode, config, context))

    grid_type = config.grid_type
    if grid_type not in (GridType.TIMECODE, GridType.MINSEC, GridType.CD_FRAME):
        return result

    if config.grid_musical:
        Log.debug(f"GridDispatcher: applying {grid_type.value} on top of musical grid result {result}")

    try:
        params = scale_params_for(context)
        if grid_type is GridType.TIMECODE:
            result = snap_to_timecode(result, mode, params, unscaled)
        elif grid_type is GridType.MINSEC:
            result = snap_to_minsec(result, mode, params, unscaled)
        else:
            result = snap_to_cd_frames(result, mode, params, unscaled)
    except InvalidTimeBase as e:
        Log.error(f"GridDispatcher: cannot round to {grid_type.value} grid: {e}")
        raise

    return result
