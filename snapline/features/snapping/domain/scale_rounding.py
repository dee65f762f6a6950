"""
Scale Rounding

Pure functions that round a position to the nearest boundary of one
non-musical ruler scale (timecode, minutes:seconds, CD frames).

Design:
- Boundary-index arithmetic; results are whole samples
- Unit size comes from the session timebase and the displayed ruler scale
- Timecode and minutes:seconds boundaries are relative to the session
  timecode offset, not absolute zero
- Results never go below zero
"""

import math
from dataclasses import dataclass

from .errors import InvalidTimeBase
from .time_position import TimePosition
from .timebase import SessionTimebase
from .types import MinsecRulerScale, RoundMode, TimecodeRulerScale

# Samples closer than this to a unit boundary are treated as on it
ALIGNMENT_TOLERANCE = 0.5


@dataclass(frozen=True)
class ScaleParams:
    """
    Inputs shared by all scale rounding functions.

    Attributes:
        timebase: Session sample rate and timecode parameters
        timecode_scale: Scale currently displayed by the timecode ruler
        minsec_scale: Scale currently displayed by the minutes:seconds ruler
    """
    timebase: SessionTimebase
    timecode_scale: TimecodeRulerScale = TimecodeRulerScale.FRAMES
    minsec_scale: MinsecRulerScale = MinsecRulerScale.SECONDS


def round_samples(samples: int, unit: float, mode: RoundMode) -> int:
    """
    Round a sample count to a multiple of `unit`.

    Args:
        samples: Position in samples (may be negative while an offset is applied)
        unit: Boundary spacing in samples (may be fractional for timecode frames)
        mode: Rounding direction policy

    Returns:
        Rounded sample count

    Raises:
        InvalidTimeBase: If unit is not positive
    """
    if unit is None or unit <= 0:
        raise InvalidTimeBase("rounding unit", unit)

    # Boundaries of a fractional unit land on int(round(k * unit)), so a sample
    # within half a sample of k * unit counts as aligned.
    nearest_index = round(samples / unit)
    if abs(samples - nearest_index * unit) <= ALIGNMENT_TOLERANCE:
        if mode.is_maybe or mode is RoundMode.NEAREST:
            return samples
        index = nearest_index + 1 if mode.is_up else nearest_index - 1
        return int(round(index * unit))

    lower_index = math.floor(samples / unit)
    if mode is RoundMode.NEAREST:
        # exact half rounds up
        go_up = (samples - lower_index * unit) * 2 >= unit
    else:
        go_up = mode.is_up

    index = lower_index + 1 if go_up else lower_index
    return int(round(index * unit))


def _round_with_offset(pos: TimePosition, unit: float, mode: RoundMode, offset: int) -> TimePosition:
    shifted = pos.to_samples() - offset
    rounded = round_samples(shifted, unit, mode) + offset
    return TimePosition.from_samples(max(0, rounded))


def snap_to_timecode(
    pos: TimePosition,
    mode: RoundMode,
    params: ScaleParams,
    unscaled: bool = False
) -> TimePosition:
    """
    Round to the timecode unit shown by the timecode ruler.

    Frames (and sub-frame "bits") round to one timecode frame, seconds to one
    timecode second, minutes and above to one timecode minute. `unscaled`
    ignores the ruler and always uses frames.
    """
    timebase = params.timebase
    scale = TimecodeRulerScale.FRAMES if unscaled else params.timecode_scale

    if scale in (TimecodeRulerScale.BITS, TimecodeRulerScale.FRAMES):
        unit = timebase.samples_per_timecode_frame
    elif scale == TimecodeRulerScale.SECONDS:
        unit = timebase.one_timecode_second
    else:
        unit = timebase.one_timecode_minute

    return _round_with_offset(pos, unit, mode, timebase.signed_timecode_offset)


def snap_to_minsec(
    pos: TimePosition,
    mode: RoundMode,
    params: ScaleParams,
    unscaled: bool = False
) -> TimePosition:
    """
    Round to the unit shown by the minutes:seconds ruler.

    Milliseconds and seconds scales round to whole seconds, the minutes scale
    to whole minutes, hour scales to whole hours. `unscaled` always uses
    seconds.
    """
    timebase = params.timebase
    scale = MinsecRulerScale.SECONDS if unscaled else params.minsec_scale

    if scale in (MinsecRulerScale.MSECS, MinsecRulerScale.SECONDS):
        unit = timebase.one_second
    elif scale == MinsecRulerScale.MINUTES:
        unit = timebase.one_minute
    else:
        unit = timebase.one_hour

    return _round_with_offset(pos, unit, mode, timebase.signed_timecode_offset)


def snap_to_cd_frames(
    pos: TimePosition,
    mode: RoundMode,
    params: ScaleParams,
    unscaled: bool = False
) -> TimePosition:
    """
    Round to CD frames (1/75 second).

    Unless unscaled, CD frames are only finer than the ruler when it shows
    milliseconds; otherwise this is minutes:seconds rounding.
    """
    if not unscaled and params.minsec_scale != MinsecRulerScale.MSECS:
        return snap_to_minsec(pos, mode, params, unscaled)

    rounded = round_samples(pos.to_samples(), params.timebase.one_cd_frame, mode)
    return TimePosition.from_samples(max(0, rounded))
