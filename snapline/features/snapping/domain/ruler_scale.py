"""
Ruler Scale Selection

Chooses which granularity the timecode and minutes:seconds rulers display for
the visible time range. Scaled grid snapping rounds to the displayed unit, so
zooming out coarsens the snap.

Design:
- Pure functions over (visible range, timebase)
- Thresholds expressed in seconds of visible range
"""

from .timebase import SessionTimebase
from .types import MinsecRulerScale, TimecodeRulerScale

# Visible-range thresholds (seconds) for the minutes:seconds ruler
MINSEC_MSECS_MAX_RANGE = 10.0
MINSEC_SECONDS_MAX_RANGE = 600.0
MINSEC_MINUTES_MAX_RANGE = 7200.0
MINSEC_HOURS_MAX_RANGE = 28800.0

# Visible-range thresholds for the timecode ruler
TIMECODE_BITS_MAX_FRAMES = 10       # sub-frame display below this many frames
TIMECODE_FRAMES_MAX_RANGE = 20.0
TIMECODE_SECONDS_MAX_RANGE = 600.0
TIMECODE_MINUTES_MAX_RANGE = 7200.0
TIMECODE_HOURS_MAX_RANGE = 28800.0


def choose_minsec_ruler_scale(visible_samples: int, timebase: SessionTimebase) -> MinsecRulerScale:
    """
    Pick the minutes:seconds ruler scale for a visible range.

    Args:
        visible_samples: Width of the visible timeline in samples
        timebase: Session timebase (sample rate)

    Returns:
        MinsecRulerScale to display
    """
    range_seconds = max(0, visible_samples) / timebase.one_second

    if range_seconds < MINSEC_MSECS_MAX_RANGE:
        return MinsecRulerScale.MSECS
    elif range_seconds < MINSEC_SECONDS_MAX_RANGE:
        return MinsecRulerScale.SECONDS
    elif range_seconds < MINSEC_MINUTES_MAX_RANGE:
        return MinsecRulerScale.MINUTES
    elif range_seconds < MINSEC_HOURS_MAX_RANGE:
        return MinsecRulerScale.HOURS
    return MinsecRulerScale.MANY_HOURS


def choose_timecode_ruler_scale(visible_samples: int, timebase: SessionTimebase) -> TimecodeRulerScale:
    """
    Pick the timecode ruler scale for a visible range.

    Args:
        visible_samples: Width of the visible timeline in samples
        timebase: Session timebase (sample rate and fps)

    Returns:
        TimecodeRulerScale to display
    """
    visible_samples = max(0, visible_samples)
    range_seconds = visible_samples / timebase.one_second

    if visible_samples < TIMECODE_BITS_MAX_FRAMES * timebase.samples_per_timecode_frame:
        return TimecodeRulerScale.BITS
    elif range_seconds < TIMECODE_FRAMES_MAX_RANGE:
        return TimecodeRulerScale.FRAMES
    elif range_seconds < TIMECODE_SECONDS_MAX_RANGE:
        return TimecodeRulerScale.SECONDS
    elif range_seconds < TIMECODE_MINUTES_MAX_RANGE:
        return TimecodeRulerScale.MINUTES
    elif range_seconds < TIMECODE_HOURS_MAX_RANGE:
        return TimecodeRulerScale.HOURS
    return TimecodeRulerScale.MANY_HOURS
