"""
Snapping Enums
==============

Tags used to dispatch rounding, candidate collection and edit-point
resolution. All dispatch happens on these enums with plain if/elif chains.
"""

from enum import Enum


class RoundMode(Enum):
    """
    Direction policy when rounding to a boundary.

    MAYBE variants leave an already aligned position alone; ALWAYS variants
    move to the next boundary in their direction even when aligned.
    """
    NEAREST = "nearest"
    ROUND_UP_ALWAYS = "round_up_always"
    ROUND_UP_MAYBE = "round_up_maybe"
    ROUND_DOWN_ALWAYS = "round_down_always"
    ROUND_DOWN_MAYBE = "round_down_maybe"

    @property
    def is_up(self) -> bool:
        return self in (RoundMode.ROUND_UP_ALWAYS, RoundMode.ROUND_UP_MAYBE)

    @property
    def is_down(self) -> bool:
        return self in (RoundMode.ROUND_DOWN_ALWAYS, RoundMode.ROUND_DOWN_MAYBE)

    @property
    def is_maybe(self) -> bool:
        return self in (RoundMode.ROUND_UP_MAYBE, RoundMode.ROUND_DOWN_MAYBE)


class GridType(Enum):
    """Active ruler/grid granularity."""
    NONE = "none"
    BAR = "bar"
    BEAT = "beat"
    BEAT_DIV2 = "beat_div2"
    BEAT_DIV3 = "beat_div3"
    BEAT_DIV4 = "beat_div4"
    BEAT_DIV5 = "beat_div5"
    BEAT_DIV6 = "beat_div6"
    BEAT_DIV7 = "beat_div7"
    BEAT_DIV8 = "beat_div8"
    BEAT_DIV10 = "beat_div10"
    BEAT_DIV12 = "beat_div12"
    BEAT_DIV14 = "beat_div14"
    BEAT_DIV16 = "beat_div16"
    BEAT_DIV20 = "beat_div20"
    BEAT_DIV24 = "beat_div24"
    BEAT_DIV28 = "beat_div28"
    BEAT_DIV32 = "beat_div32"
    TIMECODE = "timecode"
    MINSEC = "minsec"
    CD_FRAME = "cd_frame"

    @property
    def is_musical(self) -> bool:
        return self is GridType.BAR or self.value.startswith("beat")

    @property
    def divisions(self) -> int:
        """
        Beat subdivisions for musical grids.

        0 means whole bars, 1 means beats, n means 1/n of a beat.
        Non-musical grids report -1.
        """
        if self is GridType.BAR:
            return 0
        if self is GridType.BEAT:
            return 1
        if self.value.startswith("beat_div"):
            return int(self.value[len("beat_div"):])
        return -1


class SnapPreference(Enum):
    """Which candidate sources participate in a snap."""
    ANY_VISUAL = "any_visual"        # grid, markers, playhead, region boundaries
    GRID_ONLY = "grid_only"          # grid at the displayed ruler scale
    GRID_UNSCALED = "grid_unscaled"  # grid at a canonical sub-scale


class SnapTarget(Enum):
    """Configured role of the grid among snap sources."""
    GRID = "grid"    # grid only, other sources are skipped
    OTHER = "other"  # everything except the grid
    BOTH = "both"


class EditPoint(Enum):
    """Authoritative source of the position an edit happens at."""
    PLAYHEAD = "playhead"
    MOUSE = "mouse"
    SELECTED_MARKER = "selected_marker"


class EditIgnoreOption(Enum):
    """Command-local override of the edit point preference."""
    NONE = "none"
    IGNORE_PLAYHEAD = "ignore_playhead"
    IGNORE_MOUSE = "ignore_mouse"


class RegionBoundaryKind(Enum):
    """Region positions that can act as snap targets."""
    START = "start"
    END = "end"
    SYNC = "sync"


class TimecodeRulerScale(Enum):
    """Granularity currently displayed by the timecode ruler."""
    BITS = "bits"
    FRAMES = "frames"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    MANY_HOURS = "many_hours"


class MinsecRulerScale(Enum):
    """Granularity currently displayed by the minutes:seconds ruler."""
    MSECS = "msecs"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    MANY_HOURS = "many_hours"
