"""
Snapping Interfaces

Protocol definitions for the collaborators the snapping core reads from.
The core never mutates any of them; everything is read at resolution time.
"""

from typing import Iterable, Optional, Protocol, Tuple, runtime_checkable

from .entities import Location, Region
from .time_position import TimePosition
from .types import MinsecRulerScale, RoundMode, TimecodeRulerScale


@runtime_checkable
class TempoMap(Protocol):
    """
    Converts between samples and musical ticks and rounds to bar/beat lines.

    Musical rounding is a black box to the snapping core.
    """

    def samples_to_ticks(self, samples: int) -> int:
        ...

    def ticks_to_samples(self, ticks: int) -> int:
        ...

    def round_to_bar(self, samples: int, mode: RoundMode) -> int:
        """Round a sample position to a bar line."""
        ...

    def round_to_subdivision(self, samples: int, divisions: int, mode: RoundMode) -> int:
        """Round a sample position to 1/divisions of a beat."""
        ...


@runtime_checkable
class MarkerSource(Protocol):
    """Ordered marker (Location) collection."""

    def has_marks(self) -> bool:
        ...

    def marks_either_side(self, pos: TimePosition) -> Tuple[TimePosition, TimePosition]:
        """
        Nearest marker positions around `pos`.

        Returns:
            (before, after): last position strictly before `pos` and first
            position at or after it. A missing side is TimePosition.max().
        """
        ...


@runtime_checkable
class RegionSource(Protocol):
    """Regions currently in snapping scope (regions on visible tracks)."""

    def iter_regions(self) -> Iterable[Region]:
        ...


@runtime_checkable
class TransportState(Protocol):
    """Playhead/transport state."""

    def audible_sample(self) -> int:
        ...

    def transport_rolling(self) -> bool:
        ...


@runtime_checkable
class DisplayState(Protocol):
    """Zoom level and displayed ruler scales of the editing surface."""

    def samples_per_pixel(self) -> float:
        ...

    def timecode_ruler_scale(self) -> TimecodeRulerScale:
        ...

    def minsec_ruler_scale(self) -> MinsecRulerScale:
        ...


@runtime_checkable
class EditSurface(Protocol):
    """Pointer, hover and selection state of the editing canvas."""

    def pointer_sample(self) -> Optional[int]:
        """Pointer position in samples, or None when the pointer is off the canvas."""
        ...

    def context_click_sample(self) -> Optional[int]:
        """Position of the click that opened the current context menu."""
        ...

    def entered_marker_position(self) -> Optional[TimePosition]:
        """Position of the marker under the cursor, if any."""
        ...

    def first_selected_marker(self) -> Optional[Tuple[Location, bool]]:
        """First selected marker's location and whether its start edge was selected."""
        ...

    def dragging_playhead(self) -> bool:
        ...

    def playhead_visual_sample(self) -> int:
        ...
