"""
Static collaborator state.

Plain, mutable holders for display, transport and edit-surface state. The
editor window updates them from its widgets; tests and headless tools set
them directly.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from snapline.features.snapping.domain.entities import Location
from snapline.features.snapping.domain.ruler_scale import (
    choose_minsec_ruler_scale,
    choose_timecode_ruler_scale,
)
from snapline.features.snapping.domain.time_position import TimePosition
from snapline.features.snapping.domain.timebase import SessionTimebase
from snapline.features.snapping.domain.types import MinsecRulerScale, TimecodeRulerScale


@dataclass
class StaticDisplayState:
    """
    Zoom level and ruler scales of the editor canvas.

    When `visible_width_px` and `timebase` are set, the ruler scales follow
    the visible range. Otherwise the fixed scales are reported.

    Attributes:
        spp: Samples per pixel
        visible_width_px: Canvas width in pixels (optional)
        timebase: Session timebase used for automatic scale selection
        timecode_scale: Fixed timecode ruler scale
        minsec_scale: Fixed minutes:seconds ruler scale
    """
    spp: float = 1.0
    visible_width_px: Optional[int] = None
    timebase: Optional[SessionTimebase] = None
    timecode_scale: TimecodeRulerScale = TimecodeRulerScale.FRAMES
    minsec_scale: MinsecRulerScale = MinsecRulerScale.SECONDS

    def __post_init__(self):
        if self.spp <= 0:
            raise ValueError(f"samples per pixel must be positive, got {self.spp}")

    @property
    def visible_samples(self) -> Optional[int]:
        if self.visible_width_px is None:
            return None
        return int(self.visible_width_px * self.spp)

    def samples_per_pixel(self) -> float:
        return self.spp

    def timecode_ruler_scale(self) -> TimecodeRulerScale:
        if self.visible_width_px is not None and self.timebase is not None:
            return choose_timecode_ruler_scale(self.visible_samples, self.timebase)
        return self.timecode_scale

    def minsec_ruler_scale(self) -> MinsecRulerScale:
        if self.visible_width_px is not None and self.timebase is not None:
            return choose_minsec_ruler_scale(self.visible_samples, self.timebase)
        return self.minsec_scale


@dataclass
class StaticTransport:
    """Transport position and rolling flag."""
    position: int = 0
    rolling: bool = False

    def audible_sample(self) -> int:
        return self.position

    def transport_rolling(self) -> bool:
        return self.rolling


@dataclass
class StaticEditSurface:
    """
    Pointer, selection and playhead state of the editor canvas.

    Attributes:
        pointer: Pointer position in samples, None when off the canvas
        context_click: Position of the click that opened the context menu
        entered_marker: Position of the marker under the cursor
        selected_marker: First selected marker and whether its start is selected
        playhead_dragging: Playhead is being dragged
        playhead_visual: Drawn playhead position in samples
    """
    pointer: Optional[int] = None
    context_click: Optional[int] = None
    entered_marker: Optional[TimePosition] = None
    selected_marker: Optional[Tuple[Location, bool]] = None
    playhead_dragging: bool = False
    playhead_visual: int = 0

    def pointer_sample(self) -> Optional[int]:
        return self.pointer

    def context_click_sample(self) -> Optional[int]:
        return self.context_click

    def entered_marker_position(self) -> Optional[TimePosition]:
        return self.entered_marker

    def first_selected_marker(self) -> Optional[Tuple[Location, bool]]:
        return self.selected_marker

    def dragging_playhead(self) -> bool:
        return self.playhead_dragging

    def playhead_visual_sample(self) -> int:
        return self.playhead_visual
