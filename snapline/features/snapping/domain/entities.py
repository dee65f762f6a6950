"""
Timeline entities consumed by the snapping core.

Markers (Locations) and regions are owned by the editing model; the core
only reads their positions.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from .time_position import TimePosition

if TYPE_CHECKING:
    from .interfaces import TempoMap


@dataclass(frozen=True)
class Location:
    """
    A marker (start == end) or a range on the timeline.

    Attributes:
        name: Display name
        start: Start position
        end: End position (equal to start for plain marks)
        hidden: Hidden locations never act as snap targets
    """
    name: str
    start: TimePosition
    end: Optional[TimePosition] = None
    hidden: bool = False

    def __post_init__(self):
        if self.end is None:
            object.__setattr__(self, "end", self.start)
        if self.end < self.start:
            raise ValueError(f"Location '{self.name}' ends before it starts")

    @property
    def is_mark(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class Region:
    """
    Editable region on a track.

    The start may be in either time domain; length and sync offset are always
    samples, so end and sync point are AUDIO-domain positions.

    Attributes:
        id: Unique identifier
        position: Start position on the timeline
        length: Length in samples
        sync_offset: Sync point relative to the start, in samples
    """
    id: str
    position: TimePosition
    length: int
    sync_offset: int = 0

    def __post_init__(self):
        if self.length < 0:
            raise ValueError(f"Region '{self.id}' has negative length: {self.length}")

    @property
    def start(self) -> TimePosition:
        return self.position

    @property
    def end(self) -> TimePosition:
        return self.end_at()

    @property
    def sync_position(self) -> TimePosition:
        return self.sync_at()

    def end_at(self, tempo_map: Optional["TempoMap"] = None) -> TimePosition:
        """End position in samples. BEATS-domain starts need a tempo map."""
        return TimePosition.from_samples(self.position.to_samples(tempo_map) + self.length)

    def sync_at(self, tempo_map: Optional["TempoMap"] = None) -> TimePosition:
        return TimePosition.from_samples(self.position.to_samples(tempo_map) + self.sync_offset)


@dataclass
class Track:
    """A track holding regions. Hidden tracks are out of snapping scope."""
    name: str
    visible: bool = True
    regions: List[Region] = field(default_factory=list)
