"""
Location List

In-memory marker store implementing the MarkerSource protocol.

Ranges contribute both their start and end as snap targets; hidden
locations contribute nothing.
"""

from bisect import bisect_left
from typing import Iterator, List, Optional, Tuple

from snapline.features.snapping.domain.entities import Location
from snapline.features.snapping.domain.interfaces import TempoMap
from snapline.features.snapping.domain.time_position import TimePosition
from snapline.utils.message import Log


class LocationList:
    """
    Ordered collection of markers and ranges.

    Example:
        locations = LocationList()
        locations.add(Location("verse", TimePosition.from_samples(48000)))
        before, after = locations.marks_either_side(TimePosition.from_samples(50000))
    """

    def __init__(self, locations=None, tempo_map: Optional[TempoMap] = None):
        self._locations: List[Location] = []
        self._tempo_map = tempo_map
        for location in locations or []:
            self.add(location)

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self) -> Iterator[Location]:
        return iter(self._locations)

    def set_tempo_map(self, tempo_map: Optional[TempoMap]) -> None:
        """Tempo map used to place BEATS-domain locations."""
        self._tempo_map = tempo_map

    def add(self, location: Location) -> None:
        self._locations.append(location)
        Log.debug(f"LocationList: added '{location.name}' @ {location.start}")

    def remove(self, name: str) -> bool:
        """Remove the first location with this name. Returns True if one was removed."""
        for index, location in enumerate(self._locations):
            if location.name == name:
                del self._locations[index]
                return True
        return False

    def find(self, name: str) -> Optional[Location]:
        for location in self._locations:
            if location.name == name:
                return location
        return None

    def clear(self) -> None:
        self._locations.clear()

    # =========================================================================
    # MarkerSource
    # =========================================================================

    def has_marks(self) -> bool:
        return any(not location.hidden for location in self._locations)

    def marks_either_side(self, pos: TimePosition) -> Tuple[TimePosition, TimePosition]:
        """
        Nearest marker positions around `pos`.

        `before` is the last position strictly earlier than `pos`, `after` the
        first position at or later than `pos`. A missing side is
        TimePosition.max().
        """
        samples = self._sorted_samples()
        target = pos.to_samples(self._tempo_map)
        idx = bisect_left(samples, target)

        before = TimePosition.from_samples(samples[idx - 1]) if idx > 0 else TimePosition.max()
        after = TimePosition.from_samples(samples[idx]) if idx < len(samples) else TimePosition.max()
        return before, after

    def _sorted_samples(self) -> List[int]:
        positions = set()
        for location in self._locations:
            if location.hidden:
                continue
            positions.add(location.start.to_samples(self._tempo_map))
            positions.add(location.end.to_samples(self._tempo_map))
        return sorted(positions)
