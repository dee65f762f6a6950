"""
Track Region Model

Qt-side owner of tracks and their regions. Every structural change emits
`regions_changed`, which is what keeps the region boundary index honest.

Design:
- QObject with a single parameterless change signal
- iter_regions() only yields regions on visible tracks
"""

from typing import Dict, Iterator, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from snapline.features.snapping.domain.entities import Region, Track
from snapline.features.snapping.domain.time_position import TimePosition
from snapline.utils.message import Log


class TrackRegionModel(QObject):
    """
    Track/region container implementing the RegionSource protocol.

    Signals:
        regions_changed: Emitted after any add/remove/move/visibility change
    """

    regions_changed = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._tracks: Dict[str, Track] = {}

    # =========================================================================
    # Tracks
    # =========================================================================

    def add_track(self, name: str, visible: bool = True) -> Track:
        if name in self._tracks:
            raise ValueError(f"Track '{name}' already exists")
        track = Track(name=name, visible=visible)
        self._tracks[name] = track
        return track

    def track(self, name: str) -> Track:
        try:
            return self._tracks[name]
        except KeyError:
            raise KeyError(f"No track named '{name}'") from None

    def tracks(self) -> List[Track]:
        return list(self._tracks.values())

    def set_track_visible(self, name: str, visible: bool) -> None:
        track = self.track(name)
        if track.visible == visible:
            return
        track.visible = visible
        Log.debug(f"TrackRegionModel: track '{name}' visible={visible}")
        self.regions_changed.emit()

    # =========================================================================
    # Regions
    # =========================================================================

    def add_region(self, track_name: str, region: Region) -> None:
        self.track(track_name).regions.append(region)
        self.regions_changed.emit()

    def remove_region(self, region_id: str) -> bool:
        for track in self._tracks.values():
            for index, region in enumerate(track.regions):
                if region.id == region_id:
                    del track.regions[index]
                    self.regions_changed.emit()
                    return True
        return False

    def move_region(self, region_id: str, position: TimePosition) -> Region:
        """Replace a region with a copy at a new position."""
        for track in self._tracks.values():
            for index, region in enumerate(track.regions):
                if region.id == region_id:
                    moved = Region(region.id, position, region.length, region.sync_offset)
                    track.regions[index] = moved
                    self.regions_changed.emit()
                    return moved
        raise KeyError(f"No region with id '{region_id}'")

    def find_region(self, region_id: str) -> Optional[Region]:
        for region in self._all_regions():
            if region.id == region_id:
                return region
        return None

    # =========================================================================
    # RegionSource
    # =========================================================================

    def iter_regions(self) -> Iterator[Region]:
        for track in self._tracks.values():
            if track.visible:
                yield from track.regions

    def _all_regions(self) -> Iterator[Region]:
        for track in self._tracks.values():
            yield from track.regions
