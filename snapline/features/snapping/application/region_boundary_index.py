"""
Region Boundary Index

Cached, sorted set of region start/end/sync positions used as snap
candidates.

Lifecycle:
- Created dirty and empty
- invalidate() only sets the dirty flag (called on every region add/remove/
  move and track visibility change)
- The next query rebuilds the whole set synchronously, then clears the flag

Region sets change in bursts, so a wholesale rebuild on the next query is
cheaper than maintaining the set incrementally.
"""

from bisect import bisect_left, bisect_right
from typing import FrozenSet, Iterable, List, Optional, Tuple

from snapline.features.snapping.domain.interfaces import RegionSource, TempoMap
from snapline.features.snapping.domain.time_position import TimePosition
from snapline.features.snapping.domain.types import RegionBoundaryKind
from snapline.utils.message import Log

ALL_BOUNDARY_KINDS: FrozenSet[RegionBoundaryKind] = frozenset(RegionBoundaryKind)


class RegionBoundaryIndex:
    """
    Lazily rebuilt index of region boundaries (stored as sample positions).

    Example:
        index = RegionBoundaryIndex(track_model)
        prev, nxt = index.query_neighbors(TimePosition.from_samples(500))
        track_model.regions_changed.connect(index.invalidate)
    """

    def __init__(
        self,
        region_source: Optional[RegionSource] = None,
        kinds: Iterable[RegionBoundaryKind] = ALL_BOUNDARY_KINDS,
        tempo_map: Optional[TempoMap] = None
    ):
        self._region_source = region_source
        self._kinds: FrozenSet[RegionBoundaryKind] = frozenset(kinds)
        self._tempo_map = tempo_map
        self._boundaries: List[int] = []
        self._dirty = True
        self._rebuild_count = 0

    # =========================================================================
    # State
    # =========================================================================

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def rebuild_count(self) -> int:
        """Number of rebuilds performed (diagnostics)."""
        return self._rebuild_count

    @property
    def kinds(self) -> FrozenSet[RegionBoundaryKind]:
        return self._kinds

    def set_kinds(self, kinds: Iterable[RegionBoundaryKind]) -> None:
        """Change which region positions are indexed. Invalidates on change."""
        kinds = frozenset(kinds)
        if kinds != self._kinds:
            self._kinds = kinds
            self.invalidate()

    def set_region_source(self, region_source: Optional[RegionSource]) -> None:
        self._region_source = region_source
        self.invalidate()

    def set_tempo_map(self, tempo_map: Optional[TempoMap]) -> None:
        if tempo_map is not self._tempo_map:
            self._tempo_map = tempo_map
            self.invalidate()

    def invalidate(self) -> None:
        """Mark the index stale. No work happens until the next query."""
        self._dirty = True

    # =========================================================================
    # Queries
    # =========================================================================

    def query_neighbors(self, pos: TimePosition) -> Tuple[TimePosition, TimePosition]:
        """
        Boundaries around a position.

        `next` is the first boundary strictly after `pos`, `prev` the last one
        strictly before it. A boundary equal to `pos` is neither. A missing
        side is TimePosition.max().

        Returns:
            (prev, next) as AUDIO-domain positions
        """
        self._ensure_built()

        samples = pos.to_samples(self._tempo_map)
        next_idx = bisect_right(self._boundaries, samples)
        prev_idx = bisect_left(self._boundaries, samples) - 1

        if next_idx < len(self._boundaries):
            next_pos = TimePosition.from_samples(self._boundaries[next_idx])
        else:
            next_pos = TimePosition.max()

        if prev_idx >= 0:
            prev_pos = TimePosition.from_samples(self._boundaries[prev_idx])
        else:
            prev_pos = TimePosition.max()

        return prev_pos, next_pos

    def boundaries(self) -> List[TimePosition]:
        """Snapshot of all indexed boundaries, ascending."""
        self._ensure_built()
        return [TimePosition.from_samples(s) for s in self._boundaries]

    def __len__(self) -> int:
        self._ensure_built()
        return len(self._boundaries)

    # =========================================================================
    # Rebuild
    # =========================================================================

    def _ensure_built(self) -> None:
        if self._dirty:
            self.rebuild()

    def rebuild(self) -> None:
        """Rebuild the boundary set from the region source and clear the dirty flag."""
        positions = set()

        if self._region_source is not None and self._kinds:
            for region in self._region_source.iter_regions():
                if RegionBoundaryKind.START in self._kinds:
                    positions.add(region.start.to_samples(self._tempo_map))
                if RegionBoundaryKind.END in self._kinds:
                    positions.add(region.end_at(self._tempo_map).value)
                if RegionBoundaryKind.SYNC in self._kinds:
                    positions.add(region.sync_at(self._tempo_map).value)

        self._boundaries = sorted(positions)
        self._dirty = False
        self._rebuild_count += 1
        Log.debug(f"RegionBoundaryIndex: rebuilt with {len(self._boundaries)} boundaries")
