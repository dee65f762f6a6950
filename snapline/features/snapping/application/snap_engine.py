"""
Snap Engine

Collects snap candidates from the grid, markers, the playhead and region
boundaries, keeps the nearest one and applies the magnetic threshold.

Candidate order is grid, marker, playhead, region boundary. A later
candidate replaces the best so far only when it is strictly closer, so the
earlier source wins ties.

All distance arithmetic happens in samples; the result is returned in the
time domain of the input position.
"""

from typing import Optional

from snapline.features.snapping.domain.configuration import SnapConfiguration, SnapContext
from snapline.features.snapping.domain.time_position import TimeDomain, TimePosition
from snapline.features.snapping.domain.types import RoundMode, SnapPreference, SnapTarget
from snapline.utils.message import Log

from .grid_dispatcher import snap_to_grid
from .region_boundary_index import RegionBoundaryIndex


def pick_neighbor(
    pos: TimePosition,
    before: TimePosition,
    after: TimePosition,
    mode: RoundMode
) -> Optional[TimePosition]:
    """
    Choose between the candidates either side of `pos`.

    Up modes take `after`, down modes take `before`, NEAREST takes the closer
    one with ties going to `after`. A missing side (max sentinel) yields the
    other side; both missing yields None.
    """
    if before.is_max and after.is_max:
        return None
    if before.is_max:
        return after
    if after.is_max:
        return before

    if mode.is_up:
        return after
    if mode.is_down:
        return before

    if before.distance(pos) < pos.distance(after):
        return before
    return after


class _BestSnap:
    """Best candidate so far for one resolution."""

    def __init__(self, presnap: TimePosition):
        self.presnap = presnap
        self.best: Optional[TimePosition] = None
        self.best_distance = float("inf")
        self.source = ""

    def consider(self, candidate: Optional[TimePosition], source: str) -> None:
        if candidate is None or candidate.is_max:
            return
        distance = abs(self.presnap.distance(candidate))
        if distance < self.best_distance:
            self.best = candidate
            self.best_distance = distance
            self.source = source


class SnapEngine:
    """
    Resolves a raw position to the nearest visually justified snap target.

    The engine holds no state of its own besides the (optional) region
    boundary index it queries.
    """

    def __init__(self, boundary_index: Optional[RegionBoundaryIndex] = None):
        self._boundary_index = boundary_index

    @property
    def boundary_index(self) -> Optional[RegionBoundaryIndex]:
        return self._boundary_index

    def magnetic_threshold_samples(self, config: SnapConfiguration, context: SnapContext) -> float:
        """
        Convert the pixel threshold to samples at the current zoom level.

        The optional seconds clamp bounds the threshold at extreme zoom-out.
        """
        samples_per_pixel = context.display.samples_per_pixel()
        threshold = config.snap_threshold_px * samples_per_pixel

        if config.snap_threshold_max_seconds is not None:
            threshold = min(threshold, config.snap_threshold_max_seconds * context.timebase.one_second)

        return threshold

    def resolve(
        self,
        pos: TimePosition,
        mode: RoundMode,
        pref: SnapPreference,
        ensure_snap: bool,
        config: SnapConfiguration,
        context: SnapContext
    ) -> TimePosition:
        """
        Snap a position.

        Args:
            pos: Raw position
            mode: Rounding direction policy
            pref: Which candidate sources participate
            ensure_snap: Accept the best candidate regardless of the magnetic threshold
            config: Snap configuration
            context: External state snapshot

        Returns:
            The snapped position, or `pos` unchanged when there is no
            candidate or the best one is beyond the magnetic threshold
        """
        presnap = pos.to_domain(TimeDomain.AUDIO, context.tempo_map)
        best = _BestSnap(presnap)
        any_visual = pref is SnapPreference.ANY_VISUAL
        grid_only = False

        if config.grid_enabled and config.snap_target is not SnapTarget.OTHER:
            best.consider(snap_to_grid(presnap, mode, pref, config, context), "grid")
            grid_only = config.snap_target is SnapTarget.GRID

        if not grid_only:
            if any_visual and config.snap_to_marks:
                best.consider(self._marker_candidate(presnap, mode, context), "marker")

            if any_visual and config.snap_to_playhead:
                best.consider(self._playhead_candidate(context), "playhead")

            if any_visual and config.snaps_to_regions:
                best.consider(self._region_candidate(presnap, mode, config, context), "region")

        if best.best is None:
            return pos

        if not ensure_snap:
            threshold = self.magnetic_threshold_samples(config, context)
            if best.best_distance > threshold:
                Log.debug(
                    f"SnapEngine: {best.source} candidate {best.best} is {best.best_distance} samples "
                    f"from {presnap}, beyond threshold {threshold:.0f}"
                )
                return pos

        return best.best.to_domain(pos.domain, context.tempo_map)

    # =========================================================================
    # Candidate sources
    # =========================================================================

    def _marker_candidate(
        self,
        presnap: TimePosition,
        mode: RoundMode,
        context: SnapContext
    ) -> Optional[TimePosition]:
        markers = context.markers
        if markers is None or not markers.has_marks():
            return None

        before, after = markers.marks_either_side(presnap)
        return pick_neighbor(
            presnap,
            before.to_domain(TimeDomain.AUDIO, context.tempo_map),
            after.to_domain(TimeDomain.AUDIO, context.tempo_map),
            mode,
        )

    def _playhead_candidate(self, context: SnapContext) -> Optional[TimePosition]:
        transport = context.transport
        if transport is None or transport.transport_rolling():
            return None
        return TimePosition.from_samples(transport.audible_sample())

    def _region_candidate(
        self,
        presnap: TimePosition,
        mode: RoundMode,
        config: SnapConfiguration,
        context: SnapContext
    ) -> Optional[TimePosition]:
        index = self._boundary_index
        if index is None:
            return None

        index.set_kinds(config.region_boundary_kinds)
        index.set_tempo_map(context.tempo_map)
        prev_pos, next_pos = index.query_neighbors(presnap)
        return pick_neighbor(presnap, prev_pos, next_pos, mode)
