"""
Tests for SnapEngine candidate aggregation and the magnetic threshold.

Display runs at 1 sample per pixel unless stated otherwise, so the default
25 px threshold is 25 samples.
"""
import pytest

from snapline.features.snapping.application.region_boundary_index import RegionBoundaryIndex
from snapline.features.snapping.application.snap_engine import SnapEngine, pick_neighbor
from snapline.features.snapping.domain.configuration import SnapConfiguration, SnapContext
from snapline.features.snapping.domain.entities import Location, Region
from snapline.features.snapping.domain.time_position import TimeDomain, TimePosition
from snapline.features.snapping.domain.timebase import SessionTimebase
from snapline.features.snapping.domain.types import (
    GridType,
    RoundMode,
    SnapPreference,
    SnapTarget,
)
from snapline.features.snapping.infrastructure.location_list import LocationList
from snapline.features.snapping.infrastructure.state import StaticDisplayState, StaticTransport
from snapline.features.snapping.infrastructure.tempo_map import ConstantTempoMap


def at(samples):
    return TimePosition.from_samples(samples)


def markers(*samples):
    return LocationList([Location(f"m{s}", at(s)) for s in samples])


class FakeRegionSource:
    def __init__(self, regions):
        self.regions = list(regions)

    def iter_regions(self):
        return iter(self.regions)


def make_context(spp=1.0, marks=None, transport=None, tempo_map=None):
    return SnapContext(
        timebase=SessionTimebase(sample_rate=48000, timecode_fps=30.0),
        display=StaticDisplayState(spp=spp),
        tempo_map=tempo_map,
        markers=marks,
        transport=transport,
    )


def resolve(engine, pos, config, context, mode=RoundMode.NEAREST,
            pref=SnapPreference.ANY_VISUAL, ensure_snap=False):
    return engine.resolve(pos, mode, pref, ensure_snap, config, context)


@pytest.fixture
def engine():
    return SnapEngine()


class TestPickNeighbor:
    """Tests for choosing between the candidates either side."""

    def test_both_missing(self):
        assert pick_neighbor(at(5), TimePosition.max(), TimePosition.max(), RoundMode.NEAREST) is None

    def test_one_side_missing(self):
        assert pick_neighbor(at(5), TimePosition.max(), at(9), RoundMode.ROUND_DOWN_MAYBE) == at(9)
        assert pick_neighbor(at(5), at(1), TimePosition.max(), RoundMode.ROUND_UP_MAYBE) == at(1)

    def test_direction(self):
        assert pick_neighbor(at(5), at(4), at(100), RoundMode.ROUND_UP_ALWAYS) == at(100)
        assert pick_neighbor(at(5), at(0), at(6), RoundMode.ROUND_DOWN_MAYBE) == at(0)

    def test_nearest_tie_goes_after(self):
        assert pick_neighbor(at(10), at(5), at(15), RoundMode.NEAREST) == at(15)
        assert pick_neighbor(at(10), at(6), at(15), RoundMode.NEAREST) == at(6)


class TestCandidates:
    """Tests for which sources participate."""

    def test_nothing_enabled_is_identity(self, engine):
        config = SnapConfiguration(snap_to_marks=False)
        context = make_context(marks=markers(1001))
        assert resolve(engine, at(1000), config, context) == at(1000)

    def test_no_sources_is_identity(self, engine):
        assert resolve(engine, at(1000), SnapConfiguration(), make_context()) == at(1000)

    def test_marker_tie_goes_to_later_marker(self, engine):
        context = make_context(marks=markers(995, 1005))
        assert resolve(engine, at(1000), SnapConfiguration(), context) == at(1005)

    def test_grid_only_preference_skips_markers(self, engine):
        config = SnapConfiguration(grid_type=GridType.TIMECODE)
        context = make_context(marks=markers(1001))
        result = resolve(engine, at(1000), config, context, pref=SnapPreference.GRID_ONLY, ensure_snap=True)
        assert result == at(1600)

    def test_grid_target_skips_other_sources(self, engine):
        config = SnapConfiguration(grid_type=GridType.TIMECODE, snap_target=SnapTarget.GRID)
        context = make_context(marks=markers(1001))
        assert resolve(engine, at(1000), config, context, ensure_snap=True) == at(1600)

    def test_other_target_ignores_grid(self, engine):
        config = SnapConfiguration(grid_type=GridType.TIMECODE, snap_target=SnapTarget.OTHER)
        context = make_context(marks=markers(400))
        assert resolve(engine, at(1000), config, context, ensure_snap=True) == at(400)

    def test_earlier_source_wins_ties(self, engine):
        # grid 1600 and marker 400 are both 600 samples away
        config = SnapConfiguration(grid_type=GridType.TIMECODE)
        context = make_context(marks=markers(400))
        assert resolve(engine, at(1000), config, context, ensure_snap=True) == at(1600)

    def test_strictly_closer_later_source_wins(self, engine):
        config = SnapConfiguration(grid_type=GridType.TIMECODE)
        context = make_context(marks=markers(500))
        assert resolve(engine, at(1000), config, context, ensure_snap=True) == at(500)

    def test_playhead_ignored_while_rolling(self, engine):
        config = SnapConfiguration(snap_to_playhead=True)
        rolling = make_context(transport=StaticTransport(position=1010, rolling=True))
        stopped = make_context(transport=StaticTransport(position=1010, rolling=False))
        assert resolve(engine, at(1000), config, rolling) == at(1000)
        assert resolve(engine, at(1000), config, stopped) == at(1010)

    def test_region_boundaries(self):
        source = FakeRegionSource([Region("a", at(100), 400)])
        engine = SnapEngine(RegionBoundaryIndex(source))
        context = make_context()
        assert resolve(engine, at(480), SnapConfiguration(), context) == at(500)
        assert resolve(engine, at(480), SnapConfiguration(), context,
                        mode=RoundMode.ROUND_DOWN_MAYBE, ensure_snap=True) == at(100)

    def test_region_kinds_follow_configuration(self):
        source = FakeRegionSource([Region("a", at(100), 400)])
        engine = SnapEngine(RegionBoundaryIndex(source))
        config = SnapConfiguration(snap_to_region_end=False)
        assert resolve(engine, at(480), config, make_context()) == at(480)
        assert resolve(engine, at(480), config, make_context(), ensure_snap=True) == at(100)

    def test_beats_input_keeps_domain(self, engine):
        tempo_map = ConstantTempoMap(bpm=120.0, sample_rate=48000)
        config = SnapConfiguration(grid_type=GridType.BEAT)
        context = make_context(tempo_map=tempo_map)
        result = resolve(engine, TimePosition.from_beats(0.9), config, context, ensure_snap=True)
        assert result.domain is TimeDomain.BEATS
        assert result == TimePosition.from_beats(1)


class TestMagneticThreshold:
    """Tests for the pixel threshold gate."""

    def test_within_threshold_snaps(self, engine):
        context = make_context(spp=4.0, marks=markers(1100))
        assert resolve(engine, at(1000), SnapConfiguration(), context) == at(1100)

    def test_beyond_threshold_returns_input(self, engine):
        context = make_context(spp=1.0, marks=markers(1100))
        assert resolve(engine, at(1000), SnapConfiguration(), context) == at(1000)

    def test_ensure_snap_bypasses_threshold(self, engine):
        context = make_context(spp=1.0, marks=markers(1100))
        assert resolve(engine, at(1000), SnapConfiguration(), context, ensure_snap=True) == at(1100)

    def test_threshold_in_samples(self, engine):
        config = SnapConfiguration(snap_threshold_px=10)
        assert engine.magnetic_threshold_samples(config, make_context(spp=250.0)) == 2500

    def test_threshold_clamp(self, engine):
        config = SnapConfiguration(snap_threshold_max_seconds=0.001)
        assert engine.magnetic_threshold_samples(config, make_context(spp=10.0)) == 48

    @pytest.fixture
    def grid_only(self):
        # 30 fps: frames every 1600 samples; 100 px at 1 spp is 100 samples
        return SnapConfiguration(
            grid_type=GridType.TIMECODE, snap_target=SnapTarget.GRID, snap_threshold_px=100
        )

    def test_grid_candidate_at_exact_threshold_snaps(self, engine, grid_only):
        assert resolve(engine, at(1500), grid_only, make_context()) == at(1600)

    def test_grid_candidate_one_past_threshold_returns_input(self, engine, grid_only):
        assert resolve(engine, at(1499), grid_only, make_context()) == at(1499)

    def test_grid_candidate_one_past_threshold_with_ensure_snap(self, engine, grid_only):
        assert resolve(engine, at(1499), grid_only, make_context(), ensure_snap=True) == at(1600)
