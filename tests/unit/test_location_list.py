"""
Tests for LocationList (marker source).
"""
from snapline.features.snapping.domain.entities import Location
from snapline.features.snapping.domain.interfaces import MarkerSource
from snapline.features.snapping.domain.time_position import TimePosition
from snapline.features.snapping.infrastructure.location_list import LocationList
from snapline.features.snapping.infrastructure.tempo_map import ConstantTempoMap


def at(samples):
    return TimePosition.from_samples(samples)


class TestLocationList:
    """Tests for marker lookup around a position."""

    def test_implements_protocol(self):
        assert isinstance(LocationList(), MarkerSource)

    def test_empty_list_has_no_neighbours(self):
        locations = LocationList()
        assert not locations.has_marks()
        before, after = locations.marks_either_side(at(100))
        assert before.is_max and after.is_max

    def test_before_is_strict_after_is_inclusive(self):
        locations = LocationList([Location("a", at(100)), Location("b", at(500))])
        assert locations.marks_either_side(at(500)) == (at(100), at(500))
        assert locations.marks_either_side(at(300)) == (at(100), at(500))

    def test_missing_sides(self):
        locations = LocationList([Location("a", at(100))])
        before, after = locations.marks_either_side(at(50))
        assert before.is_max and after == at(100)
        before, after = locations.marks_either_side(at(150))
        assert before == at(100) and after.is_max

    def test_range_contributes_both_ends(self):
        locations = LocationList([Location("loop", at(100), at(900))])
        assert locations.marks_either_side(at(500)) == (at(100), at(900))

    def test_hidden_locations_ignored(self):
        locations = LocationList([Location("hidden", at(200), hidden=True)])
        assert not locations.has_marks()
        before, after = locations.marks_either_side(at(100))
        assert before.is_max and after.is_max

    def test_beats_locations_converted(self):
        tempo_map = ConstantTempoMap(bpm=120.0, sample_rate=48000)
        locations = LocationList([Location("beat 2", TimePosition.from_beats(1))], tempo_map=tempo_map)
        assert locations.marks_either_side(at(0)) == (TimePosition.max(), at(24000))

    def test_remove_and_find(self):
        locations = LocationList([Location("a", at(100)), Location("b", at(500))])
        assert locations.find("b").start == at(500)
        assert locations.remove("a") is True
        assert locations.remove("a") is False
        assert len(locations) == 1
        assert locations.find("a") is None
