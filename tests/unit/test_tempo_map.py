"""
Tests for ConstantTempoMap.
"""
import pytest

from snapline.features.snapping.domain.errors import InvalidTimeBase
from snapline.features.snapping.domain.interfaces import TempoMap
from snapline.features.snapping.domain.types import RoundMode
from snapline.features.snapping.infrastructure.tempo_map import ConstantTempoMap


@pytest.fixture
def tempo_map():
    return ConstantTempoMap(bpm=120.0, beats_per_bar=4, sample_rate=48000)


class TestConstantTempoMap:
    """Tests for beat arithmetic and musical rounding."""

    def test_implements_protocol(self, tempo_map):
        assert isinstance(tempo_map, TempoMap)

    def test_beat_and_bar_lengths(self, tempo_map):
        assert tempo_map.samples_per_beat == 24000
        assert tempo_map.samples_per_bar == 96000

    def test_tick_conversion(self, tempo_map):
        assert tempo_map.samples_to_ticks(36000) == 2880
        assert tempo_map.ticks_to_samples(2880) == 36000

    def test_beat_conversion(self, tempo_map):
        assert tempo_map.samples_to_beats(12000) == 0.5
        assert tempo_map.beats_to_samples(2.5) == 60000

    def test_round_to_bar(self, tempo_map):
        assert tempo_map.round_to_bar(40000, RoundMode.NEAREST) == 0
        assert tempo_map.round_to_bar(50000, RoundMode.NEAREST) == 96000
        assert tempo_map.round_to_bar(96000, RoundMode.ROUND_UP_ALWAYS) == 192000

    def test_round_to_beat(self, tempo_map):
        assert tempo_map.round_to_subdivision(13000, 1, RoundMode.NEAREST) == 24000
        assert tempo_map.round_to_subdivision(13000, 1, RoundMode.ROUND_DOWN_MAYBE) == 0

    def test_round_to_subdivision(self, tempo_map):
        assert tempo_map.round_to_subdivision(7000, 4, RoundMode.NEAREST) == 6000

    def test_round_never_negative(self, tempo_map):
        assert tempo_map.round_to_subdivision(0, 1, RoundMode.ROUND_DOWN_ALWAYS) == 0

    def test_zero_divisions_rejected(self, tempo_map):
        with pytest.raises(ValueError):
            tempo_map.round_to_subdivision(100, 0, RoundMode.NEAREST)

    @pytest.mark.parametrize("kwargs", [
        {"bpm": 0},
        {"beats_per_bar": 0},
        {"sample_rate": -1},
    ])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(InvalidTimeBase):
            ConstantTempoMap(**kwargs)
