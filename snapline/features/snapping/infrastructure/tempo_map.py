"""
Constant Tempo Map

Tempo map with a single tempo and meter for the whole session. Bars and
beats are counted from sample 0.

Design:
- Pure arithmetic over (bpm, beats_per_bar, sample_rate)
- Musical grid rounding reuses the sample rounding used by the ruler scales
"""

from snapline.features.snapping.domain.errors import InvalidTimeBase
from snapline.features.snapping.domain.scale_rounding import round_samples
from snapline.features.snapping.domain.time_position import TICKS_PER_BEAT
from snapline.features.snapping.domain.types import RoundMode


class ConstantTempoMap:
    """
    Fixed-tempo TempoMap implementation.

    Example:
        tempo_map = ConstantTempoMap(bpm=120.0, beats_per_bar=4, sample_rate=48000)
        tempo_map.samples_per_beat   # 24000.0
        tempo_map.round_to_bar(40000, RoundMode.NEAREST)   # 0
    """

    def __init__(self, bpm: float = 120.0, beats_per_bar: int = 4, sample_rate: int = 48000):
        if bpm <= 0:
            raise InvalidTimeBase("bpm", bpm)
        if beats_per_bar <= 0:
            raise InvalidTimeBase("beats_per_bar", beats_per_bar)
        if sample_rate <= 0:
            raise InvalidTimeBase("sample_rate", sample_rate)

        self._bpm = float(bpm)
        self._beats_per_bar = int(beats_per_bar)
        self._sample_rate = int(sample_rate)

    def __repr__(self) -> str:
        return (
            f"ConstantTempoMap(bpm={self._bpm}, beats_per_bar={self._beats_per_bar}, "
            f"sample_rate={self._sample_rate})"
        )

    @property
    def bpm(self) -> float:
        return self._bpm

    @property
    def beats_per_bar(self) -> int:
        return self._beats_per_bar

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def samples_per_beat(self) -> float:
        return self._sample_rate * 60.0 / self._bpm

    @property
    def samples_per_bar(self) -> float:
        return self.samples_per_beat * self._beats_per_bar

    # =========================================================================
    # Domain conversion
    # =========================================================================

    def samples_to_ticks(self, samples: int) -> int:
        return int(round(samples / self.samples_per_beat * TICKS_PER_BEAT))

    def ticks_to_samples(self, ticks: int) -> int:
        return int(round(ticks / TICKS_PER_BEAT * self.samples_per_beat))

    def samples_to_beats(self, samples: int) -> float:
        return samples / self.samples_per_beat

    def beats_to_samples(self, beats: float) -> int:
        return int(round(beats * self.samples_per_beat))

    # =========================================================================
    # Musical grid rounding
    # =========================================================================

    def round_to_bar(self, samples: int, mode: RoundMode) -> int:
        """Round to a bar line."""
        return max(0, round_samples(samples, self.samples_per_bar, mode))

    def round_to_subdivision(self, samples: int, divisions: int, mode: RoundMode) -> int:
        """
        Round to the n-th subdivision of a beat.

        Args:
            samples: Position in samples
            divisions: Subdivisions per beat (1 = beats, 2 = eighths in 4/4, ...)
            mode: Rounding direction policy
        """
        if divisions <= 0:
            raise ValueError(f"divisions must be positive, got {divisions}")
        return max(0, round_samples(samples, self.samples_per_beat / divisions, mode))
