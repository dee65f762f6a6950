"""
Time Position

Immutable timeline position in one of two time domains:

- AUDIO: integer sample count at the session sample rate (exact, monotonic)
- BEATS: integer ticks (TICKS_PER_BEAT per quarter note), only meaningful
  relative to a tempo map

Positions in the same domain compare directly. Comparing or measuring across
domains needs a tempo map to convert first.
"""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .interfaces import TempoMap


TICKS_PER_BEAT = 1920

# Sentinel value meaning "no boundary in this direction"
MAX_POSITION_VALUE = 2 ** 62 - 1


class TimeDomain(Enum):
    """Time domain a position is expressed in."""
    AUDIO = "audio"
    BEATS = "beats"


@total_ordering
@dataclass(frozen=True)
class TimePosition:
    """
    A point on the timeline.

    Attributes:
        value: Samples (AUDIO) or ticks (BEATS)
        domain: Domain the value is expressed in

    Example:
        pos = TimePosition.from_samples(48000)
        beat = TimePosition.from_beats(1.5)
        pos.distance(TimePosition.from_samples(48640))  # 640
    """
    value: int = 0
    domain: TimeDomain = TimeDomain.AUDIO

    def __post_init__(self):
        object.__setattr__(self, "value", int(self.value))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_samples(cls, samples: int) -> "TimePosition":
        return cls(samples, TimeDomain.AUDIO)

    @classmethod
    def from_ticks(cls, ticks: int) -> "TimePosition":
        return cls(ticks, TimeDomain.BEATS)

    @classmethod
    def from_beats(cls, beats: float) -> "TimePosition":
        return cls(round(beats * TICKS_PER_BEAT), TimeDomain.BEATS)

    @classmethod
    def max(cls, domain: TimeDomain = TimeDomain.AUDIO) -> "TimePosition":
        """Sentinel for "no boundary in this direction"."""
        return cls(MAX_POSITION_VALUE, domain)

    @property
    def is_max(self) -> bool:
        return self.value == MAX_POSITION_VALUE

    @property
    def beats(self) -> float:
        """Position in (fractional) beats. Only valid in the BEATS domain."""
        if self.domain is not TimeDomain.BEATS:
            raise TypeError("beats is only defined for BEATS-domain positions")
        return self.value / TICKS_PER_BEAT

    # -------------------------------------------------------------------------
    # Domain conversion
    # -------------------------------------------------------------------------

    def to_samples(self, tempo_map: Optional["TempoMap"] = None) -> int:
        """Sample count for this position, converting through the tempo map if needed."""
        if self.domain is TimeDomain.AUDIO or self.is_max:
            return self.value
        if tempo_map is None:
            raise TypeError("Converting a BEATS position to samples requires a tempo map")
        return tempo_map.ticks_to_samples(self.value)

    def to_ticks(self, tempo_map: Optional["TempoMap"] = None) -> int:
        """Tick count for this position, converting through the tempo map if needed."""
        if self.domain is TimeDomain.BEATS or self.is_max:
            return self.value
        if tempo_map is None:
            raise TypeError("Converting an AUDIO position to ticks requires a tempo map")
        return tempo_map.samples_to_ticks(self.value)

    def to_domain(self, domain: TimeDomain, tempo_map: Optional["TempoMap"] = None) -> "TimePosition":
        """Same instant expressed in another domain. The max sentinel stays a sentinel."""
        if domain is self.domain:
            return self
        if self.is_max:
            return TimePosition.max(domain)
        if domain is TimeDomain.AUDIO:
            return TimePosition(self.to_samples(tempo_map), TimeDomain.AUDIO)
        return TimePosition(self.to_ticks(tempo_map), TimeDomain.BEATS)

    # -------------------------------------------------------------------------
    # Arithmetic / ordering
    # -------------------------------------------------------------------------

    def distance(self, other: "TimePosition", tempo_map: Optional["TempoMap"] = None) -> int:
        """
        Signed distance from this position to `other`, in this position's domain.

        Positive when `other` is later.
        """
        return other.to_domain(self.domain, tempo_map).value - self.value

    def _check_comparable(self, other: "TimePosition") -> None:
        if other.domain is not self.domain:
            raise TypeError(
                f"Cannot compare {self.domain.value} and {other.domain.value} positions "
                f"without a tempo map"
            )

    def __lt__(self, other: "TimePosition") -> bool:
        if not isinstance(other, TimePosition):
            return NotImplemented
        self._check_comparable(other)
        return self.value < other.value

    def __str__(self) -> str:
        if self.is_max:
            return f"max({self.domain.value})"
        if self.domain is TimeDomain.AUDIO:
            return f"{self.value} samples"
        return f"beat {self.beats:.3f}"
