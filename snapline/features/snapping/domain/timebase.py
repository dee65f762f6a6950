"""
Session Timebase

Sample rate and timecode parameters every non-musical scale derives its
rounding unit from. Units are integer sample counts except the timecode
frame, which may be fractional (e.g. 48000 / 29.97).
"""

from dataclasses import dataclass

from .errors import InvalidTimeBase

CD_FRAMES_PER_SECOND = 75


@dataclass(frozen=True)
class SessionTimebase:
    """
    Session timing parameters.

    Attributes:
        sample_rate: Samples per second
        timecode_fps: Timecode frames per second
        timecode_offset: Session timecode offset in samples (magnitude)
        timecode_offset_negative: Whether the offset is negative
    """
    sample_rate: int = 48000
    timecode_fps: float = 30.0
    timecode_offset: int = 0
    timecode_offset_negative: bool = False

    def _require_sample_rate(self) -> int:
        if self.sample_rate is None or self.sample_rate <= 0:
            raise InvalidTimeBase("sample_rate", self.sample_rate)
        return int(self.sample_rate)

    def _require_fps(self) -> float:
        if self.timecode_fps is None or self.timecode_fps <= 0:
            raise InvalidTimeBase("timecode_fps", self.timecode_fps)
        return float(self.timecode_fps)

    @property
    def signed_timecode_offset(self) -> int:
        return -self.timecode_offset if self.timecode_offset_negative else self.timecode_offset

    @property
    def samples_per_timecode_frame(self) -> float:
        return self._require_sample_rate() / self._require_fps()

    @property
    def one_timecode_second(self) -> int:
        return int(round(self._require_fps()) * self.samples_per_timecode_frame)

    @property
    def one_timecode_minute(self) -> int:
        return int(round(self._require_fps()) * self.samples_per_timecode_frame * 60)

    @property
    def one_second(self) -> int:
        return self._require_sample_rate()

    @property
    def one_minute(self) -> int:
        return self.one_second * 60

    @property
    def one_hour(self) -> int:
        return self.one_minute * 60

    @property
    def one_cd_frame(self) -> int:
        unit = self._require_sample_rate() // CD_FRAMES_PER_SECOND
        if unit <= 0:
            raise InvalidTimeBase("sample_rate / 75", unit, "sample rate too low for CD frames")
        return unit
