"""
Tests for the non-musical scale rounding functions.

Session is 48 kHz, 30 fps unless stated otherwise:
one timecode frame = 1600 samples, one CD frame = 640 samples.
"""
import pytest

from snapline.features.snapping.domain.errors import InvalidTimeBase, SnapError
from snapline.features.snapping.domain.scale_rounding import (
    ScaleParams,
    round_samples,
    snap_to_cd_frames,
    snap_to_minsec,
    snap_to_timecode,
)
from snapline.features.snapping.domain.time_position import TimePosition
from snapline.features.snapping.domain.timebase import SessionTimebase
from snapline.features.snapping.domain.types import MinsecRulerScale, RoundMode, TimecodeRulerScale


def at(samples):
    return TimePosition.from_samples(samples)


@pytest.fixture
def timebase():
    return SessionTimebase(sample_rate=48000, timecode_fps=30.0)


class TestRoundSamples:
    """Tests for the shared sample rounding primitive."""

    def test_nearest_rounds_down_below_half(self):
        assert round_samples(319, 640, RoundMode.NEAREST) == 0

    def test_nearest_exact_half_rounds_up(self):
        assert round_samples(320, 640, RoundMode.NEAREST) == 640

    def test_maybe_modes_leave_aligned_values(self):
        assert round_samples(1280, 640, RoundMode.ROUND_UP_MAYBE) == 1280
        assert round_samples(1280, 640, RoundMode.ROUND_DOWN_MAYBE) == 1280

    def test_always_modes_move_aligned_values(self):
        assert round_samples(1280, 640, RoundMode.ROUND_UP_ALWAYS) == 1920
        assert round_samples(1280, 640, RoundMode.ROUND_DOWN_ALWAYS) == 640

    def test_directional_modes_on_unaligned_values(self):
        assert round_samples(1000, 640, RoundMode.ROUND_UP_MAYBE) == 1280
        assert round_samples(1000, 640, RoundMode.ROUND_DOWN_ALWAYS) == 640

    @pytest.mark.parametrize("samples", [0, 1, 639, 640, 12345])
    def test_maybe_is_idempotent(self, samples):
        once = round_samples(samples, 640, RoundMode.ROUND_UP_MAYBE)
        assert round_samples(once, 640, RoundMode.ROUND_UP_MAYBE) == once

    def test_fractional_unit(self):
        # 29.97 fps frame is ~1601.6 samples
        unit = 48000 / 29.97
        assert round_samples(1601, unit, RoundMode.NEAREST) == 1602

    @pytest.mark.parametrize("mode", [RoundMode.ROUND_UP_MAYBE, RoundMode.ROUND_DOWN_MAYBE, RoundMode.NEAREST])
    @pytest.mark.parametrize("samples", [1000, 1602, 2500, 3203, 47_999])
    def test_fractional_unit_is_idempotent(self, samples, mode):
        unit = 48000 / 29.97
        once = round_samples(samples, unit, mode)
        assert round_samples(once, unit, mode) == once

    def test_fractional_unit_always_moves_one_frame(self):
        unit = 48000 / 29.97
        assert round_samples(1602, unit, RoundMode.ROUND_UP_ALWAYS) == 3203
        assert round_samples(1602, unit, RoundMode.ROUND_DOWN_ALWAYS) == 0

    @pytest.mark.parametrize("unit", [0, -640, None])
    def test_non_positive_unit_raises(self, unit):
        with pytest.raises(InvalidTimeBase):
            round_samples(100, unit, RoundMode.NEAREST)

    def test_invalid_timebase_is_a_value_error(self):
        with pytest.raises(ValueError):
            round_samples(100, 0, RoundMode.NEAREST)
        assert issubclass(InvalidTimeBase, SnapError)


class TestCdFrames:
    """Tests for CD frame rounding."""

    def test_rounds_to_cd_frame_at_millisecond_scale(self, timebase):
        params = ScaleParams(timebase, minsec_scale=MinsecRulerScale.MSECS)
        assert snap_to_cd_frames(at(700), RoundMode.NEAREST, params) == at(640)

    def test_delegates_to_minsec_at_coarser_scales(self, timebase):
        params = ScaleParams(timebase, minsec_scale=MinsecRulerScale.SECONDS)
        assert snap_to_cd_frames(at(700), RoundMode.NEAREST, params) == at(0)

    def test_unscaled_ignores_ruler(self, timebase):
        params = ScaleParams(timebase, minsec_scale=MinsecRulerScale.HOURS)
        assert snap_to_cd_frames(at(700), RoundMode.NEAREST, params, unscaled=True) == at(640)

    def test_sample_rate_too_low_raises(self):
        params = ScaleParams(SessionTimebase(sample_rate=50), minsec_scale=MinsecRulerScale.MSECS)
        with pytest.raises(InvalidTimeBase):
            snap_to_cd_frames(at(10), RoundMode.NEAREST, params)


class TestMinsec:
    """Tests for minutes:seconds rounding."""

    def test_round_up_always_moves_to_next_minute(self, timebase):
        params = ScaleParams(timebase, minsec_scale=MinsecRulerScale.MINUTES)
        assert snap_to_minsec(at(2_880_000), RoundMode.ROUND_UP_ALWAYS, params) == at(5_760_000)

    def test_round_up_maybe_keeps_aligned_minute(self, timebase):
        params = ScaleParams(timebase, minsec_scale=MinsecRulerScale.MINUTES)
        assert snap_to_minsec(at(2_880_000), RoundMode.ROUND_UP_MAYBE, params) == at(2_880_000)

    def test_seconds_scale(self, timebase):
        params = ScaleParams(timebase, minsec_scale=MinsecRulerScale.SECONDS)
        assert snap_to_minsec(at(30_000), RoundMode.NEAREST, params) == at(48_000)

    def test_hours_scale(self, timebase):
        params = ScaleParams(timebase, minsec_scale=MinsecRulerScale.MANY_HOURS)
        assert snap_to_minsec(at(100), RoundMode.ROUND_UP_MAYBE, params) == at(48000 * 3600)

    def test_unscaled_uses_seconds(self, timebase):
        params = ScaleParams(timebase, minsec_scale=MinsecRulerScale.HOURS)
        assert snap_to_minsec(at(30_000), RoundMode.NEAREST, params, unscaled=True) == at(48_000)

    def test_zero_sample_rate_raises(self):
        params = ScaleParams(SessionTimebase(sample_rate=0))
        with pytest.raises(InvalidTimeBase):
            snap_to_minsec(at(100), RoundMode.NEAREST, params)


class TestTimecode:
    """Tests for timecode rounding."""

    def test_frames_scale(self, timebase):
        params = ScaleParams(timebase, timecode_scale=TimecodeRulerScale.FRAMES)
        assert snap_to_timecode(at(2500), RoundMode.NEAREST, params) == at(3200)

    def test_bits_scale_rounds_to_frames(self, timebase):
        params = ScaleParams(timebase, timecode_scale=TimecodeRulerScale.BITS)
        assert snap_to_timecode(at(2500), RoundMode.ROUND_DOWN_MAYBE, params) == at(1600)

    def test_seconds_scale(self, timebase):
        params = ScaleParams(timebase, timecode_scale=TimecodeRulerScale.SECONDS)
        assert snap_to_timecode(at(30_000), RoundMode.NEAREST, params) == at(48_000)

    def test_minutes_scale(self, timebase):
        params = ScaleParams(timebase, timecode_scale=TimecodeRulerScale.HOURS)
        assert snap_to_timecode(at(2500), RoundMode.ROUND_UP_MAYBE, params) == at(2_880_000)

    def test_unscaled_uses_frames(self, timebase):
        params = ScaleParams(timebase, timecode_scale=TimecodeRulerScale.MINUTES)
        assert snap_to_timecode(at(2500), RoundMode.NEAREST, params, unscaled=True) == at(3200)

    def test_positive_offset_shifts_boundaries(self):
        params = ScaleParams(SessionTimebase(timecode_offset=1000))
        assert snap_to_timecode(at(2500), RoundMode.NEAREST, params) == at(2600)

    def test_negative_offset_shifts_boundaries(self):
        params = ScaleParams(SessionTimebase(timecode_offset=1000, timecode_offset_negative=True))
        assert snap_to_timecode(at(2500), RoundMode.NEAREST, params) == at(2200)

    def test_result_never_negative(self, timebase):
        params = ScaleParams(timebase)
        assert snap_to_timecode(at(0), RoundMode.ROUND_DOWN_ALWAYS, params) == at(0)

    def test_drop_frame_rate_snaps_do_not_creep(self):
        params = ScaleParams(SessionTimebase(sample_rate=48000, timecode_fps=29.97))
        first = snap_to_timecode(at(1000), RoundMode.ROUND_UP_MAYBE, params)
        second = snap_to_timecode(first, RoundMode.ROUND_UP_MAYBE, params)
        third = snap_to_timecode(second, RoundMode.ROUND_UP_MAYBE, params)
        assert first == at(1602)
        assert second == first
        assert third == first

    def test_zero_fps_raises(self):
        params = ScaleParams(SessionTimebase(timecode_fps=0))
        with pytest.raises(InvalidTimeBase):
            snap_to_timecode(at(100), RoundMode.NEAREST, params)
