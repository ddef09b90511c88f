"""Tests for time string conversions."""

import pytest

from marketplace_booking.errors import InvalidTimeFormat
from marketplace_booking.scheduling.time_math import (
    canonical_time,
    crosses_midnight,
    end_minutes,
    format_range_12_hour,
    format_to_12_hour,
    minutes_to_time,
    parse_12_hour_to_24,
    time_to_minutes,
)


class TestTimeToMinutes:
    def test_midnight_is_zero(self):
        assert time_to_minutes("00:00") == 0

    def test_last_minute_of_day(self):
        assert time_to_minutes("23:59") == 1439

    def test_half_past(self):
        assert time_to_minutes("09:30") == 570

    @pytest.mark.parametrize(
        "bad",
        ["24:00", "12:60", "9:30", "09-30", "", "noon", "09:30:00",
         " 10:00", "10:00 ", "10:00\n", "\u0661\u0660:00"],
    )
    def test_rejects_malformed(self, bad):
        with pytest.raises(InvalidTimeFormat):
            time_to_minutes(bad)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            time_to_minutes("25:00")

    def test_canonical_time_keeps_wire_form(self):
        assert canonical_time("07:05") == "07:05"

    def test_canonical_time_rejects_padding(self):
        with pytest.raises(InvalidTimeFormat):
            canonical_time(" 07:05")


class TestEndMinutes:
    def test_midnight_end_is_end_of_day(self):
        assert end_minutes("00:00") == 1440

    def test_other_times_unchanged(self):
        assert end_minutes("17:00") == 1020


class TestMinutesToTime:
    def test_basic(self):
        assert minutes_to_time(570) == "09:30"

    def test_end_of_day_sentinel(self):
        assert minutes_to_time(1440) == "00:00"

    def test_no_wrap_by_default(self):
        with pytest.raises(ValueError):
            minutes_to_time(1500)

    def test_wrap_when_requested(self):
        assert minutes_to_time(1500, wrap=True) == "01:00"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            minutes_to_time(-30)

    def test_every_minute_round_trips(self):
        for minutes in range(0, 1440):
            assert time_to_minutes(minutes_to_time(minutes)) == minutes


class TestCrossesMidnight:
    def test_overnight_window(self):
        assert crosses_midnight("22:00", "02:00")

    def test_day_window(self):
        assert not crosses_midnight("09:00", "17:00")

    def test_ending_at_midnight_is_not_a_crossing(self):
        assert not crosses_midnight("20:00", "00:00")


class TestTwelveHourFormat:
    def test_morning(self):
        assert format_to_12_hour("09:30") == "9:30 AM"

    def test_midnight_hour(self):
        assert format_to_12_hour("00:15") == "12:15 AM"

    def test_noon(self):
        assert format_to_12_hour("12:00") == "12:00 PM"

    def test_evening(self):
        assert format_to_12_hour("21:05") == "9:05 PM"

    def test_parse_pm(self):
        assert parse_12_hour_to_24("9:30 PM") == "21:30"

    def test_parse_midnight(self):
        assert parse_12_hour_to_24("12:00 AM") == "00:00"

    def test_parse_noon(self):
        assert parse_12_hour_to_24("12:45 pm") == "12:45"

    @pytest.mark.parametrize("bad", ["13:00 PM", "0:30 AM", "9:30", "9:75 AM"])
    def test_parse_rejects_malformed(self, bad):
        with pytest.raises(InvalidTimeFormat):
            parse_12_hour_to_24(bad)

    def test_every_minute_survives_display(self):
        for minutes in range(0, 1440):
            time = minutes_to_time(minutes)
            assert parse_12_hour_to_24(format_to_12_hour(time)) == time

    def test_range_label(self):
        assert format_range_12_hour("09:00", "17:00") == "9:00 AM - 5:00 PM"
