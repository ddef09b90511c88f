"""Tests for availability checks against weekly windows."""

from datetime import date

import pytest

from marketplace_booking.errors import DayNotAvailable, InvalidTimeOrder, OutOfWindow
from marketplace_booking.schemas.availability_schema import Weekday
from marketplace_booking.scheduling.validator import (
    fits_window,
    is_day_available,
    is_within_window,
    validate_date_range,
    weekday_for,
)
from tests.conftest import day, make_availability


class TestWeekdayLookup:
    def test_iso_string(self):
        assert weekday_for("2024-06-03") == Weekday.MONDAY

    def test_datetime_string(self):
        assert weekday_for("2024-06-07T00:00:00.000Z") == Weekday.FRIDAY

    def test_date_object(self):
        assert weekday_for(date(2024, 6, 2)) == Weekday.SUNDAY


class TestIsDayAvailable:
    def test_open_weekday(self, weekday_availability):
        assert is_day_available(weekday_availability, "2024-06-03")

    def test_closed_weekend(self, weekday_availability):
        assert not is_day_available(weekday_availability, "2024-06-08")


class TestDayWindow:
    def test_inside_window(self, weekday_availability):
        assert is_within_window(weekday_availability, "Monday", "10:00", "11:00")

    def test_whole_window(self, weekday_availability):
        assert is_within_window(weekday_availability, "Monday", "09:00", "17:00")

    def test_starts_before_window(self, weekday_availability):
        with pytest.raises(OutOfWindow, match="Monday"):
            is_within_window(weekday_availability, "Monday", "08:00", "09:30")

    def test_ends_after_window(self, weekday_availability):
        with pytest.raises(OutOfWindow):
            is_within_window(weekday_availability, "Monday", "16:30", "17:30")

    def test_end_before_start(self, weekday_availability):
        with pytest.raises(InvalidTimeOrder):
            is_within_window(weekday_availability, "Monday", "15:00", "10:00")

    def test_zero_length(self, weekday_availability):
        with pytest.raises(InvalidTimeOrder):
            is_within_window(weekday_availability, "Monday", "10:00", "10:00")

    @pytest.mark.parametrize("weekday", ["Saturday", "Sunday"])
    def test_closed_day_rejected_regardless_of_time(self, weekday_availability, weekday):
        with pytest.raises(DayNotAvailable, match=f"{weekday} is not available"):
            is_within_window(weekday_availability, weekday, "10:00", "11:00")

    def test_closed_day_checked_before_times(self, weekday_availability):
        with pytest.raises(DayNotAvailable):
            is_within_window(weekday_availability, "Sunday", "03:00", "01:00")


class TestMidnightWindow:
    def test_slot_ending_at_midnight(self, evening_availability):
        assert is_within_window(evening_availability, "Friday", "23:00", "00:00")

    def test_morning_slot_outside_evening_window(self, evening_availability):
        with pytest.raises(OutOfWindow):
            is_within_window(evening_availability, "Friday", "06:00", "07:00")

    def test_midnight_end_on_day_window_is_out(self, weekday_availability):
        with pytest.raises(OutOfWindow):
            is_within_window(weekday_availability, "Monday", "16:00", "00:00")

    def test_full_day_window(self):
        availability = make_availability(sunday=day("00:00", "00:00"))
        assert is_within_window(availability, "Sunday", "00:00", "00:00")
        assert is_within_window(availability, "Sunday", "23:30", "00:00")


class TestCrossingWindow:
    def test_before_midnight(self, evening_availability):
        assert is_within_window(evening_availability, "Saturday", "22:00", "23:30")

    def test_spanning_midnight(self, evening_availability):
        assert is_within_window(evening_availability, "Saturday", "23:00", "01:00")

    def test_after_midnight(self, evening_availability):
        assert is_within_window(evening_availability, "Saturday", "00:30", "02:00")

    def test_ending_at_midnight(self, evening_availability):
        assert is_within_window(evening_availability, "Saturday", "23:00", "00:00")

    def test_past_window_end(self, evening_availability):
        with pytest.raises(OutOfWindow):
            is_within_window(evening_availability, "Saturday", "01:00", "03:00")

    def test_daytime_slot(self, evening_availability):
        with pytest.raises(OutOfWindow):
            is_within_window(evening_availability, "Saturday", "12:00", "13:00")

    def test_reversed_after_midnight(self, evening_availability):
        with pytest.raises(InvalidTimeOrder):
            is_within_window(evening_availability, "Saturday", "01:00", "00:30")


class TestFitsWindow:
    def test_true_when_valid(self, weekday_availability):
        assert fits_window(weekday_availability, "Tuesday", "09:00", "09:30")

    def test_false_instead_of_raising(self, weekday_availability):
        assert not fits_window(weekday_availability, "Sunday", "09:00", "09:30")
        assert not fits_window(weekday_availability, "Tuesday", "07:00", "09:30")


class TestValidateDateRange:
    def test_accepts_monday_booking(self, weekday_availability):
        assert validate_date_range(
            weekday_availability, "2024-06-03", "10:00", "11:00"
        ) == Weekday.MONDAY

    def test_rejects_out_of_window(self, weekday_availability):
        with pytest.raises(OutOfWindow):
            validate_date_range(weekday_availability, "2024-06-03", "08:00", "09:30")
