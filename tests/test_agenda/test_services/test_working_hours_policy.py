"""Testes da politica de expediente (dia util, horario, almoco)."""

from __future__ import annotations

from datetime import date, time

import pytest

from agenda.domain import WorkingHoursConfig
from agenda.services.working_hours_policy import (
    describe_working_days,
    fits_working_hours,
    is_lunch_time,
    is_working_day,
    is_working_hour,
    lunch_overlaps,
)
from tests.fakes.builders import at

CLINIC = WorkingHoursConfig.model_validate(
    {
        "working_days": ["monday", "tuesday", "wednesday", "thursday", "friday"],
        "work_start": "08:00",
        "work_end": "18:00",
        "has_lunch_break": True,
        "lunch_start": "12:00",
        "lunch_end": "13:00",
    }
)


class TestIsWorkingDay:
    def test_weekday_in_config(self) -> None:
        assert is_working_day(date(2024, 6, 10), CLINIC)

    def test_weekend_outside_config(self) -> None:
        assert not is_working_day(date(2024, 6, 15), CLINIC)

    def test_absent_days_means_every_day(self) -> None:
        assert is_working_day(date(2024, 6, 16), WorkingHoursConfig())


class TestIsWorkingHour:
    @pytest.mark.parametrize("moment", [time(8, 0), time(12, 30), time(18, 0)])
    def test_bounds_are_inclusive(self, moment: time) -> None:
        assert is_working_hour(moment, CLINIC)

    @pytest.mark.parametrize("moment", [time(7, 59), time(18, 1), time(22, 0)])
    def test_outside_bounds(self, moment: time) -> None:
        assert not is_working_hour(moment, CLINIC)

    def test_missing_bound_is_permissive(self) -> None:
        config = WorkingHoursConfig(work_start=time(8, 0))
        assert is_working_hour(time(23, 0), config)


class TestIsLunchTime:
    def test_lunch_is_half_open(self) -> None:
        assert is_lunch_time(time(12, 0), CLINIC)
        assert is_lunch_time(time(12, 59), CLINIC)
        assert not is_lunch_time(time(13, 0), CLINIC)
        assert not is_lunch_time(time(11, 59), CLINIC)

    def test_never_lunch_without_flag(self) -> None:
        config = CLINIC.model_copy(update={"has_lunch_break": False})
        for hour in range(24):
            for minute in (0, 15, 30, 45):
                assert not is_lunch_time(time(hour, minute), config)

    def test_missing_lunch_bound_is_not_lunch(self) -> None:
        config = WorkingHoursConfig(has_lunch_break=True, lunch_start=time(12, 0))
        assert not is_lunch_time(time(12, 30), config)


class TestLunchOverlaps:
    def test_interval_crossing_lunch(self) -> None:
        assert lunch_overlaps(at("2024-06-10", "11:30"), at("2024-06-10", "12:30"), CLINIC)

    def test_interval_ending_at_lunch_start(self) -> None:
        assert not lunch_overlaps(at("2024-06-10", "11:00"), at("2024-06-10", "12:00"), CLINIC)

    def test_interval_starting_at_lunch_end(self) -> None:
        assert not lunch_overlaps(at("2024-06-10", "13:00"), at("2024-06-10", "14:00"), CLINIC)


class TestFitsWorkingHours:
    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            ("08:00", "09:00", True),
            ("17:00", "18:00", True),
            ("17:30", "18:30", False),
            ("07:30", "08:30", False),
        ],
    )
    def test_interval_inside_hours(self, start: str, end: str, expected: bool) -> None:
        result = fits_working_hours(at("2024-06-10", start), at("2024-06-10", end), CLINIC)
        assert result is expected

    def test_missing_bounds_fit_anything(self) -> None:
        assert fits_working_hours(
            at("2024-06-10", "22:00"), at("2024-06-10", "23:00"), WorkingHoursConfig()
        )


def test_describe_working_days_in_week_order() -> None:
    config = WorkingHoursConfig.model_validate({"working_days": ["friday", "monday"]})
    assert describe_working_days(config) == "Segunda, Sexta"
    assert describe_working_days(WorkingHoursConfig()) == "Todos os dias"
