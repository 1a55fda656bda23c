"""Testes dos modelos de dominio de consultas e calendario externo."""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from agenda.domain import (
    Appointment,
    AppointmentOrigin,
    CalendarIntegration,
    ExternalEvent,
    TimeInterval,
    intervals_overlap,
    localize,
)
from tests.fakes.builders import TZ, appointment, at, integration
from utils.errors import InvalidIntervalError, SchedulingError


class TestIntervalsOverlap:
    def test_partial_overlap(self) -> None:
        assert intervals_overlap(
            at("2024-06-10", "09:00"),
            at("2024-06-10", "10:00"),
            at("2024-06-10", "09:30"),
            at("2024-06-10", "10:30"),
        )

    def test_back_to_back_never_overlaps(self) -> None:
        assert not intervals_overlap(
            at("2024-06-10", "09:00"),
            at("2024-06-10", "10:00"),
            at("2024-06-10", "10:00"),
            at("2024-06-10", "11:00"),
        )

    def test_containment_overlaps(self) -> None:
        assert intervals_overlap(
            at("2024-06-10", "09:00"),
            at("2024-06-10", "12:00"),
            at("2024-06-10", "10:00"),
            at("2024-06-10", "10:15"),
        )


class TestTimeInterval:
    def test_end_before_start_raises(self) -> None:
        with pytest.raises(InvalidIntervalError):
            TimeInterval(start=at("2024-06-10", "10:00"), end=at("2024-06-10", "09:00"))

    def test_empty_interval_raises(self) -> None:
        moment = at("2024-06-10", "10:00")
        with pytest.raises(InvalidIntervalError):
            TimeInterval(start=moment, end=moment)

    def test_invalid_interval_is_value_error_and_scheduling_error(self) -> None:
        moment = at("2024-06-10", "10:00")
        with pytest.raises(ValueError):
            TimeInterval(start=moment, end=moment)
        with pytest.raises(SchedulingError):
            TimeInterval(start=moment, end=moment)

    def test_from_duration(self) -> None:
        interval = TimeInterval.from_duration(at("2024-06-10", "09:00"), 45)
        assert interval.end == at("2024-06-10", "09:45")
        assert interval.duration_minutes == 45

    @pytest.mark.parametrize("duration", [0, -30])
    def test_from_duration_rejects_non_positive(self, duration: int) -> None:
        with pytest.raises(InvalidIntervalError):
            TimeInterval.from_duration(at("2024-06-10", "09:00"), duration)


class TestAppointment:
    def test_missing_duration_defaults_to_sixty(self) -> None:
        item = appointment("1", "2024-06-10", "09:00", duration=None)
        assert item.duration_minutes == 60
        assert item.end == at("2024-06-10", "10:00")

    def test_numeric_ids_are_coerced_to_str(self) -> None:
        item = Appointment.model_validate(
            {
                "id": 42,
                "contact_id": 7,
                "professional_id": 3,
                "scheduled_start": at("2024-06-10", "09:00"),
            }
        )
        assert item.id == "42"
        assert item.contact_id == "7"
        assert item.professional_id == "3"
        assert item.origin is AppointmentOrigin.LOCAL

    @pytest.mark.parametrize(
        "status",
        ["cancelada_paciente", "cancelada_dentista", "CANCELLED", " cancelada "],
    )
    def test_cancelled_statuses_are_inactive(self, status: str) -> None:
        assert not appointment("1", "2024-06-10", "09:00", status=status).is_active

    @pytest.mark.parametrize("status", ["agendada", "confirmada", "realizada"])
    def test_other_statuses_are_active(self, status: str) -> None:
        assert appointment("1", "2024-06-10", "09:00", status=status).is_active

    def test_overlaps_uses_real_duration(self) -> None:
        item = appointment("1", "2024-06-10", "09:00", duration=30)
        assert item.overlaps(at("2024-06-10", "09:15"), at("2024-06-10", "09:45"))
        assert not item.overlaps(at("2024-06-10", "09:30"), at("2024-06-10", "10:00"))

    def test_interval_property(self) -> None:
        item = appointment("1", "2024-06-10", "09:00", duration=90)
        assert item.interval.end - item.interval.start == timedelta(minutes=90)

    def test_is_frozen(self) -> None:
        item = appointment("1", "2024-06-10", "09:00")
        with pytest.raises(ValidationError):
            item.status = "cancelada"  # type: ignore[misc]


class TestExternalEvent:
    def test_end_must_follow_start(self) -> None:
        with pytest.raises(ValidationError):
            ExternalEvent(id="e1", start=at("2024-06-10", "10:00"), end=at("2024-06-10", "10:00"))

    def test_default_title(self) -> None:
        event = ExternalEvent(
            id="e1",
            start=at("2024-06-10", "10:00"),
            end=at("2024-06-10", "11:00"),
        )
        assert event.title
        assert event.overlaps(at("2024-06-10", "10:30"), at("2024-06-10", "12:00"))


class TestCalendarIntegration:
    def test_syncable_requires_active_sync_and_token(self) -> None:
        assert integration("i1").is_syncable
        assert not integration("i1", is_active=False).is_syncable
        assert not integration("i1", sync_enabled=False).is_syncable
        assert not integration("i1", access_token=None).is_syncable
        assert not integration("i1", access_token="").is_syncable

    def test_target_calendar_prefers_linked_calendar(self) -> None:
        linked = CalendarIntegration(id="1", calendar_id="main", linked_calendar_id="clinic")
        plain = CalendarIntegration(id="2", calendar_id="main")
        bare = CalendarIntegration(id="3")
        assert linked.target_calendar_id == "clinic"
        assert plain.target_calendar_id == "main"
        assert bare.target_calendar_id == "primary"

    def test_creation_sort_key_orders_by_created_at_then_id(self) -> None:
        early = integration("b", created_at=at("2024-01-01", "08:00"))
        late = integration("a", created_at=at("2024-02-01", "08:00"))
        same_time = integration("c", created_at=at("2024-01-01", "08:00"))
        undated = integration("0")
        ordered = sorted([undated, late, same_time, early], key=lambda i: i.creation_sort_key())
        assert [item.id for item in ordered] == ["b", "c", "a", "0"]

    def test_tokens_hidden_from_repr(self) -> None:
        assert "secret-token" not in repr(integration("i1", access_token="secret-token"))


class TestLocalize:
    def test_naive_moment_gets_clinic_zone(self) -> None:
        assert localize(datetime(2024, 6, 10, 9, 0), TZ) == at("2024-06-10", "09:00")

    def test_aware_moment_is_not_converted(self) -> None:
        moment = at("2024-06-10", "09:00").astimezone(ZoneInfo("UTC"))
        assert localize(moment, TZ) is moment

    def test_without_zone_keeps_naive(self) -> None:
        moment = datetime(2024, 6, 10, 9, 0)
        assert localize(moment, None).tzinfo is None

    def test_naive_database_row(self) -> None:
        row = Appointment.model_validate(
            {"id": 1, "professional_id": "dr-1", "scheduled_start": "2024-06-10T09:00:00"}
        )
        local = row.localized(TZ)
        assert local.id == "1"
        assert local.scheduled_start == at("2024-06-10", "09:00")
        assert local.end == at("2024-06-10", "10:00")
        assert row.scheduled_start.tzinfo is None

    def test_aware_row_is_returned_as_is(self) -> None:
        item = appointment("A", "2024-06-10", "09:00")
        assert item.localized(TZ) is item

    def test_naive_external_event(self) -> None:
        event = ExternalEvent(
            id="evt",
            start=datetime(2024, 6, 10, 9, 0),
            end=datetime(2024, 6, 10, 10, 0),
        )
        local = event.localized(TZ)
        assert local.overlaps(at("2024-06-10", "09:30"), at("2024-06-10", "10:30"))

    def test_naive_interval(self) -> None:
        interval = TimeInterval(
            start=datetime(2024, 6, 10, 9, 0), end=datetime(2024, 6, 10, 10, 0)
        ).localized(TZ)
        assert interval.start == at("2024-06-10", "09:00")
