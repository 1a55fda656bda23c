"""Servicos do motor de agenda (conflitos, slots, layout, visao do dia)."""

from agenda.services.availability import AvailabilityService
from agenda.services.availability_requests import (
    AvailabilityRequest,
    AvailabilityRequestSequencer,
    AvailabilityResponse,
)
from agenda.services.collision_layout import (
    LANE_GAP_PERCENT,
    CollisionLayoutEngine,
    build_collision_groups,
    compute_layout,
    fingerprint_appointments,
)
from agenda.services.conflict_detector import ConflictDetector
from agenda.services.day_agenda import DayAgendaService
from agenda.services.external_events import ExternalEventFetcher
from agenda.services.slot_finder import SlotFinder
from agenda.services.time_slot_analyzer import TimeSlotAnalyzer
from agenda.services.working_hours_policy import (
    describe_working_days,
    fits_working_hours,
    is_lunch_time,
    is_working_day,
    is_working_hour,
    lunch_overlaps,
)

__all__ = [
    "LANE_GAP_PERCENT",
    "AvailabilityRequest",
    "AvailabilityRequestSequencer",
    "AvailabilityResponse",
    "AvailabilityService",
    "CollisionLayoutEngine",
    "ConflictDetector",
    "DayAgendaService",
    "ExternalEventFetcher",
    "SlotFinder",
    "TimeSlotAnalyzer",
    "build_collision_groups",
    "compute_layout",
    "describe_working_days",
    "fingerprint_appointments",
    "fits_working_hours",
    "is_lunch_time",
    "is_working_day",
    "is_working_hour",
    "lunch_overlaps",
]
