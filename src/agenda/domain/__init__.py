"""Modelos de dominio do motor de agenda."""

from agenda.domain.appointment import (
    CANCELLED_STATUSES,
    DEFAULT_DURATION_MINUTES,
    Appointment,
    AppointmentOrigin,
    CalendarIntegration,
    ExternalEvent,
    TimeInterval,
    intervals_overlap,
    localize,
)
from agenda.domain.conflict import (
    AppointmentConflict,
    AvailabilityResult,
    ConflictDetails,
    ConflictResult,
    ConflictType,
    ExternalConflict,
    NoConflict,
    NoProfessionalSelected,
)
from agenda.domain.layout import CollisionGroup, LayoutAssignment
from agenda.domain.slots import SlotAnalysis, SlotSuggestion, SlotWarning
from agenda.domain.working_hours import WEEKDAY_LABELS_PT, Weekday, WorkingHoursConfig

__all__ = [
    "CANCELLED_STATUSES",
    "DEFAULT_DURATION_MINUTES",
    "WEEKDAY_LABELS_PT",
    "Appointment",
    "AppointmentConflict",
    "AppointmentOrigin",
    "AvailabilityResult",
    "CalendarIntegration",
    "CollisionGroup",
    "ConflictDetails",
    "ConflictResult",
    "ConflictType",
    "ExternalConflict",
    "ExternalEvent",
    "LayoutAssignment",
    "NoConflict",
    "NoProfessionalSelected",
    "SlotAnalysis",
    "SlotSuggestion",
    "SlotWarning",
    "TimeInterval",
    "Weekday",
    "WorkingHoursConfig",
    "intervals_overlap",
    "localize",
]
