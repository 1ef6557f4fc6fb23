from .exceptions import AvailabilityError, InvalidInput, NotFound
from .models import (
    WeeklySchedule, WorkDay, LunchBreak, VacationRange,
    ExistingBooking, TimeSlot, DayAvailability, UnavailableReason,
    is_occupying_status,
)
from .slot_engine import (
    compute_available_slots, evaluate_day, available_dates,
    parse_time, format_time, parse_date, weekday_of, intervals_overlap,
)

__all__ = [
    "AvailabilityError", "InvalidInput", "NotFound",
    "WeeklySchedule", "WorkDay", "LunchBreak", "VacationRange",
    "ExistingBooking", "TimeSlot", "DayAvailability", "UnavailableReason",
    "is_occupying_status",
    "compute_available_slots", "evaluate_day", "available_dates",
    "parse_time", "format_time", "parse_date", "weekday_of", "intervals_overlap",
]
