from .schedule import (
    LunchBreakSchema, WorkDaySchema, VacationSchema,
    WorkScheduleUpdate, WorkScheduleResponse
)
from .availability import (
    TimeSlotResponse, DayAvailabilityResponse,
    AvailableSlotsResponse, AvailableDatesResponse,
    LegacyTimeslotsData, LegacyTimeslotsResponse
)

__all__ = [
    "LunchBreakSchema", "WorkDaySchema", "VacationSchema",
    "WorkScheduleUpdate", "WorkScheduleResponse",
    "TimeSlotResponse", "DayAvailabilityResponse",
    "AvailableSlotsResponse", "AvailableDatesResponse",
    "LegacyTimeslotsData", "LegacyTimeslotsResponse"
]
