from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class TimeSlotResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start: str
    end: str
    is_available: bool = Field(..., alias="isAvailable")


class DayAvailabilityResponse(BaseModel):
    date: str
    weekday: int = Field(..., description="0-воскресенье, 6-суббота")
    status: str = Field(..., description="available или unavailable")
    reason: Optional[str] = Field(None, description="no_schedule, schedule_disabled, not_working_day, vacation")
    message: Optional[str] = None
    slots: List[TimeSlotResponse] = []

    @classmethod
    def from_domain(cls, availability, message: Optional[str] = None) -> "DayAvailabilityResponse":
        return cls(
            date=availability.date,
            weekday=availability.weekday,
            status=availability.status,
            reason=availability.reason.value if availability.reason else None,
            message=message,
            slots=[
                TimeSlotResponse(start=slot.start, end=slot.end, is_available=slot.is_available)
                for slot in availability.slots
            ],
        )


class AvailableSlotsResponse(BaseModel):
    success: bool = True
    data: DayAvailabilityResponse


class AvailableDatesResponse(BaseModel):
    success: bool = True
    data: List[str] = []


class LegacyTimeslotsData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    reason: Optional[str] = None
    message: Optional[str] = None
    time_slots: List[TimeSlotResponse] = Field([], alias="timeSlots")


class LegacyTimeslotsResponse(BaseModel):
    success: bool = True
    data: LegacyTimeslotsData
