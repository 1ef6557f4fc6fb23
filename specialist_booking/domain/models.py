"""
Доменные модели расписания и слотов.

Это неизменяемые снимки данных из БД: движок расчета слотов работает только
с ними и ничего не знает об ORM.

День недели везде задается как 0 - воскресенье, 6 - суббота.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .exceptions import InvalidInput

NON_OCCUPYING_STATUSES = frozenset({"cancelled", "archived"})


def is_occupying_status(status: Optional[str]) -> bool:
    """Занимает ли запись с таким статусом время специалиста."""
    return (status or "").strip().lower() not in NON_OCCUPYING_STATUSES


class UnavailableReason(str, Enum):
    NO_SCHEDULE = "no_schedule"
    SCHEDULE_DISABLED = "schedule_disabled"
    NOT_WORKING_DAY = "not_working_day"
    VACATION = "vacation"


@dataclass(frozen=True)
class LunchBreak:
    start_time: str
    end_time: str
    enabled: bool = True


@dataclass(frozen=True)
class WorkDay:
    """
    Шаблон рабочего дня для одного дня недели.

    Invariant: weekday в диапазоне 0..6.
    """
    weekday: int
    start_time: str
    end_time: str
    active: bool = True
    lunch_breaks: Tuple[LunchBreak, ...] = ()

    def __post_init__(self):
        if not 0 <= self.weekday <= 6:
            raise InvalidInput(f"День недели должен быть от 0 до 6, получено {self.weekday}")


@dataclass(frozen=True)
class VacationRange:
    start_date: str
    end_date: str
    enabled: bool = True


@dataclass(frozen=True)
class WeeklySchedule:
    """
    Недельное расписание специалиста.

    Invariant: не больше одного WorkDay на каждый день недели.
    """
    specialist_id: str
    enabled: bool = True
    work_days: Tuple[WorkDay, ...] = ()
    vacations: Tuple[VacationRange, ...] = ()
    booking_period_months: int = 2
    id: Optional[str] = None

    def __post_init__(self):
        weekdays = [day.weekday for day in self.work_days]
        if len(weekdays) != len(set(weekdays)):
            raise InvalidInput(
                f"В расписании специалиста {self.specialist_id} повторяются дни недели: {sorted(weekdays)}"
            )

    def work_day_for(self, weekday: int) -> Optional[WorkDay]:
        for day in self.work_days:
            if day.weekday == weekday:
                return day
        return None


@dataclass(frozen=True)
class ExistingBooking:
    specialist_id: str
    date: str
    start_time: str
    end_time: str
    status: str = "confirmed"

    @property
    def is_occupying(self) -> bool:
        return is_occupying_status(self.status)


@dataclass(frozen=True)
class TimeSlot:
    start: str
    end: str
    is_available: bool


@dataclass
class DayAvailability:
    """Результат расчета на одну дату: слоты либо причина их отсутствия."""
    date: str
    weekday: int
    reason: Optional[UnavailableReason] = None
    slots: List[TimeSlot] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "unavailable" if self.reason else "available"

    @property
    def available_slots(self) -> List[TimeSlot]:
        return [slot for slot in self.slots if slot.is_available]
