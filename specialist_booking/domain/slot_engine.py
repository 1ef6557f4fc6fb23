"""
Расчет свободных слотов для записи к специалисту.

Чистая логика без обращений к БД: на вход снимок расписания и записей,
на выход список слотов. Все время - локальное время специалиста,
интервалы полуоткрытые [start, end).

Алгоритм для одной даты:
1. Расписание выключено или отсутствует -> слотов нет
2. Находим рабочий день по дню недели (0 - воскресенье)
3. Нерабочий день или отпуск -> слотов нет
4. Генерируем начала слотов от начала рабочего дня с шагом step,
   пока слот длительностью duration помещается до конца дня
5. Слот недоступен, если пересекается с перерывом или занятой записью
"""

from datetime import date as dt_date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import pendulum

from .exceptions import InvalidInput
from .models import (
    DayAvailability, ExistingBooking, LunchBreak, TimeSlot,
    UnavailableReason, VacationRange, WeeklySchedule,
)

DateLike = Union[str, dt_date]
Interval = Tuple[int, int]


def parse_time(value: str) -> int:
    """Преобразовать "HH:MM" в минуты от начала суток"""
    try:
        parsed = datetime.strptime(value.strip(), "%H:%M")
    except (AttributeError, ValueError):
        raise InvalidInput(f"Время должно быть в формате HH:MM, получено {value!r}")
    return parsed.hour * 60 + parsed.minute


def format_time(minutes: int) -> str:
    """Преобразовать минуты от начала суток в "HH:MM" """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_date(value: DateLike) -> dt_date:
    """Дата в формате YYYY-MM-DD или объект date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, dt_date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise InvalidInput(f"Дата должна быть в формате YYYY-MM-DD, получено {value!r}")


def weekday_of(value: DateLike) -> int:
    """День недели: 0 - воскресенье, 1 - понедельник, ..., 6 - суббота"""
    return parse_date(value).isoweekday() % 7


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Пересечение полуоткрытых интервалов; касание границами не считается"""
    return a_start < b_end and a_end > b_start


def _parse_interval(start: str, end: str, what: str) -> Interval:
    start_minutes = parse_time(start)
    end_minutes = parse_time(end)
    if start_minutes >= end_minutes:
        raise InvalidInput(f"{what}: время начала {start} должно быть раньше окончания {end}")
    return start_minutes, end_minutes


def _positive(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidInput(f"{name} должно быть положительным целым числом, получено {value!r}")
    return value


def is_on_vacation(vacations: Iterable[VacationRange], day: DateLike) -> bool:
    """Попадает ли дата в какой-либо включенный отпуск (границы включительно)"""
    target = parse_date(day)
    for vacation in vacations:
        if not vacation.enabled:
            continue
        if parse_date(vacation.start_date) <= target <= parse_date(vacation.end_date):
            return True
    return False


def _busy_intervals(
    lunch_breaks: Iterable[LunchBreak],
    bookings: Iterable[ExistingBooking],
    day: dt_date,
) -> Tuple[List[Interval], List[Interval]]:
    breaks = [
        _parse_interval(lunch.start_time, lunch.end_time, "Перерыв")
        for lunch in lunch_breaks
        if lunch.enabled
    ]
    busy = []
    for booking in bookings:
        if not booking.is_occupying:
            continue
        if booking.date and parse_date(booking.date) != day:
            continue
        busy.append(_parse_interval(booking.start_time, booking.end_time, "Запись"))
    return breaks, busy


def generate_slots(
    work_start: int,
    work_end: int,
    duration: int,
    step: int,
    breaks: Sequence[Interval],
    busy: Sequence[Interval],
) -> List[TimeSlot]:
    """Сгенерировать слоты в рабочем окне и отметить пересечения"""
    slots = []
    current = work_start

    while current + duration <= work_end:
        slot_end = current + duration

        overlaps_break = any(intervals_overlap(current, slot_end, s, e) for s, e in breaks)
        overlaps_booking = not overlaps_break and any(
            intervals_overlap(current, slot_end, s, e) for s, e in busy
        )

        slots.append(TimeSlot(
            start=format_time(current),
            end=format_time(slot_end),
            is_available=not (overlaps_break or overlaps_booking),
        ))
        current += step

    return slots


def evaluate_day(
    schedule: Optional[WeeklySchedule],
    vacations: Optional[Iterable[VacationRange]],
    lunch_breaks: Optional[Iterable[LunchBreak]],
    existing_bookings: Iterable[ExistingBooking],
    date: DateLike,
    service_duration_minutes: int,
    slot_step_minutes: int = 30,
    include_unavailable: bool = True,
) -> DayAvailability:
    """
    Рассчитать доступность специалиста на дату.

    Args:
        schedule: недельное расписание или None, если оно не настроено
        vacations: отпуска; None - взять из schedule
        lunch_breaks: перерывы этого дня; None - взять из рабочего дня
        existing_bookings: записи специалиста на эту дату
        date: дата YYYY-MM-DD
        service_duration_minutes: длительность услуги
        slot_step_minutes: шаг между началами слотов
        include_unavailable: оставлять ли в ответе занятые слоты

    Returns:
        DayAvailability со слотами или причиной недоступности
    """
    day = parse_date(date)
    duration = _positive(service_duration_minutes, "Длительность услуги")
    step = _positive(slot_step_minutes, "Шаг слотов")
    weekday = weekday_of(day)
    result = DayAvailability(date=day.isoformat(), weekday=weekday)

    if schedule is None:
        result.reason = UnavailableReason.NO_SCHEDULE
        return result

    if not schedule.enabled:
        result.reason = UnavailableReason.SCHEDULE_DISABLED
        return result

    work_day = schedule.work_day_for(weekday)
    if work_day is None or not work_day.active:
        result.reason = UnavailableReason.NOT_WORKING_DAY
        return result

    if is_on_vacation(schedule.vacations if vacations is None else vacations, day):
        result.reason = UnavailableReason.VACATION
        return result

    work_start, work_end = _parse_interval(work_day.start_time, work_day.end_time, "Рабочий день")
    breaks, busy = _busy_intervals(
        work_day.lunch_breaks if lunch_breaks is None else lunch_breaks,
        existing_bookings,
        day,
    )

    slots = generate_slots(work_start, work_end, duration, step, breaks, busy)
    if not include_unavailable:
        slots = [slot for slot in slots if slot.is_available]
    result.slots = slots
    return result


def compute_available_slots(
    schedule: Optional[WeeklySchedule],
    vacations: Optional[Iterable[VacationRange]],
    lunch_breaks: Optional[Iterable[LunchBreak]],
    existing_bookings: Iterable[ExistingBooking],
    date: DateLike,
    service_duration_minutes: int,
    slot_step_minutes: int = 30,
    include_unavailable: bool = True,
) -> List[TimeSlot]:
    """Список слотов на дату; пустой, если специалист в этот день не работает"""
    return evaluate_day(
        schedule, vacations, lunch_breaks, existing_bookings, date,
        service_duration_minutes, slot_step_minutes, include_unavailable,
    ).slots


def booking_horizon(schedule: WeeklySchedule, today: DateLike) -> dt_date:
    """Последняя дата, на которую еще можно записаться"""
    start = parse_date(today)
    horizon = pendulum.date(start.year, start.month, start.day).add(months=schedule.booking_period_months)
    return dt_date(horizon.year, horizon.month, horizon.day)


def available_dates(
    schedule: Optional[WeeklySchedule],
    start_date: DateLike,
    end_date: DateLike,
    today: Optional[DateLike] = None,
) -> List[str]:
    """
    Даты в диапазоне [start_date, end_date], в которые специалист работает.

    Диапазон обрезается снизу сегодняшним днем и сверху периодом записи
    booking_period_months. Занятость записями здесь не учитывается.
    """
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start > end:
        raise InvalidInput(f"Начальная дата {start} позже конечной {end}")

    if schedule is None or not schedule.enabled:
        return []

    today = parse_date(today) if today is not None else dt_date.today()
    start = max(start, today)
    end = min(end, booking_horizon(schedule, today))

    dates = []
    current = start
    while current <= end:
        work_day = schedule.work_day_for(weekday_of(current))
        if work_day and work_day.active and not is_on_vacation(schedule.vacations, current):
            dates.append(current.isoformat())
        current += timedelta(days=1)
    return dates
