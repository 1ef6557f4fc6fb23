from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func
from sqlalchemy.orm import selectinload
from typing import Optional, List, Mapping, Any
from ..core.config import settings
from ..domain.models import ExistingBooking, NON_OCCUPYING_STATUSES
from ..domain.slot_engine import format_time, parse_time
from ..models.appointments import Appointments
import logging

logger = logging.getLogger(__name__)

# Разные источники отдают время записи под разными именами полей
START_TIME_KEYS = ("start_time", "startTime", "time_start", "timeStart", "start", "time")
END_TIME_KEYS = ("end_time", "endTime", "time_end", "timeEnd", "end")
LAST_MINUTE = 23 * 60 + 59


def _first_present(record: Mapping[str, Any], keys) -> Optional[str]:
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def booking_from_record(record: Mapping[str, Any], default_duration: Optional[int] = None) -> Optional[ExistingBooking]:
    """
    Привести запись из любого источника к ExistingBooking.

    Если время окончания не указано, оно считается по длительности услуги
    и обрезается концом суток (23:59).
    Запись без времени начала пропускается (None).
    """
    start_time = _first_present(record, START_TIME_KEYS)
    if not start_time:
        logger.warning(f"Запись {record.get('id')} без времени начала пропущена")
        return None

    end_time = _first_present(record, END_TIME_KEYS)
    if not end_time:
        start_minutes = parse_time(start_time)
        if start_minutes >= LAST_MINUTE:
            logger.warning(f"Запись {record.get('id')} начинается в {start_time}, пропущена")
            return None
        duration = record.get("duration") or default_duration or settings.default_service_duration
        # Запись не переходит на следующие сутки
        end_time = format_time(min(start_minutes + int(duration), LAST_MINUTE))

    return ExistingBooking(
        specialist_id=str(record.get("specialist_id") or record.get("specialistId") or ""),
        date=record.get("date") or "",
        start_time=start_time,
        end_time=end_time,
        status=record.get("status") or "pending",
    )


class AppointmentService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_existing_bookings(self, specialist_id: str, date: str) -> List[ExistingBooking]:
        """Получить записи специалиста на дату, которые занимают время (не отмененные и не архивные)"""
        try:
            result = await self.db.execute(
                select(Appointments)
                .options(selectinload(Appointments.service))
                .where(
                    and_(
                        Appointments.specialist_id == specialist_id,
                        Appointments.date == date,
                        func.lower(func.coalesce(Appointments.status, "")).notin_(sorted(NON_OCCUPYING_STATUSES))
                    )
                )
            )
            appointments = result.scalars().all()
        except Exception as e:
            logger.error(f"Ошибка при получении записей специалиста {specialist_id} на {date}: {e}")
            raise

        bookings = []
        for appointment in appointments:
            booking = booking_from_record({
                "id": appointment.id,
                "specialist_id": appointment.specialist_id,
                "date": appointment.date,
                "start_time": appointment.start_time,
                "end_time": appointment.end_time,
                "status": appointment.status,
                "duration": appointment.service.duration if appointment.service else None,
            })
            if booking:
                bookings.append(booking)

        logger.info(f"Найдено {len(bookings)} занятых интервалов на {date} для специалиста {specialist_id}")
        return bookings
