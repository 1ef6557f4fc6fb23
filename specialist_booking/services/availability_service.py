from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List
from ..core.config import settings
from ..domain import slot_engine
from ..domain.exceptions import NotFound
from ..domain.models import DayAvailability, UnavailableReason
from .appointment_service import AppointmentService
from .schedule_service import ScheduleService
from .service_service import ServiceService
from .specialist_service import SpecialistService
import logging

logger = logging.getLogger(__name__)

REASON_MESSAGES = {
    UnavailableReason.NO_SCHEDULE: "У специалиста не настроено расписание",
    UnavailableReason.SCHEDULE_DISABLED: "Запись к специалисту временно закрыта",
    UnavailableReason.NOT_WORKING_DAY: "Этот день недели не является рабочим для специалиста",
    UnavailableReason.VACATION: "Специалист находится в отпуске в этот день",
}


class AvailabilityService:
    """Расчет свободного времени специалиста на основе расписания и записей"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.schedules = ScheduleService(db)
        self.appointments = AppointmentService(db)
        self.services = ServiceService(db)
        self.specialists = SpecialistService(db)

    async def _ensure_specialist(self, specialist_id: str):
        specialist = await self.specialists.get_specialist_by_id(specialist_id)
        if not specialist:
            logger.warning(f"Специалист не найден: {specialist_id}")
            raise NotFound(f"Специалист {specialist_id} не найден")
        return specialist

    async def get_day_availability(
        self,
        specialist_id: str,
        date: str,
        service_id: Optional[int] = None,
        service_duration: Optional[int] = None,
        slot_step: Optional[int] = None,
        include_unavailable: bool = True,
    ) -> DayAvailability:
        """Получить слоты специалиста на дату с отметкой доступности"""
        day = slot_engine.parse_date(date).isoformat()
        weekday = slot_engine.weekday_of(day)
        logger.info(f"Поиск слотов для specialist_id={specialist_id}, date={day}, weekday={weekday}")

        await self._ensure_specialist(specialist_id)

        if service_duration is None:
            service_duration = await self.services.get_service_duration(service_id)
        step = settings.slot_step_minutes if slot_step is None else slot_step

        schedule = await self.schedules.get_weekly_schedule(specialist_id)
        vacations = None
        lunch_breaks = None
        bookings = []

        if schedule is not None:
            vacations = await self.schedules.get_vacations(schedule.id)
            work_day = await self.schedules.get_work_day_and_breaks(schedule.id, weekday)
            if work_day is not None:
                _, lunch_breaks = work_day
                bookings = await self.appointments.get_existing_bookings(specialist_id, day)

        availability = slot_engine.evaluate_day(
            schedule,
            vacations,
            lunch_breaks,
            bookings,
            day,
            service_duration,
            step,
            include_unavailable,
        )

        if availability.reason:
            logger.info(f"Специалист {specialist_id} недоступен {day}: {availability.reason.value}")
        else:
            logger.info(
                f"Сгенерировано {len(availability.slots)} слотов "
                f"({len(availability.available_slots)} свободных) для специалиста {specialist_id} на {day}"
            )
        return availability

    async def get_available_dates(
        self,
        specialist_id: str,
        start_date: str,
        end_date: str,
        today: Optional[str] = None,
    ) -> List[str]:
        """Получить рабочие даты специалиста в диапазоне с учетом отпусков и периода записи"""
        await self._ensure_specialist(specialist_id)

        schedule = await self.schedules.get_weekly_schedule(specialist_id)
        if schedule is None:
            logger.warning(f"Расписание не найдено для специалиста: {specialist_id}")

        dates = slot_engine.available_dates(schedule, start_date, end_date, today=today)
        logger.info(f"Найдено {len(dates)} доступных дат для специалиста {specialist_id}")
        return dates
