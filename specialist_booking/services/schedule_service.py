from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from sqlalchemy.orm import selectinload
from typing import Optional, List, Tuple
from ..core.config import settings
from ..domain import models as domain
from ..models.schedule import WorkSchedule, WorkDay, LunchBreak, Vacation
from ..schemas.schedule import (
    WorkScheduleUpdate, WorkScheduleResponse,
    WorkDaySchema, LunchBreakSchema
)
import logging

logger = logging.getLogger(__name__)


def _to_lunch_break(row: LunchBreak) -> domain.LunchBreak:
    return domain.LunchBreak(
        start_time=row.start_time,
        end_time=row.end_time,
        enabled=bool(row.enabled),
    )


def _to_work_day(row: WorkDay, lunch_breaks: Optional[List[domain.LunchBreak]] = None) -> domain.WorkDay:
    if lunch_breaks is None:
        lunch_breaks = [_to_lunch_break(lunch) for lunch in row.lunch_breaks]
    return domain.WorkDay(
        weekday=row.day,
        start_time=row.start_time,
        end_time=row.end_time,
        active=bool(row.active),
        lunch_breaks=tuple(lunch_breaks),
    )


def _to_vacation(row: Vacation) -> domain.VacationRange:
    return domain.VacationRange(
        start_date=row.start_date,
        end_date=row.end_date,
        enabled=bool(row.enabled),
    )


def default_schedule(specialist_id: str) -> WorkScheduleResponse:
    """Шаблон расписания: будни 09:00-18:00 с обедом 13:00-14:00"""
    return WorkScheduleResponse(
        specialist_id=specialist_id,
        enabled=True,
        booking_period_months=settings.default_booking_period_months,
        work_days=[
            WorkDaySchema(
                day=day,
                active=1 <= day <= 5,
                start_time="09:00",
                end_time="18:00",
                lunch_breaks=[LunchBreakSchema(start_time="13:00", end_time="14:00")],
            )
            for day in range(7)
        ],
        vacations=[],
        is_default=True,
    )


class ScheduleService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_schedule_row(self, specialist_id: str) -> Optional[WorkSchedule]:
        """Получить расписание специалиста со всеми рабочими днями, перерывами и отпусками"""
        try:
            result = await self.db.execute(
                select(WorkSchedule)
                .options(
                    selectinload(WorkSchedule.work_days).selectinload(WorkDay.lunch_breaks),
                    selectinload(WorkSchedule.vacations),
                )
                .where(WorkSchedule.specialist_id == specialist_id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Ошибка при получении расписания специалиста {specialist_id}: {e}")
            raise

    async def get_weekly_schedule(self, specialist_id: str) -> Optional[domain.WeeklySchedule]:
        """Получить недельное расписание в виде доменной модели (None, если не настроено)"""
        schedule = await self.get_schedule_row(specialist_id)
        if not schedule:
            return None

        return domain.WeeklySchedule(
            id=schedule.id,
            specialist_id=specialist_id,
            enabled=bool(schedule.enabled),
            work_days=tuple(_to_work_day(day) for day in schedule.work_days),
            vacations=tuple(_to_vacation(vacation) for vacation in schedule.vacations),
            booking_period_months=schedule.booking_period_months or settings.default_booking_period_months,
        )

    async def get_vacations(self, schedule_id: str) -> List[domain.VacationRange]:
        """Получить отпуска по расписанию"""
        try:
            result = await self.db.execute(
                select(Vacation).where(Vacation.schedule_id == schedule_id)
            )
            return [_to_vacation(row) for row in result.scalars().all()]
        except Exception as e:
            logger.error(f"Ошибка при получении отпусков для расписания {schedule_id}: {e}")
            raise

    async def get_work_day_and_breaks(self, schedule_id: str, weekday: int) -> Optional[Tuple[domain.WorkDay, List[domain.LunchBreak]]]:
        """Получить рабочий день по дню недели (0-воскресенье) и его перерывы"""
        try:
            result = await self.db.execute(
                select(WorkDay)
                .options(selectinload(WorkDay.lunch_breaks))
                .where(
                    and_(
                        WorkDay.schedule_id == schedule_id,
                        WorkDay.day == weekday
                    )
                )
            )
            row = result.scalar_one_or_none()
            if not row:
                return None

            lunch_breaks = [_to_lunch_break(lunch) for lunch in row.lunch_breaks]
            return _to_work_day(row, lunch_breaks), lunch_breaks
        except Exception as e:
            logger.error(f"Ошибка при получении рабочего дня {weekday} для расписания {schedule_id}: {e}")
            raise

    async def get_schedule_or_default(self, specialist_id: str) -> WorkScheduleResponse:
        """Получить расписание специалиста или шаблон по умолчанию"""
        schedule = await self.get_schedule_row(specialist_id)
        if not schedule:
            logger.info(f"Расписание для специалиста {specialist_id} не найдено, возвращаем шаблон")
            return default_schedule(specialist_id)
        return WorkScheduleResponse.model_validate(schedule)

    async def save_schedule(self, specialist_id: str, schedule_data: WorkScheduleUpdate) -> WorkScheduleResponse:
        """Сохранить расписание целиком: рабочие дни, перерывы и отпуска заменяются"""
        try:
            schedule = await self.get_schedule_row(specialist_id)
            if not schedule:
                schedule = WorkSchedule(specialist_id=specialist_id)
                self.db.add(schedule)

            schedule.enabled = schedule_data.enabled
            schedule.booking_period_months = schedule_data.booking_period_months
            schedule.work_days = [
                WorkDay(
                    day=day.day,
                    active=day.active,
                    start_time=day.start_time,
                    end_time=day.end_time,
                    lunch_breaks=[
                        LunchBreak(
                            enabled=lunch.enabled,
                            start_time=lunch.start_time,
                            end_time=lunch.end_time,
                        )
                        for lunch in day.lunch_breaks
                    ],
                )
                for day in schedule_data.work_days
            ]
            schedule.vacations = [
                Vacation(
                    enabled=vacation.enabled,
                    start_date=vacation.start_date,
                    end_date=vacation.end_date,
                    description=vacation.description,
                )
                for vacation in schedule_data.vacations
            ]

            await self.db.commit()
            logger.info(f"Расписание для специалиста {specialist_id} успешно обновлено")
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Ошибка при обновлении расписания специалиста {specialist_id}: {e}")
            raise

        return await self.get_schedule_or_default(specialist_id)
