from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List
from ..domain.slot_engine import parse_date, parse_time


def _check_time(v: str) -> str:
    """Проверяет формат времени HH:MM"""
    parse_time(v)
    return v


def _check_date(v: str) -> str:
    """Проверяет формат даты YYYY-MM-DD"""
    parse_date(v)
    return v


class LunchBreakSchema(BaseModel):
    """Обеденный перерыв внутри рабочего дня"""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    enabled: bool = True
    start_time: str = Field(..., description="Начало перерыва (например: 13:00)")
    end_time: str = Field(..., description="Окончание перерыва (например: 14:00)")

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_time_format(cls, v):
        return _check_time(v)

    @model_validator(mode='after')
    def validate_end_time(self):
        """Проверяет, что перерыв заканчивается позже, чем начинается"""
        if parse_time(self.end_time) <= parse_time(self.start_time):
            raise ValueError('Время окончания перерыва должно быть больше времени начала')
        return self


class WorkDaySchema(BaseModel):
    """Рабочий день недели"""
    model_config = ConfigDict(from_attributes=True)

    day: int = Field(..., ge=0, le=6, description="День недели: 0-воскресенье, 6-суббота")
    active: bool = True
    start_time: str = Field(..., description="Время начала рабочего дня (например: 09:00)")
    end_time: str = Field(..., description="Время окончания рабочего дня (например: 18:00)")
    lunch_breaks: List[LunchBreakSchema] = []

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_time_format(cls, v):
        return _check_time(v)

    @model_validator(mode='after')
    def validate_span(self):
        """Проверяет порядок времени и что перерывы лежат внутри рабочего дня"""
        start, end = parse_time(self.start_time), parse_time(self.end_time)
        if end <= start:
            raise ValueError('Время окончания должно быть больше времени начала')
        for lunch in self.lunch_breaks:
            if parse_time(lunch.start_time) < start or parse_time(lunch.end_time) > end:
                raise ValueError(
                    f'Перерыв {lunch.start_time}-{lunch.end_time} выходит за рамки рабочего дня'
                )
        return self


class VacationSchema(BaseModel):
    """Отпуск: специалист недоступен все дни диапазона включительно"""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    enabled: bool = True
    start_date: str = Field(..., description="Первый день отпуска YYYY-MM-DD")
    end_date: str = Field(..., description="Последний день отпуска YYYY-MM-DD")
    description: Optional[str] = None

    @field_validator('start_date', 'end_date')
    @classmethod
    def validate_date_format(cls, v):
        return _check_date(v)

    @model_validator(mode='after')
    def validate_range(self):
        if parse_date(self.end_date) < parse_date(self.start_date):
            raise ValueError('Дата окончания отпуска не может быть раньше даты начала')
        return self


class WorkScheduleBase(BaseModel):
    """Недельное расписание специалиста"""
    enabled: bool = True
    booking_period_months: int = Field(2, ge=1, le=12, description="На сколько месяцев вперед открыта запись")
    work_days: List[WorkDaySchema] = []
    vacations: List[VacationSchema] = []

    @field_validator('work_days')
    @classmethod
    def validate_unique_days(cls, v):
        """Проверяет, что каждый день недели указан не более одного раза"""
        days = [work_day.day for work_day in v]
        if len(days) != len(set(days)):
            raise ValueError('Каждый день недели может быть указан только один раз')
        return v


class WorkScheduleUpdate(WorkScheduleBase):
    """Схема для сохранения расписания"""
    pass


class WorkScheduleResponse(WorkScheduleBase):
    """Схема ответа для расписания"""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    specialist_id: str
    is_default: bool = False
