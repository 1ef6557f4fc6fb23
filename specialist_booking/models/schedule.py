import uuid

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..core.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class WorkSchedule(Base):
    __tablename__ = "specialist_work_schedules"
    
    id = Column(String, primary_key=True, default=_uuid)
    specialist_id = Column(String, ForeignKey("specialist.id", ondelete="CASCADE"), unique=True, index=True)
    enabled = Column(Boolean, default=True)
    booking_period_months = Column(Integer, default=2)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    specialist = relationship("Specialist", back_populates="schedule")
    work_days = relationship("WorkDay", back_populates="schedule", cascade="all, delete-orphan")
    vacations = relationship("Vacation", back_populates="schedule", cascade="all, delete-orphan")


class WorkDay(Base):
    __tablename__ = "work_days"
    
    id = Column(String, primary_key=True, default=_uuid)
    schedule_id = Column(String, ForeignKey("specialist_work_schedules.id", ondelete="CASCADE"), index=True)
    day = Column(Integer, nullable=False)  # 0-6 (воскресенье-суббота)
    active = Column(Boolean, default=True)
    start_time = Column(String, nullable=False)  # "09:00"
    end_time = Column(String, nullable=False)    # "18:00"
    
    schedule = relationship("WorkSchedule", back_populates="work_days")
    lunch_breaks = relationship("LunchBreak", back_populates="work_day", cascade="all, delete-orphan")


class LunchBreak(Base):
    __tablename__ = "lunch_breaks"
    
    id = Column(String, primary_key=True, default=_uuid)
    work_day_id = Column(String, ForeignKey("work_days.id", ondelete="CASCADE"), index=True)
    enabled = Column(Boolean, default=True)
    start_time = Column(String, nullable=False)
    end_time = Column(String, nullable=False)
    
    work_day = relationship("WorkDay", back_populates="lunch_breaks")


class Vacation(Base):
    __tablename__ = "vacations"
    
    id = Column(String, primary_key=True, default=_uuid)
    schedule_id = Column(String, ForeignKey("specialist_work_schedules.id", ondelete="CASCADE"), index=True)
    enabled = Column(Boolean, default=True)
    start_date = Column(String, nullable=False)  # "YYYY-MM-DD"
    end_date = Column(String, nullable=False)    # "YYYY-MM-DD", включительно
    description = Column(String, nullable=True)
    
    schedule = relationship("WorkSchedule", back_populates="vacations")
