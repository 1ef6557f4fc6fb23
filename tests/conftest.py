"""
Shared fixtures: in-memory SQLite database and an HTTP client bound to it.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from specialist_booking.core.database import Base, get_db
from specialist_booking.main import app
from specialist_booking.models import (
    Appointments, LunchBreak, Service, Specialist, Vacation, WorkDay, WorkSchedule,
)

SPECIALIST_ID = "spec-1"
SCHEDULE_ID = "sched-1"
MONDAY = "2024-11-25"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded(session_factory):
    """
    Specialist working Mon-Fri 09:00-18:00 with lunch 13:00-14:00,
    Saturday configured but inactive, vacation over the new year.

    Bookings on Monday 2024-11-25:
    - 10:00-11:00 confirmed
    - 15:00-16:00 cancelled (does not occupy)
    - 12:00-13:00 ARCHIVED (does not occupy)
    - 16:00 pending, no end time, 90-minute service -> 16:00-17:30
    """
    work_days = [
        WorkDay(
            day=day,
            active=True,
            start_time="09:00",
            end_time="18:00",
            lunch_breaks=[LunchBreak(enabled=True, start_time="13:00", end_time="14:00")],
        )
        for day in range(1, 6)
    ]
    work_days.append(WorkDay(day=6, active=False, start_time="10:00", end_time="14:00"))

    async with session_factory() as session:
        session.add(Specialist(id=SPECIALIST_ID, first_name="Анна", last_name="Иванова"))
        session.add(Specialist(id="spec-2", first_name="Олег"))
        session.add(Service(id=1, specialist_id=SPECIALIST_ID, name="Консультация", duration=90))
        session.add(WorkSchedule(
            id=SCHEDULE_ID,
            specialist_id=SPECIALIST_ID,
            enabled=True,
            booking_period_months=2,
            work_days=work_days,
            vacations=[
                Vacation(enabled=True, start_date="2024-12-30", end_date="2025-01-05"),
                Vacation(enabled=False, start_date="2024-11-26", end_date="2024-11-26"),
            ],
        ))
        session.add_all([
            Appointments(specialist_id=SPECIALIST_ID, date=MONDAY, start_time="10:00", end_time="11:00", status="confirmed"),
            Appointments(specialist_id=SPECIALIST_ID, date=MONDAY, start_time="15:00", end_time="16:00", status="cancelled"),
            Appointments(specialist_id=SPECIALIST_ID, date=MONDAY, start_time="12:00", end_time="13:00", status="ARCHIVED"),
            Appointments(specialist_id=SPECIALIST_ID, date=MONDAY, start_time="16:00", service_id=1, status="pending"),
            Appointments(specialist_id=SPECIALIST_ID, date="2024-11-27", start_time="09:00", end_time="18:00", status="confirmed"),
        ])
        await session.commit()

    return SPECIALIST_ID


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
