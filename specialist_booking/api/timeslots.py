from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from ..core.database import get_db
from ..domain.exceptions import InvalidInput, NotFound
from ..services import AvailabilityService
from ..services.availability_service import REASON_MESSAGES
from ..schemas.availability import (
    LegacyTimeslotsResponse, LegacyTimeslotsData, TimeSlotResponse
)

router = APIRouter(prefix="/timeslots", tags=["availability"])


# Старый формат для виджета записи: только свободные слоты
@router.get("", response_model=LegacyTimeslotsResponse)
async def get_timeslots(
    specialist_id: str = Query(..., alias="specialistId", description="ID специалиста"),
    date: str = Query(..., description="Дата в формате YYYY-MM-DD"),
    service_duration: Optional[int] = Query(None, alias="serviceDuration", description="Длительность услуги в минутах"),
    service_id: Optional[int] = Query(None, alias="serviceId", description="ID услуги"),
    db: AsyncSession = Depends(get_db)
):
    """Получить свободные временные слоты специалиста на дату"""
    try:
        availability_service = AvailabilityService(db)
        availability = await availability_service.get_day_availability(
            specialist_id,
            date,
            service_id=service_id,
            service_duration=service_duration,
            include_unavailable=False,
        )
        return LegacyTimeslotsResponse(
            data=LegacyTimeslotsData(
                status=availability.status,
                reason=availability.reason.value if availability.reason else None,
                message=REASON_MESSAGES.get(availability.reason),
                time_slots=[
                    TimeSlotResponse(start=slot.start, end=slot.end, is_available=slot.is_available)
                    for slot in availability.slots
                ],
            )
        )
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Ошибка при получении временных слотов: {str(e)}")
