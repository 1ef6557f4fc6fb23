from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from ..core.database import get_db
from ..domain.exceptions import InvalidInput, NotFound
from ..services import AvailabilityService
from ..services.availability_service import REASON_MESSAGES
from ..schemas.availability import (
    AvailableSlotsResponse, AvailableDatesResponse, DayAvailabilityResponse
)

router = APIRouter(prefix="/specialists", tags=["availability"])


# Слоты на дату с отметкой доступности
@router.get("/{specialist_id}/available-slots", response_model=AvailableSlotsResponse)
async def get_available_slots(
    specialist_id: str,
    date: str = Query(..., description="Дата в формате YYYY-MM-DD"),
    service_id: Optional[int] = Query(None, description="ID услуги, чтобы взять ее длительность"),
    service_duration: Optional[int] = Query(None, description="Длительность услуги в минутах"),
    step: Optional[int] = Query(None, description="Шаг между началами слотов в минутах"),
    only_available: bool = Query(False, description="Вернуть только свободные слоты"),
    db: AsyncSession = Depends(get_db)
):
    """Получить слоты специалиста на дату; занятые слоты помечаются isAvailable=false"""
    try:
        availability_service = AvailabilityService(db)
        availability = await availability_service.get_day_availability(
            specialist_id,
            date,
            service_id=service_id,
            service_duration=service_duration,
            slot_step=step,
            include_unavailable=not only_available,
        )
        return AvailableSlotsResponse(
            data=DayAvailabilityResponse.from_domain(
                availability, REASON_MESSAGES.get(availability.reason)
            )
        )
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Ошибка при получении доступных слотов: {str(e)}")


# Рабочие даты в диапазоне
@router.get("/{specialist_id}/available-dates", response_model=AvailableDatesResponse)
async def get_available_dates(
    specialist_id: str,
    start_date: str = Query(..., description="Начальная дата YYYY-MM-DD"),
    end_date: str = Query(..., description="Конечная дата YYYY-MM-DD"),
    db: AsyncSession = Depends(get_db)
):
    """Получить даты, в которые специалист принимает"""
    try:
        availability_service = AvailabilityService(db)
        dates = await availability_service.get_available_dates(specialist_id, start_date, end_date)
        return AvailableDatesResponse(data=dates)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Ошибка при получении доступных дат: {str(e)}")
