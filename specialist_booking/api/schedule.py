from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from ..core.database import get_db
from ..services import ScheduleService, SpecialistService
from ..schemas.schedule import WorkScheduleUpdate, WorkScheduleResponse

router = APIRouter(prefix="/specialists", tags=["schedule"])


async def _ensure_specialist(specialist_id: str, db: AsyncSession):
    specialist = await SpecialistService(db).get_specialist_by_id(specialist_id)
    if not specialist:
        raise HTTPException(status_code=404, detail="Специалист не найден")


# Получить расписание специалиста (или шаблон, если не настроено)
@router.get("/{specialist_id}/schedule", response_model=WorkScheduleResponse)
async def get_schedule(
    specialist_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Получить расписание специалиста"""
    try:
        await _ensure_specialist(specialist_id, db)
        schedule_service = ScheduleService(db)
        return await schedule_service.get_schedule_or_default(specialist_id)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Ошибка при получении расписания: {str(e)}")


# Сохранить расписание специалиста целиком
@router.put("/{specialist_id}/schedule", response_model=WorkScheduleResponse)
async def update_schedule(
    specialist_id: str,
    schedule: WorkScheduleUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Обновить рабочие дни, перерывы и отпуска специалиста"""
    try:
        await _ensure_specialist(specialist_id, db)
        schedule_service = ScheduleService(db)
        return await schedule_service.save_schedule(specialist_id, schedule)
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Ошибка при обновлении расписания: {str(e)}")
