from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
from ..models.specialist import Specialist
import logging

logger = logging.getLogger(__name__)


class SpecialistService:
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def get_specialist_by_id(self, specialist_id: str) -> Optional[Specialist]:
        """Получить специалиста по ID"""
        try:
            result = await self.db.execute(
                select(Specialist).where(Specialist.id == specialist_id)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Ошибка при получении специалиста {specialist_id}: {e}")
            raise
    