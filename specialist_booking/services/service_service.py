from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
from ..core.config import settings
from ..models.service import Service
import logging

logger = logging.getLogger(__name__)


class ServiceService:
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def get_service_by_id(self, service_id: int) -> Optional[Service]:
        try:
            result = await self.db.execute(
                select(Service).where(Service.id == service_id)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Ошибка при получении услуги {service_id}: {e}")
            raise
    
    async def get_service_duration(self, service_id: Optional[int]) -> int:
        """Длительность услуги в минутах; если услуга не указана или без длительности - по умолчанию"""
        if service_id is None:
            return settings.default_service_duration

        service = await self.get_service_by_id(service_id)
        if not service or not service.duration:
            logger.warning(f"Длительность услуги {service_id} не найдена, используем {settings.default_service_duration} минут")
            return settings.default_service_duration
        return service.duration
