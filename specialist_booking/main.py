from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .api import schedule, availability, timeslots
from .core.config import settings
from .core.database import create_tables
from . import models  # noqa: F401  регистрирует таблицы в Base.metadata
import logging

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Создание FastAPI приложения
app = FastAPI(
    title="Specialist Booking API",
    description="Расписание специалистов и свободное время для записи",
    version="1.0.0",
    debug=settings.debug,
)


# Создание таблиц при запуске
@app.on_event("startup")
async def startup_event():
    await create_tables()
    logger.info("Таблицы базы данных готовы")


# Настройка CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(schedule, prefix="/api")
app.include_router(availability, prefix="/api")
app.include_router(timeslots, prefix="/api")


@app.get("/health")
async def health_check():
    """Проверка состояния API"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
