from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///./booking.db"
    database_echo: bool = False

    # App Settings
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = ["*"]

    # Booking
    default_service_duration: int = 60  # минут, если у услуги не указана длительность
    slot_step_minutes: int = 30  # шаг между началами слотов
    default_booking_period_months: int = 2

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
