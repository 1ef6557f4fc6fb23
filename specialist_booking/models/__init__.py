from .specialist import Specialist
from .service import Service
from .schedule import WorkSchedule, WorkDay, LunchBreak, Vacation
from .appointments import Appointments
from ..core.database import Base

__all__ = [
    "Base",
    "Specialist",
    "Service",
    "WorkSchedule",
    "WorkDay",
    "LunchBreak",
    "Vacation",
    "Appointments",
]
