# Services
from .specialist_service import SpecialistService
from .service_service import ServiceService
from .appointment_service import AppointmentService
from .schedule_service import ScheduleService
from .availability_service import AvailabilityService

__all__ = [
    "SpecialistService",
    "ServiceService",
    "AppointmentService",
    "ScheduleService",
    "AvailabilityService",
]
