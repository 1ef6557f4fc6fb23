from .schedule import router as schedule
from .availability import router as availability
from .timeslots import router as timeslots
