import uuid

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..core.database import Base


class Specialist(Base):
    __tablename__ = "specialist"
    
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    position = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    description = Column(String, nullable=True)
    order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    schedule = relationship("WorkSchedule", back_populates="specialist", uselist=False)
    services = relationship("Service", back_populates="specialist")
    appointments = relationship("Appointments", back_populates="specialist")
