from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ..core.database import Base


class Service(Base):
    __tablename__ = "service"
    
    id = Column(Integer, primary_key=True, index=True)
    specialist_id = Column(String, ForeignKey("specialist.id"), nullable=True)
    name = Column(String)
    description = Column(String, nullable=True)
    price = Column(String, nullable=True)
    duration = Column(Integer, nullable=True)  # минуты
    
    specialist = relationship("Specialist", back_populates="services")
    appointments = relationship("Appointments", back_populates="service")
