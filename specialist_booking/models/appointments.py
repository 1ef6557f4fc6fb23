from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..core.database import Base


class Appointments(Base):
    __tablename__ = "appointments"
    
    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(String, nullable=True)
    client_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    specialist_id = Column(String, ForeignKey("specialist.id"), index=True)
    service_id = Column(Integer, ForeignKey("service.id"), nullable=True)
    date = Column(String)  # "YYYY-MM-DD"
    start_time = Column(String)  # "HH:MM"
    end_time = Column(String, nullable=True)  # если пусто, считается по длительности услуги
    status = Column(String, default="pending")  # pending, confirmed, completed, cancelled, archived
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    specialist = relationship("Specialist", back_populates="appointments")
    service = relationship("Service", back_populates="appointments")
