from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from classroom_booking.db import Base


class Classroom(Base):
    __tablename__ = "classrooms"

    id = Column(Integer, primary_key=True, index=True)
    building_id = Column(Integer, ForeignKey("buildings.id"), nullable=False, index=True)
    name = Column(String, index=True, nullable=False)
    capacity = Column(Integer, nullable=False, default=0)
    floor = Column(Integer, nullable=False, default=1)
    has_projector = Column(Boolean, nullable=False, default=False)
    has_ac = Column(Boolean, nullable=False, default=False)
    is_computer_lab = Column(Boolean, nullable=False, default=False)
    description = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    building = relationship("Building", back_populates="classrooms")
    bookings = relationship("Booking", back_populates="classroom")
