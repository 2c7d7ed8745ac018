from datetime import datetime
from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from classroom_booking.db import Base


BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "blocked")


class Booking(Base):
    __tablename__ = "bookings"
    # zero-padded HH:MM strings order the same way as the times they encode
    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_bookings_time_order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    classroom_id = Column(Integer, ForeignKey("classrooms.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    purpose = Column(String, nullable=False, default="")
    description = Column(String, nullable=True)
    attendees = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default="pending")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    classroom = relationship("Classroom", back_populates="bookings")
    user = relationship("User", back_populates="bookings")

    @property
    def user_name(self):
        return self.user.name if self.user else None

    @property
    def user_email(self):
        return self.user.email if self.user else None

    @property
    def room_name(self):
        return self.classroom.name if self.classroom else None

    @property
    def building_name(self):
        if self.classroom and self.classroom.building:
            return self.classroom.building.name
        return None
