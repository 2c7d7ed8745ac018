import datetime
from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from classroom_booking.schemas.booking import BookingResponse
from classroom_booking.schemas.building import BuildingResponse
from classroom_booking.schemas.classroom import ClassroomResponse


class TimeSlotResponse(BaseModel):
    start: str
    end: str
    is_available: bool
    booking: Optional[BookingResponse] = None

    model_config = ConfigDict(from_attributes=True)


class AvailabilityResponse(BaseModel):
    classroom: ClassroomResponse
    building: BuildingResponse
    date: datetime.date
    time_slots: List[TimeSlotResponse]


class AvailabilityCheckResponse(BaseModel):
    available: bool
    conflicts: List[BookingResponse]
