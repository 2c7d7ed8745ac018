import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Literal, Optional
from classroom_booking.utils.availability import to_minutes
from classroom_booking.utils.validation_helpers import validate_time_format

BookingStatus = Literal["pending", "confirmed", "cancelled", "blocked"]


class BookingBase(BaseModel):
    classroom_id: int
    date: datetime.date
    start_time: str
    end_time: str
    purpose: str = ""
    description: Optional[str] = None
    attendees: int = Field(0, ge=0)

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time_format(cls, value):
        return validate_time_format(value)


class BookingCreate(BookingBase):
    # only administrators may pick a status; teachers' requests start out pending
    status: Optional[BookingStatus] = None

    @model_validator(mode="after")
    def check_time_order(self):
        if to_minutes(self.start_time) >= to_minutes(self.end_time):
            raise ValueError("Start time must be before end time")
        return self


class BookingUpdate(BaseModel):
    classroom_id: Optional[int] = None
    date: Optional[datetime.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    purpose: Optional[str] = None
    description: Optional[str] = None
    attendees: Optional[int] = Field(None, ge=0)
    status: Optional[BookingStatus] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time_format(cls, value):
        return validate_time_format(value)


class BookingResponse(BaseModel):
    id: int
    classroom_id: int
    user_id: int
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    room_name: Optional[str] = None
    building_name: Optional[str] = None
    date: datetime.date
    start_time: str
    end_time: str
    purpose: str
    description: Optional[str] = None
    attendees: int
    status: BookingStatus
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
