from fastapi import HTTPException, status
from classroom_booking.utils.availability import TIME_PATTERN, to_minutes


def validate_time_format(value):
    if value is not None and not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format (e.g., 09:30)")
    return value


def validate_time_range(start_time, end_time):
    if to_minutes(start_time) >= to_minutes(end_time):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Start time must be before end time",
        )
