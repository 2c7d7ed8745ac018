import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from classroom_booking.db import get_db
from classroom_booking.models.building import Building
from classroom_booking.models.classroom import Classroom
from classroom_booking.schemas.availability import AvailabilityCheckResponse, AvailabilityResponse
from classroom_booking.schemas.classroom import ClassroomResponse
from classroom_booking.utils.auth import get_current_user
from classroom_booking.utils.scheduler import find_booking_conflicts, find_free_classrooms, room_slots

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/availability",
    tags=["availability"],
)


def bad_request(error: ValueError):
    logger.error(f"Invalid availability query: {error}")
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


def get_classroom_or_404(db: Session, classroom_id: int) -> Classroom:
    classroom = db.query(Classroom).filter(Classroom.id == classroom_id).first()
    if not classroom:
        logger.error(f"Classroom not found: {classroom_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Classroom not found")
    return classroom


@router.get(
    "/rooms",
    response_model=List[ClassroomResponse],
    summary="Find free classrooms",
    description="List classrooms free for a whole time range, smallest fitting room first.",
)
def get_free_classrooms(
    on_date: date = Query(..., alias="date"),
    start_time: str = Query(...),
    end_time: str = Query(...),
    min_capacity: int = Query(0, ge=0),
    building_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    - **date**: Day to search (e.g., 2025-04-20).
    - **start_time** / **end_time**: HH:MM range that must be free.
    - **min_capacity**: Minimum number of seats.
    - **building_id**: Only search one building.
    """
    try:
        return find_free_classrooms(db, on_date, start_time, end_time, min_capacity, building_id)
    except ValueError as e:
        raise bad_request(e)


@router.get(
    "/{classroom_id}",
    response_model=AvailabilityResponse,
    summary="Classroom availability grid",
    description="Split the bookable day into slots and mark each one available or booked.",
)
def get_availability(
    classroom_id: int,
    on_date: date = Query(..., alias="date"),
    day_start: Optional[str] = None,
    day_end: Optional[str] = None,
    step_minutes: Optional[int] = Query(None, gt=0),
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    - **classroom_id**: Classroom to inspect.
    - **date**: Day to inspect.
    - **day_start** / **day_end** / **step_minutes**: Override the configured grid.

    Returns the classroom, its building, the date and the ordered time slots.
    """
    classroom = get_classroom_or_404(db, classroom_id)
    building = db.query(Building).filter(Building.id == classroom.building_id).first()
    if not building:
        logger.error(f"Building not found: {classroom.building_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Building not found")

    try:
        slots = room_slots(db, classroom_id, on_date, day_start, day_end, step_minutes)
    except ValueError as e:
        raise bad_request(e)

    logger.debug(
        f"Availability for classroom_id: {classroom_id} on {on_date}: "
        f"{sum(slot.is_available for slot in slots)}/{len(slots)} slots free"
    )
    return {"classroom": classroom, "building": building, "date": on_date, "time_slots": slots}


@router.get(
    "/{classroom_id}/check",
    response_model=AvailabilityCheckResponse,
    summary="Check a time range",
    description="Tell whether a classroom is free for a time range and list the bookings in the way.",
)
def check_availability(
    classroom_id: int,
    on_date: date = Query(..., alias="date"),
    start_time: str = Query(...),
    end_time: str = Query(...),
    exclude_booking_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    - **exclude_booking_id**: Ignore this booking, for checking an edit of it.
    """
    get_classroom_or_404(db, classroom_id)
    try:
        conflicts = find_booking_conflicts(db, classroom_id, on_date, start_time, end_time, exclude_booking_id)
    except ValueError as e:
        raise bad_request(e)
    return {"available": not conflicts, "conflicts": conflicts}
