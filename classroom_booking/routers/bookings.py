from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from datetime import date
from sqlalchemy.orm import Session
from classroom_booking.db import get_db
from classroom_booking.models.booking import Booking
from classroom_booking.models.classroom import Classroom
from classroom_booking.schemas.booking import BookingCreate, BookingUpdate, BookingResponse, BookingStatus
from classroom_booking.utils.auth import get_current_user, is_admin
from classroom_booking.utils.availability import OCCUPYING_STATUSES
from classroom_booking.utils.scheduler import booking_lock, find_conflict
from classroom_booking.utils.validation_helpers import validate_time_range
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
)

UNAVAILABLE_DETAIL = "Classroom is not available for the selected time"


def get_booking_for_user(db: Session, booking_id: int, current_user: dict) -> Booking:
    """Fetch a booking that the current user owns or, for administrators, any booking."""
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not booking:
        logger.error(f"Booking not found: {booking_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    if not is_admin(current_user) and booking.user_id != current_user["id"]:
        logger.error(f"User {current_user['id']} not authorized to access booking {booking_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return booking


def check_capacity(classroom: Classroom, attendees: int):
    if attendees and classroom.capacity < attendees:
        logger.error(f"Classroom capacity insufficient: {classroom.capacity} < {attendees}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Classroom capacity insufficient")


@router.post(
    "/",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
    description="Book a classroom for a time range on one day. Requires authentication.",
)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Book a classroom for a time range on one day.
    Requires authentication.

    - **classroom_id**: ID of the classroom to book.
    - **date**: Day of the booking (e.g., 2025-04-20).
    - **start_time** / **end_time**: HH:MM, start before end.
    - **purpose**, **description**, **attendees**: Booking details.
    - **status**: Administrators only; defaults to confirmed for them and pending for everyone else.

    Returns the created booking.
    """
    logger.debug(
        f"Creating booking for user: {current_user['id']}, classroom_id: {booking.classroom_id}, "
        f"{booking.date} {booking.start_time}-{booking.end_time}"
    )

    classroom = db.query(Classroom).filter(Classroom.id == booking.classroom_id).first()
    if not classroom:
        logger.error(f"Classroom not found: {booking.classroom_id}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Classroom not found")
    check_capacity(classroom, booking.attendees)

    if is_admin(current_user):
        booking_status = booking.status or "confirmed"
    elif booking.status in (None, "pending"):
        booking_status = "pending"
    else:
        logger.error(f"User {current_user['id']} tried to create a booking with status {booking.status}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    with booking_lock(booking.classroom_id, booking.date):
        if booking_status in OCCUPYING_STATUSES:
            conflict = find_conflict(db, booking.classroom_id, booking.date, booking.start_time, booking.end_time)
            if conflict:
                logger.error(
                    f"Overlapping booking {conflict.id} for classroom_id: {booking.classroom_id}, "
                    f"{booking.date} {booking.start_time}-{booking.end_time}"
                )
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=UNAVAILABLE_DETAIL)

        db_booking = Booking(
            **booking.model_dump(exclude={"status"}),
            user_id=current_user["id"],
            status=booking_status,
        )
        db.add(db_booking)
        db.commit()
    db.refresh(db_booking)
    logger.debug(f"Created booking: {db_booking.id}, status: {db_booking.status}")
    return db_booking


@router.get(
    "/",
    response_model=List[BookingResponse],
    summary="List bookings",
    description="Teachers see their own bookings unless user_id is given; administrators see all.",
)
def get_bookings(
    user_id: Optional[int] = None,
    classroom_id: Optional[int] = None,
    on_date: Optional[date] = Query(None, alias="date"),
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Retrieve bookings ordered by date and start time.

    - **user_id**: Only bookings of this user.
    - **classroom_id**, **date**, **status**: Further filters.
    """
    query = db.query(Booking)
    if user_id is not None:
        query = query.filter(Booking.user_id == user_id)
    elif not is_admin(current_user):
        query = query.filter(Booking.user_id == current_user["id"])
    if classroom_id is not None:
        query = query.filter(Booking.classroom_id == classroom_id)
    if on_date is not None:
        query = query.filter(Booking.date == on_date)
    if booking_status is not None:
        query = query.filter(Booking.status == booking_status)

    bookings = query.order_by(Booking.date, Booking.start_time, Booking.id).offset(skip).limit(limit).all()
    logger.debug(f"Retrieved {len(bookings)} bookings")
    return bookings


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking by ID",
    description="Retrieve a booking owned by the current user, or any booking for administrators.",
)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    booking = get_booking_for_user(db, booking_id, current_user)
    logger.debug(f"Retrieved booking: {booking_id}")
    return booking


@router.put(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Update a booking",
    description="Update a booking's details or status. Requires ownership or an administrator.",
)
def update_booking(
    booking_id: int,
    booking_update: BookingUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Update a booking's details or status.
    Requires ownership or an administrator.

    Availability is re-checked, ignoring the booking itself, whenever the
    classroom, date or times change or a cancelled booking is reactivated.
    Teachers may only cancel; confirming and blocking are reserved for
    administrators, and a confirmed booking a teacher moves goes back to
    pending.

    Returns the updated booking.
    """
    db_booking = get_booking_for_user(db, booking_id, current_user)

    update_data = booking_update.model_dump(exclude_unset=True)
    for key in ("classroom_id", "date", "start_time", "end_time", "purpose", "attendees", "status"):
        if key in update_data and update_data[key] is None:
            del update_data[key]

    new_status = update_data.get("status", db_booking.status)
    if new_status != db_booking.status and not is_admin(current_user) and new_status != "cancelled":
        logger.error(f"User {current_user['id']} tried to set booking {booking_id} to {new_status}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    classroom_id = update_data.get("classroom_id", db_booking.classroom_id)
    on_date = update_data.get("date", db_booking.date)
    start_time = update_data.get("start_time", db_booking.start_time)
    end_time = update_data.get("end_time", db_booking.end_time)
    validate_time_range(start_time, end_time)

    classroom = db.query(Classroom).filter(Classroom.id == classroom_id).first()
    if not classroom:
        logger.error(f"Classroom not found: {classroom_id}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Classroom not found")
    if "classroom_id" in update_data or "attendees" in update_data:
        check_capacity(classroom, update_data.get("attendees", db_booking.attendees))

    moved = (
        classroom_id != db_booking.classroom_id
        or on_date != db_booking.date
        or start_time != db_booking.start_time
        or end_time != db_booking.end_time
    )
    if moved and not is_admin(current_user) and new_status == "confirmed":
        # a confirmation covers the slot it was given for, a moved booking needs a new one
        new_status = update_data["status"] = "pending"
    reactivated = db_booking.status not in OCCUPYING_STATUSES
    needs_check = new_status in OCCUPYING_STATUSES and (moved or reactivated)

    with booking_lock(classroom_id, on_date):
        if needs_check:
            conflict = find_conflict(db, classroom_id, on_date, start_time, end_time, exclude_booking_id=booking_id)
            if conflict:
                logger.error(
                    f"Overlapping booking {conflict.id} for classroom_id: {classroom_id}, "
                    f"{on_date} {start_time}-{end_time}"
                )
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=UNAVAILABLE_DETAIL)

        for key, value in update_data.items():
            setattr(db_booking, key, value)
        db.commit()
    db.refresh(db_booking)
    logger.debug(f"Updated booking: {booking_id}, status: {db_booking.status}")
    return db_booking


@router.delete(
    "/{booking_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a booking",
    description="Delete a booking. Requires ownership or an administrator.",
)
def delete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Delete a booking.
    Requires ownership or an administrator.

    - **booking_id**: ID of the booking to delete.
    """
    db_booking = get_booking_for_user(db, booking_id, current_user)
    db.delete(db_booking)
    db.commit()
    logger.debug(f"Deleted booking: {booking_id}")
    return None
