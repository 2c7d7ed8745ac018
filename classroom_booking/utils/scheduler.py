import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from classroom_booking.config import settings
from classroom_booking.models.booking import Booking
from classroom_booking.models.classroom import Classroom
from classroom_booking.utils.availability import (
    OCCUPYING_STATUSES,
    TimeSlot,
    find_conflicts,
    generate_slots,
    is_available,
)

logger = logging.getLogger(__name__)

# (classroom_id, date) -> [lock, number of requests holding or waiting for it]
_booking_locks: Dict[Tuple[int, date], list] = {}
_booking_locks_guard = threading.Lock()


@contextmanager
def booking_lock(classroom_id: int, on_date: date):
    """
    Serialize check-then-write sequences for one classroom on one day.

    Two requests that both pass the availability check before either commits
    would otherwise insert overlapping bookings.
    """
    key = (classroom_id, on_date)
    with _booking_locks_guard:
        entry = _booking_locks.setdefault(key, [threading.Lock(), 0])
        entry[1] += 1
    try:
        with entry[0]:
            yield
    finally:
        with _booking_locks_guard:
            entry[1] -= 1
            if entry[1] == 0:
                del _booking_locks[key]


def bookings_for_day(db: Session, classroom_id: int, on_date: date) -> List[Booking]:
    """Slot-occupying bookings of a classroom on a date, earliest first."""
    return (
        db.query(Booking)
        .filter(
            Booking.classroom_id == classroom_id,
            Booking.date == on_date,
            Booking.status.in_(OCCUPYING_STATUSES),
        )
        .order_by(Booking.start_time)
        .all()
    )


def find_booking_conflicts(
    db: Session,
    classroom_id: int,
    on_date: date,
    start_time: str,
    end_time: str,
    exclude_booking_id: Optional[int] = None,
) -> List[Booking]:
    bookings = bookings_for_day(db, classroom_id, on_date)
    return find_conflicts(bookings, classroom_id, on_date, start_time, end_time, exclude_booking_id)


def find_conflict(
    db: Session,
    classroom_id: int,
    on_date: date,
    start_time: str,
    end_time: str,
    exclude_booking_id: Optional[int] = None,
) -> Optional[Booking]:
    """Return the earliest booking that collides with the interval, or None when the room is free."""
    conflicts = find_booking_conflicts(db, classroom_id, on_date, start_time, end_time, exclude_booking_id)
    if conflicts:
        logger.debug(
            f"Conflict for classroom_id: {classroom_id}, {on_date} {start_time}-{end_time}: "
            f"booking {conflicts[0].id} ({conflicts[0].start_time}-{conflicts[0].end_time})"
        )
        return conflicts[0]
    return None


def room_slots(
    db: Session,
    classroom_id: int,
    on_date: date,
    day_start: Optional[str] = None,
    day_end: Optional[str] = None,
    step_minutes: Optional[int] = None,
) -> List[TimeSlot]:
    """Availability grid for a classroom; unset bounds fall back to the configured bookable day."""
    return generate_slots(
        bookings_for_day(db, classroom_id, on_date),
        classroom_id,
        on_date,
        day_start=day_start or settings.day_start,
        day_end=day_end or settings.day_end,
        step_minutes=step_minutes or settings.slot_minutes,
    )


def find_free_classrooms(
    db: Session,
    on_date: date,
    start_time: str,
    end_time: str,
    min_capacity: int = 0,
    building_id: Optional[int] = None,
) -> List[Classroom]:
    """
    Find classrooms free for the whole interval with at least ``min_capacity`` seats.

    The smallest room that fits comes first.
    """
    query = db.query(Classroom).filter(Classroom.capacity >= min_capacity)
    if building_id is not None:
        query = query.filter(Classroom.building_id == building_id)
    candidates = query.order_by(Classroom.capacity, Classroom.id).all()

    day_bookings = (
        db.query(Booking)
        .filter(Booking.date == on_date, Booking.status.in_(OCCUPYING_STATUSES))
        .all()
    )
    free = [
        classroom
        for classroom in candidates
        if is_available(day_bookings, classroom.id, on_date, start_time, end_time)
    ]
    logger.debug(f"Found {len(free)} free classrooms out of {len(candidates)} for {on_date} {start_time}-{end_time}")
    return free
