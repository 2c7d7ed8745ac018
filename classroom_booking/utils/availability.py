"""
Booking conflict checking and availability slots.

Times are "HH:MM" wall-clock strings on a 24h scale and every interval is
half-open, [start, end): a booking that ends at 10:00 does not collide with
one that starts at 10:00.

The functions here work on any iterable of booking-like objects exposing
``id``, ``classroom_id``, ``date``, ``start_time``, ``end_time`` and
``status``; they never touch the database.
"""
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Optional, Tuple

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

# Cancelled bookings free their slot, everything else holds it.
OCCUPYING_STATUSES = frozenset({"pending", "confirmed", "blocked"})

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class TimeSlot:
    start: str
    end: str
    is_available: bool
    booking: Optional[Any] = None


def to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    match = TIME_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM in 24-hour format")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_minutes(minutes: int) -> str:
    """Convert minutes since midnight back to "HH:MM"."""
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise ValueError(f"Minutes out of range: {minutes}")
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def to_interval(start: str, end: str) -> Tuple[int, int]:
    start_minutes, end_minutes = to_minutes(start), to_minutes(end)
    if start_minutes >= end_minutes:
        raise ValueError(f"Start time {start} must be before end time {end}")
    return start_minutes, end_minutes


def overlaps(existing_start, existing_end, query_start, query_end) -> bool:
    """Return True when [existing_start, existing_end) and [query_start, query_end) share an instant."""
    return existing_start < query_end and query_start < existing_end


def occupies_slot(booking) -> bool:
    return booking.status in OCCUPYING_STATUSES


def find_conflicts(
    bookings: Iterable[Any],
    classroom_id,
    on_date: date,
    start: str,
    end: str,
    exclude_booking_id=None,
) -> List[Any]:
    """
    Return the bookings of ``classroom_id`` on ``on_date`` that collide with [start, end).

    ``exclude_booking_id`` skips one booking so that an edit in place never
    conflicts with the booking being edited. Results are ordered by start time.
    """
    query_start, query_end = to_interval(start, end)
    conflicts = [
        booking
        for booking in bookings
        if booking.classroom_id == classroom_id
        and booking.date == on_date
        and (exclude_booking_id is None or booking.id != exclude_booking_id)
        and occupies_slot(booking)
        and overlaps(
            to_minutes(booking.start_time),
            to_minutes(booking.end_time),
            query_start,
            query_end,
        )
    ]
    conflicts.sort(key=lambda booking: (to_minutes(booking.start_time), booking.end_time))
    return conflicts


def is_available(
    bookings: Iterable[Any],
    classroom_id,
    on_date: date,
    start: str,
    end: str,
    exclude_booking_id=None,
) -> bool:
    return not find_conflicts(bookings, classroom_id, on_date, start, end, exclude_booking_id)


def generate_slots(
    bookings: Iterable[Any],
    classroom_id,
    on_date: date,
    day_start: str = "08:00",
    day_end: str = "20:00",
    step_minutes: int = 30,
) -> List[TimeSlot]:
    """
    Split [day_start, day_end) into consecutive slots of ``step_minutes``.

    The last slot always ends at ``day_end``, so it is shorter than the step
    when the day does not divide evenly. Each slot carries the earliest
    booking that collides with it.
    """
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")
    first, last = to_interval(day_start, day_end)

    day_bookings = find_conflicts(bookings, classroom_id, on_date, day_start, day_end)

    slots = []
    current = first
    while current < last:
        slot_end = min(current + step_minutes, last)
        start, end = format_minutes(current), format_minutes(slot_end)
        conflicts = find_conflicts(day_bookings, classroom_id, on_date, start, end)
        slots.append(
            TimeSlot(
                start=start,
                end=end,
                is_available=not conflicts,
                booking=conflicts[0] if conflicts else None,
            )
        )
        current = slot_end
    return slots
