"""Demo campus loaded into an empty database on first start."""
import logging
from datetime import date
from sqlalchemy.orm import Session
from classroom_booking.models.booking import Booking
from classroom_booking.models.building import Building
from classroom_booking.models.classroom import Classroom
from classroom_booking.models.user import User
from classroom_booking.utils.auth import get_password_hash

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {
        "name": "Admin User",
        "email": "admin@um-surabaya.ac.id",
        "password": "admin123",
        "role": "admin",
        "department": "Information Technology",
        "phone": "+62-812-3456-7890",
        "bio": "System administrator responsible for classroom management system.",
    },
    {
        "name": "Teacher User",
        "email": "teacher@um-surabaya.ac.id",
        "password": "teacher123",
        "role": "teacher",
        "department": "Computer Science",
        "phone": "+62-876-5432-1098",
        "bio": "Computer Science professor specializing in artificial intelligence and machine learning.",
    },
]

DEMO_BUILDINGS = [
    {
        "name": "Engineering Building",
        "location": "North Campus",
        "description": "Main engineering faculty building with classrooms and labs",
        "floors": 5,
        "classrooms": [
            {"name": "E101", "capacity": 35, "floor": 1, "has_projector": True, "has_ac": True,
             "description": "Standard lecture room with projector and whiteboard"},
            {"name": "E202", "capacity": 50, "floor": 2, "has_projector": True, "has_ac": True,
             "description": "Large lecture hall with tiered seating"},
            {"name": "E305", "capacity": 25, "floor": 3, "has_projector": True, "has_ac": True,
             "is_computer_lab": True, "description": "Computer lab with 25 workstations"},
        ],
    },
    {
        "name": "Science Building",
        "location": "East Campus",
        "description": "Houses science departments and research facilities",
        "floors": 4,
        "classrooms": [
            {"name": "S101", "capacity": 40, "floor": 1, "has_projector": True, "has_ac": True,
             "description": "Science lecture room with demonstration table"},
            {"name": "S205", "capacity": 30, "floor": 2, "has_projector": True, "has_ac": True,
             "description": "Biology lab with microscope stations"},
        ],
    },
    {
        "name": "Technology Hub",
        "location": "South Campus",
        "description": "Modern technology and computer science facility",
        "floors": 3,
        "classrooms": [
            {"name": "T101", "capacity": 60, "floor": 1, "has_projector": True, "has_ac": True,
             "is_computer_lab": True, "description": "Large computer lab with advanced workstations"},
        ],
    },
]

# (room name, date, start, end, purpose, status, attendees), all owned by the demo teacher
DEMO_BOOKINGS = [
    ("E101", date(2025, 4, 20), "09:00", "11:00", "Introduction to Programming Lecture", "confirmed", 30),
    ("E305", date(2025, 4, 21), "13:00", "15:00", "Advanced Programming Lab", "confirmed", 20),
    ("S101", date(2025, 4, 22), "10:00", "12:00", "Physics Demonstration", "pending", 35),
]


def seed_demo_data(db: Session) -> bool:
    """Populate an empty database. Returns False when users already exist."""
    if db.query(User).first():
        return False

    users = {}
    for data in DEMO_USERS:
        data = dict(data)
        user = User(hashed_password=get_password_hash(data.pop("password")), **data)
        db.add(user)
        users[user.role] = user

    rooms = {}
    for data in DEMO_BUILDINGS:
        data = dict(data)
        classrooms = data.pop("classrooms")
        building = Building(**data)
        db.add(building)
        for classroom_data in classrooms:
            classroom = Classroom(building=building, **classroom_data)
            db.add(classroom)
            rooms[classroom.name] = classroom

    for room_name, on_date, start_time, end_time, purpose, booking_status, attendees in DEMO_BOOKINGS:
        db.add(Booking(
            classroom=rooms[room_name],
            user=users["teacher"],
            date=on_date,
            start_time=start_time,
            end_time=end_time,
            purpose=purpose,
            status=booking_status,
            attendees=attendees,
        ))

    db.commit()
    logger.info(f"Seeded {len(DEMO_USERS)} users, {len(rooms)} classrooms and {len(DEMO_BOOKINGS)} bookings")
    return True
