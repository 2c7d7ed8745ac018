from datetime import date
from classroom_booking.models.booking import Booking
from classroom_booking.models.classroom import Classroom
from classroom_booking.models.user import User
from classroom_booking.seed import seed_demo_data
from classroom_booking.utils.scheduler import find_conflict, room_slots
from tests.conf_tests import client, clear_db, test_db


def test_seed_populates_empty_database(test_db):
    assert seed_demo_data(test_db) is True
    assert test_db.query(User).count() == 2
    assert test_db.query(Classroom).count() == 6
    assert test_db.query(Booking).count() == 3

    response = client.post(
        "/auth/login", json={"email": "admin@um-surabaya.ac.id", "password": "admin123"}
    )
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "admin"


def test_seed_runs_once(test_db):
    seed_demo_data(test_db)
    assert seed_demo_data(test_db) is False
    assert test_db.query(User).count() == 2


def test_seeded_lecture_blocks_its_room(test_db):
    seed_demo_data(test_db)
    room = test_db.query(Classroom).filter(Classroom.name == "E101").one()
    on_date = date(2025, 4, 20)

    assert find_conflict(test_db, room.id, on_date, "10:00", "12:00") is not None
    assert find_conflict(test_db, room.id, on_date, "11:00", "12:00") is None

    slots = room_slots(test_db, room.id, on_date)
    assert [slot.start for slot in slots if not slot.is_available] == ["09:00", "09:30", "10:00", "10:30"]
