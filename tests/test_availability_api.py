from fastapi import status
from classroom_booking.models.classroom import Classroom
from tests.conf_tests import (
    TEST_DATE,
    client,
    clear_db,
    test_db,
    test_user,
    auth_headers,
    test_building,
    test_classroom,
    test_booking,
)


def test_availability_grid(auth_headers, test_booking):
    response = client.get(
        f"/availability/{test_booking.classroom_id}?date={TEST_DATE.isoformat()}",
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["classroom"]["id"] == test_booking.classroom_id
    assert data["building"]["name"] == "Engineering Building"
    assert data["date"] == TEST_DATE.isoformat()

    slots = data["time_slots"]
    assert len(slots) == 24
    assert (slots[0]["start"], slots[0]["end"]) == ("08:00", "08:30")
    assert (slots[-1]["start"], slots[-1]["end"]) == ("19:30", "20:00")

    booked = [slot for slot in slots if not slot["is_available"]]
    assert [slot["start"] for slot in booked] == ["09:00", "09:30", "10:00", "10:30"]
    assert all(slot["booking"]["id"] == test_booking.id for slot in booked)
    assert all(slot["booking"] is None for slot in slots if slot["is_available"])


def test_availability_grid_is_stable(auth_headers, test_booking):
    url = f"/availability/{test_booking.classroom_id}?date={TEST_DATE.isoformat()}"
    first = client.get(url, headers=auth_headers).json()
    second = client.get(url, headers=auth_headers).json()
    assert first == second


def test_availability_grid_custom_day(auth_headers, test_classroom):
    response = client.get(
        f"/availability/{test_classroom.id}?date={TEST_DATE.isoformat()}"
        "&day_start=07:00&day_end=09:00&step_minutes=60",
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    slots = response.json()["time_slots"]
    assert [(slot["start"], slot["end"]) for slot in slots] == [("07:00", "08:00"), ("08:00", "09:00")]


def test_availability_grid_bad_day(auth_headers, test_classroom):
    response = client.get(
        f"/availability/{test_classroom.id}?date={TEST_DATE.isoformat()}&day_start=21:00",
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_availability_requires_date(auth_headers, test_classroom):
    response = client.get(f"/availability/{test_classroom.id}", headers=auth_headers)
    assert response.status_code == 422


def test_availability_classroom_not_found(auth_headers):
    response = client.get(f"/availability/9999?date={TEST_DATE.isoformat()}", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Classroom not found"


def test_check_availability(auth_headers, test_booking):
    url = f"/availability/{test_booking.classroom_id}/check"
    params = {"date": TEST_DATE.isoformat(), "start_time": "11:00", "end_time": "12:00"}
    response = client.get(url, params=params, headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"available": True, "conflicts": []}

    params.update(start_time="10:00")
    data = client.get(url, params=params, headers=auth_headers).json()
    assert data["available"] is False
    assert [booking["id"] for booking in data["conflicts"]] == [test_booking.id]

    params.update(exclude_booking_id=test_booking.id)
    data = client.get(url, params=params, headers=auth_headers).json()
    assert data["available"] is True


def test_check_availability_malformed_time(auth_headers, test_classroom):
    response = client.get(
        f"/availability/{test_classroom.id}/check",
        params={"date": TEST_DATE.isoformat(), "start_time": "10", "end_time": "11:00"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_free_classrooms_best_fit_first(auth_headers, test_booking, test_building, test_db):
    small = Classroom(building_id=test_building.id, name="E001", capacity=10)
    large = Classroom(building_id=test_building.id, name="E202", capacity=50)
    test_db.add_all([small, large])
    test_db.commit()

    params = {"date": TEST_DATE.isoformat(), "start_time": "10:00", "end_time": "11:00"}
    response = client.get("/availability/rooms", params=params, headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [room["name"] for room in response.json()] == ["E001", "E202"]

    params.update(min_capacity=20)
    response = client.get("/availability/rooms", params=params, headers=auth_headers)
    assert [room["name"] for room in response.json()] == ["E202"]

    params.update(start_time="11:00", end_time="12:00")
    response = client.get("/availability/rooms", params=params, headers=auth_headers)
    assert [room["name"] for room in response.json()] == ["E101", "E202"]
