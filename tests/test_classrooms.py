from fastapi import status
from classroom_booking.models.classroom import Classroom
from tests.conf_tests import (
    client,
    clear_db,
    test_db,
    test_user,
    admin_user,
    auth_headers,
    admin_headers,
    test_building,
    test_classroom,
    test_booking,
)


# Tests
def test_create_classroom_unauthorized(test_building):
    response = client.post(
        "/classrooms/", json={"building_id": test_building.id, "name": "E102", "capacity": 5}
    )
    assert response.status_code in [
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_403_FORBIDDEN,
    ]


def test_create_classroom_as_teacher(auth_headers, test_building):
    response = client.post(
        "/classrooms/",
        json={"building_id": test_building.id, "name": "E102", "capacity": 5},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Access denied"


def test_create_classroom_success(admin_headers, test_building):
    classroom_data = {
        "building_id": test_building.id,
        "name": "E305",
        "capacity": 25,
        "floor": 3,
        "is_computer_lab": True,
    }
    response = client.post("/classrooms/", json=classroom_data, headers=admin_headers)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "E305"
    assert data["is_computer_lab"] is True
    assert data["has_projector"] is False
    assert data["description"] == ""


def test_create_classroom_unknown_building(admin_headers):
    response = client.post(
        "/classrooms/", json={"building_id": 9999, "name": "X1"}, headers=admin_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Building not found"


def test_get_classrooms_with_data(auth_headers, test_classroom):
    response = client.get("/classrooms/", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert len(data) == 1
    assert data[0]["id"] == test_classroom.id
    assert data[0]["name"] == test_classroom.name


def test_get_classrooms_by_building(auth_headers, test_classroom):
    response = client.get(f"/classrooms/?building_id={test_classroom.building_id}", headers=auth_headers)
    assert len(response.json()) == 1

    response = client.get("/classrooms/?building_id=9999", headers=auth_headers)
    assert response.json() == []


def test_get_classroom_success(auth_headers, test_classroom):
    response = client.get(f"/classrooms/{test_classroom.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == test_classroom.id
    assert data["capacity"] == test_classroom.capacity
    assert data["building_id"] == test_classroom.building_id


def test_get_classroom_not_found(auth_headers):
    response = client.get("/classrooms/9999", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Classroom not found"


def test_partial_update_classroom(admin_headers, test_classroom):
    response = client.put(
        f"/classrooms/{test_classroom.id}", json={"capacity": 40}, headers=admin_headers
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["capacity"] == 40
    assert data["name"] == test_classroom.name


def test_update_classroom_unknown_building(admin_headers, test_classroom):
    response = client.put(
        f"/classrooms/{test_classroom.id}", json={"building_id": 9999}, headers=admin_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_classroom_not_found(admin_headers):
    response = client.put("/classrooms/9999", json={"name": "Nowhere"}, headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_classroom_success(admin_headers, test_classroom, test_db):
    response = client.delete(f"/classrooms/{test_classroom.id}", headers=admin_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    deleted = test_db.query(Classroom).filter(Classroom.id == test_classroom.id).first()
    assert deleted is None


def test_delete_classroom_with_bookings(admin_headers, test_booking):
    response = client.delete(f"/classrooms/{test_booking.classroom_id}", headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Cannot delete classroom with existing bookings"
