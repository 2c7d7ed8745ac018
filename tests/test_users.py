from fastapi import status
from tests.conf_tests import (
    TEST_PASSWORD,
    client,
    clear_db,
    create_user,
    login,
    test_db,
    test_user,
    admin_user,
    auth_headers,
    admin_headers,
)


def test_list_users_as_admin(admin_headers, admin_user, test_user):
    response = client.get("/users/", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    assert {user["id"] for user in response.json()} == {admin_user.id, test_user.id}


def test_list_users_as_teacher(auth_headers):
    response = client.get("/users/", headers=auth_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_adds_user(admin_headers):
    user_data = {"name": "Second Admin", "email": "admin2@example.com", "password": "secret123", "role": "admin"}
    response = client.post("/users/", json=user_data, headers=admin_headers)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["role"] == "admin"

    login_response = client.post("/auth/login", json={"email": "admin2@example.com", "password": "secret123"})
    assert login_response.status_code == status.HTTP_200_OK


def test_update_own_profile(auth_headers, test_user):
    response = client.put(
        f"/users/{test_user.id}",
        json={"department": "Physics", "bio": "Teaches mechanics"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["department"] == "Physics"


def test_teacher_cannot_change_own_role(auth_headers, test_user):
    response = client.put(f"/users/{test_user.id}", json={"role": "admin"}, headers=auth_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Cannot change role"


def test_teacher_cannot_edit_someone_else(auth_headers, test_db):
    other = create_user(test_db)
    response = client.put(f"/users/{other.id}", json={"name": "Hacked"}, headers=auth_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_changes_role(admin_headers, test_user):
    response = client.put(f"/users/{test_user.id}", json={"role": "admin"}, headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["role"] == "admin"


def test_password_change_is_hashed(auth_headers, test_user):
    response = client.put(f"/users/{test_user.id}", json={"password": "newsecret"}, headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK

    old = client.post("/auth/login", json={"email": test_user.email, "password": TEST_PASSWORD})
    assert old.status_code == status.HTTP_401_UNAUTHORIZED
    new = client.post("/auth/login", json={"email": test_user.email, "password": "newsecret"})
    assert new.status_code == status.HTTP_200_OK


def test_deactivated_user_is_locked_out(admin_headers, test_db):
    user = create_user(test_db)
    headers = login(user)
    response = client.put(f"/users/{user.id}", json={"status": "inactive"}, headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK

    response = client.get("/auth/user", headers=headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
