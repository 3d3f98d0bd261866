"""Tests for the admin user management endpoints."""

from collections.abc import Callable

from flask.testing import FlaskClient

from app.models.user import User


class TestUsersList:
    """Tests for GET /api/admin/users."""

    def test_list_empty(self, client: FlaskClient) -> None:
        response = client.get("/api/admin/users")

        assert response.status_code == 200
        data = response.get_json()
        assert data["data"] == []
        assert data["pagination"] == {
            "currentPage": 1,
            "totalPages": 0,
            "totalRecords": 0,
            "recordsPerPage": 10,
            "hasNextPage": False,
            "hasPrevPage": False,
        }

    def test_list_with_search_and_paging(
        self, client: FlaskClient, make_user: Callable[..., User]
    ) -> None:
        for i in range(11):
            make_user(f"EMP{i:03d}", f"Worker {i:02d}")
        make_user("ADM001", "Supervisor", role="admin")

        first_page = client.get("/api/admin/users").get_json()
        assert first_page["data"][0]["employee_id"] == "ADM001"
        assert first_page["pagination"]["totalRecords"] == 12
        assert first_page["pagination"]["hasNextPage"] is True

        second_page = client.get("/api/admin/users?page=2").get_json()
        assert len(second_page["data"]) == 2
        assert second_page["pagination"]["hasPrevPage"] is True

        searched = client.get("/api/admin/users", query_string={"search": "worker 05"}).get_json()
        assert [u["employee_id"] for u in searched["data"]] == ["EMP005"]

    def test_password_hash_is_not_exposed(
        self, client: FlaskClient, make_user: Callable[..., User]
    ) -> None:
        make_user("ADM001", "Siti", role="admin")

        user = client.get("/api/admin/users").get_json()["data"][0]

        assert "password" not in user
        assert "password_hash" not in user


class TestUsersCreate:
    """Tests for POST /api/admin/users."""

    def test_create_user(self, client: FlaskClient) -> None:
        response = client.post(
            "/api/admin/users",
            json={"name": "Budi", "employee_id": "EMP001", "role": "user", "nik": "3201"},
        )

        assert response.status_code == 201
        data = response.get_json()
        assert data["message"] == "User created successfully"
        assert data["data"]["employee_id"] == "EMP001"
        assert data["data"]["nik"] == "3201"

    def test_create_admin_without_password(self, client: FlaskClient) -> None:
        response = client.post(
            "/api/admin/users",
            json={"name": "Siti", "employee_id": "ADM001", "role": "admin"},
        )

        assert response.status_code == 400
        assert "Password is required" in response.get_json()["error"]

    def test_duplicate_employee_id(
        self, client: FlaskClient, make_user: Callable[..., User]
    ) -> None:
        make_user("EMP001", "Budi")

        response = client.post(
            "/api/admin/users",
            json={"name": "Other", "employee_id": "EMP001", "role": "user"},
        )

        assert response.status_code == 409
        assert "already exists" in response.get_json()["error"]

    def test_invalid_role(self, client: FlaskClient) -> None:
        response = client.post(
            "/api/admin/users",
            json={"name": "Budi", "employee_id": "EMP001", "role": "owner"},
        )

        assert response.status_code == 400

    def test_missing_fields(self, client: FlaskClient) -> None:
        response = client.post("/api/admin/users", json={})

        assert response.status_code == 400


class TestUsersUpdate:
    """Tests for PUT /api/admin/users/<id>."""

    def test_update_user(self, client: FlaskClient, make_user: Callable[..., User]) -> None:
        user = make_user("EMP001", "Budi")

        response = client.put(
            f"/api/admin/users/{user.id}", json={"name": "Budi Santoso", "role": "user"}
        )

        assert response.status_code == 200
        assert response.get_json()["data"]["name"] == "Budi Santoso"

    def test_promote_to_admin_allows_login(
        self, client: FlaskClient, make_user: Callable[..., User]
    ) -> None:
        user = make_user("EMP001", "Budi")

        response = client.put(
            f"/api/admin/users/{user.id}",
            json={"name": "Budi", "role": "admin", "password": "promoted1"},
        )
        assert response.status_code == 200

        login = client.post(
            "/api/auth/login", json={"employee_id": "EMP001", "password": "promoted1"}
        )
        assert login.status_code == 200

    def test_update_missing_user(self, client: FlaskClient) -> None:
        response = client.put("/api/admin/users/9999", json={"name": "X", "role": "user"})

        assert response.status_code == 404
        assert response.get_json()["code"] == "RECORD_NOT_FOUND"


class TestUsersDelete:
    """Tests for DELETE /api/admin/users/<id>."""

    def test_delete_user(self, client: FlaskClient, make_user: Callable[..., User]) -> None:
        user = make_user("EMP001", "Budi")

        response = client.delete(f"/api/admin/users/{user.id}")

        assert response.status_code == 200
        assert response.get_json()["message"] == "User deleted successfully"
        assert client.get("/api/admin/users").get_json()["data"] == []

    def test_delete_missing_user(self, client: FlaskClient) -> None:
        response = client.delete("/api/admin/users/9999")

        assert response.status_code == 404
