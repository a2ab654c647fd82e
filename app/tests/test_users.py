"""
Tests for profile and user administration endpoints.
"""


class TestProfile:

    def test_get_profile(self, staff_client):
        user = staff_client.get("/api/users/profile").json()["user"]

        assert user["username"] == "staff"
        assert user["role"] == "staff"
        assert "password" not in user

    def test_update_profile(self, staff_client):
        response = staff_client.put("/api/users/profile", json={"full_name": "Sam Staff", "email": "sam@x.com"})

        assert response.status_code == 200
        assert response.json()["message"] == "Profile updated successfully"
        assert staff_client.get("/api/users/profile").json()["user"]["full_name"] == "Sam Staff"

    def test_change_password(self, staff_client, client):
        response = staff_client.put(
            "/api/users/change-password",
            json={"current_password": "secret-pass", "new_password": "new-pass"},
        )

        assert response.status_code == 200
        assert client.post("/api/auth/login", json={"username": "staff", "password": "secret-pass"}).status_code == 401
        assert client.post("/api/auth/login", json={"username": "staff", "password": "new-pass"}).status_code == 200

    def test_change_password_with_wrong_current(self, staff_client):
        response = staff_client.put(
            "/api/users/change-password",
            json={"current_password": "nope", "new_password": "new-pass"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Current password is incorrect"

    def test_change_password_requires_both(self, staff_client):
        response = staff_client.put("/api/users/change-password", json={"new_password": "new-pass"})
        assert response.status_code == 400


class TestUserAdministration:

    def test_create_staff_gets_default_permissions(self, admin_client):
        response = admin_client.post("/api/users", json={"username": "sam", "password": "pw", "role": "staff"})

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["role"] == "staff"
        assert user["permissions"] == ["manage_schedules", "manage_students", "view_dashboard"]

    def test_create_staff_with_explicit_permissions(self, admin_client):
        response = admin_client.post(
            "/api/users",
            json={"username": "sam", "password": "pw", "role": "staff", "permissions": ["manage_seats"]},
        )

        assert response.json()["user"]["permissions"] == ["manage_seats"]

    def test_created_user_can_log_in(self, admin_client, client):
        admin_client.post("/api/users", json={"username": "sam", "password": "pw", "role": "admin"})

        response = client.post("/api/auth/login", json={"username": "sam", "password": "pw"})

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "admin"

    def test_create_rejects_bad_input(self, admin_client):
        missing = admin_client.post("/api/users", json={"username": "sam", "role": "staff"})
        bad_role = admin_client.post("/api/users", json={"username": "sam", "password": "pw", "role": "owner"})
        bad_permission = admin_client.post(
            "/api/users", json={"username": "sam", "password": "pw", "role": "staff", "permissions": ["fly"]}
        )

        assert missing.status_code == 400
        assert bad_role.json()["detail"] == "Role must be 'admin' or 'staff'"
        assert bad_permission.status_code == 400

    def test_duplicate_username(self, admin_client):
        admin_client.post("/api/users", json={"username": "sam", "password": "pw", "role": "staff"})

        response = admin_client.post("/api/users", json={"username": "sam", "password": "pw2", "role": "staff"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Username already exists"

    def test_list_users(self, admin_client, make_user):
        make_user("zed")

        usernames = [u["username"] for u in admin_client.get("/api/users").json()["users"]]

        assert usernames == ["admin", "zed"]

    def test_delete_user(self, admin_client, make_user):
        user = make_user("zed")

        response = admin_client.delete(f"/api/users/{user.id}")

        assert response.status_code == 200
        assert [u["username"] for u in admin_client.get("/api/users").json()["users"]] == ["admin"]
        assert admin_client.delete(f"/api/users/{user.id}").status_code == 404

    def test_cannot_delete_self(self, admin_client):
        admin_id = admin_client.get("/api/users/profile").json()["user"]["id"]

        response = admin_client.delete(f"/api/users/{admin_id}")

        assert response.status_code == 400
        assert response.json()["detail"] == "You cannot delete your own account"
