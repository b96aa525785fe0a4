"""
Tests for login, the session profile and admin-only user management.
"""

from datetime import timedelta

from hrm import models, security


class TestLogin:
    def test_returns_token_with_claims(self, client, admin_user):
        response = client.post("/api/user/login", json={"email": "Alice@Example.com", "password": "secret123"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["data"]["tokenType"] == "bearer"
        claims = security.decode_access_token(body["data"]["token"])
        assert claims["userId"] == admin_user["id"]
        assert claims["email"] == "alice@example.com"
        assert claims["role"] == "admin"
        assert claims["name"] == "Alice Admin"

    def test_wrong_password(self, client, admin_user):
        response = client.post("/api/user/login", json={"email": "alice@example.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid credentials"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_unknown_email(self, client):
        response = client.post("/api/user/login", json={"email": "ghost@example.com", "password": "secret123"})

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "User not found"

    def test_malformed_body(self, client):
        response = client.post("/api/user/login", json={"email": "not-an-email"})

        assert response.status_code == 400
        fields = {d["field"] for d in response.json()["error"]["details"]}
        assert fields == {"email", "password"}


class TestSession:
    def test_profile_reflects_token(self, client, hr_headers, hr_user):
        response = client.get("/api/user/profile", headers=hr_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {
            "userId": hr_user["id"],
            "email": "harry@example.com",
            "role": "hr",
            "name": "Harry Hr",
        }

    def test_missing_token(self, client):
        response = client.get("/api/user/profile")

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "No token provided"

    def test_garbage_token(self, client):
        response = client.get("/api/user/profile", headers={"Authorization": "Bearer not.a.jwt"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid token"

    def test_expired_token(self, client, session_factory, admin_user):
        with session_factory() as db:
            user = db.get(models.User, admin_user["id"])
            token = security.create_access_token(user, expires_delta=timedelta(minutes=-5))

        response = client.get("/api/user/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_health_is_public(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "ok"


class TestUserManagement:
    NEW_USER = {"name": "Nina New", "email": "nina@example.com", "phone": "5550001111", "password": "pass1234"}

    def test_admin_creates_user(self, client, auth_headers):
        response = client.post("/api/user/create-user", json=self.NEW_USER, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["email"] == "nina@example.com"
        assert data["role"] == "hr"
        assert "password" not in data
        assert "hashedPassword" not in data

    def test_created_user_can_log_in(self, client, auth_headers):
        client.post("/api/user/create-user", json=self.NEW_USER, headers=auth_headers)

        response = client.post("/api/user/login", json={"email": "nina@example.com", "password": "pass1234"})

        assert response.status_code == 200

    def test_password_is_hashed(self, client, auth_headers, session_factory):
        client.post("/api/user/create-user", json=self.NEW_USER, headers=auth_headers)

        with session_factory() as db:
            stored = db.query(models.User).filter(models.User.email == "nina@example.com").one()
            assert stored.hashed_password != "pass1234"
            assert security.verify_password("pass1234", stored.hashed_password)

    def test_hr_user_is_forbidden(self, client, hr_headers):
        response = client.post("/api/user/create-user", json=self.NEW_USER, headers=hr_headers)

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "forbidden"

    def test_duplicate_email(self, client, auth_headers):
        response = client.post(
            "/api/user/create-user", json=dict(self.NEW_USER, email="ALICE@example.com"), headers=auth_headers
        )

        assert response.status_code == 409
        assert response.json()["error"]["message"] == "User already exists"

    def test_list_users(self, client, auth_headers, hr_user):
        body = client.get("/api/user/get-user", headers=auth_headers).json()

        assert body["total"] == 2
        assert [u["name"] for u in body["data"]] == ["Alice Admin", "Harry Hr"]

        searched = client.get("/api/user/get-user", params={"search": "harry"}, headers=auth_headers).json()
        assert [u["email"] for u in searched["data"]] == ["harry@example.com"]

    def test_update_user(self, client, auth_headers, hr_user):
        payload = {"name": "Harry Hart", "email": "harry.hart@example.com", "phone": "5552223333", "role": "admin"}

        response = client.put(f"/api/user/update-user/{hr_user['id']}", json=payload, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Harry Hart"
        assert data["role"] == "admin"

    def test_update_to_taken_email(self, client, auth_headers, hr_user):
        payload = {"name": "Harry Hr", "email": "alice@example.com", "phone": "5552223333", "role": "hr"}

        response = client.put(f"/api/user/update-user/{hr_user['id']}", json=payload, headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["error"]["message"] == "Email already exists"

    def test_update_unknown_user(self, client, auth_headers):
        payload = {"name": "Ghost", "email": "ghost@example.com", "role": "hr"}

        assert client.put("/api/user/update-user/999", json=payload, headers=auth_headers).status_code == 404

    def test_delete_user(self, client, auth_headers, hr_user, session_factory):
        response = client.delete(f"/api/user/delete-user/{hr_user['id']}", headers=auth_headers)

        assert response.status_code == 200
        with session_factory() as db:
            assert db.get(models.User, hr_user["id"]) is None

    def test_hr_user_cannot_delete(self, client, hr_headers, admin_user):
        response = client.delete(f"/api/user/delete-user/{admin_user['id']}", headers=hr_headers)

        assert response.status_code == 403

    def test_unknown_role(self, client, auth_headers):
        response = client.post(
            "/api/user/create-user", json=dict(self.NEW_USER, role="superuser"), headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["details"][0]["field"] == "role"
