from fastapi.testclient import TestClient

from core.errors import ServerFault
from database import get_db
from main import app
from models.user import User


SIGNUP = {"username": "alice", "email": "alice@x.com", "password": "secret1"}


class TestSignup:
    def test_signup_then_signin(self, client):
        response = client.post("/api/auth/signup", json=SIGNUP)
        assert response.status_code == 201
        data = response.json()
        assert data["token"]
        assert data["username"] == "alice"
        assert data["role"] == "user"
        assert "password" not in data and "password_hash" not in data

        response = client.post("/api/auth/signin", json={"email": "alice@x.com", "password": "secret1"})
        assert response.status_code == 200
        assert response.json()["username"] == "alice"
        assert response.json()["token"]

    def test_password_is_stored_hashed(self, client, db):
        client.post("/api/auth/signup", json=SIGNUP)
        user = db.query(User).filter(User.username == "alice").one()
        assert user.password_hash != "secret1"

    def test_email_is_normalised(self, client):
        body = dict(SIGNUP, email="  Alice@X.com ")
        response = client.post("/api/auth/signup", json=body)
        assert response.status_code == 201
        assert response.json()["email"] == "alice@x.com"

    def test_role_cannot_be_chosen(self, client):
        response = client.post("/api/auth/signup", json=dict(SIGNUP, role="admin"))
        assert response.status_code == 201
        assert response.json()["role"] == "user"

    def test_duplicate_email_conflicts(self, client, db):
        client.post("/api/auth/signup", json=SIGNUP)
        response = client.post(
            "/api/auth/signup",
            json={"username": "alice2", "email": "alice@x.com", "password": "secret1"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists"
        assert db.query(User).count() == 1

    def test_duplicate_username_conflicts(self, client, db):
        client.post("/api/auth/signup", json=SIGNUP)
        response = client.post(
            "/api/auth/signup",
            json={"username": "alice", "email": "other@x.com", "password": "secret1"},
        )
        assert response.status_code == 400
        assert db.query(User).count() == 1

    def test_validation_lists_every_bad_field(self, client, db):
        response = client.post(
            "/api/auth/signup",
            json={"username": "", "email": "not-an-email", "password": "123"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Validation failed"
        assert {e["field"] for e in body["errors"]} == {"username", "email", "password"}
        assert db.query(User).count() == 0

    def test_missing_fields(self, client):
        response = client.post("/api/auth/signup", json={})
        assert response.status_code == 400
        assert {e["field"] for e in response.json()["errors"]} == {"username", "email", "password"}


class TestSignin:
    def test_wrong_password(self, client, alice):
        response = client.post("/api/auth/signin", json={"email": "alice@x.com", "password": "nope-nope"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_unknown_email_same_message(self, client):
        response = client.post("/api/auth/signin", json={"email": "ghost@x.com", "password": "secret1"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_malformed_input(self, client):
        response = client.post("/api/auth/signin", json={"email": "nope"})
        assert response.status_code == 400
        assert {e["field"] for e in response.json()["errors"]} == {"email", "password"}

    def test_response_carries_identity(self, client, alice):
        response = client.post("/api/auth/signin", json={"email": "alice@x.com", "password": "secret1"})
        data = response.json()
        assert data["id"] == alice.id
        assert data["role"] == "user"


class TestMe:
    def test_requires_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_rejects_bad_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_returns_profile(self, client, alice, alice_headers):
        response = client.get("/api/auth/me", headers=alice_headers)
        assert response.status_code == 200
        assert response.json() == {"id": alice.id, "username": "alice", "email": "alice@x.com", "role": "user"}

    def test_deleted_user_token_rejected(self, client, db, alice, alice_headers):
        db.delete(alice)
        db.commit()
        response = client.get("/api/auth/me", headers=alice_headers)
        assert response.status_code == 401


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_unexpected_error_is_a_server_fault():
    def broken_db():
        raise RuntimeError("connection pool exploded")
        yield

    app.dependency_overrides[get_db] = broken_db
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.get("/api/blogs")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": ServerFault().detail}
    assert "exploded" not in response.text
