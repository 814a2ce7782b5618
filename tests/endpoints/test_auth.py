from fastapi.testclient import TestClient

from app.core.constants import RoleEnum
from app.core.security import TokenService
from tests.helpers.asserts import api_call, assert_error, assert_shape
from app.schemas.user import User


SIGNUP = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "password": "engines42",
    "confirm_password": "engines42",
    "role": "student",
}


def test_signup_then_signin(client: TestClient):
    r = api_call(client, "POST", "/api/auth/signup", json=SIGNUP)
    assert r.status_code == 201
    data = r.json()["data"]
    assert_shape(data, User)
    assert data["email"] == "ada@example.com"
    assert data["role"] == "student"
    assert data["enrolled_courses"] == []
    assert "hashed_password" not in data

    r = api_call(client, "POST", "/api/auth/signin", json={"email": "ada@example.com", "password": "engines42"})
    body = r.json()["data"]
    assert body["token"]
    assert body["token_type"] == "bearer"
    assert body["user"]["name"] == "Ada Lovelace"


def test_signup_password_mismatch(client: TestClient):
    r = client.post("/api/auth/signup", json={**SIGNUP, "confirm_password": "different"})
    assert_error(r, 400, "BAD_REQUEST", "Passwords do not match")


def test_signup_duplicate_email(client: TestClient):
    api_call(client, "POST", "/api/auth/signup", json=SIGNUP)
    r = client.post("/api/auth/signup", json=SIGNUP)
    assert_error(r, 409, "CONFLICT", "Email is already taken")


def test_signup_rejects_unknown_role(client: TestClient):
    r = client.post("/api/auth/signup", json={**SIGNUP, "role": "admin"})
    assert_error(r, 422, "VALIDATION_ERROR")


def test_signup_validation_errors_do_not_echo_input(client: TestClient):
    r = client.post("/api/auth/signup", json={**SIGNUP, "email": "not-an-email"})
    assert r.status_code == 422
    assert "engines42" not in r.text


def test_signin_wrong_password(client: TestClient, user_factory):
    user = user_factory(email="grace@example.com")
    r = client.post("/api/auth/signin", json={"email": user.email, "password": "wrong-password"})
    assert_error(r, 401, "UNAUTHORIZED", "Invalid email or password")


def test_signin_unknown_email(client: TestClient):
    r = client.post("/api/auth/signin", json={"email": "nobody@example.com", "password": "whatever"})
    assert_error(r, 401, "UNAUTHORIZED")


def test_profile_requires_token(client: TestClient):
    r = client.get("/api/auth/profile")
    assert_error(r, 401, "UNAUTHORIZED", "Authentication required")


def test_profile_with_garbage_token(client: TestClient):
    r = client.get("/api/auth/profile", headers={"Authorization": "Bearer not.a.jwt"})
    assert_error(r, 401, "UNAUTHORIZED", "Invalid or expired token")


def test_profile_with_expired_token(client: TestClient, student):
    expired = TokenService("test-secret-key", expire_minutes=-1).issue({"id": student.id})
    r = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {expired}"})
    assert_error(r, 401, "UNAUTHORIZED", "Invalid or expired token")


def test_profile_with_token_signed_by_other_key(client: TestClient, student):
    forged = TokenService("some-other-key").issue({"id": student.id, "role": "instructor"})
    r = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {forged}"})
    assert_error(r, 401, "UNAUTHORIZED", "Invalid or expired token")


def test_profile_with_token_missing_id(client: TestClient, app):
    token = app.state.context.token_service.issue({"role": "student", "name": "x"})
    r = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert_error(r, 401, "UNAUTHORIZED", "Invalid token payload")


def test_profile_for_deleted_subject(client: TestClient, app):
    token = app.state.context.token_service.issue({"id": 99999, "role": "student"})
    r = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert_error(r, 404, "NOT_FOUND", "User not found")


def test_read_and_update_profile(client: TestClient, student, auth_headers):
    headers = auth_headers(student)
    r = api_call(client, "GET", "/api/auth/profile", headers=headers)
    assert r.json()["data"]["id"] == student.id

    r = api_call(client, "PUT", "/api/auth/profile", headers=headers, json={"name": "Renamed", "bio": "Hello"})
    data = r.json()["data"]
    assert data["name"] == "Renamed"
    assert data["bio"] == "Hello"


def test_update_profile_email_taken(client: TestClient, user_factory, auth_headers):
    first = user_factory(email="first@example.com")
    user_factory(email="second@example.com")
    r = client.put("/api/auth/profile", headers=auth_headers(first), json={"email": "second@example.com"})
    assert_error(r, 409, "CONFLICT")


def test_update_profile_requires_a_field(client: TestClient, student, auth_headers):
    r = client.put("/api/auth/profile", headers=auth_headers(student), json={})
    assert r.status_code == 422


def test_public_user_lookup(client: TestClient, student, user_factory, auth_headers):
    other = user_factory(role=RoleEnum.INSTRUCTOR)
    r = api_call(client, "GET", f"/api/auth/user/{other.id}", headers=auth_headers(student))
    assert r.json()["data"]["role"] == "instructor"

    r = client.get("/api/auth/user/424242", headers=auth_headers(student))
    assert_error(r, 404, "NOT_FOUND", "User not found")


def test_profile_picture_upload(client: TestClient, student, auth_headers, storage):
    r = api_call(
        client, "PUT", "/api/auth/profile/picture",
        headers=auth_headers(student),
        files={"profile_pic": ("me.png", b"\x89PNG fake", "image/png")},
    )
    assert r.json()["data"]["profile_pic"].startswith("https://storage.test/profile_pics/")
    assert len(storage.uploads) == 1


def test_profile_picture_rejects_non_image(client: TestClient, student, auth_headers, storage):
    r = client.put(
        "/api/auth/profile/picture",
        headers=auth_headers(student),
        files={"profile_pic": ("notes.pdf", b"%PDF", "application/pdf")},
    )
    assert_error(r, 400, "BAD_REQUEST")
    assert storage.uploads == []


def test_profile_picture_storage_failure(client: TestClient, student, auth_headers, storage):
    storage.fail = True
    r = client.put(
        "/api/auth/profile/picture",
        headers=auth_headers(student),
        files={"profile_pic": ("me.jpg", b"jpeg bytes", "image/jpeg")},
    )
    assert_error(r, 502, "UPSTREAM_FAILURE")


def test_health(client: TestClient):
    r = api_call(client, "GET", "/health")
    assert r.json() == {"status": "ok"}
    assert r.headers.get("X-Request-ID")
