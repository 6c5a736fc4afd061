import uuid

from sqlalchemy.exc import OperationalError

from backend.services import reel_service, user_store
from backend.services.auth_service import create_access_token
from conftest import signup


def test_ping(client):
    r = client.get("/api/ping")
    assert r.status_code == 200
    assert r.text == "API is working!"


def test_signup_sets_cookie_and_hides_hash(client):
    r = signup(client)
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Signup successful"
    assert body["user"]["email"] == "a@x.com"
    assert body["user"]["name"] == "Ana"
    assert body["user"]["img"] == ""
    assert "password" not in body["user"]
    assert "password_hash" not in body["user"]

    set_cookie = r.headers["set-cookie"]
    assert set_cookie.startswith("token=")
    assert "HttpOnly" in set_cookie
    assert client.cookies.get("token")


def test_signup_duplicate_email(client):
    assert signup(client).status_code == 201
    r = signup(client, name="Other", password="different")
    assert r.status_code == 400
    assert r.json() == {"message": "User already exists"}


def test_signup_missing_field(client):
    r = client.post("/api/signup", data={"email": "a@x.com", "password": "pw123"})
    assert r.status_code == 400
    assert "name" in r.json()["message"]


def test_signup_rejects_bad_email(client):
    r = signup(client, email="not-an-email")
    assert r.status_code == 400
    assert "email" in r.json()["message"]


def test_signup_with_avatar(client):
    r = signup(client, files={"img": ("me.PNG", b"\x89PNG avatar", "image/png")})
    assert r.status_code == 201
    img = r.json()["user"]["img"]
    assert img.endswith(".png")
    assert "me" not in img

    fetched = client.get(f"/uploads/{img}")
    assert fetched.status_code == 200
    assert fetched.content == b"\x89PNG avatar"


def test_login_success(client):
    signup(client)
    client.cookies.clear()

    r = client.post("/api/login", json={"email": "a@x.com", "password": "pw123"})
    assert r.status_code == 200
    assert r.json()["message"] == "Login successful"
    assert "password_hash" not in r.json()["user"]
    assert client.cookies.get("token")


def test_login_failures_are_indistinguishable(client):
    signup(client)
    client.cookies.clear()

    wrong_password = client.post("/api/login", json={"email": "a@x.com", "password": "nope"})
    unknown_email = client.post("/api/login", json={"email": "b@x.com", "password": "pw123"})

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"message": "Invalid email or password"}
    assert "set-cookie" not in wrong_password.headers
    assert "set-cookie" not in unknown_email.headers


def test_login_requires_both_fields(client):
    r = client.post("/api/login", json={"email": "a@x.com", "password": ""})
    assert r.status_code == 400
    r = client.post("/api/login", json={"password": "pw123"})
    assert r.status_code == 400
    assert "message" in r.json()


def test_profile_requires_session(client):
    r = client.get("/api/profile")
    assert r.status_code == 401
    assert r.json() == {"message": "Unauthorized"}


def test_profile_rejects_tampered_cookie(client):
    client.cookies.set("token", "not.a.jwt")
    r = client.get("/api/profile")
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid token"}


def test_profile_returns_user_without_hash(client):
    created = signup(client).json()["user"]

    r = client.get("/api/profile")
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == created["id"]
    assert body["email"] == "a@x.com"
    assert "password" not in body
    assert "password_hash" not in body


def test_signup_logout_profile_scenario(client):
    assert signup(client).status_code == 201
    assert client.get("/api/profile").status_code == 200

    r = client.get("/api/logout")
    assert r.status_code == 200
    assert r.json() == {"message": "Logged out"}
    assert "token=" in r.headers["set-cookie"]
    assert not client.cookies.get("token")

    assert client.get("/api/profile").status_code == 401


def test_signup_rejects_password_over_72_bytes(client):
    r = signup(client, password="p" * 73)
    assert r.status_code == 400
    assert "password" in r.json()["message"]
    assert "set-cookie" not in r.headers


def test_profile_for_unknown_user_is_404(client, settings):
    client.cookies.set("token", create_access_token(uuid.uuid4(), settings))
    r = client.get("/api/profile")
    assert r.status_code == 404
    assert r.json() == {"message": "User not found"}


def test_database_failure_returns_generic_500(client, monkeypatch):
    async def broken_list(db):
        raise OperationalError("SELECT reels", {}, Exception("connection refused at 10.0.0.5"))

    monkeypatch.setattr(reel_service, "list_reels", broken_list)
    r = client.get("/api/reels")
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error"}


def test_avatar_removed_when_insert_hits_unique_index(client, settings, monkeypatch):
    assert signup(client).status_code == 201
    client.cookies.clear()

    # a racing signup passes the lookup; the unique index stops the insert
    async def no_user(db, email):
        return None

    monkeypatch.setattr(user_store, "get_user_by_email", no_user)
    r = signup(client, files={"img": ("me.png", b"avatar", "image/png")})
    assert r.status_code == 400
    assert r.json() == {"message": "User already exists"}
    assert list(settings.upload_dir.iterdir()) == []
