from athletic_balance.db.session import SessionLocal
from athletic_balance.services import auth as auth_service


def test_signup_sets_cookie_and_returns_user(client, credentials):
    response = client.post("/api/auth/signup", json={**credentials, "fullName": "Sam Lee"})
    assert response.status_code == 201
    user = response.json()["user"]
    assert user["email"] == credentials["email"]
    assert user["profile"]["full_name"] == "Sam Lee"
    assert "password_hash" not in user
    cookie = response.headers["set-cookie"].lower()
    assert "httponly" in cookie
    assert "samesite=lax" in cookie
    assert "max-age=604800" in cookie


def test_duplicate_signup_conflicts(client, credentials, auth_cookie):
    response = client.post("/api/auth/signup", json=credentials)
    assert response.status_code == 409
    assert response.json() == {"error": "User already exists"}


def test_signin_requires_both_fields(client):
    response = client.post("/api/auth/signin", json={"email": "someone@example.com"})
    assert response.status_code == 400


def test_bad_password_is_unauthorized(client, credentials, auth_cookie):
    response = client.post(
        "/api/auth/signin", json={"email": credentials["email"], "password": "wrong-password"}
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_signin_user_signout_flow(client, credentials, auth_cookie):
    client.cookies.clear()
    signin = client.post("/api/auth/signin", json=credentials)
    assert signin.status_code == 200
    token = signin.cookies.get("auth_token")

    me = client.get("/api/auth/user")
    assert me.status_code == 200
    assert me.json()["user"]["email"] == credentials["email"]

    signout = client.post("/api/auth/signout")
    assert signout.json() == {"success": True}

    after = client.get("/api/auth/user")
    assert after.status_code == 401

    client.cookies.set("auth_token", token)
    reused = client.get("/api/auth/user")
    assert reused.status_code == 401
    assert reused.json() == {"error": "Invalid or expired token"}


def test_garbage_token_is_rejected(client):
    client.cookies.set("auth_token", "not-a-jwt")
    response = client.get("/api/auth/user")
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_cleanup_expired_sessions_counts_rows(credentials):
    db = SessionLocal()
    try:
        result = auth_service.sign_up(db, credentials["email"], credentials["password"])
        assert result.ok
        for session in result.user.auth_sessions:
            session.expires_at = session.expires_at.replace(year=2000)
        db.commit()
        assert auth_service.cleanup_expired_sessions(db) >= 1
        assert auth_service.get_user_from_token(db, result.token).error == "Invalid or expired token"
    finally:
        db.close()
