from datetime import datetime, timezone

import jobtracker.main as main_mod
import jobtracker.routers.auth as auth_mod


class _ConnOK:
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, _query):
        return 1


class _EngineOK:
    def connect(self):
        return _ConnOK()


class _EngineFail:
    def connect(self):
        raise RuntimeError("db down")


def test_health_live(client):
    resp = client.get("/health/live")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_health_ready_ok(monkeypatch, client):
    monkeypatch.setattr(main_mod, "engine", _EngineOK())
    resp = client.get("/health/ready")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ready"


def test_health_ready_not_ready(monkeypatch, client):
    monkeypatch.setattr(main_mod, "engine", _EngineFail())
    resp = client.get("/health/ready")
    assert resp.status_code == 503
    assert resp.json()["status"] == "not_ready"


def test_root_route(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Job Tracker API" in resp.json()["message"]


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/no-such-route")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_malformed_json_is_400(client):
    resp = client.post("/companies", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_validation_message_formatting():
    assert main_mod._validation_message({"loc": ("body", "username"), "type": "missing"}) == "username is required"
    assert main_mod._validation_message(
        {"loc": ("body",), "type": "value_error", "msg": "Value error, Username and password are required"}
    ) == "Username and password are required"


def test_unexpected_exception_is_sanitized_500(monkeypatch, stub_user):
    from fastapi.testclient import TestClient

    from jobtracker.database import get_db
    from jobtracker.dependencies import get_current_user

    def _boom(db, user_id):
        raise RuntimeError("secret internals")

    monkeypatch.setattr("jobtracker.routers.companies.get_stats", _boom)
    main_mod.app.dependency_overrides[get_db] = lambda: object()
    main_mod.app.dependency_overrides[get_current_user] = lambda: stub_user
    try:
        resp = TestClient(main_mod.app, raise_server_exceptions=False).get("/companies/stats")
    finally:
        main_mod.app.dependency_overrides.clear()
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_session_cookie_is_httponly(monkeypatch, client):
    class _User:
        id = "u1"
        username = "alice"
        email = "alice@example.com"
        password_hash = "hashed"
        created_at = None

    class _Session:
        id = "sid-1"
        expires_at = datetime(2099, 1, 1, tzinfo=timezone.utc)

    monkeypatch.setattr(auth_mod, "get_by_username", lambda db, username: _User())
    monkeypatch.setattr(auth_mod, "verify_password", lambda plain, hashed: True)
    monkeypatch.setattr(auth_mod, "create_session", lambda db, uid: _Session())
    resp = client.post("/auth/login", json={"username": "alice", "password": "secret123"})
    assert resp.status_code == 200
    set_cookie = resp.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "samesite=lax" in set_cookie


def test_startup_production_placeholder_secret_raises(monkeypatch):
    monkeypatch.setattr(main_mod.settings, "app_env", "production")
    monkeypatch.setattr(main_mod.settings, "secret_key", main_mod.PLACEHOLDER_SECRET)
    try:
        main_mod.on_startup()
        assert False, "expected runtime error"
    except RuntimeError:
        pass


def test_startup_nonprod_calls_init_db(monkeypatch):
    monkeypatch.setattr(main_mod.settings, "app_env", "development")
    monkeypatch.setattr(main_mod.settings, "secret_key", "dev-key")
    called = {"ok": False}
    monkeypatch.setattr(main_mod, "init_db", lambda: called.update(ok=True))
    main_mod.on_startup()
    assert called["ok"] is True
