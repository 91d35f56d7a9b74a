# tests/conftest.py
import base64
import secrets
import sys
from pathlib import Path

import bcrypt
import pytest
from fastapi.testclient import TestClient

# --- make 'student_api' importable from the repo root ---
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from student_api.core.config import Settings  # noqa: E402

ADMIN_USER = "admin"
ADMIN_PASSWORD = "admin123"


def _ephemeral_secret() -> str:
    return base64.b64encode(secrets.token_bytes(32)).decode()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings for one test: fresh SQLite file, fresh signing key, one known user."""
    password_hash = bcrypt.hashpw(ADMIN_PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()
    return Settings(
        db_url=f"sqlite+aiosqlite:///{(tmp_path / 'test.sqlite3').as_posix()}",
        jwt_secret=_ephemeral_secret(),
        jwt_expiration_ms=60_000,
        bootstrap_username=ADMIN_USER,
        bootstrap_password_hash=password_hash,
    )


@pytest.fixture
def client(settings):
    from student_api.main import create_app

    # 'with' runs the lifespan: tables and bootstrap user exist before the first request
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def auth_headers(client) -> dict:
    r = client.post("/api/auth/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


class FakeClock:
    """Manually advanced replacement for time.time_ns."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now_ns = start_ms * 1_000_000

    def __call__(self) -> int:
        return self.now_ns

    def advance_ms(self, ms: int) -> None:
        self.now_ns += ms * 1_000_000

    def advance_ns(self, ns: int) -> None:
        self.now_ns += ns


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
