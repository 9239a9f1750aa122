import base64
from datetime import date

import pytest

import musicals.db as db_module
from musicals.models import Musical
from musicals.server import create_app

ADMIN_USER = "admin"
ADMIN_PASSWORD = "s3cret"


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "musicals.db"


@pytest.fixture()
def conn(db_path):
    conn = db_module.connect(db_path)
    yield conn
    conn.close()


@pytest.fixture()
def cfg(db_path):
    return {
        "site": {"title": "Test Musicals"},
        "database": {"path": str(db_path)},
        "secrets": {"admin_username": ADMIN_USER, "admin_password": ADMIN_PASSWORD},
    }


@pytest.fixture()
def client(cfg):
    app = create_app(cfg)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture()
def auth_headers():
    token = base64.b64encode(f"{ADMIN_USER}:{ADMIN_PASSWORD}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture()
def make_musical():
    def _make(**overrides) -> Musical:
        fields = {
            "title": "Wicked",
            "venue_name": "Apollo Victoria Theatre",
            "type": "West End",
            "start_date": date(2025, 1, 1),
            "end_date": date(2025, 12, 31),
        }
        fields.update(overrides)
        return Musical(**fields)
    return _make
