"""Shared fixtures: Flask app on mongomock, test client, seeded configuration."""
from datetime import datetime, timedelta, timezone

import mongomock
import pytest

from app import create_app
from utils.db import mongo


@pytest.fixture
def app(monkeypatch, tmp_path):
    """Create test app with an in-memory MongoDB."""
    monkeypatch.delenv("ATTENDANCE_SYNC_URL", raising=False)
    monkeypatch.delenv("BLOB_READ_WRITE_TOKEN", raising=False)

    app = create_app("testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")

    client = mongomock.MongoClient(tz_aware=True)
    monkeypatch.setattr(mongo, "cx", client, raising=False)
    monkeypatch.setattr(mongo, "db", client["AttendanceCheckinTest"], raising=False)

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def db(app):
    return mongo.db


@pytest.fixture
def insert_config(db):
    """Insert a raw configuration document, as an administrator would."""
    def _insert(kind="form", updated_at=None, **fields):
        now = updated_at or datetime.now(timezone.utc)
        doc = {"type": kind, "createdAt": now, "updatedAt": now, **fields}
        db.configs.insert_one(doc)
        return doc
    return _insert


@pytest.fixture
def form_config(insert_config):
    return insert_config(
        kind="form",
        apkVersion=[{"value": "2.0.0", "name": "2.0.0"}],
        presenceType=[{"value": "CI", "name": "Check In"}, {"value": "CO", "name": "Check Out"}],
        workType=[{"value": "wfo", "name": "WFO"}, {"value": "wfh", "name": "WFH"}],
        latitude="-6.2",
        longitude="106.8",
        updated_at=datetime.now(timezone.utc) - timedelta(minutes=1),
    )


@pytest.fixture
def valid_attendance():
    return {
        "apkVersion": "2.0.0",
        "employeeId": "EMP-1",
        "presenceType": "Check In",
        "latitude": "-6.2",
        "longitude": "106.8",
        "workType": "wfo",
        "information": "note",
    }
