"""Test configuration lookup, option normalization and GET /config."""
from datetime import datetime, timedelta, timezone

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from models.configuration import ConfigOption, Configuration
from services.config_service import get_latest_config
from utils.errors import NotFound, StorageError


def test_latest_by_update_time_wins(insert_config):
    t1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
    t2 = t1 + timedelta(days=1)
    insert_config(kind="form", updated_at=t2, apkVersion=[{"value": "2.0.0"}])
    insert_config(kind="form", updated_at=t1, apkVersion=[{"value": "1.0.0"}])

    config = get_latest_config()
    assert [o.value for o in config.apk_version] == ["2.0.0"]


def test_lookup_is_filtered_to_form_kind(insert_config):
    insert_config(kind="form", updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
                  workType=[{"value": "wfo", "name": "WFO"}])
    insert_config(kind="passKey", updated_at=datetime(2025, 1, 1, tzinfo=timezone.utc), passKey="1234")

    config = get_latest_config()
    assert config.kind == Configuration.FORM
    assert config.work_type == [ConfigOption("wfo", "WFO")]


def test_not_found_when_empty(app):
    with pytest.raises(NotFound):
        get_latest_config()


def test_not_found_when_only_pass_key_exists(insert_config):
    insert_config(kind="passKey", passKey="1234")
    with pytest.raises(NotFound):
        get_latest_config()


def unreachable_database(kind):
    raise ServerSelectionTimeoutError("no servers")


def test_database_error_is_storage_error(app, monkeypatch):
    monkeypatch.setattr(Configuration, "latest", staticmethod(unreachable_database))
    with pytest.raises(StorageError, match="no servers"):
        get_latest_config()


def test_option_fallback_between_value_and_name():
    options = ConfigOption.normalize_list([
        {"value": "CI", "name": "Check In"},
        {"name": "Check Out"},
        {"value": "wfh"},
        {},
        {"value": "", "name": ""},
        "2.0.0",
    ])
    assert [o.to_dict() for o in options] == [
        {"value": "CI", "name": "Check In"},
        {"value": "Check Out", "name": "Check Out"},
        {"value": "wfh", "name": "wfh"},
        {"value": "2.0.0", "name": "2.0.0"},
    ]


def test_upsert_updates_single_document_in_place(app, db):
    Configuration.upsert(Configuration.FORM, {"workType": [{"value": "wfo", "name": "WFO"}]})
    first = Configuration.latest(Configuration.FORM)

    Configuration.upsert(Configuration.FORM, {"workType": [{"name": "WFH"}], "latitude": "-6.2"})
    second = Configuration.latest(Configuration.FORM)

    assert db.configs.count_documents({"type": "form"}) == 1
    assert second.work_type == [ConfigOption("WFH", "WFH")]
    assert second.latitude == "-6.2"
    assert second.updated_at >= first.updated_at
    assert second.created_at == first.created_at


def test_upsert_rejects_unknown_kind(app):
    with pytest.raises(ValueError):
        Configuration.upsert("theme", {"color": "dark"})


# ----------------------------------------------------------
# HTTP
# ----------------------------------------------------------
def test_get_config_endpoint(client, form_config):
    response = client.get("/config")
    assert response.status_code == 200

    body = response.get_json()
    assert body["success"] is True
    data = body["data"]
    assert data["type"] == "form"
    assert data["presenceType"] == [
        {"value": "CI", "name": "Check In"},
        {"value": "CO", "name": "Check Out"},
    ]
    assert data["latitude"] == "-6.2"
    assert isinstance(data["_id"], str)


def test_get_config_never_exposes_pass_key(client, insert_config):
    insert_config(kind="form", passKey="ABCD", workType=[{"value": "wfo", "name": "WFO"}])
    data = client.get("/config").get_json()["data"]
    assert "passKey" not in data


def test_get_config_endpoint_not_found(client):
    response = client.get("/config")
    assert response.status_code == 404
    assert response.get_json() == {"success": False, "error": "Configuration not found"}


def test_get_config_endpoint_database_error(client, monkeypatch):
    monkeypatch.setattr(Configuration, "latest", staticmethod(unreachable_database))
    response = client.get("/config")
    assert response.status_code == 500
    assert response.get_json() == {"success": False, "error": "no servers"}
