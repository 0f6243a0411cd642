"""Test the passkey gate service and POST /validate-key."""
import pytest

from services.access_gate import validate_pass_key
from utils.errors import ConfigurationMissing, StorageError, Unauthorized, ValidationError


@pytest.fixture
def stored_pass_key(insert_config):
    insert_config(kind="passKey", passKey="1234")


def test_exact_match_grants(stored_pass_key):
    assert validate_pass_key("1234") == {"granted": True}


@pytest.mark.parametrize("candidate", ["1235", "123", "12345", " 1234"])
def test_mismatch_is_unauthorized(stored_pass_key, candidate):
    with pytest.raises(Unauthorized):
        validate_pass_key(candidate)


def test_comparison_is_case_sensitive(insert_config):
    insert_config(kind="passKey", passKey="ABCD")
    with pytest.raises(Unauthorized):
        validate_pass_key("abcd")


@pytest.mark.parametrize("candidate", ["", None])
def test_empty_candidate_is_validation_error(stored_pass_key, candidate):
    with pytest.raises(ValidationError):
        validate_pass_key(candidate)


def test_non_string_candidate_is_unauthorized(stored_pass_key):
    with pytest.raises(Unauthorized):
        validate_pass_key(1234)


def test_numeric_stored_pass_key_compares_as_text(insert_config):
    insert_config(kind="passKey", passKey=1234)
    assert validate_pass_key("1234") == {"granted": True}
    with pytest.raises(Unauthorized):
        validate_pass_key("1235")


def test_no_configuration_fails_closed(app):
    with pytest.raises(ConfigurationMissing):
        validate_pass_key("1234")


def test_configuration_without_pass_key_fails_closed(form_config):
    with pytest.raises(ConfigurationMissing):
        validate_pass_key("1234")


def test_pass_key_on_form_document_is_accepted(insert_config):
    insert_config(kind="form", passKey="ABCD", presenceType=[{"value": "CI", "name": "Check In"}])
    assert validate_pass_key("ABCD") == {"granted": True}


def test_dedicated_pass_key_document_wins(insert_config):
    insert_config(kind="form", passKey="OLD")
    insert_config(kind="passKey", passKey="NEW")
    assert validate_pass_key("NEW") == {"granted": True}
    with pytest.raises(Unauthorized):
        validate_pass_key("OLD")


def test_database_error_is_storage_error(app, monkeypatch):
    from pymongo.errors import ServerSelectionTimeoutError
    from models.configuration import Configuration

    def boom(kind):
        raise ServerSelectionTimeoutError("no servers")

    monkeypatch.setattr(Configuration, "latest", staticmethod(boom))
    with pytest.raises(StorageError):
        validate_pass_key("1234")


# ----------------------------------------------------------
# HTTP
# ----------------------------------------------------------
def test_validate_key_endpoint_success(client, stored_pass_key):
    response = client.post("/validate-key", json={"passKey": "1234"})
    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "PassKey Validated"}


def test_validate_key_endpoint_mismatch(client, stored_pass_key):
    response = client.post("/validate-key", json={"passKey": "1235"})
    assert response.status_code == 401
    assert response.get_json() == {"success": False, "error": "Invalid PassKey"}


def test_validate_key_endpoint_missing_key(client, stored_pass_key):
    response = client.post("/validate-key", json={})
    assert response.status_code == 400
    assert response.get_json()["error"] == "PassKey is required"


def test_validate_key_endpoint_without_body(client, stored_pass_key):
    response = client.post("/validate-key", data="not json")
    assert response.status_code == 400


def test_validate_key_endpoint_not_configured(client):
    response = client.post("/validate-key", json={"passKey": "1234"})
    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_validate_key_endpoint_numeric_candidate(client, stored_pass_key):
    response = client.post("/validate-key", json={"passKey": 1234})
    assert response.status_code == 401
    assert response.get_json() == {"success": False, "error": "Invalid PassKey"}
