"""Core functionality tests."""

import json
import sys

from grandcentral.core.types import (
    ActionDefinition,
    ActionField,
    ExecutionItem,
    FieldKind,
    WebhookSubscription,
)
from grandcentral.core.errors import GrandCentralApiError, GrandCentralError
from grandcentral.core.settings import DEFAULT_BASE_URL, DEFAULT_SOURCE, GrandCentralSettings
from grandcentral.core.context import InMemoryStaticData, JsonFileStaticData
from grandcentral.core.catalog import ACTIONS, RESOURCES, all_fields, default_operation, get_action
from grandcentral.utils.helpers import censor_token
from grandcentral.utils.validation import sanitize_for_logging, validate_url


def test_settings_defaults():
    settings = GrandCentralSettings()
    assert settings.api_key is None
    assert settings.base_url == DEFAULT_BASE_URL == "https://api.grandcentr.al/v1"
    assert settings.timeout == 60.0
    assert settings.source == DEFAULT_SOURCE


def test_settings_from_env():
    settings = GrandCentralSettings.from_env({
        "GRANDCENTRAL_API_KEY": "abc",
        "GRANDCENTRAL_BASE_URL": "http://localhost:9000/v1",
        "GRANDCENTRAL_TIMEOUT": "5",
    })
    assert settings.api_key == "abc"
    assert settings.base_url == "http://localhost:9000/v1"
    assert settings.timeout == 5.0


def test_settings_invalid_timeout_falls_back():
    settings = GrandCentralSettings.from_env({"GRANDCENTRAL_TIMEOUT": "soon"})
    assert settings.timeout == 60.0
    assert settings.api_key is None


def test_settings_with_api_key():
    settings = GrandCentralSettings(api_key="env-key")
    assert settings.with_api_key("") is settings
    override = settings.with_api_key("node-key")
    assert override.api_key == "node-key"
    assert settings.api_key == "env-key"


def test_censor_token():
    censored = censor_token("gc_live_secrettoken123")
    assert censored.startswith("gc_l")
    assert censored.endswith("n123")
    assert "secret" not in censored
    assert censor_token(None) == "(not set)"
    assert censor_token("short") == "*****"


def test_errors_to_dict():
    error = GrandCentralApiError("HTTP 401: nope", status=401, body="nope")
    assert isinstance(error, GrandCentralError)
    assert error.status == 401
    assert error.to_dict() == {
        "error": "API_ERROR",
        "message": "HTTP 401: nope",
        "details": {"status": 401, "body": "nope"},
    }


def test_execution_item_shape():
    item = ExecutionItem(json={"id": 1}, paired_item=0)
    assert item.to_dict() == {"json": {"id": 1}, "pairedItem": {"item": 0}}


def test_webhook_subscription():
    sub = WebhookSubscription(id=7, event="dealCreated", url="https://x/hook")
    assert sub.to_dict() == {"id": 7, "event": "dealCreated", "url": "https://x/hook"}


def test_action_field_input_types():
    assert ActionField("query").input_type() == ("STRING", {"default": ""})
    assert ActionField("limit", FieldKind.NUMBER, 50).input_type() == ("INT", {"default": 50})
    assert ActionField("allOrgs", FieldKind.BOOLEAN).input_type() == ("BOOLEAN", {})


def test_catalog_lookup():
    definition = get_action("users", "findUsers")
    assert isinstance(definition, ActionDefinition)
    assert definition.field_names == ("query", "type", "role")
    assert definition.get_field("query").kind is FieldKind.STRING
    assert definition.get_field("missing") is None


def test_catalog_size_and_defaults():
    assert len(RESOURCES) == 23
    assert len(ACTIONS) == 88
    assert default_operation("projects") == "changeProjectStage"
    assert default_operation("system") == "info"
    assert get_action("system", "info").fields == ()
    assert "orgId" in all_fields()


def test_all_fields_drops_conflicting_defaults():
    fields = all_fields()
    # declared with different defaults by different actions
    assert fields["recurring"] == ActionField("recurring")
    assert fields["isSequential"] == ActionField("isSequential", FieldKind.BOOLEAN)
    # declared as string and number
    assert fields["limit"] == ActionField("limit")
    assert fields["checklistId"] == ActionField("checklistId")


def test_catalog_rejects_mismatched_pair():
    try:
        get_action("users", "findDeals")
    except ValueError as e:
        assert "users/findDeals" in str(e)
    else:
        raise AssertionError("expected ValueError")


def test_in_memory_static_data():
    store = InMemoryStaticData()
    data = store.scope("workflow-1:trigger")
    assert data.get("webhookId") is None

    data.set("webhookId", 7)
    assert data.get("webhookId") == 7
    assert "webhookId" in data
    assert store.scope("workflow-2:trigger").get("webhookId") is None

    data.delete("webhookId")
    data.delete("webhookId")
    assert data.to_dict() == {}
    assert store.clear() == 0


def test_json_file_static_data_survives_reopen(tmp_path):
    path = tmp_path / "static" / "data.json"
    store = JsonFileStaticData(path)
    store.scope("sub-1").set("webhookId", "wh_1")

    reopened = JsonFileStaticData(path)
    assert reopened.get("sub-1", "webhookId") == "wh_1"
    assert json.loads(path.read_text()) == {"sub-1": {"webhookId": "wh_1"}}

    reopened.delete("sub-1", "webhookId")
    assert JsonFileStaticData(path).get_all("sub-1") == {}


def test_json_file_static_data_corrupt_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json")
    store = JsonFileStaticData(path)
    assert store.get("sub-1", "webhookId") is None
    store.set("sub-1", "webhookId", 3)
    assert store.get("sub-1", "webhookId") == 3


def test_validate_url():
    assert validate_url("https://example.com/hook") == (True, None)
    assert validate_url("")[0] is False
    assert validate_url("ftp://example.com")[0] is False
    assert validate_url("https://")[0] is False
    assert validate_url("not a url")[0] is False


def test_sanitize_for_logging():
    clean = sanitize_for_logging({"action": "createWebhook", "token": "abc", "nested": {"password": "x"}})
    assert clean["action"] == "createWebhook"
    assert clean["token"] == "[REDACTED]"
    assert clean["nested"]["password"] == "[REDACTED]"


def run_all():
    import tempfile
    from pathlib import Path

    tests = [
        test_settings_defaults,
        test_settings_from_env,
        test_settings_invalid_timeout_falls_back,
        test_settings_with_api_key,
        test_censor_token,
        test_errors_to_dict,
        test_execution_item_shape,
        test_webhook_subscription,
        test_action_field_input_types,
        test_catalog_lookup,
        test_catalog_size_and_defaults,
        test_all_fields_drops_conflicting_defaults,
        test_catalog_rejects_mismatched_pair,
        test_in_memory_static_data,
        test_validate_url,
        test_sanitize_for_logging,
    ]
    path_tests = [
        test_json_file_static_data_survives_reopen,
        test_json_file_static_data_corrupt_file,
    ]

    passed = 0
    failed = 0

    for test in tests + path_tests:
        try:
            if test in path_tests:
                with tempfile.TemporaryDirectory() as tmp:
                    test(Path(tmp))
            else:
                test()
            print(f"  PASS: {test.__name__}")
            passed += 1
        except Exception as e:
            print(f"  FAIL: {test.__name__} - {e}")
            failed += 1

    print(f"\n{passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    print("Running core tests...")
    success = run_all()
    sys.exit(0 if success else 1)
