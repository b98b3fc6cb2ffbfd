"""Webhook lifecycle tests."""

import asyncio
import sys

from grandcentral.core.context import InMemoryStaticData
from grandcentral.core.dispatcher import ActionDispatcher
from grandcentral.core.errors import GrandCentralApiError, GrandCentralConnectionError
from grandcentral.core.lifecycle import WebhookLifecycleManager
from grandcentral.core.types import SubscriptionState

from fakes import CALLBACK_URL, RecordingClient


def make_manager(responses=None, event="dealCreated", url=CALLBACK_URL):
    client = RecordingClient(responses)
    store = InMemoryStaticData()
    static_data = store.scope("workflow-1:trigger")
    manager = WebhookLifecycleManager(
        ActionDispatcher(client),
        static_data,
        event=event,
        callback_url=url,
        source="n8n",
    )
    return manager, client, static_data


def test_check_exists_adopts_matching_webhook():
    manager, client, static_data = make_manager([{"data": [
        {"id": 3, "url": "https://other.example.com/hook", "triggers": ["dealCreated"]},
        {"id": 7, "url": CALLBACK_URL, "triggers": ["dealCreated"]},
    ]}])

    assert asyncio.run(manager.check_exists()) is True
    assert static_data.get("webhookId") == 7
    assert manager.state is SubscriptionState.REGISTERED
    assert manager.subscription.to_dict() == {"id": 7, "event": "dealCreated", "url": CALLBACK_URL}
    assert client.actions == ["getWebhooks"]


def test_check_exists_requires_event_in_triggers():
    manager, client, static_data = make_manager([{"data": [
        {"id": 7, "url": CALLBACK_URL, "triggers": ["dealWon", "dealLost"]},
        {"id": 8, "url": CALLBACK_URL},
    ]}])

    assert asyncio.run(manager.check_exists()) is False
    assert static_data.get("webhookId") is None
    assert manager.state is SubscriptionState.UNREGISTERED
    assert manager.subscription is None


def test_check_exists_failure_propagates():
    manager, client, static_data = make_manager([GrandCentralConnectionError("Request timeout")])
    try:
        asyncio.run(manager.check_exists())
    except GrandCentralConnectionError:
        pass
    else:
        raise AssertionError("expected GrandCentralConnectionError")
    assert static_data.get("webhookId") is None


def test_reconciliation_does_not_duplicate():
    manager, client, static_data = make_manager([{"data": [
        {"id": 7, "url": CALLBACK_URL, "triggers": ["dealCreated"]},
    ]}])

    assert asyncio.run(manager.ensure_registered()) is True
    assert static_data.get("webhookId") == 7
    assert "createWebhook" not in client.actions


def test_create_stores_returned_id():
    manager, client, static_data = make_manager([
        {"data": []},
        {"data": {"id": "wh_42"}},
    ])

    assert asyncio.run(manager.ensure_registered()) is True
    assert client.actions == ["getWebhooks", "createWebhook"]
    assert client.requests[1]["body"] == {
        "action": "createWebhook",
        "trigger": "dealCreated",
        "url": CALLBACK_URL,
    }
    assert static_data.get("webhookId") == "wh_42"


def test_create_without_id_fails():
    manager, client, static_data = make_manager([{"data": {}}])
    try:
        asyncio.run(manager.create())
    except GrandCentralApiError:
        pass
    else:
        raise AssertionError("expected GrandCentralApiError")
    assert static_data.get("webhookId") is None


def test_create_rejects_invalid_callback_url():
    manager, client, static_data = make_manager(url="not a url")
    try:
        asyncio.run(manager.create())
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError")
    assert client.requests == []


def test_delete_without_webhook_id_is_noop():
    manager, client, static_data = make_manager()
    assert asyncio.run(manager.delete()) is True
    assert client.requests == []


def test_delete_clears_state_and_is_repeatable():
    manager, client, static_data = make_manager([{"data": {"success": True}}])
    static_data.set("webhookId", 7)
    static_data.set("webhookEvents", ["dealCreated"])
    static_data.set("hookSecret", "s3cret")

    assert asyncio.run(manager.delete()) is True
    assert client.requests[0]["body"] == {
        "action": "deleteWebhook",
        "webhookId": 7,
        "source": "n8n",
    }
    assert static_data.to_dict() == {}

    assert asyncio.run(manager.delete()) is True
    assert len(client.requests) == 1


def test_delete_failure_keeps_state():
    manager, client, static_data = make_manager([GrandCentralApiError("HTTP 404: gone", status=404)])
    static_data.set("webhookId", 7)

    assert asyncio.run(manager.delete()) is False
    assert static_data.get("webhookId") == 7
    assert manager.state is SubscriptionState.REGISTERED


def run_all():
    tests = [
        test_check_exists_adopts_matching_webhook,
        test_check_exists_requires_event_in_triggers,
        test_check_exists_failure_propagates,
        test_reconciliation_does_not_duplicate,
        test_create_stores_returned_id,
        test_create_without_id_fails,
        test_create_rejects_invalid_callback_url,
        test_delete_without_webhook_id_is_noop,
        test_delete_clears_state_and_is_repeatable,
        test_delete_failure_keeps_state,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            print(f"  PASS: {test.__name__}")
            passed += 1
        except Exception as e:
            print(f"  FAIL: {test.__name__} - {e}")
            failed += 1

    print(f"\n{passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    print("Running lifecycle tests...")
    success = run_all()
    sys.exit(0 if success else 1)
