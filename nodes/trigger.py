"""GrandCentralTrigger node - Start workflows from GrandCentral webhooks."""

import logging
from typing import Any, List, Optional

from ..core.client import GrandCentralClient
from ..core.context import StaticDataStore, get_static_data_store
from ..core.dispatcher import ActionDispatcher, run_with_dispatcher, to_items
from ..core.events import load_webhook_events
from ..core.lifecycle import WebhookLifecycleManager
from ..core.settings import GrandCentralSettings
from ..utils.helpers import run_async

logger = logging.getLogger(__name__)


class GrandCentralTrigger:
    """
    Entry point for GrandCentral event-triggered workflows.

    The host drives the webhook lifecycle when the workflow is activated
    and deactivated:
    - check_exists(): adopt a remote webhook already pointing at us
    - create(): register one if check_exists() found none
    - delete(): unregister on deactivation

    Each subscription's webhook id lives in the static data store under
    the subscription id the host passes in.

    Incoming webhook bodies are emitted as-is by webhook().
    """

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "event": ("STRING", {
                    "default": "",
                    "tooltip": "GrandCentral event to subscribe to (see get_events)"
                }),
            },
            "optional": {
                "api_key": ("STRING", {
                    "default": "",
                    "tooltip": "GrandCentral API key (falls back to GRANDCENTRAL_API_KEY)"
                }),
            },
            "hidden": {
                "body": "WEBHOOK_BODY",
            },
        }

    RETURN_TYPES = ("GRANDCENTRAL_ITEMS",)
    RETURN_NAMES = ("items",)
    FUNCTION = "webhook"
    CATEGORY = "grandcentral"
    DESCRIPTION = "Starts the workflow when GrandCentral events occur."

    def __init__(
        self,
        client: Optional[GrandCentralClient] = None,
        settings: Optional[GrandCentralSettings] = None,
        store: Optional[StaticDataStore] = None,
    ):
        self._client = client
        self._settings = settings
        self._store = store

    @property
    def store(self) -> StaticDataStore:
        return self._store or get_static_data_store()

    def _source(self) -> str:
        settings = self._settings or (self._client.settings if self._client else None)
        if settings is None:
            settings = GrandCentralSettings.from_env()
        return settings.source

    def _manager(
        self,
        dispatcher: ActionDispatcher,
        subscription_id: str,
        event: str,
        webhook_url: str,
    ) -> WebhookLifecycleManager:
        return WebhookLifecycleManager(
            dispatcher,
            self.store.scope(subscription_id),
            event=event,
            callback_url=webhook_url,
            source=self._source(),
        )

    def _run(self, operation, api_key: str = ""):
        return run_async(run_with_dispatcher(
            operation,
            client=self._client,
            settings=self._settings,
            api_key=api_key,
        ))

    def get_events(self, api_key: str = "") -> List[dict]:
        """Get the subscribable events, blank option first."""
        return self._run(load_webhook_events, api_key)

    def check_exists(self, subscription_id: str, event: str, webhook_url: str, api_key: str = "") -> bool:
        """Check for (and adopt) a remote webhook for this event and URL."""
        return self._run(
            lambda d: self._manager(d, subscription_id, event, webhook_url).check_exists(),
            api_key,
        )

    def create(self, subscription_id: str, event: str, webhook_url: str, api_key: str = "") -> bool:
        """Register a remote webhook for this event and URL."""
        return self._run(
            lambda d: self._manager(d, subscription_id, event, webhook_url).create(),
            api_key,
        )

    def delete(self, subscription_id: str, event: str = "", webhook_url: str = "", api_key: str = "") -> bool:
        """Unregister the subscription's webhook. False if the API call failed."""
        return self._run(
            lambda d: self._manager(d, subscription_id, event, webhook_url).delete(),
            api_key,
        )

    def webhook(self, body: Any = None, event: str = "", api_key: str = ""):
        """
        Emit an incoming webhook body as output items.

        The body is accepted without verification; a list becomes one
        item per element, anything else a single item.
        """
        items = to_items(body)
        logger.debug(f"GrandCentralTrigger: received {len(items)} item(s) for event {event!r}")
        return ([item.to_dict() for item in items],)
