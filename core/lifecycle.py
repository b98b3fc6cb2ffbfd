"""
Webhook subscription lifecycle for the trigger node.

The persisted ``webhookId`` is the source of truth for whether this
subscription is registered. The host calls the three operations in
order and never concurrently for one subscription:

    check_exists() -> create() (only if not registered) ... delete()
"""

import logging
from typing import Any, List, Optional

from .context import StaticData
from .dispatcher import ActionDispatcher, unwrap_data
from .errors import GrandCentralApiError, GrandCentralError
from .settings import DEFAULT_SOURCE
from .types import SubscriptionState, WebhookSubscription
from ..utils.validation import validate_url

logger = logging.getLogger(__name__)

WEBHOOK_ID_KEY = "webhookId"
# Cleared along with the webhook id on teardown
CACHED_KEYS = ("webhookEvents", "hookSecret")


class WebhookLifecycleManager:
    """
    Reconciles one (event, callback URL) subscription with the remote API.

    Args:
        dispatcher: Dispatcher used for the webhook actions
        static_data: This subscription's persisted data
        event: Trigger event name selected by the user
        callback_url: This installation's webhook URL
        source: Provenance tag sent with deleteWebhook
    """

    def __init__(
        self,
        dispatcher: ActionDispatcher,
        static_data: StaticData,
        event: str,
        callback_url: str,
        source: str = DEFAULT_SOURCE,
    ):
        self.dispatcher = dispatcher
        self.static_data = static_data
        self.event = event
        self.callback_url = callback_url
        self.source = source

    @property
    def webhook_id(self) -> Any:
        return self.static_data.get(WEBHOOK_ID_KEY)

    @property
    def state(self) -> SubscriptionState:
        if self.webhook_id is None:
            return SubscriptionState.UNREGISTERED
        return SubscriptionState.REGISTERED

    @property
    def subscription(self) -> Optional[WebhookSubscription]:
        """The registered subscription, or None when unregistered."""
        webhook_id = self.webhook_id
        if webhook_id is None:
            return None
        return WebhookSubscription(id=webhook_id, event=self.event, url=self.callback_url)

    def _matches(self, webhook: Any) -> bool:
        if not isinstance(webhook, dict):
            return False
        triggers = webhook.get("triggers") or []
        return webhook.get("url") == self.callback_url and self.event in triggers

    async def check_exists(self) -> bool:
        """
        Look for a remote webhook with this URL that fires on this event.

        A match is adopted: its id becomes the persisted webhookId. Remote
        state is never changed. Request failures propagate.

        Returns:
            True if a matching webhook is registered
        """
        items = await self.dispatcher.dispatch("getWebhooks")
        webhooks: List[Any] = [item.json for item in items]

        for webhook in webhooks:
            if self._matches(webhook):
                webhook_id = webhook.get("id")
                self.static_data.set(WEBHOOK_ID_KEY, webhook_id)
                logger.info(
                    f"Adopted existing GrandCentral webhook {webhook_id} "
                    f"for event {self.event!r}"
                )
                return True

        logger.debug(
            f"No GrandCentral webhook for event {self.event!r} at {self.callback_url} "
            f"among {len(webhooks)} registered"
        )
        return False

    async def create(self) -> bool:
        """
        Register a webhook for this event and URL and persist its id.

        Does not check for an existing registration first; call
        check_exists() before this. Request failures propagate.

        Returns:
            True once the webhook is registered
        """
        valid, error = validate_url(self.callback_url)
        if not valid:
            raise ValueError(f"Invalid webhook callback URL {self.callback_url!r}: {error}")

        response = await self.dispatcher.call(
            "createWebhook",
            {"trigger": self.event, "url": self.callback_url},
        )
        data = unwrap_data(response)
        webhook_id = data.get("id") if isinstance(data, dict) else None
        if webhook_id is None:
            raise GrandCentralApiError("createWebhook response did not include a webhook id")

        self.static_data.set(WEBHOOK_ID_KEY, webhook_id)
        logger.info(f"Created GrandCentral webhook {webhook_id} for event {self.event!r}")
        return True

    async def delete(self) -> bool:
        """
        Remove the registered webhook, if any.

        With no persisted webhookId this is a no-op success. A failed
        request is logged and reported as False; persisted data is then
        left as it was so a later reconciliation can retry.

        Returns:
            True if nothing is registered anymore
        """
        webhook_id = self.webhook_id
        if webhook_id is None:
            return True

        try:
            await self.dispatcher.call(
                "deleteWebhook",
                {"webhookId": webhook_id, "source": self.source},
            )
        except GrandCentralError as e:
            logger.warning(f"Failed to delete GrandCentral webhook {webhook_id}: {e}")
            return False

        self.static_data.delete(WEBHOOK_ID_KEY)
        for key in CACHED_KEYS:
            self.static_data.delete(key)
        logger.info(f"Deleted GrandCentral webhook {webhook_id}")
        return True

    async def ensure_registered(self) -> bool:
        """Adopt a matching webhook or create one. Returns True when registered."""
        if await self.check_exists():
            return True
        return await self.create()
