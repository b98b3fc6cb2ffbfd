"""Subscribable webhook event list for the trigger node."""

import logging
from typing import List

from .dispatcher import ActionDispatcher

logger = logging.getLogger(__name__)

# Option shown first so that no event is preselected
NO_EVENT_OPTION = {"name": "", "value": ""}


async def load_webhook_events(dispatcher: ActionDispatcher) -> List[dict]:
    """
    Fetch the event options from the API.

    Not cached; every call asks the API again.

    Returns:
        The raw event records with a blank option prepended
    """
    items = await dispatcher.dispatch("webhookEvents")
    events = [dict(NO_EVENT_OPTION)]
    events.extend(item.json for item in items)
    logger.debug(f"Loaded {len(events) - 1} GrandCentral webhook events")
    return events
