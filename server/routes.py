"""HTTP routes receiving GrandCentral webhook deliveries."""

import logging
from typing import Any, Awaitable, Callable, List

from aiohttp import web

from ..nodes.trigger import GrandCentralTrigger

logger = logging.getLogger(__name__)

DEFAULT_WEBHOOK_PREFIX = "/grandcentral/webhook"

EventHandler = Callable[[str, List[dict]], Awaitable[Any]]


def build_webhook_url(base_url: str, subscription_id: str, prefix: str = DEFAULT_WEBHOOK_PREFIX) -> str:
    """Build the callback URL GrandCentral should post to for a subscription."""
    return f"{base_url.rstrip('/')}{prefix}/{subscription_id}"


def register_routes(
    routes: web.RouteTableDef,
    on_event: EventHandler,
    prefix: str = DEFAULT_WEBHOOK_PREFIX,
) -> web.RouteTableDef:
    """
    Register the webhook receiver route.

    Args:
        routes: Route table to add to
        on_event: Coroutine called with (subscription_id, items) for every
                  delivery; hands the batch to the host workflow
        prefix: Path prefix; deliveries arrive at {prefix}/{subscription_id}

    Returns:
        The route table
    """
    trigger = GrandCentralTrigger()

    @routes.post(prefix + "/{subscription_id}")
    async def grandcentral_webhook(request):
        """
        Accept one webhook delivery.

        The JSON body is forwarded unchanged; there is no signature check.
        Handler failures are logged, not reported back to the sender.

        Returns:
        - status: "received"
        """
        subscription_id = request.match_info["subscription_id"]

        try:
            body = await request.json()
        except ValueError as e:
            # malformed JSON or a body that is not valid UTF-8
            logger.warning(f"Rejected webhook for {subscription_id}: invalid JSON ({e})")
            return web.json_response(
                {"error": f"Invalid JSON body: {e}"},
                status=400
            )

        (items,) = trigger.webhook(body)

        try:
            await on_event(subscription_id, items)
        except Exception as e:
            # Acknowledged regardless of the handler outcome
            logger.error(f"Webhook handler error for {subscription_id}: {e}", exc_info=True)

        logger.info(f"Webhook for {subscription_id} received ({len(items)} item(s))")
        return web.json_response({"status": "received"})

    logger.info(f"GrandCentral webhook route registered: POST {prefix}/{{subscription_id}}")
    return routes


def create_webhook_app(on_event: EventHandler, prefix: str = DEFAULT_WEBHOOK_PREFIX) -> web.Application:
    """Build a standalone aiohttp application serving the receiver route."""
    routes = web.RouteTableDef()
    register_routes(routes, on_event, prefix=prefix)
    app = web.Application()
    app.add_routes(routes)
    return app
