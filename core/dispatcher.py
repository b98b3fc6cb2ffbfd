"""Action dispatch: payload building, request, response unwrapping."""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, TypeVar

from .client import GrandCentralClient, get_client
from .collector import collect_action_parameters, collect_parameters
from .settings import GrandCentralSettings
from .types import ActionDefinition, ExecutionItem

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_payload(action: str, parameters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Build the request body for an action.

    The action name always comes first and is never overridden by a
    parameter of the same name.
    """
    payload: Dict[str, Any] = {"action": action}
    for name, value in collect_parameters(parameters).items():
        if name == "action":
            continue
        payload[name] = value
    return payload


def to_items(records: Any, paired_item: int = 0) -> List[ExecutionItem]:
    """
    Map response records 1:1 to output items, preserving order.

    A single record (not a list) becomes one item; None becomes none.
    """
    if records is None:
        return []
    if not isinstance(records, list):
        records = [records]
    return [ExecutionItem(json=record, paired_item=paired_item) for record in records]


def unwrap_data(response: Any) -> Any:
    """Get the ``data`` field of an API response, or None when absent."""
    if isinstance(response, dict):
        return response.get("data")
    return None


class ActionDispatcher:
    """
    Sends GrandCentral actions and unpacks their results.

    Every action is an all-or-nothing POST: a failed request raises
    GrandCentralError and no items are produced.
    """

    def __init__(self, client: Optional[GrandCentralClient] = None):
        self.client = client or get_client()

    async def call(
        self,
        action: str,
        parameters: Optional[Mapping[str, Any]] = None,
        path: Optional[str] = None,
        query: Optional[dict] = None,
    ) -> Any:
        """Send one action and return the raw decoded response."""
        payload = build_payload(action, parameters)
        logger.debug(f"Dispatching GrandCentral action {action} ({len(payload) - 1} parameters)")
        return await self.client.request(payload, path=path, query=query)

    async def dispatch(
        self,
        action: str,
        parameters: Optional[Mapping[str, Any]] = None,
        path: Optional[str] = None,
        query: Optional[dict] = None,
    ) -> List[ExecutionItem]:
        """
        Send one action and map its ``data`` records to output items.

        Args:
            action: Remote action name (e.g. "findDeals")
            parameters: Parameter set; empty values and control keys are dropped
            path: Optional URL path override (default: "tools")
            query: Optional query-string parameters

        Returns:
            One ExecutionItem per record, in response order
        """
        response = await self.call(action, parameters, path=path, query=query)
        items = to_items(unwrap_data(response))
        logger.debug(f"GrandCentral action {action} returned {len(items)} item(s)")
        return items

    async def execute(
        self,
        definition: ActionDefinition,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> List[ExecutionItem]:
        """Run one catalog action with only the fields it declares."""
        collected = collect_action_parameters(definition, parameters)
        return await self.dispatch(definition.operation, collected)


async def run_with_dispatcher(
    operation: Callable[[ActionDispatcher], Awaitable[T]],
    client: Optional[GrandCentralClient] = None,
    settings: Optional[GrandCentralSettings] = None,
    api_key: Optional[str] = None,
) -> T:
    """
    Run one host call against a dispatcher.

    A given client is used as-is and left open. Otherwise a client is
    built from settings (or the environment) with api_key applied, and
    closed before returning.
    """
    if client is not None:
        return await operation(ActionDispatcher(client))

    settings = (settings or GrandCentralSettings.from_env()).with_api_key(api_key)
    async with GrandCentralClient(settings) as owned_client:
        return await operation(ActionDispatcher(owned_client))
