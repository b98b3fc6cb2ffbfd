"""Core components for the GrandCentral connector."""

from .types import (
    ActionDefinition,
    ActionField,
    ExecutionItem,
    FieldKind,
    SubscriptionState,
    WebhookSubscription,
)
from .errors import (
    GrandCentralError,
    GrandCentralApiError,
    GrandCentralAuthError,
    GrandCentralConnectionError,
)
from .settings import GrandCentralSettings
from .client import get_client, close_client, GrandCentralClient
from .collector import collect_parameters, collect_action_parameters, is_empty
from .catalog import ACTIONS, RESOURCES, get_action
from .dispatcher import ActionDispatcher, build_payload
from .events import load_webhook_events
from .context import (
    StaticData,
    StaticDataStore,
    InMemoryStaticData,
    JsonFileStaticData,
    get_static_data_store,
    set_static_data_store,
)
from .lifecycle import WebhookLifecycleManager

__all__ = [
    # Types
    "ActionDefinition",
    "ActionField",
    "ExecutionItem",
    "FieldKind",
    "SubscriptionState",
    "WebhookSubscription",
    # Errors
    "GrandCentralError",
    "GrandCentralApiError",
    "GrandCentralAuthError",
    "GrandCentralConnectionError",
    # Settings
    "GrandCentralSettings",
    # Client
    "get_client",
    "close_client",
    "GrandCentralClient",
    # Dispatch
    "collect_parameters",
    "collect_action_parameters",
    "is_empty",
    "ACTIONS",
    "RESOURCES",
    "get_action",
    "ActionDispatcher",
    "build_payload",
    "load_webhook_events",
    # Static data
    "StaticData",
    "StaticDataStore",
    "InMemoryStaticData",
    "JsonFileStaticData",
    "get_static_data_store",
    "set_static_data_store",
    # Webhooks
    "WebhookLifecycleManager",
]
