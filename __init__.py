"""
GrandCentral connector - Host automation nodes for the GrandCentral API.

Provides:
1. GrandCentral node - Run any of the GrandCentral CRM/ops actions
2. GrandCentralTrigger node - Start workflows from GrandCentral events
3. Webhook lifecycle - Idempotent remote webhook registration/teardown
4. HTTP route: POST /grandcentral/webhook/{subscription_id} for deliveries
"""

__version__ = "1.0.0"

import logging

logger = logging.getLogger(__name__)

from .nodes.action import GrandCentral
from .nodes.trigger import GrandCentralTrigger
from .server.routes import register_routes, create_webhook_app, build_webhook_url

# Node mappings for the host runtime
NODE_CLASS_MAPPINGS = {
    "GrandCentral": GrandCentral,
    "GrandCentralTrigger": GrandCentralTrigger,
}

NODE_DISPLAY_NAME_MAPPINGS = {
    "GrandCentral": "GrandCentral",
    "GrandCentralTrigger": "GrandCentral Trigger",
}

logger.debug(f"[grandcentral] v{__version__} loaded ({len(NODE_CLASS_MAPPINGS)} nodes)")

__all__ = [
    "GrandCentral",
    "GrandCentralTrigger",
    "register_routes",
    "create_webhook_app",
    "build_webhook_url",
    "NODE_CLASS_MAPPINGS",
    "NODE_DISPLAY_NAME_MAPPINGS",
]
