"""Server extension receiving GrandCentral webhooks."""

from .routes import register_routes, create_webhook_app, build_webhook_url

__all__ = ["register_routes", "create_webhook_app", "build_webhook_url"]
