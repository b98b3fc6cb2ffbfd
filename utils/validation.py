"""Validation utilities for the GrandCentral connector."""

from urllib.parse import urlparse
from typing import Optional

# Request body keys whose values never reach the log
SENSITIVE_KEYS = frozenset({
    "apikey",
    "api_key",
    "authorization",
    "token",
    "password",
    "secret",
    "hooksecret",
    "bearer",
})


def validate_url(url: str) -> tuple[bool, Optional[str]]:
    """
    Validate a webhook callback URL.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url:
        return False, "URL is empty"

    try:
        parsed = urlparse(url)
    except ValueError as e:
        return False, f"URL parsing error: {str(e)}"

    if parsed.scheme not in ("http", "https"):
        return False, f"Invalid URL scheme: {parsed.scheme}"

    if not parsed.netloc:
        return False, "URL has no host"

    return True, None


def sanitize_for_logging(data: dict) -> dict:
    """Copy a request body with sensitive values redacted, at any depth."""

    def redact_value(key: str, value):
        if isinstance(value, dict):
            return {k: redact_value(k, v) for k, v in value.items()}
        elif isinstance(value, list):
            return [redact_value(key, item) for item in value]
        elif isinstance(value, str) and key.lower() in SENSITIVE_KEYS:
            return "[REDACTED]"
        return value

    return {k: redact_value(k, v) for k, v in data.items()}
