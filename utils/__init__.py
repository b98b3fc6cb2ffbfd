"""Utility functions for the GrandCentral connector."""

from .helpers import censor_token, run_async
from .validation import validate_url, sanitize_for_logging

__all__ = [
    "censor_token",
    "run_async",
    "validate_url",
    "sanitize_for_logging",
]
