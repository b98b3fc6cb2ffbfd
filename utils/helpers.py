"""Shared helper functions."""

import asyncio
import concurrent.futures
from typing import Optional


def censor_token(value: Optional[str]) -> str:
    """Censor a secret for logging, keeping only its edges."""
    if not value:
        return "(not set)"
    if len(value) > 12:
        return value[:4] + "*" * (len(value) - 8) + value[-4:]
    return "*" * len(value)


def run_async(coro):
    """Run an async coroutine in sync context."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    # Already inside a loop (host event loop thread): run on a fresh one
    with concurrent.futures.ThreadPoolExecutor() as executor:
        future = executor.submit(asyncio.run, coro)
        return future.result()
