"""Deadline-bounded HTTP calls shared by discovery and send."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Type

import httpx

from a2a_relay.exceptions import A2ARelayError, TimeoutError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def format_timeout(timeout_ms: float) -> str:
    """Render a millisecond timeout the way it was configured (5000, not 5000.0)."""
    if isinstance(timeout_ms, float) and timeout_ms.is_integer():
        return str(int(timeout_ms))
    return str(timeout_ms)


def merge_headers(defaults: Dict[str, str], custom: Optional[Dict[str, str]]) -> Dict[str, str]:
    """Merge caller headers over protocol defaults, case-insensitively.

    A caller header replaces a default with the same name regardless of case,
    so ``accept: text/plain`` overrides ``Accept: application/json``.
    """
    merged = dict(defaults)
    for key, value in (custom or {}).items():
        for existing in [k for k in merged if k.lower() == key.lower()]:
            del merged[existing]
        merged[key] = value
    return merged


async def request_with_deadline(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    timeout_ms: float,
    timeout_message: str,
    error_cls: Type[A2ARelayError],
    **kwargs: Any,
) -> httpx.Response:
    """Issue one HTTP request that is cancelled once ``timeout_ms`` elapses.

    The deadline is armed when the call starts and disarmed as soon as it
    finishes, so nothing leaks into the caller's next request.

    Raises:
        TimeoutError: If the deadline passes first. The message is
            ``"{timeout_message} timed out after {timeout_ms}ms"``.
        error_cls: For any other transport failure.
    """
    seconds = max(timeout_ms, 0) / 1000.0
    try:
        return await asyncio.wait_for(
            client.request(method, url, timeout=httpx.Timeout(seconds), **kwargs),
            timeout=seconds,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        logger.debug(f"{method} {url} exceeded {format_timeout(timeout_ms)}ms")
        raise TimeoutError(
            f"{timeout_message} timed out after {format_timeout(timeout_ms)}ms",
            timeout_ms=timeout_ms,
            details={"url": url},
        ) from e
    except httpx.RequestError as e:
        raise error_cls(f"{type(e).__name__}: {e}", url=url) from e
