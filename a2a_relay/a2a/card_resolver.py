"""Agent card discovery.

Fetches the agent's self-description from the well-known path and parses
it into an :class:`AgentCard`. A single attempt is made; there are no
retries.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import urljoin

import httpx
from pydantic import ValidationError

from a2a_relay.a2a.models import AgentCard
from a2a_relay.a2a.transport import (
    JSON_CONTENT_TYPE,
    merge_headers,
    request_with_deadline,
)
from a2a_relay.exceptions import AgentConnectionError

logger = logging.getLogger(__name__)

AGENT_CARD_PATH = "/.well-known/agent-card.json"


def agent_card_url(base_url: str) -> str:
    """Resolve the discovery URL for an agent base URL.

    The well-known path is absolute, so it replaces any path on the base
    URL: ``https://host/api/v1`` resolves to
    ``https://host/.well-known/agent-card.json``.
    """
    return urljoin(base_url, AGENT_CARD_PATH)


async def resolve_agent_card(
    base_url: str,
    timeout_ms: float,
    headers: Optional[Dict[str, str]] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> AgentCard:
    """Fetch and parse the agent card for ``base_url``.

    Args:
        base_url: Base URL of the A2A server
        timeout_ms: Deadline for the whole call, in milliseconds
        headers: Custom headers; they override ``Accept`` on conflict
        client: HTTP client to use. A short-lived one is created if omitted.

    Returns:
        The parsed AgentCard

    Raises:
        TimeoutError: If no response arrives within ``timeout_ms``
        AgentConnectionError: On transport errors, non-2xx status,
            malformed JSON, or a body that is not an agent card
    """
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await resolve_agent_card(
                base_url, timeout_ms, headers, client=own_client
            )

    url = agent_card_url(base_url)
    request_headers = merge_headers({"Accept": JSON_CONTENT_TYPE}, headers)

    logger.debug(f"Fetching agent card from {url}")
    response = await request_with_deadline(
        client,
        "GET",
        url,
        timeout_ms=timeout_ms,
        timeout_message="Agent card request",
        error_cls=AgentConnectionError,
        headers=request_headers,
    )

    if not response.is_success:
        raise AgentConnectionError(
            f"Failed to fetch agent card: {response.status_code} {response.reason_phrase}",
            url=url,
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise AgentConnectionError(
            f"Invalid agent card JSON: {e}", url=url, status_code=response.status_code
        ) from e

    try:
        card = AgentCard.model_validate(payload)
    except ValidationError as e:
        raise AgentConnectionError(
            f"Invalid agent card: {e.error_count()} validation error(s)",
            url=url,
            status_code=response.status_code,
            details={"errors": e.errors(include_url=False)},
        ) from e

    logger.debug(f"Discovered agent: {card.name} at {url}")
    return card
