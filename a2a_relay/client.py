"""
A2A Relay Client Module

Sends one prompt to a remote A2A agent and returns its reply as text.

Each call runs two sequential network phases, then extracts the reply:

1. discovery: ``GET /.well-known/agent-card.json``
2. send: JSON-RPC ``message/send`` POSTed to the server URL

Both phases share the caller's timeout, each with its own deadline. Errors
are re-raised as :class:`RelayFailure` subclasses tagged with the phase they
came from, so callers can tell "could not reach agent" from "agent rejected
the request".

Example:
    from a2a_relay import AsyncA2ARelayClient

    async with AsyncA2ARelayClient(timeout_ms=10000) as client:
        result = await client.send("http://localhost:8001", "Hello!")
        print(result.agent_name, result.response_text)
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Dict, Iterable, Optional, Union

import httpx

from a2a_relay.a2a.card_resolver import resolve_agent_card
from a2a_relay.a2a.extraction import extract_text
from a2a_relay.a2a.headers import normalize_headers
from a2a_relay.a2a.messenger import build_user_message, send_message
from a2a_relay.a2a.models import AgentCard
from a2a_relay.config import ClientConfig
from a2a_relay.exceptions import (
    CommunicationFailure,
    ConnectionFailure,
    InternalFailure,
    ProtocolError,
    ProtocolFailure,
    RelayFailure,
    ValidationFailure,
)
from a2a_relay.types import SendResult

logger = logging.getLogger(__name__)

HeadersInput = Union[Dict[str, str], Iterable[Any], None]


def generate_request_id() -> str:
    """Short id used to correlate the log lines of one relay call."""
    return uuid.uuid4().hex[:8]


class AsyncA2ARelayClient:
    """
    Async client for relaying prompts to A2A agents.

    No state is kept between calls apart from the underlying HTTP
    connection pool, so one client can serve many concurrent requests.

    Example:
        async with AsyncA2ARelayClient() as client:
            card = await client.get_agent_card("http://localhost:8001")
            result = await client.send("http://localhost:8001", "Hi")
    """

    def __init__(
        self,
        *,
        timeout_ms: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        config: Optional[ClientConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the async relay client.

        Args:
            timeout_ms: Default timeout per network phase, in milliseconds
            headers: Headers to include in every request
            config: Full client configuration
            http_client: Existing HTTP client; the caller keeps ownership of it
        """
        if config:
            self.config = config
        else:
            self.config = ClientConfig.from_env(timeout_ms=timeout_ms, headers=headers)

        self._client = http_client
        self._owns_client = http_client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient()
            self._owns_client = True
        return self._client

    async def __aenter__(self) -> "AsyncA2ARelayClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _resolve_timeout(self, timeout_ms: Optional[float]) -> float:
        timeout = self.config.timeout_ms if timeout_ms is None else timeout_ms
        if timeout < 0:
            raise ValidationFailure(f"Timeout must be non-negative, got {timeout}")
        return timeout

    def _request_headers(self, headers: HeadersInput) -> Dict[str, str]:
        merged = self.config.base_headers()
        merged.update(normalize_headers(headers))
        return merged

    async def get_agent_card(
        self,
        server_url: str,
        *,
        timeout_ms: Optional[float] = None,
        headers: HeadersInput = None,
    ) -> AgentCard:
        """
        Discover an agent without sending it anything.

        Raises:
            ConnectionFailure: If the card cannot be fetched or parsed
        """
        timeout = self._resolve_timeout(timeout_ms)
        try:
            return await resolve_agent_card(
                server_url, timeout, self._request_headers(headers), client=self.client
            )
        except Exception as e:
            raise ConnectionFailure(f"Failed to connect to A2A server: {e}") from e

    async def send(
        self,
        server_url: str,
        prompt: str,
        *,
        timeout_ms: Optional[float] = None,
        headers: HeadersInput = None,
    ) -> SendResult:
        """
        Send a prompt to the agent at ``server_url`` and return its reply.

        Args:
            server_url: Base URL of the A2A server
            prompt: Message text; must be non-empty
            timeout_ms: Timeout for each phase (defaults to the client config)
            headers: Custom headers as a mapping or as key/value rows

        Returns:
            SendResult with the reply text, agent name and task id

        Raises:
            ValidationFailure: Empty prompt or negative timeout
            ConnectionFailure: Discovery failed or timed out
            CommunicationFailure: The send call failed or timed out
            ProtocolFailure: The agent answered with a JSON-RPC error
            InternalFailure: Anything else
        """
        request_id = generate_request_id()
        try:
            return await self._relay(request_id, server_url, prompt, timeout_ms, headers)
        except RelayFailure:
            raise
        except Exception as e:
            logger.error(f"[{request_id}] A2A request error: {e}", exc_info=True)
            raise InternalFailure(str(e) or "Unknown error occurred") from e

    async def _relay(
        self,
        request_id: str,
        server_url: str,
        prompt: str,
        timeout_ms: Optional[float],
        headers: HeadersInput,
    ) -> SendResult:
        if not prompt:
            raise ValidationFailure("Prompt is required")
        timeout = self._resolve_timeout(timeout_ms)
        custom_headers = self._request_headers(headers)

        logger.info(
            f"[{request_id}] A2A request to {server_url} "
            f"(custom headers: {bool(custom_headers)})"
        )

        try:
            card = await resolve_agent_card(
                server_url, timeout, custom_headers, client=self.client
            )
        except Exception as e:
            logger.error(f"[{request_id}] Failed to fetch agent card: {e}")
            raise ConnectionFailure(f"Failed to connect to A2A server: {e}") from e

        logger.info(f"[{request_id}] Connected to A2A agent: {card.name}")

        message = build_user_message(prompt)
        try:
            response = await send_message(
                server_url, message, timeout, custom_headers, client=self.client
            )
        except Exception as e:
            logger.error(f"[{request_id}] A2A message send to {card.name} failed: {e}")
            raise CommunicationFailure(f"A2A communication failed: {e}") from e

        try:
            text = extract_text(response)
        except ProtocolError as e:
            logger.error(f"[{request_id}] {card.name} returned an error: {e}")
            raise ProtocolFailure(e.message, details=dict(e.details)) from e

        logger.info(f"[{request_id}] A2A response received from {card.name}")
        return SendResult(
            response_text=text,
            agent_name=card.name,
            task_id=response.task_id,
        )


class A2ARelayClient:
    """
    Synchronous client for relaying prompts to A2A agents.

    Runs :class:`AsyncA2ARelayClient` on a private event loop, so it must not
    be used from inside a running event loop.

    Example:
        with A2ARelayClient() as client:
            result = client.send("http://localhost:8001", "Hello!")
            print(result.response_text)
    """

    def __init__(
        self,
        *,
        timeout_ms: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        config: Optional[ClientConfig] = None,
    ):
        self._async_client = AsyncA2ARelayClient(
            timeout_ms=timeout_ms,
            headers=headers,
            config=config,
        )
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        """Get or create the private event loop."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise RuntimeError(
                "A2ARelayClient cannot run inside an event loop; "
                "use AsyncA2ARelayClient instead"
            )
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.new_event_loop()
        return self._loop

    def _run(self, coro):
        """Run a coroutine synchronously."""
        return self._get_loop().run_until_complete(coro)

    def close(self) -> None:
        """Close the client connection."""
        if self._loop and not self._loop.is_closed():
            self._loop.run_until_complete(self._async_client.close())
            self._loop.close()
        self._loop = None

    def __enter__(self) -> "A2ARelayClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def config(self) -> ClientConfig:
        return self._async_client.config

    def get_agent_card(
        self,
        server_url: str,
        *,
        timeout_ms: Optional[float] = None,
        headers: HeadersInput = None,
    ) -> AgentCard:
        """Discover an agent without sending it anything."""
        return self._run(self._async_client.get_agent_card(
            server_url, timeout_ms=timeout_ms, headers=headers,
        ))

    def send(
        self,
        server_url: str,
        prompt: str,
        *,
        timeout_ms: Optional[float] = None,
        headers: HeadersInput = None,
    ) -> SendResult:
        """Send a prompt to the agent at ``server_url`` and return its reply."""
        return self._run(self._async_client.send(
            server_url, prompt, timeout_ms=timeout_ms, headers=headers,
        ))


async def send_a2a_message(
    server_url: str,
    prompt: str,
    *,
    timeout_ms: Optional[float] = None,
    headers: HeadersInput = None,
) -> SendResult:
    """One-shot helper: relay a single prompt with a short-lived client."""
    async with AsyncA2ARelayClient() as client:
        return await client.send(
            server_url, prompt, timeout_ms=timeout_ms, headers=headers
        )
