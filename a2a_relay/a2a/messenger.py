"""JSON-RPC ``message/send`` calls to an A2A agent."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

import httpx
from a2a.types import (
    Message,
    MessageSendParams,
    Part,
    Role,
    SendMessageRequest,
    TextPart,
)

from a2a_relay.a2a.models import JSONRPCResponse
from a2a_relay.a2a.transport import (
    JSON_CONTENT_TYPE,
    merge_headers,
    request_with_deadline,
)
from a2a_relay.exceptions import CommunicationError

logger = logging.getLogger(__name__)


def build_user_message(prompt: str, *, context_id: Optional[str] = None) -> Message:
    """Create an outbound user message with a single text part.

    Args:
        prompt: Text to send; must be non-empty
        context_id: Optional conversation context (reserved for multi-turn use)

    Returns:
        A2A Message with a fresh message id
    """
    if not prompt:
        raise ValueError("prompt must be a non-empty string")
    return Message(
        message_id=str(uuid.uuid4()),
        role=Role.user,
        parts=[Part(root=TextPart(text=prompt))],
        context_id=context_id,
    )


def build_send_request(message: Message) -> SendMessageRequest:
    """Wrap a message in a ``message/send`` JSON-RPC request with a fresh id."""
    return SendMessageRequest(
        id=str(uuid.uuid4()),
        params=MessageSendParams(message=message),
    )


def serialize_request(request: SendMessageRequest) -> Dict[str, Any]:
    """Serialize a request to its camelCase wire form."""
    return request.model_dump(mode="json", by_alias=True, exclude_none=True)


async def send_message(
    base_url: str,
    message: Message,
    timeout_ms: float,
    headers: Optional[Dict[str, str]] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> JSONRPCResponse:
    """Send ``message`` to the agent at ``base_url`` and return the raw envelope.

    The JSON-RPC ``error`` member, if any, is returned to the caller as-is.

    Args:
        base_url: A2A endpoint; the request is POSTed to it directly
        message: Message to send
        timeout_ms: Deadline for the whole call, in milliseconds
        headers: Custom headers, merged over the JSON content headers
        client: HTTP client to use. A short-lived one is created if omitted.

    Raises:
        TimeoutError: If no response arrives within ``timeout_ms``
        CommunicationError: On transport errors, non-2xx status, or a body
            that is not valid JSON
    """
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await send_message(
                base_url, message, timeout_ms, headers, client=own_client
            )

    request = build_send_request(message)
    request_headers = merge_headers(
        {"Content-Type": JSON_CONTENT_TYPE, "Accept": JSON_CONTENT_TYPE},
        headers,
    )

    logger.debug(f"Sending message/send {request.id} to {base_url}")
    response = await request_with_deadline(
        client,
        "POST",
        base_url,
        timeout_ms=timeout_ms,
        timeout_message="A2A request",
        error_cls=CommunicationError,
        json=serialize_request(request),
        headers=request_headers,
    )

    if not response.is_success:
        raise CommunicationError(
            f"A2A request failed: {response.status_code} {response.reason_phrase} - {response.text}",
            url=base_url,
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise CommunicationError(
            f"Invalid JSON-RPC response: {e}",
            url=base_url,
            status_code=response.status_code,
        ) from e

    return JSONRPCResponse.from_payload(payload)
