"""Request validation and response envelopes for an A2A send endpoint.

``handle_send_request`` is what an HTTP route calls: it validates the
inbound payload, relays the prompt, and returns a ``(status_code, body)``
pair ready to be serialized.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from a2a_relay.client import AsyncA2ARelayClient
from a2a_relay.config import DEFAULT_TIMEOUT_MS
from a2a_relay.exceptions import RelayFailure, ValidationFailure

logger = logging.getLogger(__name__)

REQUIRED_MESSAGES = {
    "serverUrl": "Server URL is required",
    "prompt": "Prompt is required",
}


class SendRequest(BaseModel):
    """Inbound payload of the send endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    server_url: str = Field(alias="serverUrl")
    prompt: str
    timeout: float = Field(default=DEFAULT_TIMEOUT_MS, allow_inf_nan=False)
    headers: Optional[List[Dict[str, Any]]] = None

    @field_validator("server_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise PydanticCustomError("invalid_url", "Invalid server URL")
        return value

    @field_validator("prompt")
    @classmethod
    def _check_prompt(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("prompt_required", "Prompt is required")
        return value

    @field_validator("timeout")
    @classmethod
    def _check_timeout(cls, value: float) -> float:
        if value < 0:
            raise PydanticCustomError("invalid_timeout", "Timeout must be a non-negative number")
        return value

    @classmethod
    def parse_payload(cls, payload: Union[str, bytes, Dict[str, Any]]) -> "SendRequest":
        """Validate a decoded dict or a raw JSON body.

        Raises:
            ValidationFailure: With every validation message joined by ", "
        """
        try:
            if isinstance(payload, (str, bytes, bytearray)):
                return cls.model_validate_json(payload)
            return cls.model_validate(payload)
        except ValidationError as e:
            raise ValidationFailure(
                f"Validation error: {format_validation_errors(e)}",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e


def format_validation_errors(error: ValidationError) -> str:
    """Render pydantic errors as ``"message, message"``."""
    messages = []
    for item in error.errors(include_url=False):
        if item["type"] == "missing":
            field = str(item["loc"][-1]) if item["loc"] else ""
            messages.append(REQUIRED_MESSAGES.get(field, f"{field} is required"))
        else:
            messages.append(item["msg"])
    return ", ".join(messages)


def failure_body(failure: RelayFailure) -> Dict[str, Any]:
    return {"success": False, "error": failure.message}


async def handle_send_request(
    payload: Union[str, bytes, Dict[str, Any]],
    *,
    client: Optional[AsyncA2ARelayClient] = None,
) -> Tuple[int, Dict[str, Any]]:
    """Validate ``payload``, relay it, and build the response envelope.

    Args:
        payload: Raw JSON body or decoded dict with ``serverUrl``, ``prompt``,
            optional ``timeout`` (ms) and optional ``headers`` rows
        client: Relay client to use; a short-lived one is created if omitted

    Returns:
        ``(200, {"success": True, "response", "agentName", "taskId", "status"})``
        on success, ``(status_code, {"success": False, "error"})`` otherwise,
        with 400 for validation, 502 for agent failures and 500 for anything else
    """
    try:
        request = SendRequest.parse_payload(payload)
    except ValidationFailure as e:
        logger.warning(f"Rejected A2A send request: {e.message}")
        return e.status_code, failure_body(e)

    try:
        if client is None:
            async with AsyncA2ARelayClient() as own_client:
                result = await own_client.send(
                    request.server_url,
                    request.prompt,
                    timeout_ms=request.timeout,
                    headers=request.headers,
                )
        else:
            result = await client.send(
                request.server_url,
                request.prompt,
                timeout_ms=request.timeout,
                headers=request.headers,
            )
    except RelayFailure as e:
        return e.status_code, failure_body(e)

    return 200, {"success": True, **result.to_dict()}
