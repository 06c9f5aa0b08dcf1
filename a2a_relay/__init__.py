"""
A2A Relay SDK

Client SDK for sending prompts to remote agents over the Agent-to-Agent
(A2A) protocol and getting their replies back as plain text.

    from a2a_relay import AsyncA2ARelayClient

    async with AsyncA2ARelayClient(timeout_ms=10000) as client:
        result = await client.send("http://localhost:8001", "Hello!")
        print(result.response_text)
"""

from a2a_relay.client import (
    A2ARelayClient,
    AsyncA2ARelayClient,
    send_a2a_message,
)
from a2a_relay.config import ClientConfig
from a2a_relay.types import (
    HeaderRow,
    RelayStatus,
    SendResult,
)
from a2a_relay.a2a import AgentCard, AgentSkill
from a2a_relay.proxy import SendRequest, handle_send_request
from a2a_relay.exceptions import (
    A2ARelayError,
    TimeoutError,
    AgentConnectionError,
    CommunicationError,
    ProtocolError,
    RelayFailure,
    ValidationFailure,
    ConnectionFailure,
    CommunicationFailure,
    ProtocolFailure,
    InternalFailure,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Client
    "A2ARelayClient",
    "AsyncA2ARelayClient",
    "send_a2a_message",
    "ClientConfig",
    # Types
    "HeaderRow",
    "RelayStatus",
    "SendResult",
    "AgentCard",
    "AgentSkill",
    # Endpoint
    "SendRequest",
    "handle_send_request",
    # Exceptions
    "A2ARelayError",
    "TimeoutError",
    "AgentConnectionError",
    "CommunicationError",
    "ProtocolError",
    "RelayFailure",
    "ValidationFailure",
    "ConnectionFailure",
    "CommunicationFailure",
    "ProtocolFailure",
    "InternalFailure",
]
