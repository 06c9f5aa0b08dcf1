"""A2A protocol steps used by the relay client.

- normalize_headers: custom header rows to a header mapping
- resolve_agent_card: agent discovery via /.well-known/agent-card.json
- send_message: JSON-RPC message/send call
- extract_text: reply text from a JSON-RPC response
"""

from a2a_relay.a2a.models import (
    AgentCard,
    AgentSkill,
    JSONRPCErrorInfo,
    JSONRPCResponse,
)
from a2a_relay.a2a.headers import normalize_headers
from a2a_relay.a2a.card_resolver import (
    AGENT_CARD_PATH,
    agent_card_url,
    resolve_agent_card,
)
from a2a_relay.a2a.messenger import (
    build_send_request,
    build_user_message,
    send_message,
)
from a2a_relay.a2a.extraction import (
    RESULT_SHAPES,
    extract_result_text,
    extract_text,
)

__all__ = [
    # Models
    "AgentCard",
    "AgentSkill",
    "JSONRPCErrorInfo",
    "JSONRPCResponse",
    # Headers
    "normalize_headers",
    # Discovery
    "AGENT_CARD_PATH",
    "agent_card_url",
    "resolve_agent_card",
    # Messaging
    "build_send_request",
    "build_user_message",
    "send_message",
    # Extraction
    "RESULT_SHAPES",
    "extract_result_text",
    "extract_text",
]
