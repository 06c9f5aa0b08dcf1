"""Shared fixtures for the A2A relay tests."""

from __future__ import annotations

from typing import Any, Dict

import pytest

BASE_URL = "http://agent.test/a2a"
CARD_URL = "http://agent.test/.well-known/agent-card.json"


@pytest.fixture
def agent_card_payload() -> Dict[str, Any]:
    """A minimal but realistic agent card document."""
    return {
        "name": "Weather Agent",
        "description": "Answers weather questions",
        "url": BASE_URL,
        "version": "1.2.0",
        "protocolVersion": "0.3.0",
        "capabilities": {"streaming": False},
        "skills": [
            {"id": "forecast", "name": "Forecast", "description": "Daily forecast"},
            {"id": "alerts", "name": "Alerts"},
        ],
    }


@pytest.fixture
def message_result() -> Dict[str, Any]:
    """JSON-RPC success envelope whose result is a direct agent message."""
    return {
        "jsonrpc": "2.0",
        "id": "rpc-1",
        "result": {
            "kind": "message",
            "messageId": "m-1",
            "role": "agent",
            "parts": [{"kind": "text", "text": "Sunny, 24C"}],
        },
    }


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def card_url() -> str:
    return CARD_URL
