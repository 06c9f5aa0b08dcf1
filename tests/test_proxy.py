"""Tests for request validation and the send endpoint envelope."""

import json

import httpx
import pytest
import respx

from a2a_relay.exceptions import ValidationFailure
from a2a_relay.proxy import SendRequest, handle_send_request


class TestSendRequest:
    """Tests for inbound payload validation."""

    def test_defaults(self):
        request = SendRequest.parse_payload({
            "serverUrl": "http://localhost:8001",
            "prompt": "hi",
        })
        assert request.server_url == "http://localhost:8001"
        assert request.timeout == 30000
        assert request.headers is None

    def test_timeout_is_coerced_from_string(self):
        request = SendRequest.parse_payload({
            "serverUrl": "https://agent.example.com",
            "prompt": "hi",
            "timeout": "5000",
        })
        assert request.timeout == 5000.0

    def test_raw_json_body(self):
        body = json.dumps({"serverUrl": "http://a.test", "prompt": "hi", "timeout": 10})
        assert SendRequest.parse_payload(body).timeout == 10

    def test_invalid_url_and_empty_prompt(self):
        with pytest.raises(ValidationFailure) as exc_info:
            SendRequest.parse_payload({"serverUrl": "not-a-url", "prompt": ""})

        failure = exc_info.value
        assert failure.status_code == 400
        assert failure.message == "Validation error: Invalid server URL, Prompt is required"

    def test_negative_timeout(self):
        with pytest.raises(
            ValidationFailure, match="^Validation error: Timeout must be a non-negative number$"
        ):
            SendRequest.parse_payload({
                "serverUrl": "http://a.test", "prompt": "hi", "timeout": -1,
            })

    def test_missing_fields(self):
        with pytest.raises(ValidationFailure) as exc_info:
            SendRequest.parse_payload({})
        assert exc_info.value.message == (
            "Validation error: Server URL is required, Prompt is required"
        )

    def test_malformed_json_body(self):
        with pytest.raises(ValidationFailure):
            SendRequest.parse_payload("{oops")


@pytest.mark.asyncio
@respx.mock
async def test_handle_send_request_success(base_url, card_url, agent_card_payload, message_result):
    respx.get(card_url).mock(return_value=httpx.Response(200, json=agent_card_payload))
    send_route = respx.post(base_url).mock(return_value=httpx.Response(200, json=message_result))

    status, body = await handle_send_request({
        "serverUrl": base_url,
        "prompt": "Weather?",
        "timeout": 5000,
        "headers": [{"id": "r1", "cells": {"Key": "X-Tenant", "Value": "acme"}}],
    })

    assert status == 200
    assert body == {
        "success": True,
        "response": "Sunny, 24C",
        "agentName": "Weather Agent",
        "taskId": "rpc-1",
        "status": "completed",
    }
    assert send_route.calls.last.request.headers["x-tenant"] == "acme"


@pytest.mark.asyncio
async def test_handle_send_request_validation_error():
    status, body = await handle_send_request({"serverUrl": "ftp://x", "prompt": "hi"})

    assert status == 400
    assert body["success"] is False
    assert body["error"].startswith("Validation error: ")


@pytest.mark.asyncio
@respx.mock
async def test_handle_send_request_connection_error(base_url, card_url):
    respx.get(card_url).mock(side_effect=httpx.ConnectError("Connection refused"))

    status, body = await handle_send_request({"serverUrl": base_url, "prompt": "hi"})

    assert status == 502
    assert body["success"] is False
    assert body["error"].startswith("Failed to connect to A2A server: ")


@pytest.mark.asyncio
@respx.mock
async def test_handle_send_request_protocol_error(base_url, card_url):
    respx.get(card_url).mock(return_value=httpx.Response(200, json={"name": "A"}))
    respx.post(base_url).mock(return_value=httpx.Response(200, json={
        "jsonrpc": "2.0", "id": "1", "error": {"code": -32000, "message": "bad request"},
    }))

    status, body = await handle_send_request({"serverUrl": base_url, "prompt": "hi"})

    assert status == 502
    assert body == {"success": False, "error": "A2A error: bad request"}
