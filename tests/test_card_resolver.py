"""Tests for agent card discovery."""

import asyncio

import httpx
import pytest
import respx

from a2a_relay.a2a.card_resolver import agent_card_url, resolve_agent_card
from a2a_relay.exceptions import AgentConnectionError, TimeoutError


class TestAgentCardUrl:
    """Tests for discovery URL resolution."""

    def test_root_base_url(self):
        assert agent_card_url("http://localhost:8001") == (
            "http://localhost:8001/.well-known/agent-card.json"
        )

    def test_trailing_slash(self):
        assert agent_card_url("https://agent.example.com/") == (
            "https://agent.example.com/.well-known/agent-card.json"
        )

    def test_path_is_replaced_by_well_known_path(self):
        assert agent_card_url("https://agent.example.com/api/v1") == (
            "https://agent.example.com/.well-known/agent-card.json"
        )


@pytest.mark.asyncio
@respx.mock
async def test_resolve_agent_card_success(base_url, card_url, agent_card_payload):
    route = respx.get(card_url).mock(
        return_value=httpx.Response(200, json=agent_card_payload)
    )

    card = await resolve_agent_card(base_url, 5000, {})

    assert route.called
    assert card.name == "Weather Agent"
    assert card.protocol_version == "0.3.0"
    assert [skill.id for skill in card.skills] == ["forecast", "alerts"]
    assert card.skills[1].description is None
    assert route.calls.last.request.headers["accept"] == "application/json"


@pytest.mark.asyncio
@respx.mock
async def test_resolve_agent_card_minimal_card(base_url, card_url):
    respx.get(card_url).mock(return_value=httpx.Response(200, json={"name": "Bare"}))

    card = await resolve_agent_card(base_url, 5000)

    assert card.name == "Bare"
    assert card.skills == []
    assert card.url is None


@pytest.mark.asyncio
@respx.mock
async def test_resolve_agent_card_forwards_custom_headers(base_url, card_url):
    route = respx.get(card_url).mock(return_value=httpx.Response(200, json={"name": "A"}))

    await resolve_agent_card(
        base_url,
        5000,
        {"Authorization": "Bearer secret", "accept": "application/vnd.a2a+json"},
    )

    request = route.calls.last.request
    assert request.headers["authorization"] == "Bearer secret"
    assert request.headers.get_list("accept") == ["application/vnd.a2a+json"]


@pytest.mark.asyncio
@respx.mock
async def test_resolve_agent_card_http_error(base_url, card_url):
    respx.get(card_url).mock(return_value=httpx.Response(404))

    with pytest.raises(AgentConnectionError) as exc_info:
        await resolve_agent_card(base_url, 5000)

    assert str(exc_info.value) == "Failed to fetch agent card: 404 Not Found"
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
@respx.mock
async def test_resolve_agent_card_malformed_json(base_url, card_url):
    respx.get(card_url).mock(return_value=httpx.Response(200, text="<html>nope</html>"))

    with pytest.raises(AgentConnectionError) as exc_info:
        await resolve_agent_card(base_url, 5000)

    assert "Invalid agent card JSON" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, ValueError)


@pytest.mark.asyncio
@respx.mock
async def test_resolve_agent_card_without_name(base_url, card_url):
    respx.get(card_url).mock(return_value=httpx.Response(200, json={"description": "x"}))

    with pytest.raises(AgentConnectionError, match="Invalid agent card"):
        await resolve_agent_card(base_url, 5000)


@pytest.mark.asyncio
@respx.mock
async def test_resolve_agent_card_connection_refused(base_url, card_url):
    respx.get(card_url).mock(side_effect=httpx.ConnectError("Connection refused"))

    with pytest.raises(AgentConnectionError, match="Connection refused"):
        await resolve_agent_card(base_url, 5000)


@pytest.mark.asyncio
@respx.mock
async def test_resolve_agent_card_transport_timeout(base_url, card_url):
    respx.get(card_url).mock(side_effect=httpx.ReadTimeout("read timed out"))

    with pytest.raises(TimeoutError) as exc_info:
        await resolve_agent_card(base_url, 5000)

    assert str(exc_info.value) == "Agent card request timed out after 5000ms"
    assert exc_info.value.timeout_ms == 5000


@pytest.mark.asyncio
async def test_resolve_agent_card_deadline_cancels_slow_request(base_url):
    cancelled = asyncio.Event()

    async def slow_handler(request: httpx.Request) -> httpx.Response:
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return httpx.Response(200, json={"name": "Too late"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(slow_handler)) as client:
        with pytest.raises(TimeoutError, match="timed out after 50ms"):
            await resolve_agent_card(base_url, 50, client=client)

    assert cancelled.is_set()


@pytest.mark.asyncio
async def test_resolve_agent_card_uses_injected_client(base_url, agent_card_payload):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=agent_card_payload)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        card = await resolve_agent_card(base_url, 1000, client=client)

    assert card.name == agent_card_payload["name"]
    assert seen == ["http://agent.test/.well-known/agent-card.json"]
