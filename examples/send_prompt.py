#!/usr/bin/env python3
"""
Example: Send a prompt to a remote A2A agent

This example demonstrates how to:
- Discover an agent through its agent card
- Send it a prompt with custom headers
- Handle classified failures

Prerequisites:
- An A2A agent running (default: http://localhost:8001)
- Install: pip install -e .

Environment Variables:
- A2A_AGENT_URL: Override the agent URL
- A2A_RELAY_TIMEOUT_MS: Default timeout per request, in milliseconds
"""

import asyncio
import os

from a2a_relay import AsyncA2ARelayClient, RelayFailure


async def main():
    """Demonstrate relaying a prompt to an A2A agent."""
    agent_url = os.environ.get("A2A_AGENT_URL", "http://localhost:8001")

    print("=" * 70)
    print("A2A Relay Example")
    print("=" * 70)

    async with AsyncA2ARelayClient() as client:
        try:
            card = await client.get_agent_card(agent_url)
        except RelayFailure as e:
            print(f"  ERROR: {e}")
            return

        print(f"  Agent: {card.name} (version {card.version or 'unknown'})")
        for skill in card.skills:
            print(f"    - {skill.name}: {skill.description or ''}")

        try:
            result = await client.send(
                agent_url,
                "What can you do?",
                headers=[{"key": "X-Request-Source", "value": "example"}],
            )
        except RelayFailure as e:
            kind = "timeout" if e.is_timeout else e.phase
            print(f"  ERROR ({kind}, HTTP {e.status_code}): {e}")
            return

        print(f"  Task ID: {result.task_id}")
        print(f"  Response:\n{result.response_text}")


if __name__ == "__main__":
    asyncio.run(main())
