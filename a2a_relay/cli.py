"""Command line entry point: send one prompt to an A2A agent.

Example:
    a2a-relay http://localhost:8001 "What is the weather?" -H "Authorization:Bearer x"
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional, Tuple

from a2a_relay.config import ClientConfig
from a2a_relay.proxy import handle_send_request

logger = logging.getLogger(__name__)


def _parse_header(raw: str) -> Tuple[str, str]:
    key, sep, value = raw.partition(":")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY:VALUE, got {raw!r}")
    return key.strip(), value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="a2a-relay",
        description="Send a prompt to a remote A2A agent and print its reply",
    )
    parser.add_argument("server_url", help="Base URL of the A2A server")
    parser.add_argument("prompt", help="Message to send to the agent")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout per request in milliseconds (default: $A2A_RELAY_TIMEOUT_MS or 30000)",
    )
    parser.add_argument(
        "-H", "--header",
        dest="headers",
        action="append",
        type=_parse_header,
        default=[],
        metavar="KEY:VALUE",
        help="Custom header to forward (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    timeout = args.timeout if args.timeout is not None else ClientConfig.from_env().timeout_ms
    payload = {
        "serverUrl": args.server_url,
        "prompt": args.prompt,
        "timeout": timeout,
        "headers": [{"key": k, "value": v} for k, v in args.headers],
    }

    status_code, body = await handle_send_request(payload)
    print(json.dumps(body, indent=2))
    if status_code != 200:
        logger.debug(f"A2A relay finished with status {status_code}")
        return 1
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
