"""Client configuration for the A2A relay SDK."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000
TIMEOUT_ENV_VAR = "A2A_RELAY_TIMEOUT_MS"


def _get_default_timeout_ms() -> float:
    """Get default timeout from A2A_RELAY_TIMEOUT_MS environment variable."""
    raw = os.environ.get(TIMEOUT_ENV_VAR)
    if not raw:
        return DEFAULT_TIMEOUT_MS
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {TIMEOUT_ENV_VAR}={raw!r}")
        return DEFAULT_TIMEOUT_MS
    if value < 0:
        logger.warning(f"Ignoring negative {TIMEOUT_ENV_VAR}={raw!r}")
        return DEFAULT_TIMEOUT_MS
    return value


@dataclass
class ClientConfig:
    """Configuration for the A2A relay client.

    Args:
        timeout_ms: Timeout applied to discovery and to the send call, each
        headers: Headers sent with every request, before per-call headers
        user_agent: Value of the User-Agent header, if set
    """
    timeout_ms: float = DEFAULT_TIMEOUT_MS
    headers: Dict[str, str] = field(default_factory=dict)
    user_agent: Optional[str] = None

    def __post_init__(self):
        if self.timeout_ms < 0:
            raise ValueError("timeout_ms must be non-negative")
        if self.headers is None:
            self.headers = {}

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        """Build a config using environment defaults, then explicit overrides."""
        values = {"timeout_ms": _get_default_timeout_ms()}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def base_headers(self) -> Dict[str, str]:
        """Headers every request starts from."""
        headers = dict(self.headers)
        if self.user_agent:
            headers.setdefault("User-Agent", self.user_agent)
        return headers
