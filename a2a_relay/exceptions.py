"""
SDK Exception Classes

Two layers of errors are raised by the SDK:

- Phase errors (``TimeoutError``, ``AgentConnectionError``,
  ``CommunicationError``, ``ProtocolError``) are raised by the individual
  protocol steps (discovery, send, extraction).
- Failures (``RelayFailure`` subclasses) are raised by the client after
  tagging a phase error with the phase it came from. They carry the HTTP
  status code an outward-facing handler should answer with.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class A2ARelayError(Exception):
    """Base exception for all A2A relay SDK errors."""

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.code:
            return f"{type(self).__name__}([{self.code}] {self.message})"
        return f"{type(self).__name__}({self.message})"


# ============================================================================
# Phase errors
# ============================================================================

class TimeoutError(A2ARelayError):
    """A network call did not complete within the configured timeout."""

    def __init__(
        self,
        message: str = "Operation timed out",
        *,
        timeout_ms: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code="TIMEOUT_ERROR", **kwargs)
        self.timeout_ms = timeout_ms
        if timeout_ms is not None:
            self.details["timeout_ms"] = timeout_ms


class AgentConnectionError(A2ARelayError):
    """The agent card could not be fetched or parsed."""

    def __init__(
        self,
        message: str = "Failed to fetch agent card",
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code="CONNECTION_ERROR", **kwargs)
        self.url = url
        self.status_code = status_code
        if url:
            self.details["url"] = url
        if status_code is not None:
            self.details["status_code"] = status_code


class CommunicationError(A2ARelayError):
    """The JSON-RPC call reached the agent but did not succeed."""

    def __init__(
        self,
        message: str = "A2A request failed",
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code="COMMUNICATION_ERROR", **kwargs)
        self.url = url
        self.status_code = status_code
        if url:
            self.details["url"] = url
        if status_code is not None:
            self.details["status_code"] = status_code


class ProtocolError(A2ARelayError):
    """The agent answered with a JSON-RPC error object."""

    def __init__(
        self,
        message: str = "A2A error",
        *,
        rpc_code: Optional[int] = None,
        rpc_data: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code="PROTOCOL_ERROR", **kwargs)
        self.rpc_code = rpc_code
        self.rpc_data = rpc_data
        if rpc_code is not None:
            self.details["rpc_code"] = rpc_code
        if rpc_data is not None:
            self.details["rpc_data"] = rpc_data


# ============================================================================
# Classified failures
# ============================================================================

class RelayFailure(A2ARelayError):
    """A failure classified by the phase of the relay it happened in."""

    status_code: int = 500
    phase: str = "internal"

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("code", f"{self.phase.upper()}_FAILURE")
        super().__init__(message, **kwargs)

    @property
    def is_timeout(self) -> bool:
        """Whether the underlying cause was a timeout."""
        return isinstance(self.__cause__, TimeoutError)


class ValidationFailure(RelayFailure):
    """The inbound request was malformed."""

    status_code = 400
    phase = "validation"


class ConnectionFailure(RelayFailure):
    """The agent was unreachable or did not serve a valid agent card."""

    status_code = 502
    phase = "connection"


class CommunicationFailure(RelayFailure):
    """The agent was reachable but the message call failed."""

    status_code = 502
    phase = "communication"


class ProtocolFailure(RelayFailure):
    """The agent responded but reported an application-level error."""

    status_code = 502
    phase = "protocol"


class InternalFailure(RelayFailure):
    """Anything the relay did not anticipate."""

    status_code = 500
    phase = "internal"
