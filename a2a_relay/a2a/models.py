"""Wire models for the A2A discovery and JSON-RPC endpoints.

Inbound documents (agent card, JSON-RPC response) are parsed leniently:
agents in the wild add fields and omit optional ones, so unknown keys are
kept and only ``AgentCard.name`` is required.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AgentSkill(BaseModel):
    """A skill advertised on an agent card."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    name: str
    description: Optional[str] = None


class AgentCard(BaseModel):
    """Self-description document served at the well-known discovery path."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    name: str
    description: Optional[str] = None
    url: Optional[str] = None
    version: Optional[str] = None
    protocol_version: Optional[str] = Field(default=None, alias="protocolVersion")
    skills: List[AgentSkill] = Field(default_factory=list)


class JSONRPCErrorInfo(BaseModel):
    """The ``error`` member of a JSON-RPC response."""

    model_config = ConfigDict(extra="allow")

    code: Optional[int] = None
    message: str = ""
    data: Any = None

    @classmethod
    def from_raw(cls, raw: Any) -> "JSONRPCErrorInfo":
        """Build from whatever the agent put in ``error``."""
        if isinstance(raw, dict):
            code = raw.get("code")
            message = raw.get("message")
            return cls(
                code=code if isinstance(code, int) and not isinstance(code, bool) else None,
                message=message if isinstance(message, str) else str(message or ""),
                data=raw.get("data"),
            )
        return cls(message=str(raw))


class JSONRPCResponse(BaseModel):
    """A JSON-RPC 2.0 response envelope, extra members included.

    ``result`` and ``error`` are opaque JSON values; interpreting them is the
    job of :func:`a2a_relay.a2a.extraction.extract_text`.
    """

    model_config = ConfigDict(extra="allow")

    jsonrpc: Optional[str] = None
    id: Any = None
    result: Any = None
    error: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> "JSONRPCResponse":
        """Wrap a decoded JSON body. Non-object bodies become an empty envelope."""
        if not isinstance(payload, dict):
            return cls()
        data = dict(payload)
        if not isinstance(data.get("jsonrpc"), str):
            data.pop("jsonrpc", None)
        return cls.model_validate(data)

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def error_info(self) -> Optional[JSONRPCErrorInfo]:
        if self.error is None:
            return None
        return JSONRPCErrorInfo.from_raw(self.error)

    @property
    def task_id(self) -> Optional[str]:
        """The response id as a string, as reported to callers."""
        if self.id is None:
            return None
        return self.id if isinstance(self.id, str) else str(self.id)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
