"""
SDK Type Definitions

Result and input types returned to, and accepted from, SDK callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class RelayStatus(Enum):
    """Status reported for a relayed task."""
    COMPLETED = "completed"


@dataclass
class HeaderRow:
    """A single key/value row of a custom header table."""
    key: Optional[str] = None
    value: Optional[str] = None

    @classmethod
    def from_any(cls, row: Any) -> "HeaderRow":
        """Create a HeaderRow from a dict, a table row, or a (key, value) pair.

        Table rows come from the header editor as
        ``{"id": ..., "cells": {"Key": ..., "Value": ...}}``.
        """
        if isinstance(row, HeaderRow):
            return row
        if isinstance(row, dict):
            cells = row.get("cells")
            if isinstance(cells, dict):
                return cls(key=cells.get("Key"), value=cells.get("Value"))
            return cls(key=row.get("key"), value=row.get("value"))
        if isinstance(row, (tuple, list)) and len(row) == 2:
            return cls(key=row[0], value=row[1])
        return cls()


@dataclass(frozen=True)
class SendResult:
    """Normalized outcome of a successful relay."""
    response_text: str
    agent_name: str
    task_id: Optional[str] = None
    status: RelayStatus = RelayStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the caller-facing payload."""
        return {
            "response": self.response_text,
            "agentName": self.agent_name,
            "taskId": self.task_id,
            "status": self.status.value,
        }
