"""Text extraction from ``message/send`` results.

An agent may answer ``message/send`` with a Message or with a Task, and a
Task may carry its text in an embedded message, in artifacts, or in its
status message. The shapes are tried in a fixed priority order and the
first one that matches wins:

1. direct message      ``{"parts": [...]}``
2. task with message   ``{"message": {"parts": [...]}}``
3. task with artifacts ``{"artifacts": [{"parts": [...]}, ...]}``
4. task status message ``{"status": {"message": {"parts": [...]}}}``

Only ``text`` parts are kept. File and data parts are dropped, so a result
that carries only non-text content extracts to ``""``.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple

from a2a_relay.a2a.models import JSONRPCResponse
from a2a_relay.exceptions import ProtocolError

TEXT_SEPARATOR = "\n"

ShapeExtractor = Callable[[dict], Optional[str]]


def _text_fragments(parts: list) -> List[str]:
    return [
        part["text"]
        for part in parts
        if isinstance(part, dict)
        and part.get("kind") == "text"
        and isinstance(part.get("text"), str)
    ]


def _parts_text(container: Any) -> Optional[str]:
    """Joined text of ``container["parts"]``, or None if there is no parts list."""
    if not isinstance(container, dict):
        return None
    parts = container.get("parts")
    if not isinstance(parts, list):
        return None
    return TEXT_SEPARATOR.join(_text_fragments(parts))


def from_direct_message(result: dict) -> Optional[str]:
    return _parts_text(result)


def from_task_message(result: dict) -> Optional[str]:
    return _parts_text(result.get("message"))


def from_artifacts(result: dict) -> Optional[str]:
    # An artifact list without any text falls through to the status message.
    artifacts = result.get("artifacts")
    if not isinstance(artifacts, list):
        return None
    texts: List[str] = []
    for artifact in artifacts:
        if isinstance(artifact, dict) and isinstance(artifact.get("parts"), list):
            texts.extend(_text_fragments(artifact["parts"]))
    if not texts:
        return None
    return TEXT_SEPARATOR.join(texts)


def from_status_message(result: dict) -> Optional[str]:
    status = result.get("status")
    if not isinstance(status, dict):
        return None
    return _parts_text(status.get("message"))


RESULT_SHAPES: Tuple[ShapeExtractor, ...] = (
    from_direct_message,
    from_task_message,
    from_artifacts,
    from_status_message,
)


def extract_result_text(result: Any) -> str:
    """Extract text from a JSON-RPC ``result`` value. Never raises."""
    if not isinstance(result, dict):
        return ""
    for extractor in RESULT_SHAPES:
        text = extractor(result)
        if text is not None:
            return text
    return ""


def extract_text(response: JSONRPCResponse) -> str:
    """Extract the agent's text reply from a JSON-RPC response.

    Args:
        response: Envelope returned by :func:`send_message`

    Returns:
        Text fragments joined with newlines, or ``""`` if the result has no
        recognizable text

    Raises:
        ProtocolError: If the response carries a JSON-RPC ``error``; the
            ``result`` member is ignored in that case
    """
    error = response.error_info
    if error is not None:
        raise ProtocolError(
            f"A2A error: {error.message}",
            rpc_code=error.code,
            rpc_data=error.data,
        )
    return extract_result_text(response.result)
