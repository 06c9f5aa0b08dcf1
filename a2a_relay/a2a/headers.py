"""Custom header normalization."""

from typing import Any, Dict, Iterable, Optional

from a2a_relay.types import HeaderRow


def normalize_headers(rows: Optional[Iterable[Any]]) -> Dict[str, str]:
    """Flatten header rows into a header mapping.

    A row contributes only when both its key and value are non-empty
    strings; other rows are skipped. Later rows win on duplicate keys.

    Args:
        rows: HeaderRow objects, ``{"key", "value"}`` dicts, header table
            rows, or ``(key, value)`` pairs. ``None`` means no headers.

    Returns:
        Header name to value mapping
    """
    headers: Dict[str, str] = {}
    if not rows:
        return headers
    if isinstance(rows, dict):
        rows = rows.items()

    for raw in rows:
        row = HeaderRow.from_any(raw)
        if not isinstance(row.key, str) or not isinstance(row.value, str):
            continue
        if row.key and row.value:
            headers[row.key] = row.value
    return headers
