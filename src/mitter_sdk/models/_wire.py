"""Small helpers shared by the wire models."""

from __future__ import annotations

from typing import Any, Dict


def drop_nones(d: Dict[str, Any]) -> Dict[str, Any]:
    """Return a shallow copy of ``d`` without keys mapped to ``None``."""
    return {k: v for k, v in d.items() if v is not None}


def identifier_from_wire(raw: Any) -> str | None:
    """Accept either ``"id"`` or ``{"identifier": "id"}`` and return the bare id."""
    if raw is None:
        return None
    if isinstance(raw, dict):
        value = raw.get("identifier")
        return None if value is None else str(value)
    return str(raw)


def identifier_to_wire(value: str | None) -> Dict[str, str] | None:
    if value is None:
        return None
    return {"identifier": value}
