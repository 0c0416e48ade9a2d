"""Entity profile and metadata models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ._wire import drop_nones, identifier_from_wire, identifier_to_wire


@dataclass(slots=True)
class EntityProfileAttribute:
    key: str
    content_type: str
    content_encoding: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "contentType": self.content_type,
            "contentEncoding": self.content_encoding,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntityProfileAttribute":
        return cls(
            key=data["key"],
            content_type=data.get("contentType", "text/plain"),
            content_encoding=data.get("contentEncoding", "identity"),
            value=data.get("value", ""),
        )


@dataclass(slots=True)
class EntityProfile:
    """Profile attached to a user or channel."""

    entity_id: str | None
    attributes: List[EntityProfileAttribute] = field(default_factory=list)

    def attribute(self, key: str) -> str | None:
        """Return the value of attribute ``key`` or ``None``."""
        for attr in self.attributes:
            if attr.key == key:
                return attr.value
        return None

    def to_dict(self) -> Dict[str, Any]:
        return drop_nones(
            {
                "entityId": identifier_to_wire(self.entity_id),
                "attributes": [a.to_dict() for a in self.attributes],
            }
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntityProfile":
        return cls(
            entity_id=identifier_from_wire(data.get("entityId")),
            attributes=[EntityProfileAttribute.from_dict(a) for a in data.get("attributes", [])],
        )


@dataclass(slots=True)
class EntityMetadata:
    metadata: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"metadata": [dict(m) for m in self.metadata]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "EntityMetadata":
        return cls(metadata=[dict(m) for m in (data or {}).get("metadata", [])])
