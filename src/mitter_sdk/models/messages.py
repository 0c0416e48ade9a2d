"""
Message models as exchanged with the ``/v1/messages`` and
``/v1/channels/:channelId/messages`` endpoints.

Wire schema (output of :meth:`Message.to_dict`)::

    {"messageId": "...", "messageType": "Standard", "payloadType": "mitter.mt.Text",
     "senderId": {"identifier": "..."}, "textPayload": "hi",
     "messageData": [...], "timelineEvents": [{"type": "mitter.mtet.SentTime", ...}],
     "entityMetadata": {"metadata": []}}

Keys mapped to ``None`` are omitted. ``ChannelReferencingMessage`` adds
``channelId``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ._wire import drop_nones, identifier_from_wire, identifier_to_wire
from .entity import EntityMetadata

SENT_TIME_EVENT = "mitter.mtet.SentTime"


@dataclass(slots=True)
class TimelineEvent:
    type: str
    event_time_ms: int
    subject: str | None = None
    event_id: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return drop_nones(
            {
                "eventId": self.event_id,
                "type": self.type,
                "eventTimeMs": self.event_time_ms,
                "subject": identifier_to_wire(self.subject),
            }
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimelineEvent":
        return cls(
            type=data["type"],
            event_time_ms=int(data.get("eventTimeMs", 0)),
            subject=identifier_from_wire(data.get("subject")),
            event_id=data.get("eventId"),
        )


@dataclass(slots=True)
class MessageTimelineEvent:
    message_id: str
    timeline_event: TimelineEvent

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MessageTimelineEvent":
        return cls(
            message_id=str(data["messageId"]),
            timeline_event=TimelineEvent.from_dict(data["timelineEvent"]),
        )


@dataclass(slots=True)
class Message:
    """A single message. ``message_id`` is ``None`` only for not-yet-sent messages."""

    message_id: Optional[str] = None
    text_payload: str = ""
    sender_id: Optional[str] = None
    message_type: str = "Standard"
    payload_type: str = "mitter.mt.Text"
    message_data: List[Dict[str, Any]] = field(default_factory=list)
    timeline_events: List[TimelineEvent] = field(default_factory=list)
    entity_metadata: EntityMetadata = field(default_factory=EntityMetadata)

    @property
    def sent_time_ms(self) -> int | None:
        """Send time from the ``mitter.mtet.SentTime`` timeline event, if any."""
        for event in self.timeline_events:
            if event.type == SENT_TIME_EVENT:
                return event.event_time_ms
        return None

    def to_dict(self) -> Dict[str, Any]:
        return drop_nones(
            {
                "messageId": self.message_id,
                "messageType": self.message_type,
                "payloadType": self.payload_type,
                "senderId": identifier_to_wire(self.sender_id),
                "textPayload": self.text_payload,
                "messageData": [dict(d) for d in self.message_data],
                "timelineEvents": [e.to_dict() for e in self.timeline_events],
                "entityMetadata": self.entity_metadata.to_dict(),
            }
        )

    @classmethod
    def _fields_from_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        message_id = data.get("messageId")
        return {
            "message_id": None if message_id is None else str(message_id),
            "text_payload": data.get("textPayload", ""),
            "sender_id": identifier_from_wire(data.get("senderId")),
            "message_type": data.get("messageType", "Standard"),
            "payload_type": data.get("payloadType", "mitter.mt.Text"),
            "message_data": [dict(d) for d in data.get("messageData", [])],
            "timeline_events": [TimelineEvent.from_dict(e) for e in data.get("timelineEvents", [])],
            "entity_metadata": EntityMetadata.from_dict(data.get("entityMetadata")),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        return cls(**cls._fields_from_dict(data))


@dataclass(slots=True)
class ChannelReferencingMessage(Message):
    """A message that also names the channel it belongs to."""

    channel_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        base = Message.to_dict(self)
        base.update(drop_nones({"channelId": identifier_to_wire(self.channel_id)}))
        return base

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelReferencingMessage":
        fields = cls._fields_from_dict(data)
        fields["channel_id"] = identifier_from_wire(data.get("channelId"))
        return cls(**fields)


def message_order_key(message: Message) -> tuple[int, str]:
    """Canonical oldest -> newest ordering key within a channel."""
    if message.message_id is None:
        raise ValueError("Unsent messages have no position in a channel")
    return (message.sent_time_ms or 0, message.message_id)
