"""Channel and participation models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from ._wire import drop_nones, identifier_from_wire, identifier_to_wire
from .entity import EntityMetadata, EntityProfile
from .messages import TimelineEvent


class StandardRuleSetNames(str, Enum):
    DIRECT_MESSAGE = "io.mitter.ruleset.chats.DirectMessage"
    GROUP_CHAT = "io.mitter.ruleset.chats.GroupChat"
    SYSTEM_CHANNEL = "io.mitter.ruleset.chats.SystemChannel"
    SINGLE_PARTICIPANT_CHANNEL = "io.mitter.ruleset.chats.SingleParticipantChannel"


class ParticipationStatus(str, Enum):
    ACTIVE = "Active"
    READ_ONLY = "ReadOnly"
    DISABLED = "Disabled"


@dataclass(slots=True)
class ChannelParticipation:
    participant_id: str
    participation_status: ParticipationStatus = ParticipationStatus.ACTIVE
    channel_id: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return drop_nones(
            {
                "participantId": identifier_to_wire(self.participant_id),
                "participationStatus": self.participation_status.value,
                "channelId": identifier_to_wire(self.channel_id),
            }
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelParticipation":
        return cls(
            participant_id=identifier_from_wire(data.get("participantId")) or "",
            participation_status=ParticipationStatus(data.get("participationStatus", "Active")),
            channel_id=identifier_from_wire(data.get("channelId")),
        )


@dataclass(slots=True)
class Channel:
    default_rule_set: str
    participation: List[ChannelParticipation] = field(default_factory=list)
    entity_profile: EntityProfile | None = None
    channel_id: str | None = None
    timeline_events: List[TimelineEvent] = field(default_factory=list)
    applied_acls: Dict[str, List[str]] = field(
        default_factory=lambda: {"plusAppliedAcls": [], "minusAppliedAcls": []}
    )
    system_channel: bool = False
    entity_metadata: EntityMetadata = field(default_factory=EntityMetadata)

    def identifier(self) -> str:
        if self.channel_id is None:
            raise ValueError("Channel has not been created yet")
        return self.channel_id

    def to_dict(self) -> Dict[str, Any]:
        return drop_nones(
            {
                "channelId": self.channel_id,
                "defaultRuleSet": self.default_rule_set,
                "participation": [p.to_dict() for p in self.participation],
                "entityProfile": self.entity_profile.to_dict() if self.entity_profile else None,
                "timelineEvents": [e.to_dict() for e in self.timeline_events],
                "appliedAcls": {k: list(v) for k, v in self.applied_acls.items()},
                "systemChannel": self.system_channel,
                "entityMetadata": self.entity_metadata.to_dict(),
            }
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Channel":
        profile = data.get("entityProfile")
        return cls(
            default_rule_set=data.get("defaultRuleSet", StandardRuleSetNames.GROUP_CHAT.value),
            participation=[ChannelParticipation.from_dict(p) for p in data.get("participation", [])],
            entity_profile=EntityProfile.from_dict(profile) if profile else None,
            channel_id=identifier_from_wire(data.get("channelId")),
            timeline_events=[TimelineEvent.from_dict(e) for e in data.get("timelineEvents", [])],
            applied_acls={
                k: list(v)
                for k, v in (data.get("appliedAcls") or {"plusAppliedAcls": [], "minusAppliedAcls": []}).items()
            },
            system_channel=bool(data.get("systemChannel", False)),
            entity_metadata=EntityMetadata.from_dict(data.get("entityMetadata")),
        )


@dataclass(slots=True)
class ParticipatedChannel:
    participation_status: ParticipationStatus
    channel: Channel

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParticipatedChannel":
        return cls(
            participation_status=ParticipationStatus(data.get("participationStatus", "Active")),
            channel=Channel.from_dict(data["channel"]),
        )
