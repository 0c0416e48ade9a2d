"""Typed wire models for the Mitter platform."""

from .channels import (
    Channel,
    ChannelParticipation,
    ParticipatedChannel,
    ParticipationStatus,
    StandardRuleSetNames,
)
from .entity import EntityMetadata, EntityProfile, EntityProfileAttribute
from .messages import (
    SENT_TIME_EVENT,
    ChannelReferencingMessage,
    Message,
    MessageTimelineEvent,
    TimelineEvent,
    message_order_key,
)

__all__ = [
    "Channel",
    "ChannelParticipation",
    "ChannelReferencingMessage",
    "EntityMetadata",
    "EntityProfile",
    "EntityProfileAttribute",
    "Message",
    "MessageTimelineEvent",
    "ParticipatedChannel",
    "ParticipationStatus",
    "SENT_TIME_EVENT",
    "StandardRuleSetNames",
    "TimelineEvent",
    "message_order_key",
]
