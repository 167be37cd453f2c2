"""Enumerations stored in friendship and feed rows."""
import enum


class FriendshipStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"


class EventType(str, enum.Enum):
    LIKE = "LIKE"
    REVIEW = "REVIEW"
    FRIEND = "FRIEND"


class Operation(str, enum.Enum):
    ADD = "ADD"
    UPDATE = "UPDATE"
    REMOVE = "REMOVE"
