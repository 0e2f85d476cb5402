"""Data models for Max API objects."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class User:
    """Max user.

    Attributes:
        user_id: User ID
        name: Display name
        username: Public username (if set)
        is_bot: Whether the user is a bot
        last_activity_time: Last activity (milliseconds since epoch)
    """
    user_id: int
    name: str
    username: Optional[str] = None
    is_bot: bool = False
    last_activity_time: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            user_id=data["user_id"],
            name=data["name"],
            username=data.get("username"),
            is_bot=data.get("is_bot", False),
            last_activity_time=data.get("last_activity_time"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(asdict(self))


@dataclass
class Chat:
    """Max chat: a dialog, group or channel."""
    chat_id: int
    type: str
    title: Optional[str] = None
    description: Optional[str] = None
    participants: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Chat":
        return cls(
            chat_id=data["chat_id"],
            type=data["type"],
            title=data.get("title"),
            description=data.get("description"),
            participants=data.get("participants"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(asdict(self))

    @property
    def is_dialog(self) -> bool:
        return self.type == "dialog"

    @property
    def is_group(self) -> bool:
        return self.type == "group"

    @property
    def is_channel(self) -> bool:
        return self.type == "channel"


@dataclass
class Message:
    """Max message."""
    message_id: str
    chat_id: int
    user_id: int
    text: str = ""
    timestamp: Optional[int] = None
    attachments: Optional[List[Dict[str, Any]]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        return cls(
            message_id=data["message_id"],
            chat_id=data["chat_id"],
            user_id=data["user_id"],
            text=data.get("text") or "",
            timestamp=data.get("timestamp"),
            attachments=data.get("attachments"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none(asdict(self))
