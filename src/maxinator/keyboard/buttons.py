"""Inline keyboard button types.

Each button type is its own frozen dataclass sharing the ``text`` label.
Serialized form is ``{"type": ..., "text": ...}`` plus ``url`` for link and
open_app buttons or ``payload`` for callback and message buttons.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict

from ..exceptions import ValidationError
from ..limits import SPECIAL_BUTTON_TYPES


@dataclass(frozen=True)
class Button:
    """Base class for keyboard buttons.

    Attributes:
        text: Label shown on the button
    """
    text: str

    type: ClassVar[str] = ""

    @property
    def is_special(self) -> bool:
        """Whether the button counts toward the per-row special button cap."""
        return self.type in SPECIAL_BUTTON_TYPES

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class CallbackButton(Button):
    """Sends a message_callback event with payload to the bot."""
    payload: str = ""

    type: ClassVar[str] = "callback"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text, "payload": self.payload}


@dataclass(frozen=True)
class LinkButton(Button):
    """Opens url in a new tab."""
    url: str = ""

    type: ClassVar[str] = "link"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text, "url": self.url}


@dataclass(frozen=True)
class RequestContactButton(Button):
    """Asks the user to share their contact and phone number."""

    type: ClassVar[str] = "request_contact"


@dataclass(frozen=True)
class RequestGeoLocationButton(Button):
    """Asks the user to share their location."""

    type: ClassVar[str] = "request_geo_location"


@dataclass(frozen=True)
class OpenAppButton(Button):
    """Launches a mini app."""
    url: str = ""

    type: ClassVar[str] = "open_app"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text, "url": self.url}


@dataclass(frozen=True)
class MessageButton(Button):
    """Sends payload back to the bot as a plain text message from the user."""
    payload: str = ""

    type: ClassVar[str] = "message"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text, "payload": self.payload}


BUTTON_TYPES: Dict[str, type] = {
    cls.type: cls
    for cls in (
        CallbackButton,
        LinkButton,
        RequestContactButton,
        RequestGeoLocationButton,
        OpenAppButton,
        MessageButton,
    )
}


def button_from_dict(data: Dict[str, Any]) -> Button:
    """Parse a serialized button back into its typed variant.

    Raises:
        ValidationError: If the type is unknown or a required field is missing
    """
    button_type = data.get("type")
    cls = BUTTON_TYPES.get(button_type)
    if cls is None:
        raise ValidationError(f"Unknown button type: {button_type}", field="button_type")

    try:
        if cls in (CallbackButton, MessageButton):
            return cls(text=data["text"], payload=data["payload"])
        if cls in (LinkButton, OpenAppButton):
            return cls(text=data["text"], url=data["url"])
        return cls(text=data["text"])
    except KeyError as e:
        raise ValidationError(f"Button of type {button_type} is missing field {e}", field="button")
