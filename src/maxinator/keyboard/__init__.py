"""Inline keyboards for Max messages."""

from .buttons import (
    Button,
    CallbackButton,
    LinkButton,
    RequestContactButton,
    RequestGeoLocationButton,
    OpenAppButton,
    MessageButton,
    button_from_dict,
)
from .builder import InlineKeyboard, KeyboardBuilder, make, make_callbacks

__all__ = [
    "Button",
    "CallbackButton",
    "LinkButton",
    "RequestContactButton",
    "RequestGeoLocationButton",
    "OpenAppButton",
    "MessageButton",
    "button_from_dict",
    "InlineKeyboard",
    "KeyboardBuilder",
    "make",
    "make_callbacks",
]
