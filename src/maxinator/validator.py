"""Validation of values before they are sent to the Max API.

Text limits count characters (Unicode code points); URL and payload limits
count UTF-8 bytes. A multi-byte character counts once toward a text limit but
several times toward a byte limit.

Every function raises ValidationError on the first violated constraint and
returns None otherwise.
"""

import re
from collections.abc import Mapping
from typing import Any, Optional, Sequence
from urllib.parse import urlparse

from . import limits
from .exceptions import ValidationError

ALLOWED_FORMATS = ("markdown", "html")

_WHITESPACE = re.compile(r'\s')


def _check_text(text: str, field: str, label: str, max_length: int, allow_empty: bool = False) -> None:
    if not text and not allow_empty:
        raise ValidationError(f"{label} cannot be empty", field=field, size=0, limit=max_length)

    length = len(text)
    if length > max_length:
        raise ValidationError(
            f"{label} is too long ({length} characters). Maximum: {max_length}",
            field=field,
            size=length,
            limit=max_length,
        )


def validate_message_text(text: str) -> None:
    """Validate message text: non-empty, at most 4096 characters."""
    _check_text(text, "message_text", "Message text", limits.MESSAGE_TEXT_MAX_LENGTH)


def validate_button_text(text: str) -> None:
    """Validate a button label: non-empty, at most 256 characters."""
    _check_text(text, "button_text", "Button text", limits.BUTTON_TEXT_MAX_LENGTH)


def validate_chat_title(title: str) -> None:
    """Validate a chat title: non-empty, at most 255 characters."""
    _check_text(title, "chat_title", "Chat title", limits.CHAT_TITLE_MAX_LENGTH)


def validate_chat_description(description: str) -> None:
    """Validate a chat description: at most 1000 characters, may be empty."""
    _check_text(
        description,
        "chat_description",
        "Chat description",
        limits.CHAT_DESCRIPTION_MAX_LENGTH,
        allow_empty=True,
    )


def is_valid_url(url: str) -> bool:
    """Check that url is a syntactically valid absolute URL (scheme and host)."""
    if not url or _WHITESPACE.search(url):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def validate_button_url(url: str) -> None:
    """Validate a button URL: absolute URL of at most 2048 bytes."""
    if not is_valid_url(url):
        raise ValidationError(f"Invalid URL: {url}", field="button_url")

    length = len(url.encode("utf-8"))
    if length > limits.BUTTON_URL_MAX_LENGTH:
        raise ValidationError(
            f"Button URL is too long ({length} bytes). Maximum: {limits.BUTTON_URL_MAX_LENGTH}",
            field="button_url",
            size=length,
            limit=limits.BUTTON_URL_MAX_LENGTH,
        )


def validate_callback_payload(payload: str) -> None:
    """Validate a callback payload: at most 4096 bytes, may be empty."""
    length = len(payload.encode("utf-8"))
    if length > limits.BUTTON_CALLBACK_PAYLOAD_MAX_LENGTH:
        raise ValidationError(
            f"Callback payload is too long ({length} bytes). "
            f"Maximum: {limits.BUTTON_CALLBACK_PAYLOAD_MAX_LENGTH}",
            field="callback_payload",
            size=length,
            limit=limits.BUTTON_CALLBACK_PAYLOAD_MAX_LENGTH,
        )


def validate_file_size(size: int) -> None:
    """Validate an upload size against the 20 MiB ceiling."""
    if size > limits.FILE_MAX_SIZE:
        raise ValidationError(
            f"File is too large ({size} bytes). Maximum: {limits.FILE_MAX_SIZE}",
            field="file_size",
            size=size,
            limit=limits.FILE_MAX_SIZE,
        )


def _button_type(button: Any) -> str:
    if isinstance(button, Mapping):
        return button.get("type", "")
    return getattr(button, "type", "")


def validate_keyboard(rows: Sequence[Sequence[Any]]) -> None:
    """Validate keyboard structure.

    Checks, in this order, stopping at the first violation:
    1. Row count (whole keyboard)
    2. For each row in order: button count, then special button count
    3. Total button count (whole keyboard)

    Args:
        rows: Rows of Button objects or button dicts with a "type" key
    """
    row_count = len(rows)
    if row_count > limits.KEYBOARD_ROWS_MAX:
        raise ValidationError(
            f"Too many rows in keyboard ({row_count}). Maximum: {limits.KEYBOARD_ROWS_MAX}",
            field="keyboard.rows",
            size=row_count,
            limit=limits.KEYBOARD_ROWS_MAX,
        )

    total_buttons = 0
    for row_index, row in enumerate(rows):
        buttons_in_row = len(row)
        total_buttons += buttons_in_row

        if buttons_in_row > limits.KEYBOARD_BUTTONS_PER_ROW_MAX:
            raise ValidationError(
                f"Too many buttons in row {row_index} ({buttons_in_row}). "
                f"Maximum: {limits.KEYBOARD_BUTTONS_PER_ROW_MAX}",
                field="keyboard.row_buttons",
                size=buttons_in_row,
                limit=limits.KEYBOARD_BUTTONS_PER_ROW_MAX,
            )

        special_buttons = sum(1 for button in row if _button_type(button) in limits.SPECIAL_BUTTON_TYPES)
        if special_buttons > limits.KEYBOARD_SPECIAL_BUTTONS_PER_ROW_MAX:
            raise ValidationError(
                f"Too many special buttons (link, open_app, etc.) in row {row_index} "
                f"({special_buttons}). Maximum: {limits.KEYBOARD_SPECIAL_BUTTONS_PER_ROW_MAX}",
                field="keyboard.row_special_buttons",
                size=special_buttons,
                limit=limits.KEYBOARD_SPECIAL_BUTTONS_PER_ROW_MAX,
            )

    if total_buttons > limits.KEYBOARD_BUTTONS_MAX:
        raise ValidationError(
            f"Too many buttons in keyboard ({total_buttons}). Maximum: {limits.KEYBOARD_BUTTONS_MAX}",
            field="keyboard.buttons",
            size=total_buttons,
            limit=limits.KEYBOARD_BUTTONS_MAX,
        )


def validate_format(format: Optional[str]) -> None:
    """Validate a message format: None, "markdown" or "html" (any case)."""
    if format is None:
        return

    if format.lower() not in ALLOWED_FORMATS:
        raise ValidationError(
            f"Invalid format: {format}. Allowed: {', '.join(ALLOWED_FORMATS)}",
            field="format",
        )
