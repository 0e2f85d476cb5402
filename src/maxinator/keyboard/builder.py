"""Inline keyboard builder for Max messages.

Docs: https://dev.max.ru/docs-api

Limits:
- At most 210 buttons (30 rows of 7 buttons)
- At most 3 link, open_app, request_geo_location, request_contact buttons per row
- Link URL at most 2048 characters

Building is two-phase. KeyboardBuilder accumulates rows and checks each
button's own fields as it is added; structural limits depend on the shape of
the whole keyboard and are only checked by build(), which returns an
immutable InlineKeyboard.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple, Union

from .. import validator
from ..exceptions import ValidationError
from ..logging import get_logger
from .buttons import (
    Button,
    CallbackButton,
    LinkButton,
    MessageButton,
    OpenAppButton,
    RequestContactButton,
    RequestGeoLocationButton,
)

logger = get_logger(__name__)

ATTACHMENT_TYPE = "inline_keyboard"


def _attachment(buttons: List[List[Dict[str, Any]]]) -> Dict[str, Any]:
    return {
        "type": ATTACHMENT_TYPE,
        "payload": {
            "buttons": buttons,
        },
    }


@dataclass(frozen=True)
class InlineKeyboard:
    """A validated inline keyboard, ready to be attached to a message.

    Attributes:
        rows: Button rows, top to bottom, each row left to right
    """
    rows: Tuple[Tuple[Button, ...], ...]

    @property
    def button_count(self) -> int:
        return sum(len(row) for row in self.rows)

    def __iter__(self) -> Iterator[Tuple[Button, ...]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the inline_keyboard attachment format."""
        return _attachment([[button.to_dict() for button in row] for row in self.rows])

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


class KeyboardBuilder:
    """Builder for inline keyboards.

    Not internally synchronized: do not share one builder between threads
    without external locking.

    Example:
        keyboard = (
            KeyboardBuilder()
            .callback("Yes", "answer:yes")
            .callback("No", "answer:no")
            .row()
            .link("Docs", "https://dev.max.ru")
            .build()
        )
    """

    def __init__(self):
        self._rows: List[List[Button]] = []

    @property
    def rows(self) -> List[List[Button]]:
        """Copy of the rows accumulated so far."""
        return [list(row) for row in self._rows]

    def row(self) -> "KeyboardBuilder":
        """Start a new row; following buttons are added to it."""
        self._rows.append([])
        return self

    def add_button(self, button: Button) -> "KeyboardBuilder":
        """Append a button to the current row, creating the first row if needed."""
        if not self._rows:
            self.row()
        self._rows[-1].append(button)
        return self

    def callback(self, text: str, payload: str) -> "KeyboardBuilder":
        """Add a callback button.

        Args:
            text: Button label
            payload: Data delivered in the message_callback event
        """
        validator.validate_button_text(text)
        validator.validate_callback_payload(payload)
        return self.add_button(CallbackButton(text=text, payload=payload))

    def link(self, text: str, url: str) -> "KeyboardBuilder":
        """Add a button that opens url (at most 2048 bytes)."""
        validator.validate_button_text(text)
        validator.validate_button_url(url)
        return self.add_button(LinkButton(text=text, url=url))

    def request_contact(self, text: str) -> "KeyboardBuilder":
        """Add a button requesting the user's contact."""
        validator.validate_button_text(text)
        return self.add_button(RequestContactButton(text=text))

    def request_geo_location(self, text: str) -> "KeyboardBuilder":
        """Add a button requesting the user's location."""
        validator.validate_button_text(text)
        return self.add_button(RequestGeoLocationButton(text=text))

    def open_app(self, text: str, app_url: str) -> "KeyboardBuilder":
        """Add a button launching the mini app at app_url."""
        validator.validate_button_text(text)
        validator.validate_button_url(app_url)
        return self.add_button(OpenAppButton(text=text, url=app_url))

    def message(self, text: str, message: str) -> "KeyboardBuilder":
        """Add a button that sends message to the bot on the user's behalf.

        Args:
            text: Button label
            message: Text of the message to send
        """
        validator.validate_button_text(text)
        validator.validate_message_text(message)
        return self.add_button(MessageButton(text=text, payload=message))

    def build(self) -> InlineKeyboard:
        """Validate the keyboard structure and freeze it.

        Raises:
            ValidationError: On the first violated structural limit
        """
        validator.validate_keyboard(self._rows)
        keyboard = InlineKeyboard(rows=tuple(tuple(row) for row in self._rows))
        logger.debug(f"Built keyboard: {len(keyboard)} rows, {keyboard.button_count} buttons")
        return keyboard

    def get(self) -> Dict[str, Any]:
        """Build and return the attachment dict."""
        return self.build().to_dict()

    def to_json(self) -> str:
        """Build and return the attachment as JSON."""
        return self.build().to_json()


def make(rows: Sequence[Sequence[Union[Button, Mapping[str, Any]]]]) -> Dict[str, Any]:
    """Wrap pre-built rows into an inline_keyboard attachment.

    Args:
        rows: Rows of Button objects or already serialized button dicts

    Raises:
        ValidationError: If the structure violates keyboard limits
    """
    validator.validate_keyboard(rows)
    return _attachment([
        [button.to_dict() if isinstance(button, Button) else dict(button) for button in row]
        for row in rows
    ])


def make_callbacks(
    buttons: Union[Mapping[str, str], Iterable[Tuple[str, str]]],
    columns: int = 3,
) -> Dict[str, Any]:
    """Build a keyboard of callback buttons laid out in a grid.

    Args:
        buttons: Ordered mapping of label -> payload, or (label, payload) pairs
        columns: Number of buttons per row

    Returns:
        The inline_keyboard attachment dict

    Raises:
        ValidationError: If a label/payload or the resulting shape is invalid
    """
    if columns < 1:
        raise ValidationError(f"Columns must be at least 1 (got {columns})", field="columns", size=columns, limit=1)

    pairs = buttons.items() if isinstance(buttons, Mapping) else buttons

    keyboard = KeyboardBuilder()
    for count, (text, payload) in enumerate(pairs):
        if count % columns == 0:
            keyboard.row()
        keyboard.callback(text, payload)

    return keyboard.get()
