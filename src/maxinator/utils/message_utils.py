"""Message text utilities for Max bots."""

import html
from typing import List

from ..limits import MESSAGE_TEXT_MAX_LENGTH


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate text to max_length characters, ending with suffix.

    Args:
        text: The text to truncate
        max_length: Maximum length in characters, suffix included
        suffix: Marker appended to truncated text

    Returns:
        The original text if it fits, otherwise the shortened text
    """
    if len(text) <= max_length:
        return text
    return text[:max(max_length - len(suffix), 0)] + suffix


def split_long_text(text: str, max_length: int = MESSAGE_TEXT_MAX_LENGTH) -> List[str]:
    """Split long text into several messages that fit within Max's limit.

    Lines are packed greedily into messages, joined by newlines. A single
    line longer than max_length is hard-cut into max_length chunks.

    Args:
        text: The message text to split
        max_length: Maximum length per message (default: 4096 for Max)

    Returns:
        List of message parts, each at most max_length characters
    """
    if len(text) <= max_length:
        return [text]

    messages = []
    current = ""

    for line in text.split("\n"):
        if current and len(current) + len(line) + 1 <= max_length:
            current = f"{current}\n{line}"
            continue
        if not current and len(line) <= max_length:
            current = line
            continue

        # Line does not fit into the current message
        if current:
            messages.append(current)
            current = ""

        if len(line) > max_length:
            messages.extend(line[i:i + max_length] for i in range(0, len(line), max_length))
        else:
            current = line

    if current:
        messages.append(current)

    return messages


def escape_html(text: str) -> str:
    """Escape text for messages sent with format="html"."""
    return html.escape(text, quote=True)
