"""Utility functions for Maxinator."""

from .message_utils import (
    escape_html,
    split_long_text,
    truncate_text,
)

__all__ = [
    "escape_html",
    "split_long_text",
    "truncate_text",
]
