"""Maxinator - Python client for the Max messenger Bot API.

This package provides:
- Bot API client (bot info, messages, chats, subscriptions, uploads)
- Inline keyboard builder with platform limit validation
- Mini app launch parameter verification
- Validation of texts, URLs and payloads against API limits
- Privacy-safe logging
- CLI scaffolding (Click-based)
"""

__version__ = "0.1.0"

from .logging import setup_logging, get_logger

from .exceptions import MaxError, ValidationError, ApiError, ConfigurationError
from . import limits

# Clients
from .client import MaxClient
from .bot import Bot
from .config import MaxConfig
from .facade import Max

# Keyboards
from .keyboard import InlineKeyboard, KeyboardBuilder, make_callbacks

# Mini apps
from .miniapp import MiniApp

# Types
from .types import User, Chat, Message

__all__ = [
    "__version__",
    "setup_logging",
    "get_logger",
    # Errors
    "MaxError",
    "ValidationError",
    "ApiError",
    "ConfigurationError",
    "limits",
    # Clients
    "MaxClient",
    "Bot",
    "MaxConfig",
    "Max",
    # Keyboards
    "InlineKeyboard",
    "KeyboardBuilder",
    "make_callbacks",
    # Mini apps
    "MiniApp",
    # Types
    "User",
    "Chat",
    "Message",
]
