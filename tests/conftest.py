"""Shared fixtures for maxinator tests."""

import hashlib
import hmac
import os
from unittest.mock import MagicMock
from urllib.parse import urlencode

import pytest

from maxinator.bot import Bot


# ==================== Credentials ====================

@pytest.fixture
def bot_token():
    """A fake bot token."""
    return "f9LHodD0cOJ5Bz8kTn2pQ7wXyZ1aB3cD4eF5gH6iJ7kL8mN9oP"


@pytest.fixture
def secret_key():
    """A fake mini app secret key."""
    return "s"


# ==================== Mini App Fixtures ====================

@pytest.fixture
def sign():
    """Sign a dict of launch parameters, returning the hex HMAC-SHA256."""
    def _sign(data, key):
        check_string = "\n".join(f"{k}={data[k]}" for k in sorted(data))
        return hmac.new(key.encode(), check_string.encode(), hashlib.sha256).hexdigest()
    return _sign


@pytest.fixture
def signed_params(sign, secret_key):
    """Build a signed, URL-encoded launch parameter string."""
    def _build(data, key=None):
        signature = sign(data, key or secret_key)
        return urlencode({**data, "hash": signature})
    return _build


@pytest.fixture
def sample_user():
    """Sample mini app user record."""
    return {
        "user_id": 42,
        "first_name": "Test",
        "last_name": "User",
        "username": "testuser",
        "language_code": "ru",
    }


# ==================== HTTP Fixtures ====================

@pytest.fixture
def make_response():
    """Build a mock requests.Response."""
    def _make(json_data=None, status_code=200, content=b'{"ok": true}'):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = json_data if json_data is not None else {}
        response.content = content
        return response
    return _make


@pytest.fixture
def bot(bot_token):
    """A Bot with a mocked HTTP session."""
    return Bot(bot_token, session=MagicMock())


@pytest.fixture
def sample_bot_info():
    """Sample GET /bots/me response."""
    return {
        "user_id": 1234567,
        "name": "Test Bot",
        "username": "test_bot",
        "is_bot": True,
        "last_activity_time": 1700000000000,
    }


@pytest.fixture
def sample_message_response():
    """Sample POST /messages response."""
    return {
        "message": {
            "recipient": {"chat_id": 987654, "chat_type": "dialog"},
            "timestamp": 1700000000000,
            "body": {"mid": "mid.0000000000000001", "text": "Hello"},
        }
    }


# ==================== Environment Fixtures ====================

@pytest.fixture
def clean_env():
    """Clean environment for testing - removes relevant env vars."""
    env_vars = [
        "LOG_LEVEL",
        "LOG_SENSITIVE",
        "MAX_BOT_TOKEN",
        "MAX_SECRET_KEY",
        "MAX_API_URL",
        "MAX_TIMEOUT",
        "MAX_ADMIN_IDS",
    ]
    original = {k: os.environ.get(k) for k in env_vars}
    for k in env_vars:
        os.environ.pop(k, None)
    yield
    for k, v in original.items():
        if v is not None:
            os.environ[k] = v
        else:
            os.environ.pop(k, None)
