"""Launch parameter verification for Max mini apps.

Docs: https://dev.max.ru/docs-miniapps

A mini app receives a URL-encoded parameter string signed by the platform.
The signature is an HMAC-SHA256, keyed with the bot's secret key, over the
canonical check string: every parameter except ``hash``, sorted by key and
serialized as ``key=value`` lines joined by a single newline.

The secret key is never logged.
"""

import hashlib
import hmac
import json
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import parse_qsl, urlencode

from ..exceptions import ValidationError
from ..logging import get_logger, anonymize_id

logger = get_logger(__name__)

HASH_KEY = "hash"
APP_URL_TEMPLATE = "https://max.ru/app/{app_id}"


def parse_query(params: str) -> Dict[str, str]:
    """Parse a URL-encoded string into a flat dict; the last repeated key wins."""
    return dict(parse_qsl(params, keep_blank_values=True))


def build_check_string(data: Mapping[str, str]) -> str:
    """Build the canonical check string from parameters (``hash`` excluded)."""
    keys = sorted((key for key in data if key != HASH_KEY), key=lambda k: k.encode("utf-8"))
    return "\n".join(f"{key}={data[key]}" for key in keys)


class MiniApp:
    """Verifier for mini app launch parameters.

    Stateless apart from the secret key, safe to share between threads.

    Example:
        mini_app = MiniApp(secret_key)
        if mini_app.validate_params(init_data):
            user = mini_app.get_user(init_data)
    """

    def __init__(self, secret_key: Union[str, bytes]):
        """Initialize verifier.

        Args:
            secret_key: Secret key issued by the platform

        Raises:
            ValidationError: If the secret key is empty
        """
        if not secret_key:
            raise ValidationError("Max secret key not configured", field="secret_key")
        if isinstance(secret_key, str):
            secret_key = secret_key.encode("utf-8")
        self._secret_key = secret_key

    def __repr__(self) -> str:
        return "MiniApp(secret_key=***)"

    def compute_hash(self, data: Mapping[str, str]) -> str:
        """Compute the hex signature of a parameter mapping."""
        check_string = build_check_string(data)
        return hmac.new(self._secret_key, check_string.encode("utf-8"), hashlib.sha256).hexdigest()

    def validate_params(self, params: str) -> bool:
        """Check the signature of launch parameters.

        Never raises: malformed input or a bad signature return False.

        Args:
            params: URL-encoded launch parameters, as received by the mini app

        Returns:
            True if the hash matches the parameters
        """
        try:
            data = parse_query(params)

            if HASH_KEY not in data:
                logger.warning("Mini app params rejected: hash not found")
                return False

            received = data.pop(HASH_KEY)
            calculated = self.compute_hash(data)

            is_valid = hmac.compare_digest(calculated.encode("utf-8"), received.encode("utf-8"))
            if not is_valid:
                logger.warning("Mini app params rejected: invalid hash")
            return is_valid
        except Exception as e:
            logger.error(f"Mini app params validation error: {type(e).__name__}")
            return False

    def parse_params(self, params: str) -> Dict[str, Any]:
        """Parse launch parameters, decoding the JSON ``user`` field.

        A ``user`` value that is not a JSON object is replaced with None.
        """
        data: Dict[str, Any] = parse_query(params)

        if "user" in data:
            try:
                user = json.loads(data["user"])
            except ValueError:
                user = None
            data["user"] = user if isinstance(user, dict) else None

        return data

    def get_user(self, params: str) -> Optional[Dict[str, Any]]:
        """Return the decoded user record, or None if absent."""
        return self.parse_params(params).get("user")

    def get_user_id(self, params: str) -> Optional[int]:
        """Return the user ID from the nested user record or a flat user_id field."""
        data = self.parse_params(params)
        user = data.get("user") or {}

        user_id = user.get("user_id")
        if user_id is None:
            user_id = data.get("user_id")
        if user_id is None:
            return None

        try:
            return int(user_id)
        except (TypeError, ValueError):
            return None

    def validate_and_get_user(self, params: str) -> Dict[str, Any]:
        """Verify launch parameters and return the user record.

        Use at trust boundaries where unverified data must abort the request.

        Raises:
            ValidationError: If the signature is invalid or no user data is present
        """
        if not self.validate_params(params):
            raise ValidationError("Invalid MiniApp params signature", field="hash")

        user = self.get_user(params)
        if not user:
            raise ValidationError("User data not found in params", field="user")

        logger.debug(f"Mini app user verified: {anonymize_id(user.get('user_id'))}")
        return user

    @staticmethod
    def create_app_url(app_id: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Build the URL that opens a mini app.

        Args:
            app_id: Mini app ID
            params: Optional query parameters passed to the app
        """
        url = APP_URL_TEMPLATE.format(app_id=app_id)
        if params:
            url = f"{url}?{urlencode(params)}"
        return url
