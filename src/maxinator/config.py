"""Configuration for Maxinator clients.

Library classes never read the environment; settings are passed explicitly.
MaxConfig.from_env() is the single place where environment variables are read.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .client import MaxClient
from .exceptions import ConfigurationError


def _parse_admin_ids(value: str) -> Tuple[int, ...]:
    ids = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.append(int(part))
        except ValueError:
            raise ConfigurationError(f"Invalid admin ID in MAX_ADMIN_IDS: {part!r}")
    return tuple(ids)


@dataclass(frozen=True)
class MaxConfig:
    """Settings for the Max bot and mini app.

    Attributes:
        token: Bot access token
        secret_key: Mini app secret key used to verify launch parameters
        base_url: API base URL
        timeout: Request timeout in seconds
        admin_ids: User IDs treated as bot administrators
    """
    token: Optional[str] = None
    secret_key: Optional[str] = None
    base_url: str = MaxClient.DEFAULT_URL
    timeout: float = MaxClient.DEFAULT_TIMEOUT
    admin_ids: Tuple[int, ...] = ()

    def __repr__(self) -> str:
        return (
            f"MaxConfig(token={'***' if self.token else None}, "
            f"secret_key={'***' if self.secret_key else None}, "
            f"base_url={self.base_url!r}, timeout={self.timeout}, admin_ids={self.admin_ids})"
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None) -> "MaxConfig":
        """Load settings from environment variables.

        Variables:
            MAX_BOT_TOKEN: Bot access token
            MAX_SECRET_KEY: Mini app secret key
            MAX_API_URL: API base URL (default https://platform-api.max.ru/)
            MAX_TIMEOUT: Request timeout in seconds (default 30)
            MAX_ADMIN_IDS: Comma-separated admin user IDs
        """
        env = os.environ if environ is None else environ

        timeout = env.get("MAX_TIMEOUT")
        try:
            timeout = float(timeout) if timeout else MaxClient.DEFAULT_TIMEOUT
        except ValueError:
            raise ConfigurationError(f"Invalid MAX_TIMEOUT: {timeout!r}")

        return cls(
            token=env.get("MAX_BOT_TOKEN") or None,
            secret_key=env.get("MAX_SECRET_KEY") or None,
            base_url=env.get("MAX_API_URL") or MaxClient.DEFAULT_URL,
            timeout=timeout,
            admin_ids=_parse_admin_ids(env.get("MAX_ADMIN_IDS", "")),
        )

    def is_admin(self, user_id: int) -> bool:
        """Check whether user_id is listed as an administrator."""
        return user_id in self.admin_ids
