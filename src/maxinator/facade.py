"""Convenience entry point bundling the bot, mini app and keyboard helpers."""

from typing import Any, Dict, Optional

from .bot import Bot
from .config import MaxConfig
from .keyboard import KeyboardBuilder
from .miniapp import MiniApp


class Max:
    """Shared access to a configured Bot and MiniApp.

    The Bot and MiniApp are created on first use and reused afterwards.

    Example:
        max_ = Max(MaxConfig.from_env())
        max_.send(chat_id, "Hello!", keyboard=max_.keyboard().callback("Hi", "hi"))
    """

    def __init__(self, config: MaxConfig):
        self.config = config
        self._bot: Optional[Bot] = None
        self._mini_app: Optional[MiniApp] = None

    @property
    def bot(self) -> Bot:
        """Bot client (raises ConfigurationError if no token is configured)."""
        if self._bot is None:
            self._bot = Bot(
                self.config.token,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
            )
        return self._bot

    @property
    def mini_app(self) -> MiniApp:
        """Mini app verifier (raises ValidationError if no secret key is configured)."""
        if self._mini_app is None:
            self._mini_app = MiniApp(self.config.secret_key)
        return self._mini_app

    @staticmethod
    def keyboard() -> KeyboardBuilder:
        """Create a new inline keyboard builder."""
        return KeyboardBuilder()

    def send(self, chat_id, text: str, **params) -> Dict[str, Any]:
        """Send a message with the configured bot."""
        return self.bot.send_message(chat_id, text, **params)

    def validate_mini_app(self, params: str) -> bool:
        """Check mini app launch parameters."""
        return self.mini_app.validate_params(params)

    def get_mini_app_user(self, params: str) -> Optional[Dict[str, Any]]:
        """Get the user record from mini app launch parameters (unverified)."""
        return self.mini_app.get_user(params)

    def is_admin(self, user_id: int) -> bool:
        """Check whether user_id is a configured administrator."""
        return self.config.is_admin(user_id)
