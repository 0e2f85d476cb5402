"""Max Bot API endpoints.

Docs: https://dev.max.ru/docs-api

One method per REST route. Values with local limits (message text, format,
chat title and description, webhook URL) are validated before the request
is made.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from .client import MaxClient
from .exceptions import ValidationError
from .keyboard import InlineKeyboard, KeyboardBuilder
from .logging import get_logger, anonymize_id
from .validator import (
    validate_chat_description,
    validate_chat_title,
    validate_format,
    validate_message_text,
    is_valid_url,
)

logger = get_logger(__name__)

ChatId = Union[int, str]


def _keyboard_attachment(keyboard: Union[InlineKeyboard, KeyboardBuilder, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(keyboard, KeyboardBuilder):
        return keyboard.get()
    if isinstance(keyboard, InlineKeyboard):
        return keyboard.to_dict()
    return dict(keyboard)


def _message_body(text: str, keyboard, params: Dict[str, Any]) -> Dict[str, Any]:
    validate_message_text(text)
    if params.get("format") is not None:
        validate_format(params["format"])

    body = {"text": text, **params}
    if keyboard is not None:
        body["attachments"] = list(body.get("attachments") or []) + [_keyboard_attachment(keyboard)]
    return body


class Bot(MaxClient):
    """Client for the Max Bot API.

    Example:
        bot = Bot(token)
        keyboard = KeyboardBuilder().callback("Ping", "ping").build()
        bot.send_message(chat_id, "Hello!", keyboard=keyboard)
    """

    # ==================== Bots ====================

    def get_bot_info(self) -> Dict[str, Any]:
        """GET /bots/me"""
        return self._get("bots/me")

    # ==================== Messages ====================

    def get_messages(self, **params) -> Dict[str, Any]:
        """GET /messages

        Args:
            **params: Filters such as chat_id, message_ids, from, to, count
        """
        return self._get("messages", params=params)

    def send_message(
        self,
        chat_id: ChatId,
        text: str,
        keyboard: Optional[Union[InlineKeyboard, KeyboardBuilder, Mapping[str, Any]]] = None,
        **params,
    ) -> Dict[str, Any]:
        """POST /messages

        Args:
            chat_id: Chat ID or user ID
            text: Message text (at most 4096 characters)
            keyboard: Inline keyboard to attach
            **params: Extra body fields (format, attachments, notify, link, ...)

        Raises:
            ValidationError: If text or format is invalid
        """
        body = _message_body(text, keyboard, params)
        body["chat_id"] = chat_id
        result = self._post("messages", body)
        logger.debug(f"Message sent to chat {anonymize_id(chat_id)}")
        return result

    def edit_message(
        self,
        message_id: str,
        text: str,
        keyboard: Optional[Union[InlineKeyboard, KeyboardBuilder, Mapping[str, Any]]] = None,
        **params,
    ) -> Dict[str, Any]:
        """PUT /messages"""
        body = _message_body(text, keyboard, params)
        body["message_id"] = message_id
        return self._put("messages", body)

    def delete_message(self, message_id: str) -> Dict[str, Any]:
        """DELETE /messages"""
        return self._delete("messages", params={"message_id": message_id})

    def get_message(self, message_id: str) -> Dict[str, Any]:
        """GET /messages/{message_id}"""
        return self._get(f"messages/{message_id}")

    def get_video_info(self, video_url: str) -> Dict[str, Any]:
        """GET /messages/video"""
        return self._get("messages/video", params={"url": video_url})

    def answer_callback(self, callback_id: str, **params) -> Dict[str, Any]:
        """POST /messages/callback

        Args:
            callback_id: ID from the message_callback update
            **params: Response fields (notification, message)
        """
        return self._post("messages/callback", {"callback_id": callback_id, **params})

    # ==================== Chats ====================

    def get_chats(self, **params) -> Dict[str, Any]:
        """GET /chats"""
        return self._get("chats", params=params)

    def get_chat_by_link(self, link: str) -> Dict[str, Any]:
        """GET /chats/byLink"""
        return self._get("chats/byLink", params={"link": link})

    def get_chat(self, chat_id: ChatId) -> Dict[str, Any]:
        """GET /chats/{chat_id}"""
        return self._get(f"chats/{chat_id}")

    def update_chat(self, chat_id: ChatId, **data) -> Dict[str, Any]:
        """PATCH /chats/{chat_id}

        Raises:
            ValidationError: If title or description is invalid
        """
        if "title" in data:
            validate_chat_title(data["title"])
        if "description" in data:
            validate_chat_description(data["description"])
        return self._patch(f"chats/{chat_id}", data)

    def delete_chat(self, chat_id: ChatId) -> Dict[str, Any]:
        """DELETE /chats/{chat_id}"""
        return self._delete(f"chats/{chat_id}")

    def send_chat_action(self, chat_id: ChatId, action: str) -> Dict[str, Any]:
        """POST /chats/{chat_id}/actions (typing_on, sending_photo, ...)"""
        return self._post(f"chats/{chat_id}/actions", {"action": action})

    def get_pinned_message(self, chat_id: ChatId) -> Dict[str, Any]:
        """GET /chats/{chat_id}/pinned"""
        return self._get(f"chats/{chat_id}/pinned")

    def pin_message(self, chat_id: ChatId, message_id: str, notify: Optional[bool] = None) -> Dict[str, Any]:
        """PUT /chats/{chat_id}/pinned"""
        data = {"message_id": message_id}
        if notify is not None:
            data["notify"] = notify
        return self._put(f"chats/{chat_id}/pinned", data)

    def unpin_message(self, chat_id: ChatId) -> Dict[str, Any]:
        """DELETE /chats/{chat_id}/pinned"""
        return self._delete(f"chats/{chat_id}/pinned")

    def get_bot_membership(self, chat_id: ChatId) -> Dict[str, Any]:
        """GET /chats/{chat_id}/members/me"""
        return self._get(f"chats/{chat_id}/members/me")

    def leave_chat(self, chat_id: ChatId) -> Dict[str, Any]:
        """DELETE /chats/{chat_id}/members/me"""
        return self._delete(f"chats/{chat_id}/members/me")

    def get_chat_admins(self, chat_id: ChatId) -> Dict[str, Any]:
        """GET /chats/{chat_id}/admins"""
        return self._get(f"chats/{chat_id}/admins")

    def promote_chat_admin(self, chat_id: ChatId, user_id: int) -> Dict[str, Any]:
        """POST /chats/{chat_id}/admins"""
        return self._post(f"chats/{chat_id}/admins", {"user_id": user_id})

    def demote_chat_admin(self, chat_id: ChatId, user_id: int) -> Dict[str, Any]:
        """DELETE /chats/{chat_id}/admins"""
        return self._delete(f"chats/{chat_id}/admins", params={"user_id": user_id})

    def get_chat_members(self, chat_id: ChatId, **params) -> Dict[str, Any]:
        """GET /chats/{chat_id}/members"""
        return self._get(f"chats/{chat_id}/members", params=params)

    def add_chat_members(self, chat_id: ChatId, user_ids: List[int]) -> Dict[str, Any]:
        """POST /chats/{chat_id}/members"""
        return self._post(f"chats/{chat_id}/members", {"user_ids": list(user_ids)})

    def remove_chat_member(self, chat_id: ChatId, user_id: int, block: Optional[bool] = None) -> Dict[str, Any]:
        """DELETE /chats/{chat_id}/members"""
        params = {"user_id": user_id}
        if block is not None:
            params["block"] = block
        return self._delete(f"chats/{chat_id}/members", params=params)

    # ==================== Subscriptions ====================

    def get_subscriptions(self) -> Dict[str, Any]:
        """GET /subscriptions"""
        return self._get("subscriptions")

    def subscribe(self, url: str, **params) -> Dict[str, Any]:
        """POST /subscriptions (set a webhook)

        Args:
            url: Webhook URL
            **params: Extra fields (update_types, secret, version)
        """
        if not is_valid_url(url):
            raise ValidationError(f"Invalid webhook URL: {url}", field="url")
        result = self._post("subscriptions", {"url": url, **params})
        logger.info("Webhook subscription created")
        return result

    def unsubscribe(self, url: Optional[str] = None) -> Dict[str, Any]:
        """DELETE /subscriptions (remove a webhook)"""
        result = self._delete("subscriptions", params={"url": url} if url else None)
        logger.info("Webhook subscription removed")
        return result

    def get_updates(self, **params) -> Dict[str, Any]:
        """GET /subscriptions/updates (long polling)

        Args:
            **params: limit, timeout, marker, types
        """
        return self._get("subscriptions/updates", params=params)

    # ==================== Upload ====================

    def upload(self, files: Mapping[str, Mapping[str, Any]], upload_type: Optional[str] = None) -> Dict[str, Any]:
        """POST /upload"""
        return self.upload_file(files, upload_type=upload_type)
