"""Tests for Max Bot API endpoints."""

import pytest

from maxinator.exceptions import ValidationError
from maxinator.keyboard import KeyboardBuilder


def _call(bot):
    """Return (method, url, params, json) of the last session request."""
    kwargs = bot.session.request.call_args.kwargs
    return kwargs["method"], kwargs["url"], kwargs["params"], kwargs["json"]


def _call_after(bot, func, *args, **kwargs):
    func(*args, **kwargs)
    return _call(bot)


@pytest.fixture
def ok(bot, make_response):
    bot.session.request.return_value = make_response({"success": True})
    return bot


class TestBotInfo:
    """Tests for bot info."""

    def test_get_bot_info(self, bot, make_response, sample_bot_info):
        """Returns the decoded bots/me response."""
        bot.session.request.return_value = make_response(sample_bot_info)

        info = bot.get_bot_info()

        assert info["user_id"] == 1234567
        assert _call(bot)[:2] == ("GET", "https://platform-api.max.ru/bots/me")


class TestMessages:
    """Tests for message endpoints."""

    def test_send_message(self, bot, make_response, sample_message_response):
        """Sends text with chat_id in the body."""
        bot.session.request.return_value = make_response(sample_message_response)

        result = bot.send_message(987654, "Hello")

        method, url, params, body = _call(bot)
        assert method == "POST"
        assert url.endswith("/messages")
        assert body == {"text": "Hello", "chat_id": 987654}
        assert result["message"]["body"]["text"] == "Hello"

    def test_send_message_with_keyboard(self, ok):
        """Appends the keyboard as an inline_keyboard attachment."""
        keyboard = KeyboardBuilder().callback("Yes", "yes").build()

        ok.send_message(1, "Continue?", keyboard=keyboard)

        body = _call(ok)[3]
        assert body["attachments"] == [{
            "type": "inline_keyboard",
            "payload": {"buttons": [[{"type": "callback", "text": "Yes", "payload": "yes"}]]},
        }]

    def test_send_message_keyboard_after_attachments(self, ok):
        """Keeps existing attachments ahead of the keyboard."""
        image = {"type": "image", "payload": {"token": "img"}}
        builder = KeyboardBuilder().link("Docs", "https://dev.max.ru")

        ok.send_message(1, "Look", keyboard=builder, attachments=[image])

        attachments = _call(ok)[3]["attachments"]
        assert attachments[0] == image
        assert attachments[1]["type"] == "inline_keyboard"

    def test_send_message_with_format(self, ok):
        ok.send_message(1, "*bold*", format="markdown", notify=False)

        body = _call(ok)[3]
        assert body["format"] == "markdown"
        assert body["notify"] is False

    def test_send_message_empty_text_fails(self, bot):
        """Rejects empty text without making a request."""
        with pytest.raises(ValidationError, match="Message text cannot be empty"):
            bot.send_message(1, "")
        bot.session.request.assert_not_called()

    def test_send_message_too_long_fails(self, bot):
        with pytest.raises(ValidationError) as exc_info:
            bot.send_message(1, "x" * 4097)
        assert exc_info.value.limit == 4096
        bot.session.request.assert_not_called()

    def test_send_message_bad_format_fails(self, bot):
        with pytest.raises(ValidationError, match="Invalid format"):
            bot.send_message(1, "hi", format="bbcode")
        bot.session.request.assert_not_called()

    def test_edit_message(self, ok):
        """Edits with PUT and message_id in the body."""
        ok.edit_message("mid.1", "Updated")

        method, url, _, body = _call(ok)
        assert method == "PUT"
        assert url.endswith("/messages")
        assert body == {"text": "Updated", "message_id": "mid.1"}

    def test_delete_message(self, ok):
        method, url, params, body = _call_after(ok, ok.delete_message, "mid.1")
        assert method == "DELETE"
        assert url.endswith("/messages")
        assert params == {"message_id": "mid.1"}
        assert body is None

    def test_get_message(self, ok):
        ok.get_message("mid.1")
        assert _call(ok)[:2] == ("GET", "https://platform-api.max.ru/messages/mid.1")

    def test_get_messages(self, ok):
        ok.get_messages(chat_id=5, count=10)
        assert _call(ok)[2] == {"chat_id": 5, "count": 10}

    def test_get_video_info(self, ok):
        ok.get_video_info("https://video.example/1")
        method, url, params, _ = _call(ok)
        assert url.endswith("/messages/video")
        assert params == {"url": "https://video.example/1"}

    def test_answer_callback(self, ok):
        ok.answer_callback("cb-1", notification="Done")

        method, url, _, body = _call(ok)
        assert method == "POST"
        assert url.endswith("/messages/callback")
        assert body == {"callback_id": "cb-1", "notification": "Done"}


class TestChats:
    """Tests for chat endpoints."""

    @pytest.mark.parametrize("func,args,method,path", [
        ("get_chats", (), "GET", "chats"),
        ("get_chat", (5,), "GET", "chats/5"),
        ("delete_chat", (5,), "DELETE", "chats/5"),
        ("get_pinned_message", (5,), "GET", "chats/5/pinned"),
        ("unpin_message", (5,), "DELETE", "chats/5/pinned"),
        ("get_bot_membership", (5,), "GET", "chats/5/members/me"),
        ("leave_chat", (5,), "DELETE", "chats/5/members/me"),
        ("get_chat_admins", (5,), "GET", "chats/5/admins"),
        ("get_chat_members", (5,), "GET", "chats/5/members"),
    ])
    def test_routes(self, ok, func, args, method, path):
        """Each method maps to its route."""
        getattr(ok, func)(*args)

        assert _call(ok)[:2] == (method, f"https://platform-api.max.ru/{path}")

    def test_get_chat_by_link(self, ok):
        method, url, params, _ = _call_after(ok, ok.get_chat_by_link, "@channel")
        assert url.endswith("/chats/byLink")
        assert params == {"link": "@channel"}

    def test_update_chat(self, ok):
        method, url, _, body = _call_after(ok, ok.update_chat, 5, title="New", description="")
        assert method == "PATCH"
        assert url.endswith("/chats/5")
        assert body == {"title": "New", "description": ""}

    def test_update_chat_invalid_title(self, bot):
        with pytest.raises(ValidationError, match="Chat title cannot be empty"):
            bot.update_chat(5, title="")
        bot.session.request.assert_not_called()

    def test_update_chat_description_too_long(self, bot):
        with pytest.raises(ValidationError):
            bot.update_chat(5, description="d" * 1001)

    def test_send_chat_action(self, ok):
        _, url, _, body = _call_after(ok, ok.send_chat_action, 5, "typing_on")
        assert url.endswith("/chats/5/actions")
        assert body == {"action": "typing_on"}

    def test_pin_message(self, ok):
        method, url, _, body = _call_after(ok, ok.pin_message, 5, "mid.1", notify=False)
        assert method == "PUT"
        assert url.endswith("/chats/5/pinned")
        assert body == {"message_id": "mid.1", "notify": False}

    def test_pin_message_without_notify(self, ok):
        assert _call_after(ok, ok.pin_message, 5, "mid.1")[3] == {"message_id": "mid.1"}

    def test_promote_and_demote_admin(self, ok):
        method, url, _, body = _call_after(ok, ok.promote_chat_admin, 5, 42)
        assert (method, body) == ("POST", {"user_id": 42})
        assert url.endswith("/chats/5/admins")

        method, url, params, _ = _call_after(ok, ok.demote_chat_admin, 5, 42)
        assert (method, params) == ("DELETE", {"user_id": 42})
        assert url.endswith("/chats/5/admins")

    def test_add_chat_members(self, ok):
        body = _call_after(ok, ok.add_chat_members, 5, (1, 2))[3]
        assert body == {"user_ids": [1, 2]}

    def test_remove_chat_member(self, ok):
        params = _call_after(ok, ok.remove_chat_member, 5, 42, block=True)[2]
        assert params == {"user_id": 42, "block": True}


class TestSubscriptions:
    """Tests for webhook and long polling endpoints."""

    def test_get_subscriptions(self, ok):
        assert _call_after(ok, ok.get_subscriptions)[:2] == (
            "GET", "https://platform-api.max.ru/subscriptions",
        )

    def test_subscribe(self, ok):
        method, url, _, body = _call_after(
            ok, ok.subscribe, "https://example.com/hook", update_types=["message_created"]
        )
        assert method == "POST"
        assert url.endswith("/subscriptions")
        assert body == {"url": "https://example.com/hook", "update_types": ["message_created"]}

    def test_subscribe_invalid_url(self, bot):
        with pytest.raises(ValidationError, match="Invalid webhook URL"):
            bot.subscribe("not a url")
        bot.session.request.assert_not_called()

    def test_unsubscribe(self, ok):
        method, _, params, _ = _call_after(ok, ok.unsubscribe, "https://example.com/hook")
        assert method == "DELETE"
        assert params == {"url": "https://example.com/hook"}

    def test_unsubscribe_without_url(self, ok):
        assert _call_after(ok, ok.unsubscribe)[2] is None

    def test_get_updates(self, ok):
        _, url, params, _ = _call_after(ok, ok.get_updates, limit=100, timeout=30)
        assert url.endswith("/subscriptions/updates")
        assert params == {"limit": 100, "timeout": 30}


class TestUpload:
    """Tests for the upload endpoint."""

    def test_upload_delegates(self, bot, make_response):
        bot.session.post.return_value = make_response({"url": "https://upload.example"})

        result = bot.upload({"data": {"content": b"x"}}, upload_type="image")

        assert result == {"url": "https://upload.example"}
        assert bot.session.post.call_args.kwargs["params"] == {"type": "image"}
