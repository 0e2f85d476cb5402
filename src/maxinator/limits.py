"""Limits and ceilings of the Max Bot API.

These values are part of the public contract: changing any of them changes
validation behavior. See https://dev.max.ru/docs-api
"""

# ==================== Keyboard ====================

# Maximum number of buttons in one keyboard
KEYBOARD_BUTTONS_MAX = 210

# Maximum number of rows in one keyboard
KEYBOARD_ROWS_MAX = 30

# Maximum number of buttons in a single row
KEYBOARD_BUTTONS_PER_ROW_MAX = 7

# Maximum number of link/open_app/request_geo_location/request_contact buttons in a row
KEYBOARD_SPECIAL_BUTTONS_PER_ROW_MAX = 3

# Button types subject to the special per-row cap
SPECIAL_BUTTON_TYPES = frozenset({
    "link",
    "open_app",
    "request_geo_location",
    "request_contact",
})

# Maximum URL length of a link button (bytes)
BUTTON_URL_MAX_LENGTH = 2048

# Maximum button label length (characters)
BUTTON_TEXT_MAX_LENGTH = 256

# Maximum callback payload length (bytes)
BUTTON_CALLBACK_PAYLOAD_MAX_LENGTH = 4096

# ==================== Messages and chats ====================

MESSAGE_TEXT_MAX_LENGTH = 4096
CHAT_TITLE_MAX_LENGTH = 255
CHAT_DESCRIPTION_MAX_LENGTH = 1000

# ==================== Files ====================

# Maximum upload size (20 MiB)
FILE_MAX_SIZE = 20 * 1024 * 1024

# ==================== HTTP status codes ====================

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_NOT_FOUND = 404
HTTP_METHOD_NOT_ALLOWED = 405
HTTP_TOO_MANY_REQUESTS = 429
HTTP_SERVICE_UNAVAILABLE = 503

# ==================== Rate limits ====================
# Informational only, nothing in this package enforces them.

API_REQUESTS_PER_SECOND = 20
MESSAGES_PER_SECOND_PER_CHAT = 1
