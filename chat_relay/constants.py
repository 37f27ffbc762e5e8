ADMIN = "Admin"

# Event names shared by the inbound and outbound catalogs.
EVENT_MESSAGE = "message"
EVENT_ACTIVITY = "activity"
EVENT_ENTER_ROOM = "enter-room"
EVENT_USER_LIST = "userList"
EVENT_ROOM_LIST = "roomList"

WELCOME_TEXT = "Welcome to Chat App!"

# Origins the bundled client is served from during local development.
DEV_CORS_ORIGINS: list[str] = [
    "http://localhost:5500",
    "http://127.0.0.1:5500",
]

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3500
DEFAULT_STATIC_DIR = "public"

__all__ = [
    "ADMIN",
    "EVENT_MESSAGE",
    "EVENT_ACTIVITY",
    "EVENT_ENTER_ROOM",
    "EVENT_USER_LIST",
    "EVENT_ROOM_LIST",
    "WELCOME_TEXT",
    "DEV_CORS_ORIGINS",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_STATIC_DIR",
]
