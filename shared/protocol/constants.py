"""Protocol-wide constants shared by client and server."""

ENCODING = "utf-8"
MSG_SIZE = 32  # bytes per frame, identical on both sides
FRAME_PADDING = b"\x00"
QUIT_SENTINEL = ":quit"
DEFAULT_POLL_INTERVAL = 0.1  # seconds

__all__ = [
    "ENCODING",
    "MSG_SIZE",
    "FRAME_PADDING",
    "QUIT_SENTINEL",
    "DEFAULT_POLL_INTERVAL",
]
