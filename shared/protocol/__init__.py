"""
Shared protocol package that centralizes the wire constants, frame codec,
errors and message model for both client and server.
"""

from .constants import DEFAULT_POLL_INTERVAL, ENCODING, FRAME_PADDING, MSG_SIZE, QUIT_SENTINEL
from .errors import (
    BindOrListenFailure,
    ConnectFailure,
    InvalidEncoding,
    OversizeMessage,
    ProtocolError,
    StatusCode,
)
from .framing import decode_frame, encode_frame, read_frame, try_read_frame
from .messages import ChatMessage

__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "ENCODING",
    "FRAME_PADDING",
    "MSG_SIZE",
    "QUIT_SENTINEL",
    "BindOrListenFailure",
    "ConnectFailure",
    "InvalidEncoding",
    "OversizeMessage",
    "ProtocolError",
    "StatusCode",
    "encode_frame",
    "decode_frame",
    "read_frame",
    "try_read_frame",
    "ChatMessage",
]
