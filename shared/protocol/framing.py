from __future__ import annotations

import asyncio
from typing import Optional

from .constants import ENCODING, FRAME_PADDING, MSG_SIZE
from .errors import InvalidEncoding, OversizeMessage


def encode_frame(msg: str) -> bytes:
    """Encode text into a fixed-size frame (payload + zero padding)."""
    if FRAME_PADDING.decode(ENCODING) in msg:
        # NUL terminates the payload on the wire, so it cannot be carried
        raise InvalidEncoding("Message contains a NUL byte")
    try:
        data = msg.encode(ENCODING)
    except UnicodeEncodeError as exc:
        raise InvalidEncoding(f"Encode failed: {exc}") from exc
    if len(data) > MSG_SIZE:
        raise OversizeMessage(len(data), MSG_SIZE)
    return data.ljust(MSG_SIZE, FRAME_PADDING)


def decode_frame(frame: bytes) -> str:
    """Decode a frame into text, taking every byte before the first NUL."""
    if len(frame) != MSG_SIZE:
        raise InvalidEncoding(f"Frame is {len(frame)} bytes, expected {MSG_SIZE}")
    payload = frame.split(FRAME_PADDING, 1)[0]
    try:
        return payload.decode(ENCODING)
    except UnicodeDecodeError as exc:
        raise InvalidEncoding(f"Decode failed: {exc}") from exc


async def read_frame(reader: asyncio.StreamReader) -> bytes:
    """Read exactly one frame from the stream."""
    return await reader.readexactly(MSG_SIZE)


async def try_read_frame(reader: asyncio.StreamReader, timeout: float) -> Optional[bytes]:
    """
    Poll for one frame, waiting at most ``timeout`` seconds.

    Returns None when no complete frame is available yet. Partial data stays in
    the reader's buffer, so the next attempt resumes on the same frame boundary.
    """
    try:
        return await asyncio.wait_for(read_frame(reader), timeout)
    except asyncio.TimeoutError:
        return None
