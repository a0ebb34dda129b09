from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field

from .framing import decode_frame


def _default_timestamp() -> int:
    return int(time.time())


class ChatMessage(BaseModel):
    """A decoded chat line together with where and when it was received."""

    model_config = ConfigDict(frozen=True)

    sender: str = Field(..., description="Peer address the frame was read from")
    text: str = Field(..., description="Message text")
    timestamp: int = Field(default_factory=_default_timestamp, description="Unix timestamp (seconds)")

    @classmethod
    def from_frame(cls, frame: bytes, sender: str) -> "ChatMessage":
        return cls(sender=sender, text=decode_frame(frame))

    @property
    def received_at(self) -> str:
        return time.strftime("%H:%M:%S", time.localtime(self.timestamp))
