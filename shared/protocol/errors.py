from __future__ import annotations

from enum import IntEnum


class StatusCode(IntEnum):
    """HTTP-like status codes attached to protocol errors."""

    BAD_REQUEST = 400
    SERVICE_UNAVAILABLE = 503


class ProtocolError(Exception):
    """Structured protocol exception carrying status + message."""

    def __init__(self, status: StatusCode, message: str = "") -> None:
        self.status = status
        self.message = message
        super().__init__(f"{status.name} ({int(status)}): {message}")


class OversizeMessage(ProtocolError):
    """Encoded message does not fit into a single frame."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(StatusCode.BAD_REQUEST, message=f"Message is {size} bytes, frame holds {limit}")


class InvalidEncoding(ProtocolError):
    """Frame payload is not valid text or cannot be represented on the wire."""

    def __init__(self, message: str) -> None:
        super().__init__(StatusCode.BAD_REQUEST, message=message)


class BindOrListenFailure(ProtocolError):
    def __init__(self, message: str) -> None:
        super().__init__(StatusCode.SERVICE_UNAVAILABLE, message=message)


class ConnectFailure(ProtocolError):
    def __init__(self, message: str) -> None:
        super().__init__(StatusCode.SERVICE_UNAVAILABLE, message=message)


__all__ = [
    "StatusCode",
    "ProtocolError",
    "OversizeMessage",
    "InvalidEncoding",
    "BindOrListenFailure",
    "ConnectFailure",
]
