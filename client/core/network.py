from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Dict, Optional

from client.config import CLIENT_CONFIG
from shared.protocol import ChatMessage, ConnectFailure, ProtocolError, framing

from .outgoing import OutgoingQueue, QueueClosed, QueueEmpty

logger = logging.getLogger(__name__)

MessageHandler = Callable[[ChatMessage], None]
NoticeHandler = Callable[[str], None]


def _print_message(message: ChatMessage) -> None:
    print(f"[{message.received_at}] message recv {message.text!r} from {message.sender}")


class DuplexClient:
    """Owns the single server connection: polls for frames and sends queued lines."""

    def __init__(
        self,
        outgoing: OutgoingQueue,
        config: Optional[Dict[str, Any]] = None,
        on_message: Optional[MessageHandler] = None,
        on_notice: Optional[NoticeHandler] = None,
    ) -> None:
        self.config = config or CLIENT_CONFIG
        self.host: str = self.config["server_host"]
        self.port: int = int(self.config["server_port"])
        self.poll_interval: float = float(self.config["poll_interval"])
        self.backoff: float = float(self.config["reconnect_backoff"])
        self.max_backoff: float = float(self.config["max_reconnect_backoff"])
        self.max_retries: int = int(self.config["max_reconnect_retries"])

        self.outgoing = outgoing
        self.on_message = on_message or _print_message
        self.on_notice = on_notice or print
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None
        self.connected: bool = False

    @property
    def peername(self) -> str:
        return f"{self.host}:{self.port}"

    async def connect(self) -> None:
        if self.connected:
            return

        retries = 0
        delay = self.backoff
        while True:
            try:
                self.reader, self.writer = await asyncio.open_connection(self.host, self.port)
                self.connected = True
                logger.info("Connected to %s", self.peername)
                return
            except OSError as exc:
                retries += 1
                logger.warning("Connect attempt %s failed: %s", retries, exc)
                if retries > self.max_retries:
                    raise ConnectFailure(f"Stream failed to connect to {self.peername}: {exc}") from exc
                await asyncio.sleep(delay)
                delay = min(delay * 2, self.max_backoff)

    async def close(self) -> None:
        self.connected = False
        if self.writer:
            try:
                self.writer.close()
                await self.writer.wait_closed()
            except (ConnectionError, OSError) as exc:
                logger.debug("Error during writer cleanup: %s", exc)
            self.writer = None
        logger.info("Network client closed")

    async def run(self) -> None:
        """Poll the connection and the outgoing queue until either side ends."""
        if not self.connected:
            await self.connect()
        try:
            while await self._receive_once() and await self._send_pending():
                pass
        finally:
            # the input source sees this on its next put
            self.outgoing.close()
            await self.close()

    async def _receive_once(self) -> bool:
        assert self.reader is not None
        try:
            frame = await framing.try_read_frame(self.reader, self.poll_interval)
        except (asyncio.IncompleteReadError, ConnectionError, OSError) as exc:
            logger.info("Receive failed: %s", exc)
            self.on_notice("connection with server was severed")
            return False
        if frame is None:
            return True
        try:
            message = ChatMessage.from_frame(frame, sender=self.peername)
        except ProtocolError as exc:
            logger.warning("Protocol error: %s", exc)
            return True
        self.on_message(message)
        return True

    async def _send_pending(self) -> bool:
        assert self.writer is not None
        try:
            msg = self.outgoing.get_nowait()
        except QueueEmpty:
            return True
        except QueueClosed:
            logger.info("Outgoing queue closed, stopping")
            return False

        try:
            frame = framing.encode_frame(msg)
        except ProtocolError as exc:
            logger.warning("Dropping outgoing message: %s", exc)
            self.on_notice(f"message not sent: {exc.message}")
            return True

        try:
            self.writer.write(frame)
            await self.writer.drain()
        except (ConnectionError, OSError) as exc:
            logger.error("Writing to socket failed: %s", exc)
            self.on_notice("connection with server was severed")
            return False
        logger.debug("Sent frame for %r", msg)
        self.on_notice(f"message sent {msg!r}")
        return True
