from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ClientHandle:
    """One accepted connection: its streams, peer address and write lock."""

    reader: asyncio.StreamReader
    writer: asyncio.StreamWriter
    peername: str
    closed: bool = False
    _write_lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def send_frame(self, frame: bytes) -> None:
        """Write one frame fully. Raises ConnectionError/OSError on failure."""
        async with self._write_lock:
            if self.closed:
                raise ConnectionResetError(f"Connection to {self.peername} is closed")
            self.writer.write(frame)
            await self.writer.drain()

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.writer.close()
            await self.writer.wait_closed()
        except (ConnectionError, OSError) as exc:
            logger.debug("Error during writer cleanup for %s: %s", self.peername, exc)
