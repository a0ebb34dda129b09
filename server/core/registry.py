from __future__ import annotations

import asyncio
import logging
from typing import Set

from shared.protocol import encode_frame

from .connection import ClientHandle

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """Tracks live connections and fans relayed messages out to them."""

    def __init__(self) -> None:
        self._handles: Set[ClientHandle] = set()
        self._lock = asyncio.Lock()

    async def register(self, handle: ClientHandle) -> None:
        async with self._lock:
            self._handles.add(handle)

    async def unregister(self, handle: ClientHandle) -> bool:
        async with self._lock:
            if handle in self._handles:
                self._handles.discard(handle)
                return True
            return False

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, handle: object) -> bool:
        return handle in self._handles

    async def broadcast(self, sender: ClientHandle, message: str) -> int:
        """
        Send ``message`` to every registered handle except ``sender``.

        The frame is encoded once; codec errors propagate to the caller. A
        recipient whose write fails is unregistered and closed, and delivery to
        the remaining recipients continues. Returns the number of deliveries.
        """
        frame = encode_frame(message)
        async with self._lock:
            recipients = [handle for handle in self._handles if handle is not sender]
        if not recipients:
            return 0

        results = await asyncio.gather(
            *(handle.send_frame(frame) for handle in recipients),
            return_exceptions=True,
        )
        delivered = 0
        for handle, result in zip(recipients, results):
            if isinstance(result, Exception):
                logger.info("Dropping %s after failed write: %s", handle.peername, result)
                await self.drop(handle)
            elif isinstance(result, BaseException):
                raise result
            else:
                delivered += 1
        return delivered

    async def drop(self, handle: ClientHandle) -> None:
        """Unregister and close a handle. Safe to call more than once."""
        await self.unregister(handle)
        await handle.close()

    async def close_all(self) -> None:
        async with self._lock:
            handles = list(self._handles)
            self._handles.clear()
        for handle in handles:
            await handle.close()
