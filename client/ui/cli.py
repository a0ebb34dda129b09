from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable
from typing import Optional

from client.core import OutgoingQueue, QueueClosed
from shared.protocol import QUIT_SENTINEL

logger = logging.getLogger(__name__)

LineReader = Callable[[], Awaitable[Optional[str]]]


async def read_stdin_line() -> Optional[str]:
    """
    Read one terminal line without blocking the event loop. None on EOF.

    ``input()`` runs on a daemon thread rather than the default executor, so an
    interrupted client can exit while the thread is still waiting for a line.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future = loop.create_future()

    def _resolve(line: Optional[str], exc: Optional[BaseException]) -> None:
        if future.done():
            return
        if exc is not None:
            future.set_exception(exc)
        else:
            future.set_result(line)

    def _read() -> None:
        line: Optional[str] = None
        error: Optional[BaseException] = None
        try:
            line = input()
        except EOFError:
            line = None
        except Exception as exc:
            error = exc
        try:
            loop.call_soon_threadsafe(_resolve, line, error)
        except RuntimeError:
            logger.debug("Event loop closed before stdin line was delivered")

    threading.Thread(target=_read, name="stdin-reader", daemon=True).start()
    return await future


class InputSource:
    """Feeds typed lines into the outgoing queue until ``:quit`` or the queue closes."""

    def __init__(
        self,
        outgoing: OutgoingQueue,
        read_line: Optional[LineReader] = None,
        on_notice: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.outgoing = outgoing
        self.read_line = read_line or read_stdin_line
        self.on_notice = on_notice or print

    async def run(self) -> None:
        self.on_notice("write a Message:")
        try:
            while True:
                line = await self.read_line()
                if line is None:
                    logger.info("Input closed")
                    break
                msg = line.strip()
                if msg == QUIT_SENTINEL:
                    break
                try:
                    self.outgoing.put(msg)
                except QueueClosed:
                    logger.info("Outgoing queue closed, input stopped")
                    break
        finally:
            self.outgoing.close()
            self.on_notice("bye bye!")
