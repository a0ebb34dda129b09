from __future__ import annotations

import threading
from collections import deque
from typing import Deque


class QueueEmpty(Exception):
    """No message is pending right now."""


class QueueClosed(Exception):
    """The queue was closed and holds no more messages."""


class OutgoingQueue:
    """
    Unbounded FIFO of lines waiting to be sent to the server.

    Any number of producers may ``put``; one consumer polls with
    ``get_nowait``. Either side may ``close`` it: messages already queued are
    still handed out, later ``put`` calls raise ``QueueClosed``.
    """

    def __init__(self) -> None:
        self._items: Deque[str] = deque()
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, msg: str) -> None:
        with self._lock:
            if self._closed:
                raise QueueClosed("Outgoing queue is closed")
            self._items.append(msg)

    def get_nowait(self) -> str:
        with self._lock:
            if self._items:
                return self._items.popleft()
            if self._closed:
                raise QueueClosed("Outgoing queue is closed")
            raise QueueEmpty()

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def __len__(self) -> int:
        return len(self._items)
