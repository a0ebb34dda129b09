from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Dict, Optional, Tuple

from shared.protocol import BindOrListenFailure, ChatMessage, ProtocolError, framing

from .connection import ClientHandle
from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)


class RelayServer:
    """Accepts connections and relays every frame to all other clients."""

    def __init__(self, host: str, port: int, registry: Optional[ConnectionRegistry] = None) -> None:
        self.host = host
        self.port = port
        self.registry = registry or ConnectionRegistry()
        self._server: Optional[asyncio.AbstractServer] = None
        self._listener_failure: Optional[asyncio.Future] = None
        self._previous_handler: Optional[Any] = None

    async def start(self) -> None:
        try:
            self._server = await asyncio.start_server(self._handle_client, self.host, self.port)
        except OSError as exc:
            raise BindOrListenFailure(f"Listener failed to bind {self.host}:{self.port}: {exc}") from exc
        # port 0 asks the OS for a free port
        self.port = self._server.sockets[0].getsockname()[1]
        logger.info("Server listening on %s:%s", self.host, self.port)

    @property
    def sockets(self) -> Tuple[Any, ...]:
        """Listening sockets, empty when the server is not running."""
        if self._server is None:
            return ()
        return tuple(self._server.sockets)

    async def serve_forever(self) -> None:
        """
        Serve until cancelled or until the listener fails.

        asyncio only logs accept errors it cannot retry. They are routed here
        through the loop's exception handler and end the whole server with
        BindOrListenFailure.
        """
        if self._server is None:
            await self.start()
        assert self._server is not None
        loop = asyncio.get_running_loop()
        self._listener_failure = loop.create_future()
        self._previous_handler = loop.get_exception_handler()
        loop.set_exception_handler(self._on_loop_error)
        serving = asyncio.ensure_future(self._server.serve_forever())
        try:
            done, _ = await asyncio.wait(
                {serving, self._listener_failure}, return_when=asyncio.FIRST_COMPLETED
            )
            for fut in done:
                fut.result()
        finally:
            loop.set_exception_handler(self._previous_handler)
            await self.stop()
            serving.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await serving

    def _on_loop_error(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        sock = context.get("socket")
        exc = context.get("exception")
        listening = {s.fileno() for s in self.sockets}
        if sock is not None and isinstance(exc, OSError) and sock.fileno() in listening:
            logger.error("Accept failed on %s:%s: %s", self.host, self.port, exc)
            if self._listener_failure is not None and not self._listener_failure.done():
                self._listener_failure.set_exception(
                    BindOrListenFailure(f"Accept failed on {self.host}:{self.port}: {exc}")
                )
            return
        if self._previous_handler is not None:
            self._previous_handler(loop, context)
        else:
            loop.default_exception_handler(context)

    async def stop(self) -> None:
        if self._server is not None:
            self._server.close()
            await self.registry.close_all()
            await self._server.wait_closed()
            self._server = None
            logger.info("Server stopped")

    async def _handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        handle = ClientHandle(reader=reader, writer=writer, peername=_format_peer(writer))
        await self.registry.register(handle)
        logger.info("Client %s connected", handle.peername)
        try:
            while True:
                frame = await framing.read_frame(reader)
                try:
                    message = ChatMessage.from_frame(frame, sender=handle.peername)
                    delivered = await self.registry.broadcast(handle, message.text)
                except ProtocolError as exc:
                    logger.warning("Protocol error for %s: %s", handle.peername, exc)
                    continue
                logger.info("Relayed %r from %s to %d client(s)", message.text, handle.peername, delivered)
        except asyncio.IncompleteReadError:
            logger.info("Closing connection with %s", handle.peername)
        except (ConnectionResetError, ConnectionAbortedError, BrokenPipeError, OSError) as exc:
            logger.info("Client %s connection reset: %s", handle.peername, exc)
        except Exception as exc:
            logger.exception("Unhandled error for %s: %s", handle.peername, exc)
        finally:
            await self.registry.drop(handle)


def _format_peer(writer: asyncio.StreamWriter) -> str:
    peer = writer.get_extra_info("peername")
    if isinstance(peer, tuple) and len(peer) >= 2:
        return f"{peer[0]}:{peer[1]}"
    return str(peer)
