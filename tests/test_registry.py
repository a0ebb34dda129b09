from __future__ import annotations

import asyncio

import pytest

from server.core import ClientHandle, ConnectionRegistry
from shared.protocol import OversizeMessage, decode_frame


class FakeWriter:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.frames = []
        self.closed = False

    def write(self, data: bytes) -> None:
        self.frames.append(data)

    async def drain(self) -> None:
        if self.fail:
            raise ConnectionResetError("peer went away")

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        return None


def _handle(name: str, fail: bool = False) -> ClientHandle:
    return ClientHandle(reader=None, writer=FakeWriter(fail=fail), peername=name)


def _texts(handle: ClientHandle):
    return [decode_frame(frame) for frame in handle.writer.frames]


def test_register_and_unregister_is_idempotent():
    async def scenario():
        registry = ConnectionRegistry()
        alice = _handle("alice")
        await registry.register(alice)
        assert alice in registry
        assert await registry.unregister(alice) is True
        assert await registry.unregister(alice) is False
        assert len(registry) == 0

    asyncio.run(scenario())


def test_broadcast_skips_sender():
    async def scenario():
        registry = ConnectionRegistry()
        alice, bob, carol = _handle("alice"), _handle("bob"), _handle("carol")
        for handle in (alice, bob, carol):
            await registry.register(handle)
        assert all(handle in registry for handle in (alice, bob, carol))

        delivered = await registry.broadcast(alice, "hello")

        assert delivered == 2
        assert _texts(alice) == []
        assert _texts(bob) == ["hello"]
        assert _texts(carol) == ["hello"]

    asyncio.run(scenario())


def test_failed_recipient_is_dropped_and_others_still_receive():
    async def scenario():
        registry = ConnectionRegistry()
        alice, broken, carol = _handle("alice"), _handle("broken", fail=True), _handle("carol")
        for handle in (alice, broken, carol):
            await registry.register(handle)

        delivered = await registry.broadcast(alice, "first")

        assert delivered == 1
        assert _texts(carol) == ["first"]
        assert broken not in registry
        assert broken.closed
        assert broken.writer.closed

        broken.writer.frames.clear()
        assert await registry.broadcast(alice, "second") == 1
        assert broken.writer.frames == []
        assert _texts(carol) == ["first", "second"]

    asyncio.run(scenario())


def test_broadcast_never_targets_unregistered_handle():
    async def scenario():
        registry = ConnectionRegistry()
        alice, bob = _handle("alice"), _handle("bob")
        await registry.register(alice)
        await registry.register(bob)
        await registry.drop(bob)

        assert await registry.broadcast(alice, "anyone?") == 0
        assert bob.writer.frames == []

    asyncio.run(scenario())


def test_broadcast_oversize_message_raises_before_sending():
    async def scenario():
        registry = ConnectionRegistry()
        alice, bob = _handle("alice"), _handle("bob")
        await registry.register(alice)
        await registry.register(bob)
        with pytest.raises(OversizeMessage):
            await registry.broadcast(alice, "x" * 64)
        assert bob.writer.frames == []

    asyncio.run(scenario())


def test_close_all_empties_registry():
    async def scenario():
        registry = ConnectionRegistry()
        handles = [_handle(f"client-{i}") for i in range(3)]
        for handle in handles:
            await registry.register(handle)
        await registry.close_all()
        assert len(registry) == 0
        assert all(handle.closed for handle in handles)

    asyncio.run(scenario())
