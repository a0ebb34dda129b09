from .connection import ClientHandle
from .registry import ConnectionRegistry
from .server import RelayServer

__all__ = ["ClientHandle", "ConnectionRegistry", "RelayServer"]
