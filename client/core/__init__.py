from .network import DuplexClient
from .outgoing import OutgoingQueue, QueueClosed, QueueEmpty

__all__ = ["DuplexClient", "OutgoingQueue", "QueueClosed", "QueueEmpty"]
