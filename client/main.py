from __future__ import annotations

import asyncio
import logging
import sys

from client.config import CLIENT_CONFIG, load_config
from client.core import DuplexClient, OutgoingQueue
from client.ui import InputSource
from shared.protocol import ConnectFailure

logger = logging.getLogger(__name__)


async def run_client() -> None:
    load_config()
    logging.basicConfig(level=CLIENT_CONFIG["log_level"])
    outgoing = OutgoingQueue()
    network = DuplexClient(outgoing)
    cli = InputSource(outgoing)

    await network.connect()
    network_task = asyncio.create_task(network.run(), name="client-duplex-loop")
    await cli.run()
    await network_task


def main() -> None:
    try:
        asyncio.run(run_client())
    except ConnectFailure as exc:
        logger.error("%s", exc.message)
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
