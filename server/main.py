from __future__ import annotations

import asyncio
import logging
import sys

from server.config import SERVER_CONFIG, load_server_config
from server.core import RelayServer
from shared.protocol import BindOrListenFailure

logger = logging.getLogger(__name__)


async def run_server() -> None:
    load_server_config()
    logging.basicConfig(level=SERVER_CONFIG["log_level"])

    server = RelayServer(SERVER_CONFIG["host"], SERVER_CONFIG["port"])
    await server.start()
    await server.serve_forever()


def main() -> None:
    try:
        asyncio.run(run_server())
    except BindOrListenFailure as exc:
        logger.error("%s", exc.message)
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
