import asyncio
import logging
import sys

import uvicorn

from hrfleet.core.config import settings
from hrfleet.core.db import engine, wait_for_db
from hrfleet.core.errors import TransientStorageError

logger = logging.getLogger("hrfleet")


async def _check_db() -> None:
    try:
        await wait_for_db()
    finally:
        # pooled connections are bound to this loop, not uvicorn's
        await engine.dispose()


def main() -> None:
    try:
        asyncio.run(_check_db())
    except TransientStorageError as exc:
        logger.critical("%s, shutting down", exc.message)
        sys.exit(1)

    uvicorn.run("hrfleet.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
