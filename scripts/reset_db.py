# scripts/reset_db.py

import asyncio
import os
import sys

from loguru import logger

# Ensure project root (the folder containing 'salesdesk') is on sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from salesdesk.core.db import engine
from salesdesk.core.logging_config import setup_logging
from salesdesk.infrastructure.db import models  # noqa: F401
from salesdesk.infrastructure.db.base import Base


async def reset_db():
    logger.info("Resetting schema (drop_all + create_all)...")

    async with engine.begin() as conn:
        logger.info("Dropping tables: {}", ", ".join(Base.metadata.tables))
        await conn.run_sync(Base.metadata.drop_all)

        logger.info("Creating all tables from current models...")
        await conn.run_sync(Base.metadata.create_all)

    await engine.dispose()
    logger.success("DB reset complete: documents, manufacturing_jobs, payments, print_configs recreated.")


if __name__ == "__main__":
    setup_logging()
    asyncio.run(reset_db())
