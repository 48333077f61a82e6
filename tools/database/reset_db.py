#!/usr/bin/env python
"""Reset database by dropping the friends table."""
import asyncio
import sys
import os

# Add repository root to Python path
repo_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, repo_root)

import asyncpg
from config.settings import get_settings


async def reset_db():
    settings = get_settings()
    conn = await asyncpg.connect(
        host=settings.db_host,
        port=settings.db_port,
        user=settings.db_user,
        password=settings.db_password,
        database=settings.db_database
    )
    try:
        print("Dropping friends table...")
        await conn.execute("DROP TABLE IF EXISTS friends")
    finally:
        await conn.close()
    print("Database reset complete!")


if __name__ == "__main__":
    asyncio.run(reset_db())
