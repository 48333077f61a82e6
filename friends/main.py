"""Bootstrap: seed the friends table, add one friend and print the list.

Usage:
    python -m friends.main
"""
import asyncio
import sys

from config.logging_config import configure_logging
from config.settings import get_settings
from friends.models.friend import Friend
from friends.repositories.friend_repository import FriendRepository
from shared.database.pool import create_pool, close_pool
from shared.observability.context import RequestContext
from shared.observability.logger import get_logger

logger = get_logger("friends")


def format_friend(friend: Friend) -> str:
    return f"{friend.name} {friend.nick if friend.nick is not None else '(No nick)'}"


async def run() -> list[Friend]:
    settings = get_settings()
    configure_logging(settings.log_level)

    ctx = RequestContext.new("FRIENDS:bootstrap")
    pool = await create_pool(settings)
    try:
        repo = FriendRepository(pool)
        await repo.initialize_store(ctx)
        await repo.insert_friend("Tomas", "Tom", ctx)
        friends = await repo.list_all_friends(ctx)
    finally:
        await close_pool(pool)

    for friend in friends:
        print(format_friend(friend))
    return friends


def main() -> int:
    try:
        asyncio.run(run())
    except Exception as e:
        logger.critical("Bootstrap failed", data={"error": str(e), "type": type(e).__name__})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
