"""Repository for friend records."""
import asyncpg
from typing import Optional
from friends.models.friend import Friend, GeneratedId
from shared.database.base_repository import BaseRepository
from shared.database.errors import InsertFailedError, StoreError
from shared.observability.context import RequestContext
from shared.observability.logger import get_logger

logger = get_logger("friends.repositories.friend")

CREATE_FRIENDS_TABLE = """
    CREATE TABLE IF NOT EXISTS friends (
        id SERIAL NOT NULL,
        name TEXT NOT NULL,
        nick TEXT,
        PRIMARY KEY (id)
    )
"""

INSERT_FRIEND = "INSERT INTO friends (name, nick) VALUES ($1, $2)"

SEED_FRIENDS = [
    ("Rasmus", "Raz"),
    ("Pelle", None),
    ("Kiwi", "Pipowitch"),
]


class FriendRepository(BaseRepository):
    """Repository for the friends table.

    Each operation holds exactly one pooled connection for its duration.
    """

    async def initialize_store(self, ctx: Optional[RequestContext] = None) -> None:
        """Create the friends table if needed, wipe it and seed fixed rows.

        Destructive: every existing row is lost. The statements are not wrapped
        in a transaction, so a failure part-way leaves the table partially
        seeded.

        Raises:
            StoreError: If any statement fails
        """
        async with self.connection() as conn:
            try:
                await conn.execute(CREATE_FRIENDS_TABLE)
                await conn.execute("TRUNCATE friends")
                for name, nick in SEED_FRIENDS:
                    await conn.execute(INSERT_FRIEND, name, nick)
            except asyncpg.PostgresError as e:
                logger.error("Failed to initialize friends table", ctx, data={"error": str(e)})
                raise StoreError("Unable to initialize friends table", e) from e

        logger.info("Friends table initialized", ctx, data={"seeded": len(SEED_FRIENDS)})

    async def list_all_friends(self, ctx: Optional[RequestContext] = None) -> list[Friend]:
        """Get every friend ordered by name.

        Returns:
            List of Friend, empty if the table has no rows

        Raises:
            StoreError: If the query fails
        """
        async with self.connection() as conn:
            try:
                rows = await conn.fetch("SELECT id, name, nick FROM friends ORDER BY name")
            except asyncpg.PostgresError as e:
                logger.error("Failed to list friends", ctx, data={"error": str(e)})
                raise StoreError("Unable to list friends", e) from e

        friends = [Friend(**dict(row)) for row in rows]
        logger.info("Retrieved friends", ctx, data={"count": len(friends)})
        return friends

    async def insert_friend(
        self,
        name: str,
        nick: Optional[str],
        ctx: Optional[RequestContext] = None
    ) -> Friend:
        """Insert a friend and return it with its generated id.

        The returned nick is the one passed in; the row is not read back.

        Args:
            name: Friend name (required)
            nick: Nickname, or None for no nickname
            ctx: Request context for log correlation

        Raises:
            InsertFailedError: If the store returned no row
            StoreError: If the statement fails
        """
        async with self.connection() as conn:
            try:
                row = await conn.fetchrow(f"{INSERT_FRIEND} RETURNING id", name, nick)
            except asyncpg.PostgresError as e:
                logger.error("Failed to create friend", ctx, data={"error": str(e)})
                raise StoreError("Unable to create new friend", e) from e

        if row is None:
            logger.warning("Insert returned no row", ctx, data={"name": name})
            raise InsertFailedError("Unable to create new friend")

        new_id = GeneratedId(id=row["id"])
        logger.info("Friend created", ctx, friend_id=new_id.id)
        return Friend(id=new_id.id, name=name, nick=nick)
