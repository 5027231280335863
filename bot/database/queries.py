import logging

import aiosqlite
from config import DB_PATH

logger = logging.getLogger(__name__)

USER_COLUMNS = {"username", "source_kind", "source", "show_errors"}


async def get_user(user_id: int) -> dict | None:
    async with aiosqlite.connect(DB_PATH) as db:
        db.row_factory = aiosqlite.Row
        async with db.execute(
            "SELECT * FROM users WHERE user_id = ?", (user_id,)
        ) as cursor:
            row = await cursor.fetchone()
            return dict(row) if row else None


async def upsert_user(user_id: int, **kwargs):
    """Створює або оновлює запис користувача."""
    unknown = set(kwargs) - USER_COLUMNS
    if unknown:
        raise ValueError(f"Unknown user columns: {', '.join(sorted(unknown))}")

    async with aiosqlite.connect(DB_PATH) as db:
        async with db.execute(
            "SELECT user_id FROM users WHERE user_id = ?", (user_id,)
        ) as cursor:
            exists = await cursor.fetchone()

        if not exists:
            await db.execute(
                "INSERT INTO users (user_id) VALUES (?)", (user_id,)
            )
            logger.info("add user: %s", user_id)

        if kwargs:
            sets = ", ".join(f"{k} = ?" for k in kwargs)
            values = list(kwargs.values()) + [user_id]
            await db.execute(f"UPDATE users SET {sets} WHERE user_id = ?", values)

        await db.commit()


async def get_all_users() -> list[dict]:
    async with aiosqlite.connect(DB_PATH) as db:
        db.row_factory = aiosqlite.Row
        async with db.execute("SELECT * FROM users") as cursor:
            rows = await cursor.fetchall()
            return [dict(r) for r in rows]


async def delete_user(user_id: int, reason: str = ""):
    async with aiosqlite.connect(DB_PATH) as db:
        await db.execute("DELETE FROM users WHERE user_id = ?", (user_id,))
        await db.commit()
    logger.info("deleted user: %s%s", user_id, f". Reason: {reason}" if reason else "")
