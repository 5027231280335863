import aiosqlite
from config import DB_PATH


async def init_db():
    async with aiosqlite.connect(DB_PATH) as db:
        await db.execute("""
            CREATE TABLE IF NOT EXISTS users (
                user_id      INTEGER PRIMARY KEY,
                username     TEXT,
                source_kind  TEXT,
                source       TEXT,
                show_errors  BOOLEAN DEFAULT 0,
                joined       TEXT DEFAULT CURRENT_TIMESTAMP
            )
        """)
        await db.commit()
