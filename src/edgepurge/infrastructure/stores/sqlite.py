"""SQLite policy repository and audit sink.

Both classes share one aiosqlite database file and create their tables
with init_schema(). Documents are stored as JSON text.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import aiosqlite

from edgepurge.core.interfaces.serializer import ISerializer
from edgepurge.infrastructure.serializers.json import JsonSerializer

SETTINGS_TABLE = "edgepurge_settings"
EVENTS_TABLE = "edgepurge_cache_events"


async def init_schema(db_path: str | Path) -> None:
    """Create the settings and cache events tables if they do not exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    async with aiosqlite.connect(db_path) as db:
        await db.execute(f"""
            CREATE TABLE IF NOT EXISTS {SETTINGS_TABLE} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                key TEXT UNIQUE NOT NULL,
                value TEXT,
                updated_at TEXT NOT NULL
            )
        """)
        await db.execute(f"""
            CREATE TABLE IF NOT EXISTS {EVENTS_TABLE} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                event_type TEXT NOT NULL,
                details TEXT,
                created_at TEXT NOT NULL
            )
        """)
        await db.execute(
            f"CREATE INDEX IF NOT EXISTS idx_cache_events_type "
            f"ON {EVENTS_TABLE}(event_type)"
        )
        await db.execute(
            f"CREATE INDEX IF NOT EXISTS idx_cache_events_created "
            f"ON {EVENTS_TABLE}(created_at)"
        )
        await db.commit()


class SqlitePolicyRepository:
    """Settings store backed by a SQLite key/value table."""

    def __init__(
        self,
        db_path: str | Path,
        serializer: ISerializer | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            db_path: Path to the SQLite database file.
            serializer: Serializer for stored documents. Defaults to JSON.
        """
        self._db_path = db_path
        self._serializer = serializer or JsonSerializer()

    async def get(self, key: str) -> dict[str, Any] | None:
        """Load the stored document for a key.

        Raises:
            SerializationError: If the stored value is not valid JSON.
        """
        async with aiosqlite.connect(self._db_path) as db:
            cursor = await db.execute(
                f"SELECT value FROM {SETTINGS_TABLE} WHERE key = ?", (key,)
            )
            row = await cursor.fetchone()

        if row is None or row[0] is None:
            return None
        return self._serializer.deserialize(row[0].encode())

    async def put(self, key: str, value: dict[str, Any]) -> None:
        """Insert or replace the document stored under a key.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        encoded = self._serializer.serialize(value).decode()
        now = datetime.now(timezone.utc).isoformat()
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                f"""
                INSERT INTO {SETTINGS_TABLE} (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT (key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, encoded, now),
            )
            await db.commit()


class SqliteAuditSink:
    """Append-only audit log backed by a SQLite table."""

    def __init__(
        self,
        db_path: str | Path,
        serializer: ISerializer | None = None,
    ) -> None:
        """Initialize the sink.

        Args:
            db_path: Path to the SQLite database file.
            serializer: Serializer for event details. Defaults to JSON.
        """
        self._db_path = db_path
        self._serializer = serializer or JsonSerializer()

    async def record(
        self,
        event_type: str,
        details: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        """Append one audit record."""
        encoded = self._serializer.serialize(details).decode()
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                f"INSERT INTO {EVENTS_TABLE} (event_type, details, created_at) "
                f"VALUES (?, ?, ?)",
                (event_type, encoded, timestamp.isoformat()),
            )
            await db.commit()

    async def recent(self, limit: int = 50) -> list[dict[str, Any]]:
        """Get the most recent records, newest first.

        Args:
            limit: Maximum number of records to return.

        Returns:
            Records as dictionaries with event_type, details and created_at.
        """
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                f"SELECT event_type, details, created_at FROM {EVENTS_TABLE} "
                f"ORDER BY id DESC LIMIT ?",
                (limit,),
            )
            rows = await cursor.fetchall()

        return [
            {
                "event_type": row["event_type"],
                "details": (
                    self._serializer.deserialize(row["details"].encode())
                    if row["details"]
                    else None
                ),
                "created_at": row["created_at"],
            }
            for row in rows
        ]
