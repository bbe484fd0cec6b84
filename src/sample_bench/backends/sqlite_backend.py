"""In-memory SQLite backend driven from a dedicated worker thread."""

import asyncio
import sqlite3
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Sequence

from sample_bench.base import Record
from sample_bench.logging_config import get_logger

logger = get_logger("SqliteBackend")


class SqliteBackend:
    """
    Orders records through an indexed ``samples (id, p)`` table of an
    in-memory database.

    The table only holds the row id and the key; the records themselves stay
    in a dict keyed by row id, so lookups hand back the inserted objects with
    every passthrough field untouched.

    sqlite3 connections must stay on the thread that created them, so every
    call, including connect and close, runs on one single-thread executor
    owned by this backend. Rows come back in ``id`` order among equal ``p``,
    matching the insertion-order tie-break of the other backends.
    """

    name = "sqlite"

    def __init__(self, database: str = ":memory:"):
        self.database = database
        self._executor: Optional[ThreadPoolExecutor] = None
        self._conn: Optional[sqlite3.Connection] = None
        self._records: Dict[int, Record] = {}

    async def _call(self, fn: Callable[..., Any], *args) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, partial(fn, *args))

    def _connect(self) -> None:
        conn = sqlite3.connect(self.database)
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE samples (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                p REAL NOT NULL
            )
        """)
        cursor.execute("CREATE INDEX idx_samples_p ON samples (p, id)")
        conn.commit()
        self._conn = conn

    async def prepare(self) -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sqlite-backend")
        self._records = {}
        await self._call(self._connect)

    def _insert_many(self, records: Sequence[Record]) -> None:
        cursor = self._conn.cursor()
        for record in records:
            cursor.execute("INSERT INTO samples (p) VALUES (?)", (record["p"],))
            self._records[cursor.lastrowid] = record
        self._conn.commit()

    async def bulk_insert(self, records: Sequence[Record]) -> None:
        await self._call(self._insert_many, records)

    async def insert(self, record: Record) -> None:
        await self._call(self._insert_many, [record])

    def _first_id(self, p: float) -> Optional[int]:
        row = self._conn.execute(
            "SELECT id FROM samples WHERE p = ? ORDER BY id LIMIT 1", (p,)
        ).fetchone()
        return None if row is None else row[0]

    def _find_one(self, p: float) -> Optional[Record]:
        row_id = self._first_id(p)
        return None if row_id is None else self._records[row_id]

    async def find_one(self, p: float) -> Optional[Record]:
        return await self._call(self._find_one, p)

    def _range(self, lo: float, hi: float) -> List[Record]:
        rows = self._conn.execute(
            "SELECT id FROM samples WHERE p BETWEEN ? AND ? ORDER BY p, id", (lo, hi)
        ).fetchall()
        return [self._records[row_id] for (row_id,) in rows]

    async def range(self, lo: float, hi: float) -> List[Record]:
        return await self._call(self._range, lo, hi)

    def _remove(self, p: float) -> None:
        row_id = self._first_id(p)
        if row_id is None:
            return
        self._conn.execute("DELETE FROM samples WHERE id = ?", (row_id,))
        self._conn.commit()
        del self._records[row_id]

    async def remove(self, p: float) -> None:
        await self._call(self._remove, p)

    def _count(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM samples").fetchone()[0]

    async def size(self) -> int:
        return await self._call(self._count)

    def _disconnect(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
        self._records = {}

    async def close(self) -> None:
        if self._executor is None:
            return
        try:
            await self._call(self._disconnect)
        finally:
            self._executor.shutdown(wait=True)
            self._executor = None
            logger.debug("Closed %s", self.database)
