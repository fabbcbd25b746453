from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine

from .tables import blobs_table


class BlobRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def get(self, key: str) -> Optional[str]:
        with self.engine.begin() as conn:
            return conn.execute(
                select(blobs_table.c.value).where(blobs_table.c.key == key)
            ).scalar_one_or_none()

    def put(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        with self.engine.begin() as conn:
            existing = conn.execute(
                select(blobs_table.c.key).where(blobs_table.c.key == key)
            ).scalar_one_or_none()
            if existing is not None:
                conn.execute(
                    update(blobs_table)
                    .where(blobs_table.c.key == key)
                    .values(value=value, updated_at=now)
                )
            else:
                conn.execute(insert(blobs_table).values(key=key, value=value, updated_at=now))


class InMemoryBlobStore:
    def __init__(self) -> None:
        self._blobs: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def put(self, key: str, value: str) -> None:
        self._blobs[key] = value
