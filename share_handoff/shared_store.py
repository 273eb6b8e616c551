"""SQLite-backed key-value store shared between the extension and the host."""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from pathlib import Path
from typing import Optional

import sqlite_utils

from .errors import PublishFailed


class SharedStore:
    """Suite-scoped defaults: one value per (suite, key), last write wins."""

    TABLE = "shared_defaults"

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.db = sqlite_utils.Database(str(db_path))
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        self.db[self.TABLE].create(
            {
                "suite": str,
                "key": str,
                "value": bytes,
                "updated_at": str,
            },
            pk=("suite", "key"),
            if_not_exists=True,
        )

    def set(self, namespace: str, key: str, value: bytes) -> None:
        try:
            self.db[self.TABLE].upsert(
                {
                    "suite": namespace,
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                pk=("suite", "key"),
            )
        except sqlite3.Error as exc:
            raise PublishFailed(f"Unable to write {namespace}/{key}: {exc}") from exc

    def get(self, namespace: str, key: str) -> Optional[bytes]:
        rows = list(
            self.db[self.TABLE].rows_where("suite = ? and key = ?", [namespace, key], limit=1)
        )
        if not rows:
            return None
        return rows[0]["value"]
