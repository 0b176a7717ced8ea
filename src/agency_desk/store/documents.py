# src/agency_desk/store/documents.py

from __future__ import annotations

import contextlib
import json
import logging
import re
import sqlite3
import uuid
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_WIRE_KEYS = frozenset({"_seconds", "_nanoseconds"})
_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class _Sentinel:
    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name


# Replaced by the store clock when written.
SERVER_TIMESTAMP = _Sentinel("SERVER_TIMESTAMP")
# Removes the key on update(); never persisted.
DELETE_FIELD = _Sentinel("DELETE_FIELD")


class DocumentNotFound(KeyError):
    """Raised by update() when the target document does not exist."""


@dataclass(frozen=True, slots=True, order=True)
class StoreTimestamp:
    """
    Store-native timestamp: whole seconds since the UNIX epoch + nanoseconds.

    Wire form inside the JSON documents: {"_seconds": int, "_nanoseconds": int}.
    """

    seconds: int
    nanoseconds: int = 0

    @classmethod
    def now(cls) -> StoreTimestamp:
        return cls.from_datetime(datetime.now(UTC))

    @classmethod
    def from_datetime(cls, dt: datetime) -> StoreTimestamp:
        # Naive datetimes are taken as UTC.
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        delta = dt.astimezone(UTC) - _EPOCH
        return cls(seconds=delta.days * 86400 + delta.seconds, nanoseconds=delta.microseconds * 1000)

    @classmethod
    def from_wire(cls, value: Any) -> StoreTimestamp | None:
        if not isinstance(value, Mapping) or set(value.keys()) != _WIRE_KEYS:
            return None
        seconds = value.get("_seconds")
        nanos = value.get("_nanoseconds")
        if not isinstance(seconds, int) or not isinstance(nanos, int):
            return None
        return cls(seconds=seconds, nanoseconds=nanos)

    def to_datetime(self) -> datetime:
        return _EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanoseconds // 1000)

    def to_wire(self) -> dict[str, int]:
        return {"_seconds": int(self.seconds), "_nanoseconds": int(self.nanoseconds)}


@dataclass(frozen=True, slots=True)
class Document:
    id: str
    data: dict[str, Any] = field(default_factory=dict)


def _encode(value: Any, now_ts: StoreTimestamp) -> Any:
    if value is SERVER_TIMESTAMP:
        return now_ts.to_wire()
    if value is DELETE_FIELD:
        raise ValueError("DELETE_FIELD is only valid as a top-level update value")
    if isinstance(value, StoreTimestamp):
        return value.to_wire()
    if isinstance(value, datetime):
        return StoreTimestamp.from_datetime(value).to_wire()
    if isinstance(value, Mapping):
        return {str(k): _encode(v, now_ts) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode(v, now_ts) for v in value]
    return value


def _decode(value: Any) -> Any:
    if isinstance(value, dict):
        ts = StoreTimestamp.from_wire(value)
        if ts is not None:
            return ts
        return {k: _decode(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_decode(v) for v in value]
    return value


def _json_path(field_name: str) -> str:
    if not _FIELD_RE.match(field_name):
        raise ValueError(f"invalid field name: {field_name!r}")
    return f"$.{field_name}"


class DocumentStore:
    """
    SQLite-backed JSON document store (collections of schemaless documents).

    - documents are addressed by (collection, id); ids are opaque strings
    - timestamps round-trip as StoreTimestamp values
    - SERVER_TIMESTAMP / DELETE_FIELD sentinels behave like their managed-store cousins

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(
        self,
        db_path: str | Path = "agency.sqlite3",
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._ensure_schema()
        logger.info("DocumentStore ready db=%s", self._db_path)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    collection TEXT NOT NULL,
                    id TEXT NOT NULL,
                    data TEXT NOT NULL DEFAULT '{}',
                    PRIMARY KEY (collection, id)
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents(collection)")
            conn.commit()
        finally:
            conn.close()

    def _now(self) -> StoreTimestamp:
        if self._clock is not None:
            return StoreTimestamp.from_datetime(self._clock())
        return StoreTimestamp.now()

    def _dumps(self, data: Mapping[str, Any]) -> str:
        return json.dumps(_encode(dict(data), self._now()), ensure_ascii=False)

    @staticmethod
    def _loads(raw: str | None) -> dict[str, Any]:
        if not raw:
            return {}
        try:
            val = json.loads(raw)
        except ValueError:
            logger.warning("Corrupt document JSON ignored.")
            return {}
        return _decode(val) if isinstance(val, dict) else {}

    def _row_to_document(self, row: sqlite3.Row) -> Document:
        return Document(id=str(row["id"]), data=self._loads(row["data"]))

    # ---- public API ----

    def add(self, collection: str, data: Mapping[str, Any]) -> str:
        """Insert a new document with a store-assigned id and return the id."""
        doc_id = uuid.uuid4().hex
        self.set(collection, doc_id, data)
        logger.debug("Document added collection=%s id=%s", collection, doc_id)
        return doc_id

    def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Create or fully replace a document."""
        if any(v is DELETE_FIELD for v in data.values()):
            data = {k: v for k, v in data.items() if v is not DELETE_FIELD}
        payload = self._dumps(data)

        conn = self._get_conn()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO documents(collection, id, data) VALUES (?, ?, ?)",
                (collection, str(doc_id), payload),
            )
            conn.commit()
        finally:
            conn.close()

    def get(self, collection: str, doc_id: str) -> Document | None:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "SELECT id, data FROM documents WHERE collection = ? AND id = ?",
                (collection, str(doc_id)),
            )
            row = cur.fetchone()
            return self._row_to_document(row) if row else None
        finally:
            conn.close()

    def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> None:
        """
        Merge top-level fields into an existing document.

        DELETE_FIELD removes the key, SERVER_TIMESTAMP stores the store clock.
        Raises DocumentNotFound if the document is missing.
        """
        now_ts = self._now()
        conn = self._get_conn()
        try:
            conn.execute("BEGIN IMMEDIATE")
            cur = conn.execute(
                "SELECT data FROM documents WHERE collection = ? AND id = ?",
                (collection, str(doc_id)),
            )
            row = cur.fetchone()
            if row is None:
                conn.rollback()
                raise DocumentNotFound(f"{collection}/{doc_id}")

            try:
                current = json.loads(row["data"] or "{}")
            except ValueError:
                current = {}
            if not isinstance(current, dict):
                current = {}

            for key, value in fields.items():
                if value is DELETE_FIELD:
                    current.pop(key, None)
                else:
                    current[key] = _encode(value, now_ts)

            conn.execute(
                "UPDATE documents SET data = ? WHERE collection = ? AND id = ?",
                (json.dumps(current, ensure_ascii=False), collection, str(doc_id)),
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, collection: str, doc_id: str) -> bool:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (collection, str(doc_id)),
            )
            conn.commit()
            return cur.rowcount == 1
        finally:
            conn.close()

    def count(self, collection: str) -> int:
        conn = self._get_conn()
        try:
            cur = conn.execute("SELECT COUNT(*) FROM documents WHERE collection = ?", (collection,))
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def query(
        self,
        collection: str,
        *,
        equals: Mapping[str, Any] | None = None,
        any_of: Mapping[str, Iterable[Any]] | None = None,
        limit: int | None = None,
    ) -> list[Document]:
        """
        Filter documents on scalar top-level fields.

        equals: field == value
        any_of: field IN (values); an empty value list matches nothing
        Results are ordered by id; range filters and ordering on timestamps
        belong to the caller.
        """
        clauses = ["collection = ?"]
        params: list[Any] = [collection]

        for name, value in (equals or {}).items():
            clauses.append("json_extract(data, ?) = ?")
            params.extend([_json_path(name), value])

        for name, values in (any_of or {}).items():
            vals = list(values)
            if not vals:
                return []
            placeholders = ",".join("?" for _ in vals)
            clauses.append(f"json_extract(data, ?) IN ({placeholders})")
            params.append(_json_path(name))
            params.extend(vals)

        sql = f"SELECT id, data FROM documents WHERE {' AND '.join(clauses)} ORDER BY id ASC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(max(0, int(limit)))

        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            return [self._row_to_document(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def stream(self, collection: str) -> Iterator[Document]:
        yield from self.query(collection)
