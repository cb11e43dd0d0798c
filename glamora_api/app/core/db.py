"""
Document store used by the service layer.

``DocumentStore`` describes the small surface the services need:
insert a document, fetch one by equality filter, fetch many with an
optional sort.  Two implementations are provided:

* ``SQLiteStore`` keeps every record as a JSON body in a single
  ``documents`` table.  Uniqueness of ``products.productId`` and
  ``users.email`` is enforced by partial expression indexes, and the
  schema is versioned through a ``migrations`` table just like any
  other SQLite database.
* ``MongoStore`` talks to MongoDB through pymongo's asyncio client.

``create_store`` picks one based on the configured connection string.
A single store instance is opened at application startup and closed
at shutdown.
"""

import abc
import json
import logging
import os
import re
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from .config import Settings
from .errors import ConstraintError, StoreError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]

# Collection -> field that must be unique within it.
UNIQUE_FIELDS = {
    "products": "productId",
    "users": "email",
}

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DocumentStore(abc.ABC):
    """Persistence collaborator shared by all services."""

    @abc.abstractmethod
    async def open(self) -> None:
        """Acquire the connection and make sure indexes exist."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release the connection."""

    @abc.abstractmethod
    async def insert(self, collection: str, document: Document) -> Document:
        """Persist ``document`` and return it with its generated ``_id``.

        Raises ``ConstraintError`` when a unique field collides with an
        existing record.
        """

    @abc.abstractmethod
    async def find_one(self, collection: str, filter: Document) -> Optional[Document]:
        """Return the first document whose fields equal ``filter``."""

    @abc.abstractmethod
    async def find_many(
        self,
        collection: str,
        filter: Optional[Document] = None,
        sort: Optional[SortSpec] = None,
    ) -> List[Document]:
        """Return every matching document.

        ``sort`` is a list of ``(field, direction)`` pairs where ``1``
        means ascending and ``-1`` descending.  Without it documents
        come back in insertion order.
        """


# ---------------------------------------------------------------------------
# SQLite
# ---------------------------------------------------------------------------

MIGRATIONS: List[Tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS documents (
            id TEXT PRIMARY KEY,
            collection TEXT NOT NULL,
            body TEXT NOT NULL,
            inserted_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents(collection);

        CREATE UNIQUE INDEX IF NOT EXISTS uq_products_product_id
            ON documents(json_extract(body, '$.productId'))
            WHERE collection = 'products';

        CREATE UNIQUE INDEX IF NOT EXISTS uq_users_email
            ON documents(json_extract(body, '$.email'))
            WHERE collection = 'users';
        """,
    ),
    (
        2,
        """
        -- Per-user order history lookups
        CREATE INDEX IF NOT EXISTS idx_orders_user_email
            ON documents(json_extract(body, '$.userEmail'))
            WHERE collection = 'orders';
        """,
    ),
]


def _encode_value(value: Any) -> Any:
    """``json.dumps`` hook for values the json module cannot handle.

    Datetimes become fixed-width UTC strings so that sorting the text
    sorts the instants.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    if isinstance(value, ObjectId):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _json_path(field: str) -> str:
    if not _FIELD_RE.match(field):
        raise StoreError(f"Invalid field name: {field!r}")
    return f"$.{field}"


def resolve_sqlite_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths and ``:memory:`` are used as is; relative paths are
    resolved against the project root.
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class SQLiteStore(DocumentStore):
    """Document store backed by a single SQLite connection."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._conn: Optional[sqlite3.Connection] = None

    async def open(self) -> None:
        # The connection is shared by every request handled on the event
        # loop; the test client drives the loop from another thread.
        conn = sqlite3.connect(self.path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        self._conn = conn
        self._migrate()
        logger.info("Opened SQLite store at %s", self.path)

    async def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and map sqlite errors."""
        if self._conn is None:
            raise StoreError("Store is not open")
        cursor = self._conn.cursor()
        try:
            yield cursor
            self._conn.commit()
        except sqlite3.IntegrityError as exc:
            self._conn.rollback()
            raise ConstraintError(str(exc)) from exc
        except sqlite3.Error as exc:
            self._conn.rollback()
            raise StoreError(str(exc)) from exc
        finally:
            cursor.close()

    def _migrate(self) -> None:
        """Apply migrations newer than the recorded schema version."""
        with self._cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version
                    logger.debug("Applied store migration %s", version)

    @staticmethod
    def _where(collection: str, filter: Optional[Document]) -> Tuple[str, List[Any]]:
        clauses = ["collection = ?"]
        params: List[Any] = [collection]
        for field, value in (filter or {}).items():
            clauses.append("json_extract(body, ?) IS ?")
            params.extend([_json_path(field), value])
        return " AND ".join(clauses), params

    @staticmethod
    def _row_to_document(row: sqlite3.Row) -> Document:
        document = json.loads(row["body"])
        document["_id"] = row["id"]
        return document

    async def insert(self, collection: str, document: Document) -> Document:
        body = {key: value for key, value in document.items() if key != "_id"}
        doc_id = uuid.uuid4().hex
        encoded = json.dumps(body, default=_encode_value)
        with self._cursor() as cursor:
            cursor.execute(
                "INSERT INTO documents (id, collection, body) VALUES (?, ?, ?)",
                (doc_id, collection, encoded),
            )
        stored = json.loads(encoded)
        stored["_id"] = doc_id
        return stored

    async def find_one(self, collection: str, filter: Document) -> Optional[Document]:
        where, params = self._where(collection, filter)
        with self._cursor() as cursor:
            row = cursor.execute(
                f"SELECT id, body FROM documents WHERE {where} ORDER BY rowid LIMIT 1",
                params,
            ).fetchone()
        return self._row_to_document(row) if row else None

    async def find_many(
        self,
        collection: str,
        filter: Optional[Document] = None,
        sort: Optional[SortSpec] = None,
    ) -> List[Document]:
        where, params = self._where(collection, filter)
        order_terms = []
        tie_direction = "ASC"
        for field, direction in sort or ():
            tie_direction = "DESC" if direction < 0 else "ASC"
            order_terms.append(f"json_extract(body, ?) {tie_direction}")
            params.append(_json_path(field))
        # Equal sort keys fall back to insertion order.
        order_terms.append(f"rowid {tie_direction}")
        with self._cursor() as cursor:
            rows = cursor.execute(
                f"SELECT id, body FROM documents WHERE {where} ORDER BY {', '.join(order_terms)}",
                params,
            ).fetchall()
        return [self._row_to_document(row) for row in rows]


# ---------------------------------------------------------------------------
# MongoDB
# ---------------------------------------------------------------------------

def _render(document: Optional[Document]) -> Optional[Document]:
    if document is None:
        return None
    out = dict(document)
    if isinstance(out.get("_id"), ObjectId):
        out["_id"] = str(out["_id"])
    return out


class MongoStore(DocumentStore):
    """Document store backed by MongoDB.

    ``database`` may be supplied directly (an object exposing
    ``db[collection]`` with pymongo's async collection API); otherwise
    a client is created from ``url`` on ``open``.
    """

    def __init__(self, url: str, database_name: str = "glamora", database: Any = None) -> None:
        self.url = url
        self.database_name = database_name
        self._client: Optional[AsyncMongoClient] = None
        self._db = database

    async def open(self) -> None:
        try:
            if self._db is None:
                self._client = AsyncMongoClient(self.url, tz_aware=True)
                self._db = self._client.get_default_database(default=self.database_name)
            for collection, field in UNIQUE_FIELDS.items():
                await self._db[collection].create_index(field, unique=True)
            await self._db["orders"].create_index(
                [("userEmail", ASCENDING), ("createdAt", DESCENDING)]
            )
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        logger.info("Connected to MongoDB database %s", self.database_name)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
        self._db = None

    def _collection(self, name: str) -> Any:
        if self._db is None:
            raise StoreError("Store is not open")
        return self._db[name]

    async def insert(self, collection: str, document: Document) -> Document:
        body = {key: value for key, value in document.items() if key != "_id"}
        try:
            result = await self._collection(collection).insert_one(body)
        except DuplicateKeyError as exc:
            raise ConstraintError(str(exc)) from exc
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        body["_id"] = result.inserted_id
        return _render(body)

    async def find_one(self, collection: str, filter: Document) -> Optional[Document]:
        try:
            document = await self._collection(collection).find_one(filter)
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        return _render(document)

    async def find_many(
        self,
        collection: str,
        filter: Optional[Document] = None,
        sort: Optional[SortSpec] = None,
    ) -> List[Document]:
        try:
            cursor = self._collection(collection).find(filter or {})
            if sort:
                cursor = cursor.sort(list(sort) + [("_id", sort[-1][1])])
            documents = await cursor.to_list(length=None)
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        return [_render(document) for document in documents]


def create_store(settings: Settings) -> DocumentStore:
    """Build the store described by ``settings.database_url``."""
    url = settings.database_url
    if url.startswith(("mongodb://", "mongodb+srv://")):
        return MongoStore(url, database_name=settings.database_name)
    return SQLiteStore(resolve_sqlite_path(url))
