from __future__ import annotations
from contextlib import contextmanager
from typing import List
import sqlite3, os, threading, uuid
from memberdir_core.logger import get_logger
from memberdir_core.storage.models import EntryRow
from memberdir_core.storage.provider import RecordProvider, StoreError

log = get_logger("memberdir.storage.sqlite")

_COLUMNS = (
    "master_key, member_key, member_metadata, member_signature, "
    "body_data, body_timestamp, body_signature"
)


class SQLiteRecordProvider(RecordProvider):
    """
    SQLite-backed record provider.

    Every thread gets its own connection in autocommit mode; write units
    (replace, sweep) open their own BEGIN IMMEDIATE transaction, so one
    thread's COMMIT or ROLLBACK never touches another thread's statements.
    Writers on the same file queue on SQLite's lock for up to `timeout` seconds.
    """

    def __init__(self, path="db/memberdir.db", timeout: float = 30.0):
        if path == ":memory:":
            # per-thread connections must all reach the same in-memory database
            self.path = f"file:memberdir-{uuid.uuid4().hex}?mode=memory&cache=shared"
        else:
            # If no directory, default to current working directory
            dir_path = os.path.dirname(path) or "."
            os.makedirs(dir_path, exist_ok=True)
            self.path = path
        self.timeout = timeout
        self._local = threading.local()
        self._connections: List[sqlite3.Connection] = []
        self._closed = False

        self._init()

    @property
    def db(self) -> sqlite3.Connection:
        """The calling thread's connection, opened on first use."""
        if self._closed:
            raise StoreError("provider is closed")
        conn = getattr(self._local, "conn", None)
        if conn is None:
            try:
                conn = sqlite3.connect(
                    self.path, timeout=self.timeout, isolation_level=None,
                    uri=True, check_same_thread=False,
                )
            except sqlite3.Error as e:
                raise StoreError(str(e)) from e
            self._local.conn = conn
            self._connections.append(conn)
        return conn

    def execute(self, sql: str, params: tuple = None):
        db = self.db
        try:
            if params:
                return db.execute(sql, params)
            return db.execute(sql)
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    @contextmanager
    def _unit(self):
        db = self.db
        db.execute("BEGIN IMMEDIATE")
        try:
            yield db
        except BaseException:
            db.execute("ROLLBACK")
            raise
        db.execute("COMMIT")

    def _init(self) -> None:
        self.execute("""CREATE TABLE IF NOT EXISTS entries(
            master_key TEXT NOT NULL,
            member_key TEXT NOT NULL,
            member_metadata TEXT NOT NULL,
            member_signature TEXT NOT NULL,
            body_data TEXT NOT NULL,
            body_timestamp INTEGER NOT NULL,
            body_signature TEXT NOT NULL,
            PRIMARY KEY (master_key, member_key)
        )""")
        self.execute("CREATE INDEX IF NOT EXISTS entries_body_timestamp ON entries(body_timestamp)")

    def superseding_exists(self, master_key: str, member_key: str, timestamp: int) -> bool:
        cur = self.execute(
            "SELECT 1 FROM entries WHERE master_key=? AND member_key=? AND body_timestamp>=? LIMIT 1",
            (master_key, member_key, timestamp),
        )
        return cur.fetchone() is not None

    def replace(self, row: EntryRow) -> None:
        try:
            with self._unit() as db:
                db.execute(
                    "DELETE FROM entries WHERE master_key=? AND member_key=?",
                    (row.master_key, row.member_key),
                )
                db.execute(
                    f"INSERT INTO entries({_COLUMNS}) VALUES(?,?,?,?,?,?,?)",
                    (
                        row.master_key, row.member_key, row.member_metadata, row.member_signature,
                        row.body_data, row.body_timestamp, row.body_signature,
                    ),
                )
        except sqlite3.Error as e:
            log.error(f"[SQLITE] replace rolled back: {e}")
            raise StoreError(str(e)) from e

    def list_siblings(self, master_key: str, exclude_member_key: str) -> List[EntryRow]:
        cur = self.execute(
            f"SELECT {_COLUMNS} FROM entries WHERE master_key=? AND member_key!=? ORDER BY member_key",
            (master_key, exclude_member_key),
        )
        return [EntryRow(*r) for r in cur.fetchall()]

    def delete_older_than(self, cutoff_ms: int) -> int:
        try:
            with self._unit() as db:
                cur = db.execute("DELETE FROM entries WHERE body_timestamp<?", (cutoff_ms,))
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        return cur.rowcount

    def count(self) -> int:
        return self.execute("SELECT COUNT(*) FROM entries").fetchone()[0]

    def close(self):
        self._closed = True
        for conn in self._connections:
            conn.close()
        self._connections.clear()
