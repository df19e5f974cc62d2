import sqlite3
import logging
import threading
from contextlib import contextmanager

from minirecord.errors import SchemaError


class DatabaseEngine:
    logger = logging.getLogger("MiniRecord")
    if not logger.handlers:
        logging.basicConfig(level=logging.INFO)

    def __init__(self, db_path=":memory:", check_same_thread=True):
        self.db_path = db_path
        self.connection = sqlite3.connect(db_path, check_same_thread=check_same_thread)
        self.connection.row_factory = sqlite3.Row
        # one connection for every thread: statements and whole transactions take turns on it
        self._lock = threading.RLock()
        self._local = threading.local()

    def __repr__(self):
        return f"<DatabaseEngine {self.db_path}>"

    @property
    def _transaction_depth(self):
        return getattr(self._local, "depth", 0)

    @_transaction_depth.setter
    def _transaction_depth(self, value):
        self._local.depth = value

    def _log(self, sql, params=None):
        msg = f"[SQL EXECUTE]: {sql}"
        if params:
            msg += f" | [PARAMS]: {params}"
        self.logger.info(msg)

    def _autocommit(self):
        if not self._transaction_depth and self.connection.in_transaction:
            self.connection.commit()

    def _run(self, sql, params):
        self._log(sql, params)
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, params or ())
        except sqlite3.Error:
            # sqlite3 has already opened an implicit transaction; don't leave it holding the lock
            if not self._transaction_depth and self.connection.in_transaction:
                self.rollback()
            raise
        return cursor

    def execute(self, sql, params=None):
        with self._lock:
            cursor = self._run(sql, params)
            rows = [dict(row) for row in cursor.fetchall()]
            self._autocommit()
            return rows

    def execute_insert(self, sql, params=None):
        with self._lock:
            cursor = self._run(sql, params)
            new_id = cursor.lastrowid
            self._autocommit()
            return new_id

    def execute_script(self, script):
        with self._lock:
            self._log(script)
            self.connection.executescript(script)

    def discover_columns(self, table_name):
        sql = f"SELECT * FROM {table_name} LIMIT 0"
        with self._lock:
            self._log(sql)
            try:
                cursor = self.connection.execute(sql)
            except sqlite3.OperationalError as e:
                raise SchemaError(f"cannot read columns of table '{table_name}': {e}") from e
            return [description[0] for description in cursor.description]

    @contextmanager
    def transaction(self):
        """Group several statements into one commit; roll back if the block raises.

        Other threads using this engine wait until the block is over.
        """
        with self._lock:
            self._transaction_depth += 1
            try:
                yield self
            except Exception:
                self._transaction_depth -= 1
                if not self._transaction_depth:
                    self.rollback()
                raise
            else:
                self._transaction_depth -= 1
                if not self._transaction_depth:
                    self.commit()

    def commit(self):
        with self._lock:
            self.connection.commit()
        self.logger.info("[TRANSACTION]: Commit")

    def rollback(self):
        with self._lock:
            self.connection.rollback()
        self.logger.warning("[TRANSACTION]: Rollback")

    def close(self):
        with self._lock:
            self.connection.close()
