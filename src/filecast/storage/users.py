"""SQLite-backed repository for user records."""
import sqlite3
import threading
from pathlib import Path

import structlog
from pydantic import BaseModel

logger = structlog.get_logger()


class User(BaseModel):
    """Stored user record.

    Attributes:
        id: Database-assigned identifier.
        name: Display name.
        email: Contact email address.
    """

    id: int
    name: str
    email: str


class UserRepository:
    """Create and list rows in the ``users`` table.

    Thread-safe via a lock. The connection uses check_same_thread=False
    since queries run in worker threads via asyncio.to_thread.
    """

    def __init__(self, path: str) -> None:
        """Initialize repository (call initialize() before use).

        Args:
            path: SQLite database file, or ":memory:".
        """
        self._path = path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def initialize(self) -> None:
        """Open the database and create the users table."""
        if self._path != ":memory:":
            Path(self._path).parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(self._path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                email TEXT NOT NULL
            )
            """)
        self._conn.commit()
        logger.info("user_repository_initialized", path=self._path)

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("UserRepository.initialize() has not been called")
        return self._conn

    def create(self, name: str, email: str) -> User:
        """Insert a user.

        Args:
            name: Display name.
            email: Contact email address.

        Returns:
            The stored user including its new id.

        Raises:
            sqlite3.Error: On database failure.
        """
        with self._lock:
            conn = self._connection()
            cursor = conn.execute(
                "INSERT INTO users (name, email) VALUES (?, ?)",
                (name, email),
            )
            conn.commit()
            user_id = cursor.lastrowid

        logger.info("user_created", user_id=user_id)
        return User(id=user_id, name=name, email=email)

    def list_all(self) -> list[User]:
        """Return every user ordered by id."""
        with self._lock:
            rows = self._connection().execute(
                "SELECT id, name, email FROM users ORDER BY id"
            ).fetchall()
        return [User(id=row["id"], name=row["name"], email=row["email"]) for row in rows]

    def ping(self) -> None:
        """Run a trivial query to confirm the database is reachable."""
        with self._lock:
            self._connection().execute("SELECT 1")

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
        logger.info("user_repository_closed")
