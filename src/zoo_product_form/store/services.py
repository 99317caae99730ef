"""SQLite-backed store for Service records."""
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from ..schemas.services import Service
from .exceptions import ServiceNotFoundError, ServiceStoreError, ValidationError
from .schema import init_database


logger = logging.getLogger(__name__)

_COLUMNS = "id, title, description, image_url, remote_ref, created_at, updated_at"


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_service_fields(
    title: Optional[str],
    description: Optional[str] = None,
    image_url: Optional[str] = None,
) -> tuple[str, Optional[str], Optional[str]]:
    """Strip input fields and enforce a non-blank title.

    Raises:
        ValidationError: If title is missing or whitespace-only
    """
    clean_title = (title or "").strip()
    if not clean_title:
        raise ValidationError("title", "Title is required")
    return clean_title, _clean_optional(description), _clean_optional(image_url)


class ServiceStore:
    """Single-record atomic CRUD over the services table."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        init_database(self.db_path)

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as exc:
            raise ServiceStoreError(f"Failed to open database: {exc}") from exc

        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise ServiceStoreError(f"Database error: {exc}") from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @staticmethod
    def _row_to_service(row: sqlite3.Row) -> Service:
        return Service(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            image_url=row["image_url"],
            remote_ref=row["remote_ref"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def _fetch(self, conn: sqlite3.Connection, service_id: int) -> Service:
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM services WHERE id = ?", (service_id,)
        ).fetchone()
        if row is None:
            raise ServiceNotFoundError(service_id)
        return self._row_to_service(row)

    def create(
        self,
        title: Optional[str],
        description: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Service:
        """Insert a new service.

        Args:
            title: Required title (stripped, must be non-blank)
            description: Optional description, blank becomes None
            image_url: Optional image URL, blank becomes None

        Returns:
            The persisted Service with its assigned id

        Raises:
            ValidationError: If title is blank
            ServiceStoreError: On persistence failure
        """
        title, description, image_url = normalize_service_fields(
            title, description, image_url
        )
        now = _utcnow()

        with self._connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO services (title, description, image_url, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (title, description, image_url, now, now),
            )
            service = self._fetch(conn, cursor.lastrowid)

        logger.info("Created service: id=%s", service.id)
        return service

    def get(self, service_id: int) -> Service:
        """Load one service.

        Raises:
            ServiceNotFoundError: If the id does not exist
        """
        with self._connection() as conn:
            return self._fetch(conn, service_id)

    def list(self, newest_first: bool = True) -> list[Service]:
        """List every service.

        Args:
            newest_first: Order by creation time descending (default), or by
                insertion order when False
        """
        order = "created_at DESC, id DESC" if newest_first else "id ASC"
        with self._connection() as conn:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM services ORDER BY {order}"
            ).fetchall()
        return [self._row_to_service(row) for row in rows]

    def count(self) -> int:
        with self._connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM services").fetchone()[0]

    def update(
        self,
        service_id: int,
        title: Optional[str],
        description: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Service:
        """Replace the editable fields of a service.

        remote_ref is left untouched.

        Raises:
            ValidationError: If title is blank
            ServiceNotFoundError: If the id does not exist
            ServiceStoreError: On persistence failure
        """
        title, description, image_url = normalize_service_fields(
            title, description, image_url
        )

        with self._connection() as conn:
            cursor = conn.execute(
                """
                UPDATE services
                SET title = ?, description = ?, image_url = ?, updated_at = ?
                WHERE id = ?
                """,
                (title, description, image_url, _utcnow(), service_id),
            )
            if cursor.rowcount == 0:
                raise ServiceNotFoundError(service_id)
            service = self._fetch(conn, service_id)

        logger.info("Updated service: id=%s", service_id)
        return service

    def set_remote_ref(self, service_id: int, remote_ref: str) -> Service:
        """Record the Metaobject GID for a service.

        Raises:
            ServiceNotFoundError: If the id does not exist
        """
        with self._connection() as conn:
            cursor = conn.execute(
                "UPDATE services SET remote_ref = ?, updated_at = ? WHERE id = ?",
                (remote_ref, _utcnow(), service_id),
            )
            if cursor.rowcount == 0:
                raise ServiceNotFoundError(service_id)
            service = self._fetch(conn, service_id)

        logger.info("Linked service id=%s to %s", service_id, remote_ref)
        return service

    def delete(self, service_id: int) -> None:
        """Delete a service.

        Raises:
            ServiceNotFoundError: If the id does not exist
        """
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM services WHERE id = ?", (service_id,))
            if cursor.rowcount == 0:
                raise ServiceNotFoundError(service_id)

        logger.info("Deleted service: id=%s", service_id)
