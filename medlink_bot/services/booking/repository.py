"""
Hospital and booking persistence backed by SQLite.
"""

import asyncio
import json
import sqlite3
import uuid
from datetime import datetime
from typing import Callable, List, Optional, TypeVar

from ...config import DatabaseConfig
from ...core.exceptions import BookingPersistenceError
from ...core.models import Booking, GeoPoint, Hospital

T = TypeVar("T")

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS hospitals (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        available_beds INTEGER NOT NULL DEFAULT 0 CHECK (available_beds >= 0),
        address TEXT,
        location TEXT,
        phone TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS bookings (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        hospital_id TEXT NOT NULL,
        status TEXT NOT NULL,
        requires_ambulance INTEGER NOT NULL,
        payment_status TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_bookings_user ON bookings (user_id)",
)

_HOSPITAL_COLUMNS = "id, name, available_beds, address, location, phone"
_BOOKING_COLUMNS = (
    "id, user_id, hospital_id, status, requires_ambulance, payment_status, created_at"
)


def _hospital_from_row(row: sqlite3.Row) -> Hospital:
    location = json.loads(row["location"]) if row["location"] else None
    return Hospital(
        id=row["id"],
        name=row["name"],
        available_beds=row["available_beds"],
        address=row["address"],
        location=GeoPoint(**location) if location else None,
        phone=row["phone"],
    )


def _booking_from_row(row: sqlite3.Row) -> Booking:
    return Booking(
        id=row["id"],
        user_id=row["user_id"],
        hospital_id=row["hospital_id"],
        status=row["status"],
        requires_ambulance=bool(row["requires_ambulance"]),
        payment_status=row["payment_status"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class BookingRepository:
    """Data access for hospitals and bed bookings.

    Hospital referential integrity is not enforced; a booking may point at
    any hospital id.
    """

    def __init__(self, config: DatabaseConfig):
        self.db_path = config.path
        self.timeout = config.connection_timeout
        self._schema_ready = False
        self._schema_lock = asyncio.Lock()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        return conn

    async def _run(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        """Run ``fn`` with a fresh connection in a worker thread."""
        await self._ensure_schema()

        def _call() -> T:
            conn = self._connect()
            try:
                result = fn(conn)
                conn.commit()
                return result
            finally:
                conn.close()

        try:
            return await asyncio.to_thread(_call)
        except sqlite3.Error as e:
            raise BookingPersistenceError(f"Database error: {e}") from e

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        async with self._schema_lock:
            if self._schema_ready:
                return

            def _create() -> None:
                conn = self._connect()
                try:
                    for statement in _SCHEMA:
                        conn.execute(statement)
                    conn.commit()
                finally:
                    conn.close()

            try:
                await asyncio.to_thread(_create)
            except sqlite3.Error as e:
                raise BookingPersistenceError(f"Cannot create schema: {e}") from e
            self._schema_ready = True

    async def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        return await self._run(lambda conn: conn.execute("SELECT 1").fetchone()[0] == 1)

    # Hospitals

    async def add_hospital(self, hospital: Hospital) -> Hospital:
        """Insert or replace a hospital record."""
        location = hospital.location.model_dump_json() if hospital.location else None

        def _insert(conn: sqlite3.Connection) -> None:
            conn.execute(
                f"INSERT OR REPLACE INTO hospitals ({_HOSPITAL_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    hospital.id,
                    hospital.name,
                    hospital.available_beds,
                    hospital.address,
                    location,
                    hospital.phone,
                ),
            )

        await self._run(_insert)
        return hospital

    async def find_hospitals(self, limit: int = 5) -> List[Hospital]:
        """Return at most ``limit`` hospitals in insertion order."""

        def _select(conn: sqlite3.Connection) -> List[Hospital]:
            rows = conn.execute(
                f"SELECT {_HOSPITAL_COLUMNS} FROM hospitals ORDER BY rowid LIMIT ?",
                (limit,),
            ).fetchall()
            return [_hospital_from_row(row) for row in rows]

        return await self._run(_select)

    async def find_hospital_by_id(self, hospital_id: str) -> Optional[Hospital]:
        def _select(conn: sqlite3.Connection) -> Optional[Hospital]:
            row = conn.execute(
                f"SELECT {_HOSPITAL_COLUMNS} FROM hospitals WHERE id = ?",
                (hospital_id,),
            ).fetchone()
            return _hospital_from_row(row) if row else None

        return await self._run(_select)

    # Bookings

    async def create_booking(
        self, user_id: str, hospital_id: str, requires_ambulance: bool
    ) -> Booking:
        """Persist a new booking with pending status and payment."""
        booking = Booking(
            id=uuid.uuid4().hex,
            user_id=user_id,
            hospital_id=hospital_id,
            requires_ambulance=requires_ambulance,
        )

        def _insert(conn: sqlite3.Connection) -> None:
            conn.execute(
                f"INSERT INTO bookings ({_BOOKING_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    booking.id,
                    booking.user_id,
                    booking.hospital_id,
                    booking.status.value,
                    int(booking.requires_ambulance),
                    booking.payment_status.value,
                    booking.created_at.isoformat(),
                ),
            )

        await self._run(_insert)
        return booking

    async def find_bookings_for_user(self, user_id: str) -> List[Booking]:
        def _select(conn: sqlite3.Connection) -> List[Booking]:
            rows = conn.execute(
                f"SELECT {_BOOKING_COLUMNS} FROM bookings WHERE user_id = ? ORDER BY rowid",
                (user_id,),
            ).fetchall()
            return [_booking_from_row(row) for row in rows]

        return await self._run(_select)
