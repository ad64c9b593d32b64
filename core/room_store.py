# =============================================================================
# core/room_store.py  —  Room Temperature Store
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Owns the one piece of durable shared state in the system: the house
#   document mapping room names to temperatures.  Callers get three
#   operations (read_all, find_by_name, set_temperature) and never touch the
#   file directly.
#
# PERSISTENCE:
#   - One JSON document, rewritten IN FULL on every mutation.
#   - Written to a sibling temp file, then os.replace()d over the original.
#     A reader either sees the old document or the new one, never half.
#   - indent=2 and a stable key order keep the file readable by hand.
#
# CONCURRENCY:
#   Tool calls run as independent asyncio tasks, and several sessions can
#   share this store.  set_temperature is a read-modify-write of the whole
#   document, so two unsynchronised writers could each read the old file and
#   the second write would erase the first one's change.
#
#   Each store instance therefore carries a readers/writer lock:
#     - writers are exclusive and run one at a time
#     - readers run alongside each other, never alongside a writer
#     - a waiting writer stops new readers from starting
#   The read inside set_temperature happens while the write lock is held.
#
# BLOCKING I/O:
#   File access runs in asyncio.to_thread() so the event loop (and the voice
#   session on it) keeps going while the disk works.
# =============================================================================

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from core.errors import RoomNotFound, StoreUnavailable
from core.models import House, Room, TemperatureChange, is_number

logger = logging.getLogger(__name__)


class _ReadWriteLock:
    """Many readers or one writer, with waiting writers served first."""

    def __init__(self):
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @asynccontextmanager
    async def reading(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and self._writers_waiting == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def writing(self) -> AsyncIterator[None]:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0
                )
            except BaseException:
                # Readers held back by this writer must be able to proceed.
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()


class RoomTemperatureStore:
    """Durable room -> temperature mapping backed by a single JSON file."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._lock = _ReadWriteLock()

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------
    async def read_all(self) -> House:
        """Load and validate the whole house document.

        Raises:
            StoreUnavailable: if the file is missing, unreadable, not JSON,
                has the wrong shape, or lists the same room twice.
        """
        async with self._lock.reading():
            return await asyncio.to_thread(self._load)

    async def find_by_name(self, name: str) -> Room | None:
        """Case-insensitive exact match, or None."""
        house = await self.read_all()
        return house.find(name)

    async def set_temperature(self, name: str, temperature: float) -> TemperatureChange:
        """Change one room's temperature and persist the whole document.

        Returns:
            The updated room together with the temperature it had before.

        Raises:
            RoomNotFound: if no room matches; nothing is written.
            StoreUnavailable: if the document cannot be read or written.
        """
        if not is_number(temperature):
            raise ValueError(f"temperature must be a finite number, got {temperature!r}")

        async with self._lock.writing():
            house = await asyncio.to_thread(self._load)
            room = house.find(name)
            if room is None:
                raise RoomNotFound(name, house.room_names())

            previous = room.temperature
            room.temperature = temperature
            await asyncio.to_thread(self._save, house)

        logger.info("Temperature in %s changed from %s to %s", room.name, previous, temperature)
        return TemperatureChange(room=room, previous_temperature=previous)

    async def add_room(self, name: str, temperature: float) -> Room:
        """Append a new room, refusing names that collide case-insensitively.

        Library-only: no tool exposes it; use it to provision a house document.
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("room name must not be empty")
        if not is_number(temperature):
            raise ValueError(f"temperature must be a finite number, got {temperature!r}")

        async with self._lock.writing():
            house = await asyncio.to_thread(self._load)
            existing = house.find(name)
            if existing is not None:
                raise StoreUnavailable(f"a room named '{existing.name}' already exists")
            room = Room(name=name, temperature=temperature)
            house.rooms.append(room)
            await asyncio.to_thread(self._save, house)

        logger.info("Added room %s at %s", room.name, temperature)
        return room

    # -------------------------------------------------------------------------
    # File access (runs in a worker thread)
    # -------------------------------------------------------------------------
    def _load(self) -> House:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise StoreUnavailable(f"rooms data file not found: {self.path}") from None
        except OSError as e:
            logger.error("Error reading rooms data from %s: %s", self.path, e)
            raise StoreUnavailable("Failed to read rooms data") from e

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("Rooms data in %s is not valid JSON: %s", self.path, e)
            raise StoreUnavailable("rooms data is not valid JSON") from e

        return House.from_document(document)

    def _save(self, house: House) -> None:
        payload = json.dumps(house.to_document(), indent=2, ensure_ascii=False) + "\n"
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error("Error writing rooms data to %s: %s", self.path, e)
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise StoreUnavailable("Failed to write rooms data") from e
