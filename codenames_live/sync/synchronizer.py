"""Room-level reads, writes and subscriptions over a shared store."""

import logging
from typing import Callable, Optional

from ..errors import (
    MissingDocumentError,
    RoomNotFoundError,
    StaleWriteError,
    StoreWriteError,
    TransientWriteError,
)
from ..game import Mutation, Room
from .store import SharedStore, Snapshot, Unsubscribe

logger = logging.getLogger(__name__)

# Computes a room's partial write from a snapshot; None means nothing to do.
Action = Callable[[Room], Optional[Mutation]]
RoomListener = Callable[[Optional[Room]], None]


def room_from_snapshot(snapshot: Optional[Snapshot]) -> Optional[Room]:
    if snapshot is None:
        return None
    return Room.from_dict(snapshot.value, version=snapshot.version)


class RoomSynchronizer:
    """
    Applies room mutations as partial-field writes and re-materializes rooms
    from store snapshots.

    In unchecked mode a write lands whatever happened since its base
    snapshot was read (last write wins per path). In versioned mode each
    write carries its base version; a stale write is recomputed from a fresh
    read, up to ``max_retries`` times.
    """

    def __init__(self, store: SharedStore, versioned: bool = True, max_retries: int = 3):
        self.store = store
        self.versioned = versioned
        self.max_retries = max_retries

    async def read(self, room_code: str) -> Optional[Room]:
        return room_from_snapshot(await self.store.read(room_code))

    async def require(self, room_code: str) -> Room:
        room = await self.read(room_code)
        if room is None:
            raise RoomNotFoundError(room_code)
        return room

    async def create(self, room: Room) -> Room:
        """Write a whole new room document."""
        try:
            snapshot = await self.store.create(room.room_code, room.to_dict())
        except StoreWriteError as exc:
            logger.warning("Creating room %s failed: %s", room.room_code, exc)
            raise TransientWriteError("create room", exc) from exc
        logger.info("Room %s created by %s", room.room_code, room.created_by)
        return room_from_snapshot(snapshot)

    async def commit(self, room: Room, updates: Mutation, description: str = "update room") -> Room:
        """
        Write ``updates`` computed from ``room``.

        Raises:
            StaleWriteError: versioned mode only, if the room changed since ``room`` was read
            RoomNotFoundError: the room was deleted
            TransientWriteError: the store failed to apply the write
        """
        expected = room.version if self.versioned else None
        try:
            snapshot = await self.store.write_fields(room.room_code, updates, expected_version=expected)
        except StaleWriteError:
            raise
        except MissingDocumentError as exc:
            logger.warning("Write to room %s failed (%s): room is gone", room.room_code, description)
            raise RoomNotFoundError(room.room_code) from exc
        except StoreWriteError as exc:
            logger.warning("Write to room %s failed (%s): %s", room.room_code, description, exc)
            raise TransientWriteError(description, exc) from exc
        return room_from_snapshot(snapshot)

    async def apply(
        self,
        room_code: str,
        action: Action,
        base: Optional[Room] = None,
        description: str = "update room",
    ) -> Room:
        """
        Compute and write one action against a room.

        Args:
            room_code: Room to act on
            action: Builds the partial write from a room snapshot
            base: Snapshot to compute from; defaults to a fresh read
            description: Human-readable action name for error messages

        Returns:
            The room after the write, or the base room if the action was a no-op
        """
        attempts = 0
        room = base
        while True:
            if room is None:
                room = await self.require(room_code)
            updates = action(room)
            if not updates:
                return room
            try:
                return await self.commit(room, updates, description)
            except StaleWriteError as exc:
                attempts += 1
                if attempts > self.max_retries:
                    logger.warning(
                        "Giving up on %s in room %s after %d stale writes", description, room_code, attempts
                    )
                    raise TransientWriteError(description, exc) from exc
                logger.debug("Stale write to room %s (%s), recomputing", room_code, exc)
                room = None

    def subscribe(self, room_code: str, listener: RoomListener) -> Unsubscribe:
        """Push every new room state (None once deleted) to ``listener``."""
        return self.store.subscribe(room_code, lambda snapshot: listener(room_from_snapshot(snapshot)))

    async def delete(self, room_code: str) -> None:
        try:
            await self.store.delete(room_code)
        except StoreWriteError as exc:
            logger.warning("Deleting room %s failed: %s", room_code, exc)
            raise TransientWriteError("delete room", exc) from exc
        logger.info("Room %s deleted", room_code)
