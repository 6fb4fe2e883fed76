# Room synchronization module
from .store import SharedStore, MemoryStore, Snapshot, apply_updates
from .synchronizer import RoomSynchronizer, Action, room_from_snapshot
from .coordinator import RoomCoordinator

__all__ = [
    "SharedStore",
    "MemoryStore",
    "Snapshot",
    "apply_updates",
    "RoomSynchronizer",
    "Action",
    "room_from_snapshot",
    "RoomCoordinator",
]
