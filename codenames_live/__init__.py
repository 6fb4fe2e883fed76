"""Shared real-time Codenames rooms: game engine and room synchronization."""

from .client import AdminPolicy, GameClient, Identity
from .config import GameConfig, load_config
from .errors import (
    CodenamesError,
    MissingDocumentError,
    PermissionDeniedError,
    RoomFinishedError,
    RoomNotFoundError,
    StaleWriteError,
    StoreWriteError,
    TransientWriteError,
)

__version__ = "0.1.0"

__all__ = [
    "AdminPolicy",
    "GameClient",
    "Identity",
    "GameConfig",
    "load_config",
    "CodenamesError",
    "MissingDocumentError",
    "PermissionDeniedError",
    "RoomFinishedError",
    "RoomNotFoundError",
    "StaleWriteError",
    "StoreWriteError",
    "TransientWriteError",
]
