"""Shared key-value store contract and an in-process implementation."""

import asyncio
import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..errors import MissingDocumentError, StaleWriteError, StoreWriteError

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"


@dataclass(frozen=True)
class Snapshot:
    """Full document under a key, with the store's write counter for it."""
    key: str
    value: dict[str, Any]
    version: int


Listener = Callable[[Optional[Snapshot]], None]
Unsubscribe = Callable[[], None]


def split_path(path: str) -> list[str]:
    parts = path.strip(PATH_SEPARATOR).split(PATH_SEPARATOR)
    if not path.strip(PATH_SEPARATOR) or any(not p for p in parts):
        raise ValueError(f"Invalid field path: {path!r}")
    return parts


def apply_updates(document: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    """
    Apply partial-field updates to a copy of ``document``.

    Each key is a ``/``-separated path; missing intermediate objects are
    created. A value of None deletes the path. Sibling fields are untouched.
    """
    result = copy.deepcopy(document)
    for path, value in updates.items():
        *parents, leaf = split_path(path)
        node = result
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                if value is None:
                    node = None
                    break
                child = {}
                node[part] = child
            node = child
        if node is None:
            continue
        if value is None:
            node.pop(leaf, None)
        else:
            node[leaf] = copy.deepcopy(value)
    return result


class SharedStore(ABC):
    """
    Contract of the shared store that rooms live in.

    Writes are partial: only the named paths change. Every change pushes the
    full document to the key's subscribers, in the order writes were applied.
    """

    @abstractmethod
    async def read(self, key: str) -> Optional[Snapshot]:
        """Current document under ``key``, or None if absent."""

    @abstractmethod
    async def create(self, key: str, document: dict[str, Any]) -> Snapshot:
        """Replace the whole document under ``key``."""

    @abstractmethod
    async def write_fields(
        self,
        key: str,
        updates: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Snapshot:
        """
        Apply a partial-field update atomically.

        Args:
            key: Document key
            updates: Paths mapped to new values (None deletes)
            expected_version: If given, reject the write with StaleWriteError
                unless the document is still at this version.

        Raises:
            MissingDocumentError: nothing is stored under ``key``
        """

    @abstractmethod
    def subscribe(self, key: str, listener: Listener) -> Unsubscribe:
        """Call ``listener`` with the current and every later document."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the document; subscribers receive None."""


class MemoryStore(SharedStore):
    """
    Shared store held in process memory.

    Every operation yields to the event loop before taking effect, so
    concurrent clients interleave the way they would over a network.
    """

    def __init__(self, latency: float = 0.0):
        self.latency = latency
        self._documents: dict[str, dict[str, Any]] = {}
        self._versions: dict[str, int] = {}
        self._listeners: dict[str, list[Listener]] = {}

    def _snapshot(self, key: str) -> Optional[Snapshot]:
        if key not in self._documents:
            return None
        return Snapshot(
            key=key,
            value=copy.deepcopy(self._documents[key]),
            version=self._versions.get(key, 0),
        )

    def _notify(self, key: str) -> None:
        for listener in list(self._listeners.get(key, ())):
            snapshot = self._snapshot(key)
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Listener for %s failed", key)

    def _commit(self, key: str, document: dict[str, Any]) -> Snapshot:
        self._documents[key] = document
        self._versions[key] = self._versions.get(key, 0) + 1
        self._notify(key)
        return self._snapshot(key)

    async def read(self, key: str) -> Optional[Snapshot]:
        await asyncio.sleep(self.latency)
        return self._snapshot(key)

    async def create(self, key: str, document: dict[str, Any]) -> Snapshot:
        if not isinstance(document, dict):
            raise StoreWriteError(f"Document for {key} must be an object")
        await asyncio.sleep(self.latency)
        return self._commit(key, copy.deepcopy(document))

    async def write_fields(
        self,
        key: str,
        updates: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Snapshot:
        await asyncio.sleep(self.latency)
        current = self._versions.get(key, 0)
        if expected_version is not None and expected_version != current:
            raise StaleWriteError(key, expected_version, current)
        if key not in self._documents:
            raise MissingDocumentError(key)
        try:
            document = apply_updates(self._documents[key], updates)
        except ValueError as exc:
            raise StoreWriteError(str(exc)) from exc
        return self._commit(key, document)

    def subscribe(self, key: str, listener: Listener) -> Unsubscribe:
        self._listeners.setdefault(key, []).append(listener)
        listener(self._snapshot(key))

        def unsubscribe() -> None:
            listeners = self._listeners.get(key, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    async def delete(self, key: str) -> None:
        await asyncio.sleep(self.latency)
        self._documents.pop(key, None)
        # Version counter survives deletion.
        self._versions[key] = self._versions.get(key, 0) + 1
        self._notify(key)
