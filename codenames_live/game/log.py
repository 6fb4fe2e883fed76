"""Append-only game log with one entry type per action kind."""

import time
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

from .types import CardType, Team


@dataclass(frozen=True)
class ClueEntry:
    """A spymaster gave a clue."""
    team: Team
    player_id: str
    player_name: str
    clue_word: str
    clue_number: int
    timestamp: float = field(default_factory=time.time)
    kind = "clue"

    def payload(self) -> dict[str, Any]:
        return {"clue_word": self.clue_word, "clue_number": self.clue_number}


@dataclass(frozen=True)
class GuessEntry:
    """An operative revealed a card."""
    team: Team
    player_id: str
    player_name: str
    guessed_word: str
    card_type: CardType
    timestamp: float = field(default_factory=time.time)
    kind = "guess"

    def payload(self) -> dict[str, Any]:
        return {"guessed_word": self.guessed_word, "card_type": self.card_type.value}


@dataclass(frozen=True)
class PassEntry:
    """The guessing team ended its turn voluntarily."""
    team: Team
    player_id: str
    player_name: str
    timestamp: float = field(default_factory=time.time)
    kind = "pass"

    def payload(self) -> dict[str, Any]:
        return {}


LogEntry = Union[ClueEntry, GuessEntry, PassEntry]


def entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    return {
        "type": entry.kind,
        "timestamp": entry.timestamp,
        "team": entry.team.value,
        "player_id": entry.player_id,
        "player_name": entry.player_name,
        "data": entry.payload(),
    }


def entry_from_dict(data: dict[str, Any]) -> LogEntry:
    """Rebuild a log entry from its stored form, dispatching on ``type``."""
    kind = data["type"]
    common = {
        "team": Team(data["team"]),
        "player_id": data["player_id"],
        "player_name": data.get("player_name", "Unknown"),
        "timestamp": float(data["timestamp"]),
    }
    payload = data.get("data") or {}

    if kind == "clue":
        return ClueEntry(
            clue_word=payload["clue_word"],
            clue_number=int(payload["clue_number"]),
            **common,
        )
    if kind == "guess":
        return GuessEntry(
            guessed_word=payload["guessed_word"],
            card_type=CardType(payload["card_type"]),
            **common,
        )
    if kind == "pass":
        return PassEntry(**common)
    raise ValueError(f"Unknown log entry type: {kind!r}")


class GameLog:
    """
    Ordered, append-only record of clue/guess/pass events.

    Order is submission order. Entries from clients racing on the same
    snapshot are neither deduplicated nor causally ordered.
    """

    def __init__(self, entries: Optional[Sequence[LogEntry]] = None):
        self._entries: tuple[LogEntry, ...] = tuple(entries or ())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, index: int) -> LogEntry:
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameLog):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"GameLog({list(self._entries)!r})"

    @property
    def last(self) -> Optional[LogEntry]:
        return self._entries[-1] if self._entries else None

    def appended(self, entry: LogEntry) -> "GameLog":
        """Return a new log with ``entry`` at the end; this log is unchanged."""
        return GameLog(self._entries + (entry,))

    def to_list(self) -> list[dict[str, Any]]:
        return [entry_to_dict(e) for e in self._entries]

    @classmethod
    def from_list(cls, data: Optional[Sequence[dict[str, Any]]]) -> "GameLog":
        return cls([entry_from_dict(d) for d in (data or [])])
