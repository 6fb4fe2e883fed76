"""Game and room state types for shared Codenames rooms."""

import time
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from .log import GameLog
from .types import CardType, Phase, Role, RoomStatus, Team, WinReason


def _enum_or_none(enum_cls, value):
    return enum_cls(value) if value is not None else None


@dataclass(frozen=True)
class Card:
    """A single card on the board."""
    id: int
    word: str
    card_type: CardType
    revealed: bool = False
    revealed_by: Optional[str] = None

    def reveal(self, player_id: str) -> "Card":
        """Return a new card with revealed=True, attributed to ``player_id``."""
        return replace(self, revealed=True, revealed_by=player_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "word": self.word,
            "type": self.card_type.value,
            "revealed": self.revealed,
            "revealed_by": self.revealed_by,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Card":
        return cls(
            id=int(data["id"]),
            word=data["word"],
            card_type=CardType(data["type"]),
            revealed=bool(data.get("revealed", False)),
            revealed_by=data.get("revealed_by"),
        )


@dataclass(frozen=True)
class Clue:
    """The clue currently being guessed against."""
    word: str
    number: int
    guesses_remaining: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.word,
            "number": self.number,
            "guesses_remaining": self.guesses_remaining,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Clue":
        return cls(
            word=data["word"],
            number=int(data["number"]),
            guesses_remaining=int(data["guesses_remaining"]),
        )


@dataclass(frozen=True)
class TeamScore:
    found: int
    total: int

    def to_dict(self) -> dict[str, int]:
        return {"found": self.found, "total": self.total}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TeamScore":
        return cls(found=int(data.get("found", 0)), total=int(data["total"]))


@dataclass
class GameState:
    """Complete state of one round."""
    board: list[Card]
    current_turn: Team
    starting_team: Team
    phase: Phase = Phase.CLUE
    current_clue: Optional[Clue] = None
    scores: dict[Team, TeamScore] = field(default_factory=dict)
    winner: Optional[Team] = None
    win_reason: Optional[WinReason] = None
    log: GameLog = field(default_factory=GameLog)

    @property
    def game_over(self) -> bool:
        return self.winner is not None

    def get_card(self, index: int) -> Card:
        """Get the card at a given index."""
        if not 0 <= index < len(self.board):
            raise IndexError(f"No card at position {index}")
        return self.board[index]

    def to_dict(self) -> dict[str, Any]:
        return {
            "board": [c.to_dict() for c in self.board],
            "current_turn": self.current_turn.value,
            "starting_team": self.starting_team.value,
            "phase": self.phase.value,
            "current_clue": self.current_clue.to_dict() if self.current_clue else None,
            "scores": {t.value: s.to_dict() for t, s in self.scores.items()},
            "winner": self.winner.value if self.winner else None,
            "win_reason": self.win_reason.value if self.win_reason else None,
            "log": self.log.to_list(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameState":
        clue = data.get("current_clue")
        return cls(
            board=[Card.from_dict(c) for c in data["board"]],
            current_turn=Team(data["current_turn"]),
            starting_team=Team(data["starting_team"]),
            phase=Phase(data.get("phase", Phase.CLUE.value)),
            current_clue=Clue.from_dict(clue) if clue else None,
            scores={Team(t): TeamScore.from_dict(s) for t, s in (data.get("scores") or {}).items()},
            winner=_enum_or_none(Team, data.get("winner")),
            win_reason=_enum_or_none(WinReason, data.get("win_reason")),
            log=GameLog.from_list(data.get("log")),
        )


@dataclass(frozen=True)
class Player:
    """A participant in a room."""
    id: str
    name: str
    email: str = ""
    photo_url: Optional[str] = None
    team: Optional[Team] = None
    role: Optional[Role] = None
    is_online: bool = True
    last_seen: float = field(default_factory=time.time)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "photo_url": self.photo_url,
            "team": self.team.value if self.team else None,
            "role": self.role.value if self.role else None,
            "is_online": self.is_online,
            "last_seen": self.last_seen,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Player":
        return cls(
            id=data["id"],
            name=data.get("name") or "Anonymous",
            email=data.get("email") or "",
            photo_url=data.get("photo_url"),
            team=_enum_or_none(Team, data.get("team")),
            role=_enum_or_none(Role, data.get("role")),
            is_online=bool(data.get("is_online", False)),
            last_seen=float(data.get("last_seen", 0.0)),
        )


@dataclass(frozen=True)
class TeamData:
    """Role slots of one team."""
    spymaster: Optional[str] = None
    operatives: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"spymaster": self.spymaster, "operatives": list(self.operatives)}

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "TeamData":
        data = data or {}
        # Keep first occurrence only; the list is an ordered set.
        operatives = tuple(dict.fromkeys(data.get("operatives") or ()))
        return cls(spymaster=data.get("spymaster"), operatives=operatives)


@dataclass
class Room:
    """A shared room document as last seen by a client."""
    room_code: str
    created_by: str
    created_at: float = field(default_factory=time.time)
    status: RoomStatus = RoomStatus.WAITING
    teams: dict[Team, TeamData] = field(
        default_factory=lambda: {Team.RED: TeamData(), Team.BLUE: TeamData()}
    )
    players: dict[str, Player] = field(default_factory=dict)
    game: Optional[GameState] = None
    # Store write counter of the snapshot this room was built from.
    version: int = 0

    def player(self, player_id: str) -> Optional[Player]:
        return self.players.get(player_id)

    def team_of(self, player_id: str) -> Optional[Team]:
        player = self.players.get(player_id)
        return player.team if player else None

    def is_spymaster(self, player_id: str, team: Optional[Team] = None) -> bool:
        teams = [team] if team else list(Team)
        return any(self.teams[t].spymaster == player_id for t in teams)

    def player_name(self, player_id: str) -> str:
        player = self.players.get(player_id)
        return player.name if player else "Unknown"

    def to_dict(self) -> dict[str, Any]:
        return {
            "room_code": self.room_code,
            "created_at": self.created_at,
            "created_by": self.created_by,
            "status": self.status.value,
            "teams": {t.value: d.to_dict() for t, d in self.teams.items()},
            "players": {pid: p.to_dict() for pid, p in self.players.items()},
            "game": self.game.to_dict() if self.game else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], version: int = 0) -> "Room":
        teams = data.get("teams") or {}
        game = data.get("game")
        return cls(
            room_code=data["room_code"],
            created_at=float(data.get("created_at", 0.0)),
            created_by=data.get("created_by", ""),
            status=RoomStatus(data.get("status", RoomStatus.WAITING.value)),
            teams={t: TeamData.from_dict(teams.get(t.value)) for t in Team},
            players={pid: Player.from_dict(p) for pid, p in (data.get("players") or {}).items()},
            game=GameState.from_dict(game) if game else None,
            version=version,
        )
