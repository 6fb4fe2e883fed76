# Game logic module
from .types import Team, Role, CardType, Phase, RoomStatus, WinReason, Mutation
from .state import Card, Clue, TeamScore, GameState, Player, TeamData, Room
from .log import GameLog, ClueEntry, GuessEntry, PassEntry, LogEntry
from .board import Board
from .generator import BoardGenerator, choose_starting_team, load_wordlist
from .teams import TeamFormation
from .rules import GameRules

__all__ = [
    "Team",
    "Role",
    "CardType",
    "Phase",
    "RoomStatus",
    "WinReason",
    "Mutation",
    "Card",
    "Clue",
    "TeamScore",
    "GameState",
    "Player",
    "TeamData",
    "Room",
    "GameLog",
    "ClueEntry",
    "GuessEntry",
    "PassEntry",
    "LogEntry",
    "Board",
    "BoardGenerator",
    "choose_starting_team",
    "load_wordlist",
    "TeamFormation",
    "GameRules",
]
