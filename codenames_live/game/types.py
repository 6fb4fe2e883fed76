"""Enumerations shared by the game and room models."""

from enum import Enum
from typing import Any, Dict, Optional


# A partial-field write: room-relative "/"-separated paths mapped to new values.
Mutation = Dict[str, Any]


class Team(Enum):
    """The two teams in Codenames."""
    RED = "red"
    BLUE = "blue"

    @property
    def opponent(self) -> "Team":
        """Get the opposing team."""
        return Team.BLUE if self == Team.RED else Team.RED


class Role(Enum):
    SPYMASTER = "spymaster"
    OPERATIVE = "operative"


class CardType(Enum):
    """Types of cards on the Codenames board."""
    RED = "red"
    BLUE = "blue"
    NEUTRAL = "neutral"
    ASSASSIN = "assassin"

    @classmethod
    def for_team(cls, team: Team) -> "CardType":
        """Get the card type for a team."""
        return cls.RED if team == Team.RED else cls.BLUE

    @property
    def team(self) -> Optional["Team"]:
        """The team owning this card colour, if any."""
        if self == CardType.RED:
            return Team.RED
        if self == CardType.BLUE:
            return Team.BLUE
        return None


class Phase(Enum):
    CLUE = "clue"
    GUESS = "guess"


class RoomStatus(Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class WinReason(Enum):
    ALL_FOUND = "all_found"
    ASSASSIN = "assassin"
