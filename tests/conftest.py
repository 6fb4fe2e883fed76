"""Shared fixtures: seeded generators and rooms at each lifecycle stage."""

from dataclasses import replace

import pytest

from codenames_live.game import (
    BoardGenerator,
    Clue,
    Phase,
    Player,
    Role,
    Room,
    RoomStatus,
    Team,
    TeamData,
)
from codenames_live.sync import apply_updates

ROOM_CODE = "ABC234"


@pytest.fixture
def generator():
    return BoardGenerator(seed=42)


@pytest.fixture
def apply():
    """Apply a partial write to a room the way the store would."""
    def _apply(room: Room, updates) -> Room:
        assert updates is not None, "expected the action to produce a write"
        return Room.from_dict(apply_updates(room.to_dict(), updates), version=room.version + 1)
    return _apply


@pytest.fixture
def lobby_room():
    players = {
        pid: Player(id=pid, name=name, last_seen=0.0)
        for pid, name in [
            ("red-spy", "Rita"),
            ("red-op", "Ron"),
            ("blue-spy", "Bea"),
            ("blue-op", "Bo"),
        ]
    }
    return Room(room_code=ROOM_CODE, created_by="red-spy", created_at=0.0, players=players)


@pytest.fixture
def ready_room(lobby_room):
    """Both teams have a spymaster and one operative."""
    room = lobby_room
    seats = {
        "red-spy": (Team.RED, Role.SPYMASTER),
        "red-op": (Team.RED, Role.OPERATIVE),
        "blue-spy": (Team.BLUE, Role.SPYMASTER),
        "blue-op": (Team.BLUE, Role.OPERATIVE),
    }
    room.players = {
        pid: replace(p, team=seats[pid][0], role=seats[pid][1]) for pid, p in room.players.items()
    }
    room.teams = {
        Team.RED: TeamData(spymaster="red-spy", operatives=("red-op",)),
        Team.BLUE: TeamData(spymaster="blue-spy", operatives=("blue-op",)),
    }
    return room


@pytest.fixture
def playing_room(ready_room, generator):
    """A round in progress: RED starts, clue phase."""
    room = ready_room
    room.status = RoomStatus.PLAYING
    room.game = generator.new_game(Team.RED)
    return room


@pytest.fixture
def guessing_room(playing_room):
    """RED has a clue for 2 outstanding (3 guesses left)."""
    room = playing_room
    room.game.phase = Phase.GUESS
    room.game.current_clue = Clue(word="ANIMAL", number=2, guesses_remaining=3)
    return room
