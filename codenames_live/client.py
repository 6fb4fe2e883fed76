"""Client-side entry points for every room action."""

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .codes import generate_room_code, normalize_room_code
from .config import GameConfig
from .errors import (
    CodenamesError,
    PermissionDeniedError,
    RoomFinishedError,
    RoomNotFoundError,
)
from .game import (
    BoardGenerator,
    GameRules,
    Mutation,
    Player,
    Role,
    Room,
    RoomStatus,
    Team,
    TeamFormation,
)
from .sync import Action, RoomCoordinator, RoomSynchronizer
from .sync.store import Unsubscribe

logger = logging.getLogger(__name__)

MAX_CODE_ATTEMPTS = 10


@dataclass(frozen=True)
class Identity:
    """A signed-in user, as provided by the identity collaborator."""
    uid: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = None

    def as_player(self) -> Player:
        return Player(
            id=self.uid,
            name=self.display_name or "Anonymous",
            email=self.email or "",
            photo_url=self.photo_url,
            is_online=True,
            last_seen=time.time(),
        )


class AdminPolicy:
    """Capability check for administrative room actions."""

    def __init__(self, admin_emails=()):
        self.admin_emails = frozenset(e.strip().lower() for e in admin_emails if e.strip())

    def is_admin(self, identity: Identity) -> bool:
        if not identity.email:
            return False
        return identity.email.strip().lower() in self.admin_emails

    def require_admin(self, identity: Identity, action: str) -> None:
        if not self.is_admin(identity):
            logger.warning("%s denied for %s", action, identity.uid)
            raise PermissionDeniedError(f"Only administrators may {action}.")


class GameClient:
    """
    One participant's view of the shared rooms.

    The client keeps the last snapshot of every room it watches and computes
    its writes from that snapshot, just as a browser would. Actions that are
    invalid in the current state are ignored and return the unchanged room.
    With a coordinator, writes are instead queued behind the room's single
    writer, which always computes from the freshest state.
    """

    def __init__(
        self,
        identity: Identity,
        synchronizer: RoomSynchronizer,
        config: Optional[GameConfig] = None,
        generator: Optional[BoardGenerator] = None,
        coordinator: Optional[RoomCoordinator] = None,
        admin_policy: Optional[AdminPolicy] = None,
        rng: Optional[random.Random] = None,
    ):
        self.identity = identity
        self.synchronizer = synchronizer
        self.config = config or GameConfig()
        if generator is None:
            if self.config.wordlist_path is not None:
                generator = BoardGenerator.from_file(self.config.wordlist_path)
            else:
                generator = BoardGenerator()
        self.generator = generator
        self.coordinator = coordinator
        self.admin_policy = admin_policy or AdminPolicy(self.config.admin_emails)
        self.rng = rng or random.Random()
        self.rooms: dict[str, Room] = {}
        self._subscriptions: dict[str, Unsubscribe] = {}

    @property
    def player_id(self) -> str:
        return self.identity.uid

    # -- subscriptions -----------------------------------------------------

    def watch(self, room_code: str, on_change: Optional[Callable[[Optional[Room]], None]] = None) -> None:
        """Follow a room: cache each pushed snapshot and forward it to ``on_change``."""
        code = normalize_room_code(room_code)
        self.unwatch(code)

        def listener(room: Optional[Room]) -> None:
            if room is None:
                self.rooms.pop(code, None)
            else:
                self.rooms[code] = room
            if on_change is not None:
                on_change(room)

        self._subscriptions[code] = self.synchronizer.subscribe(code, listener)

    def unwatch(self, room_code: str) -> None:
        unsubscribe = self._subscriptions.pop(normalize_room_code(room_code), None)
        if unsubscribe is not None:
            unsubscribe()

    def close(self) -> None:
        for code in list(self._subscriptions):
            self.unwatch(code)

    # -- plumbing ----------------------------------------------------------

    async def _act(self, room_code: str, action: Action, description: str) -> Room:
        code = normalize_room_code(room_code)
        if self.coordinator is not None:
            return await self.coordinator.submit(code, action, description)
        return await self.synchronizer.apply(
            code, action, base=self.rooms.get(code), description=description
        )

    # -- lobby -------------------------------------------------------------

    async def create_room(self) -> Room:
        """Create a room hosted by this player and start watching it."""
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_room_code(
                self.config.room_code_length, self.config.room_code_alphabet, self.rng
            )
            if await self.synchronizer.read(code) is None:
                break
        else:
            raise CodenamesError("Could not find a free room code. Please try again.")

        player = self.identity.as_player()
        room = Room(room_code=code, created_by=self.player_id, players={player.id: player})
        room = await self.synchronizer.create(room)
        self.watch(code)
        return room

    async def join_room(self, room_code: str) -> Room:
        """Enter a room by code, registering this player on first join."""
        code = normalize_room_code(room_code)
        room = await self.synchronizer.read(code)
        if room is None:
            raise RoomNotFoundError(code)
        if room.status == RoomStatus.FINISHED:
            raise RoomFinishedError(code)

        player = self.identity.as_player()

        def register(current: Room) -> Optional[Mutation]:
            if player.id in current.players:
                return None
            return {f"players/{player.id}": player.to_dict()}

        room = await self._act(code, register, "join room")
        self.watch(code)
        return room

    async def leave_room(self, room_code: str) -> Room:
        room = await self._act(
            room_code, lambda r: TeamFormation.remove_player(r, self.player_id), "leave room"
        )
        self.unwatch(room_code)
        self.rooms.pop(normalize_room_code(room_code), None)
        return room

    async def heartbeat(self, room_code: str, online: bool = True) -> Room:
        """Record presence for this player."""
        def touch(room: Room) -> Optional[Mutation]:
            if self.player_id not in room.players:
                return None
            return {
                f"players/{self.player_id}/is_online": online,
                f"players/{self.player_id}/last_seen": time.time(),
            }

        return await self._act(room_code, touch, "update presence")

    async def join_team(self, room_code: str, team: Team) -> Room:
        return await self._act(
            room_code, lambda r: TeamFormation.join_team(r, self.player_id, team), "join team"
        )

    async def select_role(self, room_code: str, role: Role) -> Room:
        return await self._act(
            room_code, lambda r: TeamFormation.select_role(r, self.player_id, role), "select role"
        )

    # -- game --------------------------------------------------------------

    async def start_game(self, room_code: str) -> Room:
        """Start the first round, or play again once a round has finished."""
        return await self._act(
            room_code, lambda r: GameRules.start_round(r, self.generator), "start game"
        )

    async def submit_clue(self, room_code: str, word: str, number: int) -> Room:
        return await self._act(
            room_code,
            lambda r: GameRules.submit_clue(r, self.player_id, word, number),
            "submit clue",
        )

    async def guess_card(self, room_code: str, card_index: int) -> Room:
        return await self._act(
            room_code,
            lambda r: GameRules.guess_card(r, self.player_id, card_index),
            "reveal card",
        )

    async def end_turn(self, room_code: str) -> Room:
        return await self._act(
            room_code, lambda r: GameRules.end_turn(r, self.player_id), "end turn"
        )

    # -- administration ----------------------------------------------------

    async def kick_player(self, room_code: str, player_id: str) -> Room:
        self.admin_policy.require_admin(self.identity, "kick players")
        logger.info("Admin %s kicking %s from %s", self.player_id, player_id, room_code)
        return await self._act(
            room_code, lambda r: TeamFormation.remove_player(r, player_id), "kick player"
        )

    async def delete_room(self, room_code: str) -> None:
        self.admin_policy.require_admin(self.identity, "delete rooms")
        code = normalize_room_code(room_code)
        await self.synchronizer.require(code)
        await self.synchronizer.delete(code)

    async def force_reset(self, room_code: str) -> Room:
        """Drop the current round and send the room back to the lobby."""
        self.admin_policy.require_admin(self.identity, "reset games")
        return await self._act(
            room_code,
            lambda r: {"status": RoomStatus.WAITING.value, "game": None},
            "reset game",
        )

    async def force_end(self, room_code: str) -> Room:
        self.admin_policy.require_admin(self.identity, "end games")
        return await self._act(
            room_code, lambda r: {"status": RoomStatus.FINISHED.value}, "end game"
        )
