"""End-to-end tests of room actions through GameClient."""

import asyncio
import random

import pytest

from codenames_live import (
    AdminPolicy,
    GameClient,
    GameConfig,
    Identity,
    PermissionDeniedError,
    RoomFinishedError,
    RoomNotFoundError,
)
from codenames_live.game import BoardGenerator, CardType, Phase, Role, RoomStatus, Team, WinReason
from codenames_live.sync import MemoryStore, RoomCoordinator, RoomSynchronizer

ADMIN_EMAIL = "admin@example.com"


def run(coro):
    return asyncio.run(coro)


class Table:
    """Four players (plus an admin) sharing one store."""

    def __init__(self, versioned=True, coordinator=False):
        self.sync = RoomSynchronizer(MemoryStore(), versioned=versioned)
        self.coordinator = RoomCoordinator(self.sync) if coordinator else None
        self.config = GameConfig(admin_emails=(ADMIN_EMAIL,))
        self.generator = BoardGenerator(seed=5)
        self.clients = {
            uid: self._client(uid, name)
            for uid, name in [
                ("red-spy", "Rita"),
                ("red-op", "Ron"),
                ("blue-spy", "Bea"),
                ("blue-op", "Bo"),
            ]
        }
        self.admin = self._client("admin", "Ada", email=ADMIN_EMAIL)

    def _client(self, uid, name, email=None):
        return GameClient(
            Identity(uid=uid, display_name=name, email=email),
            self.sync,
            config=self.config,
            generator=self.generator,
            coordinator=self.coordinator,
            rng=random.Random(uid),
        )

    def __getitem__(self, uid):
        return self.clients[uid]

    async def seat_everyone(self):
        room = await self["red-spy"].create_room()
        code = room.room_code
        for uid, client in self.clients.items():
            if uid != "red-spy":
                await client.join_room(code)
            team = Team.RED if uid.startswith("red") else Team.BLUE
            role = Role.SPYMASTER if uid.endswith("spy") else Role.OPERATIVE
            await client.join_team(code, team)
            await client.select_role(code, role)
        return code


class TestLobby:
    def test_create_room(self):
        table = Table()
        room = run(table["red-spy"].create_room())

        assert len(room.room_code) == 6
        assert set(room.room_code) <= set(table.config.room_code_alphabet)
        assert room.status == RoomStatus.WAITING
        assert room.created_by == "red-spy"
        assert room.players["red-spy"].name == "Rita"
        assert room.players["red-spy"].team is None
        assert table["red-spy"].rooms[room.room_code] == room

    def test_join_unknown_room(self):
        table = Table()
        with pytest.raises(RoomNotFoundError):
            run(table["red-op"].join_room("ZZZZZZ"))

    def test_join_normalizes_code(self):
        table = Table()

        async def scenario():
            room = await table["red-spy"].create_room()
            return await table["red-op"].join_room(f"  {room.room_code.lower()} ")

        room = run(scenario())
        assert set(room.players) == {"red-spy", "red-op"}
        assert room.players["red-op"].team is None
        assert room.players["red-op"].role is None

    def test_join_finished_room(self):
        table = Table()

        async def scenario():
            room = await table["red-spy"].create_room()
            await table.admin.force_end(room.room_code)
            await table["red-op"].join_room(room.room_code)

        with pytest.raises(RoomFinishedError):
            run(scenario())

    def test_rejoin_keeps_player(self):
        table = Table()

        async def scenario():
            room = await table["red-spy"].create_room()
            await table["red-spy"].join_team(room.room_code, Team.RED)
            return await table["red-spy"].join_room(room.room_code)

        room = run(scenario())
        assert room.players["red-spy"].team == Team.RED

    def test_join_goes_through_coordinator(self):
        table = Table(coordinator=True)
        submitted = []
        submit = table.coordinator.submit

        async def recording_submit(room_code, action, description="update room"):
            submitted.append(description)
            return await submit(room_code, action, description)

        table.coordinator.submit = recording_submit

        async def scenario():
            room = await table["red-spy"].create_room()
            joined = await table["red-op"].join_room(room.room_code)
            await table.coordinator.close()
            return joined

        room = run(scenario())
        assert submitted == ["join room"]
        assert "red-op" in room.players

    def test_watchers_see_other_clients_changes(self):
        table = Table()

        async def scenario():
            code = await table.seat_everyone()
            return table["blue-op"].rooms[code]

        room = run(scenario())
        assert room.teams[Team.RED].spymaster == "red-spy"
        assert room.teams[Team.BLUE].spymaster == "blue-spy"
        assert room.teams[Team.RED].operatives == ("red-op",)
        assert room.teams[Team.BLUE].operatives == ("blue-op",)

    def test_heartbeat(self):
        table = Table()

        async def scenario():
            room = await table["red-spy"].create_room()
            return await table["red-spy"].heartbeat(room.room_code, online=False)

        room = run(scenario())
        assert room.players["red-spy"].is_online is False
        assert room.players["red-spy"].last_seen > 0

    def test_leave_room(self):
        table = Table()

        async def scenario():
            code = await table.seat_everyone()
            room = await table["blue-op"].leave_room(code)
            return code, room

        code, room = run(scenario())
        assert "blue-op" not in room.players
        assert room.teams[Team.BLUE].operatives == ()
        assert code not in table["blue-op"].rooms


class TestGameFlow:
    def test_cannot_start_without_teams(self):
        table = Table()

        async def scenario():
            room = await table["red-spy"].create_room()
            return await table["red-spy"].start_game(room.room_code)

        assert run(scenario()).status == RoomStatus.WAITING

    def test_full_turn(self):
        table = Table()

        async def scenario():
            code = await table.seat_everyone()
            room = await table["red-op"].start_game(code)
            team = room.game.current_turn
            prefix = team.value
            room = await table[f"{prefix}-spy"].submit_clue(code, "animal", 2)
            own = next(c.id for c in room.game.board if c.card_type == CardType.for_team(team))
            room = await table[f"{prefix}-op"].guess_card(code, own)
            room = await table[f"{prefix}-op"].end_turn(code)
            return team, room

        team, room = run(scenario())
        assert room.game.current_turn == team.opponent
        assert room.game.phase == Phase.CLUE
        assert room.game.scores[team].found == 1
        assert [e.kind for e in room.game.log] == ["clue", "guess", "pass"]

    def test_out_of_turn_actions_are_ignored(self):
        table = Table()

        async def scenario():
            code = await table.seat_everyone()
            room = await table["red-spy"].start_game(code)
            other = room.game.current_turn.opponent.value
            before = room.version
            room = await table[f"{other}-spy"].submit_clue(code, "nope", 1)
            return before, room

        before, room = run(scenario())
        assert room.version == before
        assert room.game.phase == Phase.CLUE

    def test_assassin_then_play_again(self):
        table = Table()

        async def scenario():
            code = await table.seat_everyone()
            room = await table["red-spy"].start_game(code)
            prefix = room.game.current_turn.value
            room = await table[f"{prefix}-spy"].submit_clue(code, "danger", 1)
            assassin = next(c.id for c in room.game.board if c.card_type == CardType.ASSASSIN)
            finished = await table[f"{prefix}-op"].guess_card(code, assassin)
            again = await table["blue-op"].start_game(code)
            return prefix, finished, again

        prefix, finished, again = run(scenario())
        assert finished.status == RoomStatus.FINISHED
        assert finished.game.winner == Team(prefix).opponent
        assert finished.game.win_reason == WinReason.ASSASSIN
        assert again.status == RoomStatus.PLAYING
        assert again.game.winner is None
        assert len(again.game.log) == 0

    def test_concurrent_guesses_through_coordinator(self):
        table = Table(versioned=False, coordinator=True)

        async def scenario():
            code = await table.seat_everyone()
            extra = table._client("red-op2", "Rae")
            await extra.join_room(code)
            await extra.join_team(code, Team.RED)
            blue_extra = table._client("blue-op2", "Bri")
            await blue_extra.join_room(code)
            await blue_extra.join_team(code, Team.BLUE)

            room = await table["red-spy"].start_game(code)
            team = room.game.current_turn
            spy = table[f"{team.value}-spy"]
            ops = [table[f"{team.value}-op"], extra if team == Team.RED else blue_extra]
            room = await spy.submit_clue(code, "pair", 3)
            i, j = [c.id for c in room.game.board if c.card_type == CardType.for_team(team)][:2]
            await asyncio.gather(ops[0].guess_card(code, i), ops[1].guess_card(code, j))
            final = await table.sync.read(code)
            await table.coordinator.close()
            return team, final

        team, final = run(scenario())
        assert final.game.scores[team].found == 2
        assert final.game.current_clue.guesses_remaining == 2


class TestAdministration:
    def test_non_admin_is_refused(self):
        table = Table()

        async def scenario():
            code = await table.seat_everyone()
            await table["red-spy"].kick_player(code, "blue-op")

        with pytest.raises(PermissionDeniedError):
            run(scenario())

    def test_kick_player(self):
        table = Table()

        async def scenario():
            code = await table.seat_everyone()
            return await table.admin.kick_player(code, "blue-spy")

        room = run(scenario())
        assert "blue-spy" not in room.players
        assert room.teams[Team.BLUE].spymaster is None

    def test_force_reset(self):
        table = Table()

        async def scenario():
            code = await table.seat_everyone()
            await table["red-spy"].start_game(code)
            return await table.admin.force_reset(code)

        room = run(scenario())
        assert room.status == RoomStatus.WAITING
        assert room.game is None

    def test_force_end_freezes_round(self):
        table = Table()

        async def scenario():
            code = await table.seat_everyone()
            room = await table["red-spy"].start_game(code)
            spy = table[f"{room.game.current_turn.value}-spy"]
            await table.admin.force_end(code)
            return await spy.submit_clue(code, "late", 1)

        room = run(scenario())
        assert room.status == RoomStatus.FINISHED
        assert room.game.current_clue is None

    def test_delete_room_notifies_watchers(self):
        table = Table()
        seen = []

        async def scenario():
            code = await table.seat_everyone()
            table["blue-op"].watch(code, seen.append)
            await table.admin.delete_room(code)
            return code

        code = run(scenario())
        assert seen[-1] is None
        assert code not in table["blue-op"].rooms
        with pytest.raises(RoomNotFoundError):
            run(table.admin.delete_room(code))

    def test_admin_policy_is_case_insensitive(self):
        policy = AdminPolicy(["Admin@Example.com "])
        assert policy.is_admin(Identity(uid="x", email="ADMIN@example.COM"))
        assert not policy.is_admin(Identity(uid="y", email=None))
        assert not policy.is_admin(Identity(uid="z", email="other@example.com"))
