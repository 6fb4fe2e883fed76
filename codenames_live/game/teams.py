"""Team and role selection before a round starts."""

import logging
from typing import Optional

from .state import Room
from .types import Mutation, Role, RoomStatus, Team

logger = logging.getLogger(__name__)


def _team_path(team: Team, slot: str) -> str:
    return f"teams/{team.value}/{slot}"


def _player_path(player_id: str, attr: Optional[str] = None) -> str:
    return f"players/{player_id}/{attr}" if attr else f"players/{player_id}"


def _seats_locked(room: Room, action: str) -> bool:
    if room.status == RoomStatus.PLAYING:
        logger.debug("%s ignored: room %s is mid-round", action, room.room_code)
        return True
    return False


class TeamFormation:
    """
    Membership rules for the two teams.

    Every operation reads the given room snapshot and returns the partial
    write that applies it, or None when the request is a no-op or rejected.
    The at-most-one-spymaster check runs against that snapshot only, so two
    players claiming the slot from the same stale view can both succeed
    unless writes are versioned.
    """

    @staticmethod
    def join_team(room: Room, player_id: str, team: Team) -> Optional[Mutation]:
        """Move a player onto ``team`` as an operative."""
        if _seats_locked(room, "join_team"):
            return None
        player = room.player(player_id)
        if player is None:
            logger.debug("join_team ignored: %s is not in room %s", player_id, room.room_code)
            return None

        target = room.teams[team]
        if player.team == team and player.role == Role.OPERATIVE and player_id in target.operatives:
            return None

        updates: Mutation = {}
        for current_team, data in room.teams.items():
            if current_team == team:
                continue
            if data.spymaster == player_id:
                updates[_team_path(current_team, "spymaster")] = None
            if player_id in data.operatives:
                updates[_team_path(current_team, "operatives")] = [
                    pid for pid in data.operatives if pid != player_id
                ]

        if target.spymaster == player_id:
            updates[_team_path(team, "spymaster")] = None
        operatives = list(target.operatives)
        if player_id not in operatives:
            operatives.append(player_id)
        updates[_team_path(team, "operatives")] = operatives
        updates[_player_path(player_id, "team")] = team.value
        updates[_player_path(player_id, "role")] = Role.OPERATIVE.value
        return updates

    @staticmethod
    def select_role(room: Room, player_id: str, role: Role) -> Optional[Mutation]:
        """Claim or give up the spymaster slot on the player's own team."""
        if _seats_locked(room, "select_role"):
            return None
        player = room.player(player_id)
        if player is None or player.team is None:
            logger.debug("select_role ignored: %s has no team", player_id)
            return None

        team = player.team
        data = room.teams[team]
        updates: Mutation = {}

        if role == Role.SPYMASTER:
            if data.spymaster is not None and data.spymaster != player_id:
                logger.debug(
                    "select_role rejected: %s spymaster slot held by %s", team.value, data.spymaster
                )
                return None
            updates[_team_path(team, "operatives")] = [
                pid for pid in data.operatives if pid != player_id
            ]
            updates[_team_path(team, "spymaster")] = player_id
        else:
            if data.spymaster == player_id:
                updates[_team_path(team, "spymaster")] = None
            operatives = list(data.operatives)
            if player_id not in operatives:
                operatives.append(player_id)
            updates[_team_path(team, "operatives")] = operatives

        updates[_player_path(player_id, "role")] = role.value
        return updates

    @staticmethod
    def remove_player(room: Room, player_id: str) -> Optional[Mutation]:
        """Drop a player from the room and from every role slot (kick or leave)."""
        if player_id not in room.players:
            return None

        updates: Mutation = {_player_path(player_id): None}
        for team, data in room.teams.items():
            if data.spymaster == player_id:
                updates[_team_path(team, "spymaster")] = None
            if player_id in data.operatives:
                updates[_team_path(team, "operatives")] = [
                    pid for pid in data.operatives if pid != player_id
                ]
        return updates

    @staticmethod
    def can_start(room: Room) -> bool:
        """Both spymaster slots filled and at least one operative overall."""
        red, blue = room.teams[Team.RED], room.teams[Team.BLUE]
        if red.spymaster is None or blue.spymaster is None:
            return False
        return len(red.operatives) + len(blue.operatives) >= 1
