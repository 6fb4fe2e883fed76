"""Turn engine: clue submission, guess resolution and win detection."""

import logging
from dataclasses import replace
from typing import Optional

from .generator import BoardGenerator
from .log import ClueEntry, GuessEntry, PassEntry
from .state import Clue, GameState, Room
from .teams import TeamFormation
from .types import CardType, Mutation, Phase, RoomStatus, Team, WinReason

logger = logging.getLogger(__name__)

MIN_CLUE_NUMBER = 1
MAX_CLUE_NUMBER = 9


def _pass_turn(updates: Mutation, game: GameState) -> None:
    updates["game/current_turn"] = game.current_turn.opponent.value
    updates["game/phase"] = Phase.CLUE.value
    updates["game/current_clue"] = None


def _active_game(room: Room, action: str) -> Optional[GameState]:
    game = room.game
    if room.status != RoomStatus.PLAYING or game is None:
        logger.debug("%s ignored: room %s is not playing", action, room.room_code)
        return None
    if game.game_over:
        logger.debug("%s ignored: round in room %s is over", action, room.room_code)
        return None
    return game


class GameRules:
    """
    Codenames turn engine.

    Standard rules:
    - Spymaster gives clue (word + number) during the clue phase
    - Operatives can guess up to number + 1 times
    - Turn ends on: wrong guess, pass, or using all guesses
    - Game ends when: one team finds all its words, or the assassin is revealed

    Each method reads a room snapshot and returns the partial write that
    applies the action. Actions attempted outside their valid state return
    None and change nothing.
    """

    @staticmethod
    def submit_clue(room: Room, player_id: str, word: str, number: int) -> Optional[Mutation]:
        """
        Process a spymaster giving a clue.

        Args:
            room: Current room snapshot
            player_id: Submitting player; must be the current team's spymaster
            word: Clue word, trimmed and upper-cased before storing
            number: Intended number of related cards (1-9)
        """
        game = _active_game(room, "submit_clue")
        if game is None:
            return None
        if game.phase != Phase.CLUE:
            logger.debug("submit_clue ignored: phase is %s", game.phase.value)
            return None
        if room.teams[game.current_turn].spymaster != player_id:
            logger.debug("submit_clue ignored: %s is not the %s spymaster", player_id, game.current_turn.value)
            return None

        clue_word = (word or "").strip().upper()
        valid_number = isinstance(number, int) and not isinstance(number, bool)
        if not clue_word or not valid_number or not MIN_CLUE_NUMBER <= number <= MAX_CLUE_NUMBER:
            logger.debug("submit_clue ignored: invalid clue %r %r", word, number)
            return None

        # One bonus guess beyond the stated number.
        clue = Clue(word=clue_word, number=number, guesses_remaining=number + 1)
        entry = ClueEntry(
            team=game.current_turn,
            player_id=player_id,
            player_name=room.player_name(player_id),
            clue_word=clue_word,
            clue_number=number,
        )
        return {
            "game/phase": Phase.GUESS.value,
            "game/current_clue": clue.to_dict(),
            "game/log": game.log.appended(entry).to_list(),
        }

    @staticmethod
    def guess_card(room: Room, player_id: str, card_index: int) -> Optional[Mutation]:
        """
        Process a single guess.

        Resolution order: assassin, then a completed team, then a wrong
        colour, then the remaining-guess countdown.

        Args:
            room: Current room snapshot
            player_id: Guessing operative on the current team
            card_index: Board position 0-24
        """
        game = _active_game(room, "guess_card")
        if game is None:
            return None
        if game.phase != Phase.GUESS or game.current_clue is None:
            logger.debug("guess_card ignored: phase is %s", game.phase.value)
            return None

        team = game.current_turn
        if room.team_of(player_id) != team or room.is_spymaster(player_id, team):
            logger.debug("guess_card ignored: %s cannot guess for %s", player_id, team.value)
            return None
        try:
            card = game.get_card(card_index)
        except IndexError:
            logger.debug("guess_card ignored: no card at %s", card_index)
            return None
        if card.revealed:
            logger.debug("guess_card ignored: %s already revealed", card.word)
            return None

        board = list(game.board)
        board[card_index] = card.reveal(player_id)
        updates: Mutation = {"game/board": [c.to_dict() for c in board]}

        scores = dict(game.scores)
        card_team = card.card_type.team
        if card_team is not None:
            scores[card_team] = replace(scores[card_team], found=scores[card_team].found + 1)
            updates["game/scores"] = {t.value: s.to_dict() for t, s in scores.items()}

        entry = GuessEntry(
            team=team,
            player_id=player_id,
            player_name=room.player_name(player_id),
            guessed_word=card.word,
            card_type=card.card_type,
        )
        updates["game/log"] = game.log.appended(entry).to_list()

        winner: Optional[Team] = None
        reason: Optional[WinReason] = None
        if card.card_type == CardType.ASSASSIN:
            winner, reason = team.opponent, WinReason.ASSASSIN
        else:
            for candidate in (Team.RED, Team.BLUE):
                if scores[candidate].found == scores[candidate].total:
                    winner, reason = candidate, WinReason.ALL_FOUND
                    break

        if winner is not None:
            updates["game/winner"] = winner.value
            updates["game/win_reason"] = reason.value
            updates["status"] = RoomStatus.FINISHED.value
            logger.info(
                "Room %s: %s wins (%s) after %s revealed %s",
                room.room_code, winner.value, reason.value, player_id, card.word,
            )
        elif card.card_type != CardType.for_team(team):
            _pass_turn(updates, game)
        else:
            remaining = game.current_clue.guesses_remaining - 1
            if remaining <= 0:
                _pass_turn(updates, game)
            else:
                updates["game/current_clue"] = replace(
                    game.current_clue, guesses_remaining=remaining
                ).to_dict()
        return updates

    @staticmethod
    def end_turn(room: Room, player_id: str) -> Optional[Mutation]:
        """Pass: hand the turn to the other team, guesses left or not."""
        game = _active_game(room, "end_turn")
        if game is None:
            return None
        if game.phase != Phase.GUESS:
            logger.debug("end_turn ignored: phase is %s", game.phase.value)
            return None
        if room.team_of(player_id) != game.current_turn:
            logger.debug("end_turn ignored: %s is not on %s", player_id, game.current_turn.value)
            return None

        entry = PassEntry(
            team=game.current_turn,
            player_id=player_id,
            player_name=room.player_name(player_id),
        )
        updates: Mutation = {"game/log": game.log.appended(entry).to_list()}
        _pass_turn(updates, game)
        return updates

    @staticmethod
    def start_round(room: Room, generator: BoardGenerator) -> Optional[Mutation]:
        """
        Start the first round or play again.

        Replaces the whole ``game`` subtree with a fresh board and a
        coin-flip starting team.
        """
        if room.status == RoomStatus.PLAYING:
            logger.debug("start_round ignored: room %s is already playing", room.room_code)
            return None
        if not TeamFormation.can_start(room):
            logger.debug("start_round ignored: teams in room %s are incomplete", room.room_code)
            return None

        game = generator.new_game()
        logger.info("Room %s: new round, %s starts", room.room_code, game.starting_team.value)
        return {
            "status": RoomStatus.PLAYING.value,
            "game": game.to_dict(),
        }
