"""Board and round generator for Codenames."""

import logging
import random
from pathlib import Path
from typing import Optional, Sequence

from .board import BOARD_SIZE
from .state import Card, GameState, TeamScore
from .types import CardType, Phase, Team
from ..paths import WORDLIST_PATH

logger = logging.getLogger(__name__)


def load_wordlist(path: str | Path) -> list[str]:
    """Read a vocabulary file: one word per line, ``#`` starts a comment."""
    p = Path(path)
    words: list[str] = []
    for line in p.read_text(encoding="utf-8").splitlines():
        w = line.strip()
        if not w or w.startswith("#"):
            continue
        words.append(w.upper())
    # de-dup preserving order
    return list(dict.fromkeys(words))


def choose_starting_team(rng: Optional[random.Random] = None) -> Team:
    """Fair coin flip for which team opens the round."""
    rng = rng or random.Random()
    return Team.RED if rng.random() < 0.5 else Team.BLUE


class BoardGenerator:
    """
    Generates random Codenames boards.

    Words and card types are shuffled independently, so a word's content
    says nothing about its colour.
    """

    # Standard card distribution
    STARTING_TEAM_WORDS = 9
    OTHER_TEAM_WORDS = 8
    NEUTRAL_WORDS = 7
    ASSASSIN_WORDS = 1
    TOTAL_CARDS = BOARD_SIZE

    def __init__(
        self,
        word_list: Optional[Sequence[str]] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the generator.

        Args:
            word_list: Vocabulary to draw from. If None, loads the packaged word list.
            seed: Seed for this generator's private RNG, for reproducible boards.

        Raises:
            ValueError: if the vocabulary has fewer than 25 distinct words.
        """
        if word_list is None:
            word_list = load_wordlist(WORDLIST_PATH)
        self.word_list = list(dict.fromkeys(w.strip().upper() for w in word_list if w.strip()))
        if len(self.word_list) < self.TOTAL_CARDS:
            raise ValueError(
                f"Vocabulary must contain at least {self.TOTAL_CARDS} distinct words, "
                f"got {len(self.word_list)}"
            )
        self.rng = random.Random(seed)

    @classmethod
    def from_file(cls, path: str | Path, seed: Optional[int] = None) -> "BoardGenerator":
        return cls(load_wordlist(path), seed=seed)

    def choose_starting_team(self) -> Team:
        return choose_starting_team(self.rng)

    def generate_board(self, starting_team: Team) -> list[Card]:
        """
        Generate a random 25-card board.

        Args:
            starting_team: Which team goes first (and has 9 cards)

        Returns:
            Cards 0-24, all unrevealed
        """
        words = self.rng.sample(self.word_list, self.TOTAL_CARDS)
        key = self._generate_key(starting_team)
        self.rng.shuffle(key)

        return [
            Card(id=i, word=word, card_type=card_type)
            for i, (word, card_type) in enumerate(zip(words, key))
        ]

    def _generate_key(self, starting_team: Team) -> list[CardType]:
        """
        Generate the key card (list of card types), unshuffled.

        Args:
            starting_team: Which team goes first (gets 9 cards)
        """
        key: list[CardType] = []
        key.extend([CardType.for_team(starting_team)] * self.STARTING_TEAM_WORDS)
        key.extend([CardType.for_team(starting_team.opponent)] * self.OTHER_TEAM_WORDS)
        key.extend([CardType.NEUTRAL] * self.NEUTRAL_WORDS)
        key.extend([CardType.ASSASSIN] * self.ASSASSIN_WORDS)
        return key

    def new_game(self, starting_team: Optional[Team] = None) -> GameState:
        """
        Build the state of a fresh round.

        Args:
            starting_team: Opening team. If None, a coin flip decides.
        """
        if starting_team is None:
            starting_team = self.choose_starting_team()
        board = self.generate_board(starting_team)
        logger.debug("Generated board with %s starting", starting_team.value)

        def total(team: Team) -> int:
            return self.STARTING_TEAM_WORDS if team == starting_team else self.OTHER_TEAM_WORDS

        return GameState(
            board=board,
            current_turn=starting_team,
            starting_team=starting_team,
            phase=Phase.CLUE,
            scores={team: TeamScore(found=0, total=total(team)) for team in Team},
        )
