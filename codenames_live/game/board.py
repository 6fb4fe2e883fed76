"""Text views of a board for the two kinds of player."""

from dataclasses import dataclass

from .state import Card
from .types import CardType

BOARD_SIZE = 25
ROW_LENGTH = 5

TYPE_SYMBOLS = {
    CardType.RED: "R",
    CardType.BLUE: "B",
    CardType.NEUTRAL: ".",
    CardType.ASSASSIN: "X",
}


@dataclass
class Board:
    """
    A 5x5 grid over the flat card list.

    Cards are laid out row-major, so each cell shows the card id a guess
    refers to.
    """
    cards: list[Card]

    def __post_init__(self):
        if len(self.cards) != BOARD_SIZE:
            raise ValueError(f"Board must have exactly {BOARD_SIZE} cards, got {len(self.cards)}")

    def rows(self) -> list[list[Card]]:
        return [self.cards[i:i + ROW_LENGTH] for i in range(0, BOARD_SIZE, ROW_LENGTH)]

    def render_for_spymaster(self) -> str:
        """Every card's type; revealed cards are marked with ``*``."""
        lines = []
        for row in self.rows():
            cells = []
            for card in row:
                mark = "*" if card.revealed else " "
                cells.append(f"{card.id:2} {TYPE_SYMBOLS[card.card_type]}{mark} {card.word:12}")
            lines.append(" ".join(cells))
        return "\n".join(lines)

    def render_for_operative(self) -> str:
        """Types of revealed cards only, with who revealed them."""
        lines = []
        for row in self.rows():
            cells = []
            for card in row:
                if card.revealed:
                    label = f"[{TYPE_SYMBOLS[card.card_type]}] {card.revealed_by or '?'}"
                else:
                    label = card.word
                cells.append(f"{card.id:2} {label:14}")
            lines.append(" ".join(cells))
        return "\n".join(lines)
