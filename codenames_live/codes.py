"""Room code generation."""

import random
from typing import Optional

from .config import DEFAULT_ROOM_CODE_ALPHABET


def generate_room_code(
    length: int = 6,
    alphabet: str = DEFAULT_ROOM_CODE_ALPHABET,
    rng: Optional[random.Random] = None,
) -> str:
    """Generate a random room code."""
    rng = rng or random.Random()
    return "".join(rng.choices(alphabet, k=length))


def normalize_room_code(code: str) -> str:
    """Codes are typed by hand; compare them trimmed and upper-cased."""
    return code.strip().upper()
