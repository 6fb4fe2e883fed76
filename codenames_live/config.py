from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

ADMIN_EMAILS_ENV = "CODENAMES_ADMIN_EMAILS"

# No I, O, 0 or 1: codes are read aloud and typed by hand.
DEFAULT_ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


@dataclass(frozen=True)
class GameConfig:
    """Settings for one deployment of the room engine."""
    room_code_length: int = 6
    room_code_alphabet: str = DEFAULT_ROOM_CODE_ALPHABET
    wordlist_path: Optional[Path] = None  # None => packaged word list
    versioned_writes: bool = True         # False reproduces last-write-wins
    max_write_retries: int = 3            # recomputes after a stale versioned write
    admin_emails: Tuple[str, ...] = field(default_factory=tuple)


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ValueError(msg)


def _parse_emails(raw: str) -> Tuple[str, ...]:
    return tuple(e.strip().lower() for e in raw.split(",") if e.strip())


def load_config(path: str | Path | None = None, env: Optional[dict] = None) -> GameConfig:
    """
    Load settings from a JSON file, defaulting every missing key.

    Admin emails listed in ``CODENAMES_ADMIN_EMAILS`` (comma-separated) are
    added to the file's ``admin_emails``.
    """
    data: dict = {}
    if path is not None:
        p = Path(path)
        data = json.loads(p.read_text())
        _require(isinstance(data, dict), f"Config {p} must be a JSON object")

    length = int(data.get("room_code_length", 6))
    alphabet = str(data.get("room_code_alphabet", DEFAULT_ROOM_CODE_ALPHABET))
    retries = int(data.get("max_write_retries", 3))
    admins = data.get("admin_emails", [])

    _require(length >= 4, "room_code_length must be at least 4")
    _require(len(set(alphabet)) >= 10, "room_code_alphabet needs at least 10 distinct characters")
    _require(retries >= 0, "max_write_retries must be non-negative")
    _require(isinstance(admins, list), "admin_emails must be a list")

    wordlist = data.get("wordlist_path")
    config = GameConfig(
        room_code_length=length,
        room_code_alphabet=alphabet,
        wordlist_path=Path(wordlist) if wordlist else None,
        versioned_writes=bool(data.get("versioned_writes", True)),
        max_write_retries=retries,
        admin_emails=tuple(str(e).strip().lower() for e in admins if str(e).strip()),
    )

    env = os.environ if env is None else env
    extra = _parse_emails(env.get(ADMIN_EMAILS_ENV, ""))
    if extra:
        merged = tuple(dict.fromkeys(config.admin_emails + extra))
        config = replace(config, admin_emails=merged)
    return config
