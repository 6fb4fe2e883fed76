"""Tests for the game log."""

import pytest

from codenames_live.game import CardType, ClueEntry, GameLog, GuessEntry, PassEntry, Team


@pytest.fixture
def entries():
    return [
        ClueEntry(team=Team.RED, player_id="a", player_name="A", clue_word="CAT", clue_number=2, timestamp=1.0),
        GuessEntry(team=Team.RED, player_id="b", player_name="B", guessed_word="DOG",
                   card_type=CardType.NEUTRAL, timestamp=2.0),
        PassEntry(team=Team.BLUE, player_id="c", player_name="C", timestamp=3.0),
    ]


class TestGameLog:
    def test_appended_leaves_original_untouched(self, entries):
        log = GameLog(entries[:1])
        longer = log.appended(entries[1])
        assert len(log) == 1
        assert list(longer) == entries[:2]
        assert longer.last == entries[1]

    def test_keeps_submission_order_not_time_order(self, entries):
        log = GameLog().appended(entries[2]).appended(entries[0])
        assert [e.kind for e in log] == ["pass", "clue"]

    def test_duplicates_are_kept(self, entries):
        log = GameLog().appended(entries[0]).appended(entries[0])
        assert len(log) == 2

    def test_stored_form(self, entries):
        stored = GameLog(entries).to_list()
        assert stored[0]["type"] == "clue"
        assert stored[0]["data"] == {"clue_word": "CAT", "clue_number": 2}
        assert stored[1]["data"] == {"guessed_word": "DOG", "card_type": "neutral"}
        assert stored[2]["data"] == {}
        assert GameLog.from_list(stored) == GameLog(entries)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError, match="Unknown log entry"):
            GameLog.from_list([{"type": "game_over", "team": "red", "player_id": "x", "timestamp": 0}])

    def test_entries_are_immutable(self, entries):
        with pytest.raises(AttributeError):
            entries[0].clue_word = "DOG"
