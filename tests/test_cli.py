"""Tests for the command-line interface."""

from click.testing import CliRunner

from codenames_live.cli import main


class TestCli:
    def test_generate_board(self):
        result = CliRunner().invoke(main, ["generate-board", "--seed", "1", "--starting-team", "blue"])
        assert result.exit_code == 0, result.output
        assert "Starting team: BLUE" in result.output
        assert "Spymaster view:" in result.output
        assert "Operative view:" in result.output

    def test_room_code(self):
        result = CliRunner().invoke(main, ["room-code", "-n", "3"])
        assert result.exit_code == 0, result.output
        codes = result.output.split()
        assert len(codes) == 3
        assert all(len(code) == 6 for code in codes)

    def test_simulate_reaches_a_winner(self):
        result = CliRunner().invoke(main, ["simulate", "--seed", "7"])
        assert result.exit_code == 0, result.output
        assert "Winner:" in result.output
        assert "clue" in result.output

    def test_config_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"room_code_length": 8}')
        result = CliRunner().invoke(main, ["--config", str(path), "room-code"])
        assert result.exit_code == 0, result.output
        assert len(result.output.strip()) == 8
