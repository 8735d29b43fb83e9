"""
Tests for the command-line interface.
"""

import pytest

from ..cli import main


class TestCli:
    """Tests for CLI commands."""

    def test_list(self, capsys):
        """list prints every registered game."""
        main(["list"])
        out = capsys.readouterr().out
        assert "kalah(seeds_per_pit=4)" in out
        assert "2048(rows=4,columns=4)" in out

    def test_show(self, capsys):
        """show prints descriptor facts and the initial board."""
        main(["show", "kalah"])
        out = capsys.readouterr().out
        assert "Distinct actions: 14" in out
        assert "-4-4-4-4-4-4-" in out

    def test_simulate(self, capsys):
        """simulate prints one line per episode and a summary."""
        main(["simulate", "2048(rows=2,columns=2)", "--episodes", "2", "--seed", "1"])
        out = capsys.readouterr().out
        assert "Episode 1:" in out
        assert "Episode 2:" in out
        assert "Summary over 2 episode(s)" in out

    def test_unknown_game_exits(self, capsys):
        """Engine errors exit with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["show", "checkers"])
        assert exc_info.value.code == 1
        assert "Unknown game" in capsys.readouterr().out

    def test_no_command(self, capsys):
        """No command prints help and exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
