"""
Tests for the command line entry point.
"""

import argparse
import sys

import pytest

import main
from src.game.levels import Level, LevelMetadata, parse_layout

ONE_BLOCKER = """\
......
...A..
ZZ.A..
......
......
......
"""

WALLED_IN = """\
...A..
...A..
ZZ.A..
...B..
...B..
...B..
"""


def make_args(**overrides):
    defaults = dict(max_states=None, gui=False, step=False)
    defaults.update(overrides)
    return argparse.Namespace(**defaults)


def make_level(layout):
    return Level(LevelMetadata(name="cli"), parse_layout(layout))


class TestRunSolver:
    def test_solved(self, capsys):
        assert main.run_solver(make_level(ONE_BLOCKER), make_args()) == 0
        out = capsys.readouterr().out
        assert "Solved in 1 moves" in out
        assert "Move 1/1: A up" in out

    def test_unsolvable(self, capsys):
        assert main.run_solver(make_level(WALLED_IN), make_args()) == 1
        assert "No solution exists" in capsys.readouterr().out

    def test_aborted(self, capsys):
        assert main.run_solver(make_level(ONE_BLOCKER), make_args(max_states=1)) == 1
        assert "Search aborted after 1 states" in capsys.readouterr().out


class TestMain:
    def test_solves_layout_file(self, tmp_path, monkeypatch):
        path = tmp_path / "one.txt"
        path.write_text(ONE_BLOCKER)
        monkeypatch.setattr(sys, "argv", ["main.py", str(path)])

        with pytest.raises(SystemExit) as exc_info:
            main.main()
        assert exc_info.value.code == 0

    def test_invalid_layout_exits_2(self, tmp_path, monkeypatch):
        path = tmp_path / "bad.txt"
        path.write_text("ZZ....\n")
        monkeypatch.setattr(sys, "argv", ["main.py", str(path)])

        with pytest.raises(SystemExit) as exc_info:
            main.main()
        assert exc_info.value.code == 2

    def test_binary_layout_exits_2(self, tmp_path, monkeypatch):
        path = tmp_path / "screenshot.txt"
        path.write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe\xfd")
        monkeypatch.setattr(sys, "argv", ["main.py", str(path)])

        with pytest.raises(SystemExit) as exc_info:
            main.main()
        assert exc_info.value.code == 2

    def test_json_list_exits_2(self, tmp_path, monkeypatch):
        path = tmp_path / "list.json"
        path.write_text('[{"layout": "ZZ...."}]')
        monkeypatch.setattr(sys, "argv", ["main.py", str(path)])

        with pytest.raises(SystemExit) as exc_info:
            main.main()
        assert exc_info.value.code == 2

    def test_generate_and_save(self, tmp_path, monkeypatch):
        path = tmp_path / "generated.json"
        monkeypatch.setattr(
            sys,
            "argv",
            ["main.py", "--generate", "--seed", "3", "--pieces", "4",
             "--save", str(path)],
        )

        with pytest.raises(SystemExit) as exc_info:
            main.main()
        assert exc_info.value.code in (0, 1)
        assert Level.load_from_file(path).name == "Puzzle 3"

    def test_needs_puzzle_or_generate(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["main.py"])
        with pytest.raises(SystemExit) as exc_info:
            main.main()
        assert exc_info.value.code == 2
