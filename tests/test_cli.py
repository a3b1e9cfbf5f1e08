"""Tests for the command-line entry point and key dispatch."""

import curses

import pytest

from tasknc import cli
from tasknc.state import AppState
from tasknc.tui import TUI, pad

from conftest import export_record


@pytest.fixture
def no_logging(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)


class TestMain:
    """Test cli.main without a terminal."""

    def test_debug_prints_task_count(self, monkeypatch, tmp_path, capsys, no_logging):
        lines = [export_record(uuid="a", description="one"), export_record(uuid="b", description="two")]
        monkeypatch.setattr(cli, "task_version", lambda: "2.6.2")
        monkeypatch.setattr(cli, "export_lines", lambda version: lines)
        cli.main(["-d", "-c", str(tmp_path / "config")])

        assert "task count: 2" in capsys.readouterr().out

    def test_empty_task_list_exits(self, monkeypatch, tmp_path, capsys, no_logging):
        monkeypatch.setattr(cli, "task_version", lambda: "2.6.2")
        monkeypatch.setattr(cli, "export_lines", lambda version: ["[\n", "]\n"])

        with pytest.raises(SystemExit):
            cli.main(["-d", "-c", str(tmp_path / "config")])
        assert "it appears that your task list is empty" in capsys.readouterr().out

    def test_bad_export_exits(self, monkeypatch, tmp_path, no_logging):
        monkeypatch.setattr(cli, "task_version", lambda: "2.6.2")
        monkeypatch.setattr(cli, "export_lines", lambda version: [export_record(uuid="a", project="p")])

        with pytest.raises(SystemExit):
            cli.main(["-d", "-c", str(tmp_path / "config")])

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit):
            cli.main(["-v"])
        assert "v0.5.0" in capsys.readouterr().out


class TestKeys:
    """Test TUI.handle_key on keys that need no terminal I/O."""

    def make_tui(self, tasks):
        tui = TUI.__new__(TUI)
        tui.state = AppState(tasks)
        tui.state.view.viewport_height = 10
        return tui

    def test_movement(self, sample_tasks):
        tui = self.make_tui(sample_tasks)
        tui.handle_key(ord("j"))
        tui.handle_key(curses.KEY_DOWN)
        assert tui.state.view.selected_line == 2

        tui.handle_key(ord("k"))
        assert tui.state.view.selected_line == 1

        tui.handle_key(curses.KEY_END)
        assert tui.state.view.selected_line == 4
        tui.handle_key(curses.KEY_HOME)
        assert tui.state.view.selected_line == 0

    def test_quit(self, sample_tasks):
        assert self.make_tui(sample_tasks).handle_key(ord("q"))

    def test_search_next_without_pattern(self, sample_tasks):
        tui = self.make_tui(sample_tasks)
        tui.handle_key(ord("n"))

        assert tui.state.status.message == "no active search string"

    def test_unhandled_key(self, sample_tasks):
        tui = self.make_tui(sample_tasks)

        assert not tui.handle_key(ord("z"))
        assert tui.state.status.message == "unhandled key: z"


def test_pad():
    assert pad("home", 6) == "home  "
    assert pad("home", 6, "r") == "  home"
    assert pad("a long description", 10) == "a long ..."
    assert pad("abc", 0) == ""


class TestRunExternal:
    """Test handing the terminal to a task command."""

    def test_program_mode_restored_on_error(self, monkeypatch, sample_tasks):
        calls = []
        monkeypatch.setattr(curses, "def_prog_mode", lambda: calls.append("save"))
        monkeypatch.setattr(curses, "endwin", lambda: calls.append("end"))
        monkeypatch.setattr(curses, "reset_prog_mode", lambda: calls.append("restore"))
        tui = TUI.__new__(TUI)
        tui.state = AppState(sample_tasks)

        def interrupted():
            raise EOFError

        with pytest.raises(EOFError):
            tui.run_external(interrupted, "ok", "failed")
        assert calls == ["save", "end", "restore"]
