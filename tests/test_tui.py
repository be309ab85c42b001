"""Tests for speedtype.tui – key translation, rendering and a headless run."""

from __future__ import annotations

import asyncio

from speedtype.app import Application, DurationMenu, GameOptions, MenuScreen, SessionScreen
from speedtype.config import THEMES
from speedtype.game import Char, GameStats, Key, new_game, session_view
from speedtype.tui import (
    SpeedTypeApp,
    cycle_value,
    render_lines,
    render_menu,
    render_results,
    render_stats,
    translate_key,
)
from speedtype.words import FixedWordSupplier

THEME = THEMES["slate"]


class TestTranslateKey:
    def test_named_keys(self):
        assert translate_key("backspace", None) is Key.BACKSPACE
        assert translate_key("escape", "\x1b") is Key.ESCAPE
        assert translate_key("tab", "\t") is Key.TAB
        assert translate_key("enter", "\r") is Key.ENTER
        assert translate_key("up", None) is Key.UP

    def test_printable(self):
        assert translate_key("a", "a") == Char("a")
        assert translate_key("space", " ") == Char(" ")
        assert translate_key("eacute", "é") == Char("é")

    def test_other(self):
        assert translate_key("ctrl+x", "\x18") is Key.OTHER
        assert translate_key("f5", None) is Key.OTHER


class TestCycleValue:
    def test_wraps(self):
        assert cycle_value("b", ["a", "b"]) == "a"

    def test_unknown(self):
        assert cycle_value("z", ["a", "b"]) == "a"


class TestRendering:
    def test_lines_text(self, fixed_supplier, clock):
        game = new_game(fixed_supplier, 30, clock)
        view = session_view(game, 8)
        text = render_lines(view, THEME)
        assert text.plain == "abc abc \nabc abc \nabc abc "

    def test_empty_lines_for_narrow_width(self, fixed_supplier, clock):
        game = new_game(fixed_supplier, 30, clock)
        text = render_lines(session_view(game, 2), THEME)
        assert text.plain == "\n\n"

    def test_stats(self, fixed_supplier, clock):
        game = new_game(fixed_supplier, 60, clock)
        text = render_stats(session_view(game, 20), THEME)
        assert "01:00 / 01:00" in text.plain
        assert "Correct 0" in text.plain

    def test_menu(self):
        text = render_menu(DurationMenu(selected=30), GameOptions(duration=30), THEME)
        assert "> 30 s  (selected)" in text.plain
        assert "  10 s" in text.plain

    def test_results(self):
        text = render_results(GameStats(wpm=42.0, accuracy=210.0), THEME)
        assert "WPM: 42.0" in text.plain
        assert "Accuracy: 210" in text.plain


def test_headless_flow():
    machine = Application(lambda: FixedWordSupplier("abc"))
    app = SpeedTypeApp(machine)

    async def scenario() -> None:
        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.press("up", "enter")
            assert machine.options.duration == 30
            await pilot.press("tab")
            assert isinstance(machine.state, SessionScreen)
            await pilot.press("a", "b")
            assert machine.state.game.buffer.typed_text == "ab"
            await pilot.press("backspace")
            assert machine.state.game.buffer.typed_text == "a"
            await pilot.press("escape")
            assert isinstance(machine.state, MenuScreen)
            await pilot.press("escape")

    asyncio.run(scenario())
    assert machine.finished
