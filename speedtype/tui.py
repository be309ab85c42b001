from __future__ import annotations

import logging
from typing import Dict, List, Optional

try:
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Container
    from textual.logging import TextualHandler
    from textual.widgets import Static
except ModuleNotFoundError as exc:
    missing = getattr(exc, "name", "")
    hint = "python3 -m pip install -U rich textual"
    print(f"Missing dependency '{missing}'. Install with: {hint}")
    raise SystemExit(1) from exc

from .app import Application, DurationMenu, GameOptions, MenuScreen, ResultsScreen, SessionScreen
from .config import Settings
from .game import Char, Event, GameStats, Key, NotStarted, SessionView, session_view
from .text import CharState

logger = logging.getLogger(__name__)

NAMED_KEYS: Dict[str, Key] = {
    "backspace": Key.BACKSPACE,
    "escape": Key.ESCAPE,
    "tab": Key.TAB,
    "enter": Key.ENTER,
    "up": Key.UP,
    "down": Key.DOWN,
}

BAR_LEN = 34


def configure_logging(level: int = logging.INFO) -> None:
    # the terminal belongs to textual; records go to the devtools console
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        handlers=[TextualHandler()],
    )


def translate_key(key: str, character: Optional[str]) -> Event:
    if key in NAMED_KEYS:
        return NAMED_KEYS[key]
    if character is not None and len(character) == 1 and character.isprintable():
        return Char(character)
    return Key.OTHER


def cycle_value(current: str, options: List[str]) -> str:
    if current not in options:
        return options[0]
    idx = options.index(current)
    return options[(idx + 1) % len(options)]


# ---------------------------
# Rendering
# ---------------------------

def render_lines(view: SessionView, theme: Dict[str, str]) -> Text:
    styles = {
        CharState.CORRECT: f"bold {theme['ok']}",
        CharState.INCORRECT: f"bold {theme['bad']} on {theme['bad_bg']}",
        CharState.UNTYPED: theme["upcoming"],
    }
    cursor_row, cursor_col = view.lines.cursor
    text = Text()
    for row, cells in enumerate(view.lines.rows()):
        for col, (ch, state) in enumerate(cells):
            style = styles[state]
            if (row, col) == (cursor_row, cursor_col):
                style = f"reverse {theme['cursor']}"
            text.append(ch, style=style)
        if row < 2:
            text.append("\n", style="")
    return text


def render_stats(view: SessionView, theme: Dict[str, str]) -> Text:
    remaining = int(view.remaining)
    minutes, seconds = divmod(remaining, 60)
    total_min, total_sec = divmod(view.duration, 60)
    filled = BAR_LEN * view.percent // 100

    text = Text()
    text.append("Time ", style=theme["muted"])
    text.append(f"{minutes:02d}:{seconds:02d}", style=f"bold {theme['title']}")
    text.append(" / ", style=theme["muted"])
    text.append(f"{total_min:02d}:{total_sec:02d}", style=theme["muted"])
    text.append("  ", style=theme["muted"])
    text.append(f"{view.percent:>3}%", style=theme["bar_fg"])
    text.append("\n", style="")
    text.append("[", style=theme["muted"])
    if filled:
        text.append("=" * filled, style=theme["bar_fg"])
    if BAR_LEN - filled:
        text.append("." * (BAR_LEN - filled), style=theme["bar_bg"])
    text.append("]", style=theme["muted"])
    text.append("\n", style="")
    text.append("WPM ", style=theme["muted"])
    text.append(f"{int(view.wpm):>4}", style=f"bold {theme['title']}")
    text.append("   ", style=theme["muted"])
    text.append("Correct ", style=theme["muted"])
    text.append(f"{view.correct}", style=f"bold {theme['title']}")
    return text


def render_menu(menu: DurationMenu, options: GameOptions, theme: Dict[str, str]) -> Text:
    text = Text()
    text.append("Time: ", style=theme["muted"])
    text.append(f"{options.duration} s", style=f"bold {theme['title']}")
    text.append("\n\n", style="")
    for i, seconds in enumerate(menu.durations):
        if i == menu.highlight:
            text.append(f"> {seconds} s", style=f"bold {theme['bar_fg']}")
        else:
            text.append(f"  {seconds} s", style=theme["upcoming"])
        if seconds == options.duration:
            text.append("  (selected)", style=theme["muted"])
        text.append("\n", style="")
    return text


def render_results(stats: GameStats, theme: Dict[str, str]) -> Text:
    text = Text()
    text.append("Time ended!", style=f"bold {theme['title']}")
    text.append("\n\n", style="")
    text.append("WPM: ", style=theme["muted"])
    text.append(f"{stats.wpm:.1f}", style=f"bold {theme['ok']}")
    text.append("\n", style="")
    text.append("Accuracy: ", style=theme["muted"])
    text.append(f"{stats.accuracy:g}", style=f"bold {theme['ok']}")
    return text


# ---------------------------
# UI widgets
# ---------------------------

class StatsBar(Static):
    """Timer, progress and live WPM."""
    pass


class PromptView(Static):
    """Three line practice window, or the menu / results."""
    pass


class HelpBar(Static):
    """Help / controls."""
    pass


# ---------------------------
# App
# ---------------------------

class SpeedTypeApp(App):
    CSS = """
    Screen {
        background: transparent;
    }

    #root {
        height: 100%;
        padding: 1 2;
    }

    StatsBar {
        background: #0f172a;
        border: round #1f2937;
        padding: 0 2;
        height: 5;
    }

    PromptView {
        background: #0b1220;
        border: round #1f2937;
        padding: 1 2;
        height: 1fr;
    }

    HelpBar {
        background: #0f172a;
        border: round #1f2937;
        padding: 0 2;
        height: 3;
    }
    """

    TITLE = "SpeedType"

    # textual binds tab to focus changes; these must win
    BINDINGS = [
        Binding("tab", "press_tab", "Start / restart", priority=True),
        Binding("escape", "press_escape", "Back", priority=True),
        Binding("ctrl+t", "cycle_theme", "Theme", priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, machine: Application, settings: Optional[Settings] = None) -> None:
        super().__init__()
        settings = settings or Settings()
        self.machine = machine
        self.palettes = settings.themes
        self.theme_name = settings.theme
        self.palette = self.palettes[self.theme_name]

    def compose(self) -> ComposeResult:
        with Container(id="root"):
            self.stats_bar = StatsBar()
            self.prompt_view = PromptView()
            self.help_bar = HelpBar()
            yield self.stats_bar
            yield self.prompt_view
            yield self.help_bar

    def on_mount(self) -> None:
        self.apply_theme()
        self._render_all()
        self.set_interval(0.1, self._tick)

    def on_resize(self, event) -> None:
        self._render_all()

    def apply_theme(self) -> None:
        palette = self.palette
        self.screen.styles.background = palette["screen_bg"]
        self.stats_bar.styles.background = palette["stats_bg"]
        self.help_bar.styles.background = palette["stats_bg"]
        self.prompt_view.styles.background = palette["prompt_bg"]
        border_def = (("round", palette["border"]),)
        self.stats_bar.styles.border = border_def
        self.help_bar.styles.border = border_def
        self.prompt_view.styles.border = border_def

    # ---------------------------
    # Input
    # ---------------------------

    def on_key(self, event: events.Key) -> None:
        self._feed(translate_key(event.key, event.character))

    def action_press_tab(self) -> None:
        self._feed(Key.TAB)

    def action_press_escape(self) -> None:
        self._feed(Key.ESCAPE)

    def action_cycle_theme(self) -> None:
        self.theme_name = cycle_value(self.theme_name, list(self.palettes.keys()))
        self.palette = self.palettes[self.theme_name]
        logger.info(f"Theme switched to '{self.theme_name}'")
        self.apply_theme()
        self._render_all()

    def _feed(self, event: Optional[Event]) -> None:
        if not self.machine.handle(event):
            self.exit()
            return
        self._render_all()

    def _tick(self) -> None:
        # only a live test has a clock to check
        if isinstance(self.machine.state, SessionScreen):
            self._feed(None)

    # ---------------------------
    # Output
    # ---------------------------

    def _prompt_width(self) -> int:
        return self.prompt_view.content_size.width

    def _render_all(self) -> None:
        state = self.machine.state
        theme = self.palette
        if isinstance(state, MenuScreen):
            self.stats_bar.update(Text("SpeedType", style=f"bold {theme['title']}"))
            self.prompt_view.update(render_menu(state.menu, self.machine.options, theme))
        elif isinstance(state, SessionScreen):
            view = session_view(state.game, self._prompt_width())
            self.stats_bar.update(render_stats(view, theme))
            self.prompt_view.update(render_lines(view, theme))
        elif isinstance(state, ResultsScreen):
            self.stats_bar.update(Text("Results", style=f"bold {theme['title']}"))
            self.prompt_view.update(render_results(state.stats, theme))
        self._render_help()

    def _render_help(self) -> None:
        state = self.machine.state
        theme = self.palette
        text = Text()
        if isinstance(state, MenuScreen):
            text.append("Up/Down + Enter pick time", style=theme["hint"])
            text.append("  ", style=theme["muted"])
            text.append("Tab start", style=theme["hint"])
            text.append("  ", style=theme["muted"])
            text.append("Esc quit", style=theme["hint"])
        elif isinstance(state, SessionScreen):
            if isinstance(state.game, NotStarted):
                text.append("Start typing to begin. ", style=theme["hint"])
            text.append("Tab restart", style=theme["hint"])
            text.append("  ", style=theme["muted"])
            text.append("Esc menu", style=theme["hint"])
        else:
            text.append("Tab restart", style=theme["hint"])
            text.append("  ", style=theme["muted"])
            text.append("Esc quit", style=theme["hint"])
        text.append("  ", style=theme["muted"])
        text.append("Ctrl+T theme", style=theme["hint"])
        self.help_bar.update(text)
