from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple, Union

from .game import (
    Ended,
    Event,
    GameStats,
    Key,
    LiveGame,
    Signal,
    new_game,
    step,
)
from .timer import Clock
from .words import WordSupplier

logger = logging.getLogger(__name__)

DURATIONS: Tuple[int, ...] = (10, 30, 60)
DEFAULT_DURATION = 60


@dataclass
class GameOptions:
    duration: int = DEFAULT_DURATION


# ---------------------------
# Start menu
# ---------------------------

class MenuAction(Enum):
    START = "start"
    QUIT = "quit"


@dataclass(frozen=True)
class ChangeDuration:
    seconds: int


class DurationMenu:
    """Highlight over the selectable test durations."""

    def __init__(self, durations: Sequence[int] = DURATIONS, selected: int = DEFAULT_DURATION) -> None:
        self.durations = list(durations)
        self.highlight = self.durations.index(selected) if selected in self.durations else 0

    def handle(self, event: Optional[Event]) -> Union[MenuAction, ChangeDuration, None]:
        if event is Key.UP:
            self.highlight = max(0, self.highlight - 1)
        elif event is Key.DOWN:
            self.highlight = min(len(self.durations) - 1, self.highlight + 1)
        elif event is Key.ENTER:
            return ChangeDuration(self.durations[self.highlight])
        elif event is Key.TAB:
            return MenuAction.START
        elif event is Key.ESCAPE:
            return MenuAction.QUIT
        return None


# ---------------------------
# Application states
# ---------------------------

@dataclass
class MenuScreen:
    menu: DurationMenu = field(default_factory=DurationMenu)


@dataclass
class SessionScreen:
    game: LiveGame


@dataclass(frozen=True)
class ResultsScreen:
    stats: GameStats


Screen = Union[MenuScreen, SessionScreen, ResultsScreen]


class Application:
    """
    Menu -> typing test -> results, carrying the chosen duration between
    tests for the lifetime of the process.
    """

    def __init__(
        self,
        supplier_factory: Callable[[], WordSupplier],
        options: Optional[GameOptions] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.options = options or GameOptions()
        self._supplier_factory = supplier_factory
        self._clock = clock
        self.state: Optional[Screen] = self._menu()

    @property
    def finished(self) -> bool:
        return self.state is None

    def handle(self, event: Optional[Event] = None) -> bool:
        """Run one transition; False once the application has quit."""
        if self.state is not None:
            self.state = self._next(self.state, event)
        return self.state is not None

    def _menu(self) -> MenuScreen:
        return MenuScreen(DurationMenu(selected=self.options.duration))

    def _session(self) -> SessionScreen:
        game = new_game(self._supplier_factory(), self.options.duration, self._clock)
        return SessionScreen(game)

    def _next(self, state: Screen, event: Optional[Event]) -> Optional[Screen]:
        if isinstance(state, MenuScreen):
            action = state.menu.handle(event)
            if action is MenuAction.START:
                return self._session()
            if action is MenuAction.QUIT:
                return None
            if isinstance(action, ChangeDuration):
                logger.info(f"Duration set to {action.seconds}s")
                self.options.duration = action.seconds
            return state

        if isinstance(state, SessionScreen):
            result = step(state.game, event)
            if result is Signal.EXIT:
                logger.info("Test abandoned")
                return self._menu()
            if result is Signal.RESTART:
                logger.info("Test restarted")
                return self._session()
            if isinstance(result, Ended):
                return ResultsScreen(result.stats)
            return SessionScreen(result)

        if event is Key.TAB:
            return self._session()
        if event is Key.ESCAPE:
            return None
        return state
