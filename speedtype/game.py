from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .text import TextBuffer, VisibleLines
from .timer import Clock, TimeTracker, wpm_from_count
from .words import WordSupplier

logger = logging.getLogger(__name__)


# ---------------------------
# Input events
# ---------------------------

class Key(Enum):
    BACKSPACE = "backspace"
    ESCAPE = "escape"
    TAB = "tab"
    ENTER = "enter"
    UP = "up"
    DOWN = "down"
    OTHER = "other"


@dataclass(frozen=True)
class Char:
    char: str


Event = Union[Char, Key]


class Signal(Enum):
    """Requests a running game makes of whoever owns it."""

    EXIT = "exit"
    RESTART = "restart"


# ---------------------------
# Game states
# ---------------------------

@dataclass(frozen=True)
class GameStats:
    wpm: float
    accuracy: float


@dataclass
class NotStarted:
    buffer: TextBuffer
    duration: int
    clock: Clock = time.monotonic


@dataclass
class Running:
    buffer: TextBuffer
    timer: TimeTracker


@dataclass(frozen=True)
class Ended:
    stats: GameStats


GameState = Union[NotStarted, Running, Ended]
LiveGame = Union[NotStarted, Running]


def new_game(supplier: WordSupplier, duration: int, clock: Clock = time.monotonic) -> NotStarted:
    return NotStarted(TextBuffer(supplier), duration, clock)


def step(state: GameState, event: Optional[Event] = None) -> Union[GameState, Signal]:
    """
    Advance a game by one tick.

    Expiry is checked before the event, so an Escape arriving in the same
    tick the time runs out still ends the test with its results.
    """
    if isinstance(state, Ended):
        return state

    if isinstance(state, Running) and state.timer.is_expired():
        correct = state.buffer.correct
        stats = GameStats(
            wpm=wpm_from_count(correct, state.timer.duration * 1000),
            accuracy=float(correct),
        )
        logger.info(f"Test over after {state.timer.duration}s: {stats.wpm:.1f} wpm, {correct} correct")
        return Ended(stats)

    if event is None:
        return state
    if event is Key.ESCAPE:
        return Signal.EXIT
    if event is Key.TAB:
        return Signal.RESTART
    if event is Key.BACKSPACE:
        state.buffer.backspace()
        return state
    if isinstance(event, Char):
        state.buffer.type_char(event.char)
        if isinstance(state, NotStarted):
            logger.info(f"Test started ({state.duration}s)")
            return Running(state.buffer, TimeTracker(state.duration, clock=state.clock))
        return state
    return state


# ---------------------------
# Render projection
# ---------------------------

@dataclass(frozen=True)
class SessionView:
    lines: VisibleLines
    wpm: float
    correct: int
    percent: int
    remaining: float
    duration: int
    started: bool


def session_view(state: LiveGame, width: int) -> SessionView:
    lines = state.buffer.visible_lines(width)
    correct = state.buffer.correct
    if isinstance(state, Running):
        timer = state.timer
        return SessionView(
            lines=lines,
            wpm=timer.sampled_wpm(correct),
            correct=correct,
            percent=timer.percent_elapsed(),
            remaining=timer.remaining(),
            duration=timer.duration,
            started=True,
        )
    return SessionView(
        lines=lines,
        wpm=0.0,
        correct=correct,
        percent=0,
        remaining=float(state.duration),
        duration=state.duration,
        started=False,
    )
