from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .words import WordSupplier


class CharState(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNTYPED = "untyped"


def classify(reference: str, typed: str) -> List[Tuple[str, CharState]]:
    """Pair every reference character with how the user typed it."""
    out: List[Tuple[str, CharState]] = []
    for i, ch in enumerate(reference):
        if i >= len(typed):
            out.append((ch, CharState.UNTYPED))
        elif typed[i] == ch:
            out.append((ch, CharState.CORRECT))
        else:
            out.append((ch, CharState.INCORRECT))
    return out


@dataclass(frozen=True)
class VisibleLines:
    """
    Three line window over the practice text.

    ``prev_typed`` and ``typed`` are the user's input aligned with
    ``prev_line`` and ``line``; ``next_line`` is never typed into.
    """

    prev_line: str = ""
    line: str = ""
    next_line: str = ""
    prev_typed: str = ""
    typed: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.prev_line or self.line or self.next_line)

    @property
    def cursor_on_previous(self) -> bool:
        return not self.typed and len(self.prev_typed) < len(self.prev_line)

    @property
    def cursor(self) -> Tuple[int, int]:
        """(row within the window, column)"""
        if self.cursor_on_previous:
            return 0, len(self.prev_typed)
        return 1, len(self.typed)

    def rows(self) -> List[List[Tuple[str, CharState]]]:
        return [
            classify(self.prev_line, self.prev_typed),
            classify(self.line, self.typed),
            classify(self.next_line, ""),
        ]


class TextBuffer:
    """
    Infinite practice text, wrapped lazily, plus what the user typed so far.

    The reference text only ever grows: each new word is appended followed by
    a single space and its start index is recorded in ``word_starts``.
    """

    def __init__(self, supplier: WordSupplier) -> None:
        self._supplier = supplier
        self._text: List[str] = []
        self._word_starts: List[int] = []
        self._typed: List[str] = []
        self._correct = 0

    @property
    def reference_text(self) -> str:
        return "".join(self._text)

    @property
    def typed_text(self) -> str:
        return "".join(self._typed)

    @property
    def word_starts(self) -> List[int]:
        return list(self._word_starts)

    @property
    def correct(self) -> int:
        return self._correct

    # ---------------------------
    # Wrapping
    # ---------------------------

    def ensure_word(self, index: int) -> int:
        """Materialize words up to ``index`` and return where it starts."""
        while len(self._word_starts) <= index:
            self._word_starts.append(len(self._text))
            self._text.extend(self._supplier.next_word())
            self._text.append(" ")
        return self._word_starts[index]

    def line_end_word(self, start: int, width: int) -> int:
        """
        Index of the first word that does not fit on a line beginning at
        word ``start``. Returns ``start`` when not even one word fits.
        """
        end = self.ensure_word(start) + width
        index = start
        while self.ensure_word(index + 1) <= end:
            index += 1
        return index

    def visible_lines(self, width: int) -> VisibleLines:
        if width < 1:
            return VisibleLines()
        begins = [0, 0, 0, 0]
        begins[1] = self.line_end_word(begins[0], width)
        if begins[0] == begins[1]:
            return VisibleLines()
        begins[2] = self.line_end_word(begins[1], width)
        begins[3] = self.line_end_word(begins[2], width)

        cursor = len(self._typed)
        if self.ensure_word(begins[0]) <= cursor < self.ensure_word(begins[1]):
            starts = [self.ensure_word(b) for b in begins]
            return VisibleLines(
                prev_line="".join(self._text[starts[0]:starts[1]]),
                line="".join(self._text[starts[1]:starts[2]]),
                next_line="".join(self._text[starts[2]:starts[3]]),
                prev_typed="".join(self._typed[starts[0]:]),
            )

        while not (self.ensure_word(begins[1]) <= cursor < self.ensure_word(begins[2])):
            if begins[1] == begins[2]:
                # a word wider than the line; wrapping cannot move past it
                return VisibleLines()
            begins = begins[1:] + [self.line_end_word(begins[3], width)]

        starts = [self.ensure_word(b) for b in begins]
        return VisibleLines(
            prev_line="".join(self._text[starts[0]:starts[1]]),
            line="".join(self._text[starts[1]:starts[2]]),
            next_line="".join(self._text[starts[2]:starts[3]]),
            prev_typed="".join(self._typed[starts[0]:starts[1]]),
            typed="".join(self._typed[starts[1]:]),
        )

    # ---------------------------
    # Scoring
    # ---------------------------

    def type_char(self, char: str) -> None:
        position = len(self._typed)
        if position >= len(self._text):
            return
        self._typed.append(char)
        if self._text[position] == char:
            self._correct += 1

    def backspace(self) -> None:
        if not self._typed:
            return
        char = self._typed.pop()
        if self._text[len(self._typed)] == char:
            self._correct -= 1
