from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

LANGUAGES_DIR = Path(__file__).resolve().parent / "languages"


class DictionaryError(ValueError):
    """Raised when a word source has no usable words."""


# ---------------------------
# Dictionary loading
# ---------------------------

def language_path(language: str, directory: Path = LANGUAGES_DIR) -> Path:
    return Path(directory) / f"{language}.txt"


def available_languages(directory: Path = LANGUAGES_DIR) -> List[str]:
    return sorted(p.stem for p in Path(directory).glob("*.txt"))


def filter_words(raw: Sequence[str]) -> List[str]:
    # single letters are too easy to be worth practicing
    return [w.lower() for w in raw if len(w) > 1]


def load_dictionary(language: str, directory: Path = LANGUAGES_DIR) -> List[str]:
    """
    Read a whitespace separated word list for ``language``.

    OSError propagates when the file cannot be read; a list that is empty
    after filtering raises DictionaryError.
    """
    path = language_path(language, directory)
    words = filter_words(path.read_text(encoding="utf-8").split())
    if not words:
        raise DictionaryError(f"No usable words in {path}")
    logger.info(f"Loaded {len(words)} words for '{language}' from {path}")
    return words


# ---------------------------
# Word suppliers
# ---------------------------

class WordSupplier:
    """Source of practice words, one at a time."""

    def next_word(self) -> str:
        raise NotImplementedError


class RandomWordSupplier(WordSupplier):
    def __init__(self, words: Sequence[str], rng: Optional[random.Random] = None) -> None:
        if not words:
            raise DictionaryError("Cannot pick words from an empty list")
        self.words = list(words)
        self._rng = rng or random.Random()

    def next_word(self) -> str:
        return self._rng.choice(self.words)


class FixedWordSupplier(WordSupplier):
    """Replays the same text forever."""

    def __init__(self, text: str) -> None:
        if not text:
            raise DictionaryError("Fixed practice text is empty")
        self.text = text

    def next_word(self) -> str:
        return self.text
