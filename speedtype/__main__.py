from __future__ import annotations

import logging
from typing import Callable

from .app import Application, GameOptions
from .config import Settings, load_settings
from .tui import SpeedTypeApp, configure_logging
from .words import DictionaryError, FixedWordSupplier, RandomWordSupplier, WordSupplier, load_dictionary

logger = logging.getLogger(__name__)


def build_supplier_factory(settings: Settings) -> Callable[[], WordSupplier]:
    """
    Resolve the word source once so a broken dictionary fails at startup,
    not when the first test begins.
    """
    if settings.text:
        text = settings.text
        FixedWordSupplier(text)
        return lambda: FixedWordSupplier(text)
    words = load_dictionary(settings.language)
    return lambda: RandomWordSupplier(words)


def main() -> None:
    configure_logging()
    settings = load_settings()
    try:
        supplier_factory = build_supplier_factory(settings)
    except (OSError, DictionaryError) as exc:
        print(f"Cannot load words for '{settings.language}': {exc}")
        raise SystemExit(1) from exc
    machine = Application(supplier_factory, GameOptions(duration=settings.duration))
    SpeedTypeApp(machine, settings).run()


if __name__ == "__main__":
    main()
