"""Locale string lookup."""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from config.settings import settings

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).parent / "locales"

Translator = Callable[..., str]


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{full_key}."))
        else:
            flat[full_key] = str(value)
    return flat


class I18n:
    """Resolves dotted message keys for a locale.

    Missing keys fall back to the default locale and then to the key itself.
    Messages use ``{0}``, ``{1}``... placeholders.
    """

    def __init__(self, directory: Path | str = LOCALES_DIR, default_locale: str | None = None) -> None:
        self.directory = Path(directory)
        self.default_locale = default_locale or settings.default_locale
        self.locales: dict[str, dict[str, str]] = {}
        self.load()

    def load(self) -> None:
        if not self.directory.is_dir():
            logger.warning(f"Locale directory does not exist: {self.directory}")
            return

        for path in sorted(self.directory.glob("*.json")):
            with path.open(encoding="utf-8") as fh:
                self.locales[path.stem] = _flatten(json.load(fh))
            logger.debug(f"Loaded locale {path.stem}")

        if self.default_locale not in self.locales:
            logger.warning(f"Default locale {self.default_locale} has no messages")

    def resolve(self, locale: str | None) -> Translator:
        messages = self.locales.get(locale or "", {})
        fallback = self.locales.get(self.default_locale, {})

        def translate(key: str, *args: Any) -> str:
            template = messages.get(key) or fallback.get(key)
            if template is None:
                logger.debug(f"Missing locale string {key} for {locale}")
                return key
            return template.format(*args) if args else template

        return translate
