"""Localization helpers built on gettext."""

import gettext
from typing import Any, Dict, Optional


class Translator:
    """Looks up message translations and substitutes arguments.

    Messages use ``str.format`` placeholders, e.g. ``"Tag {names} has been
    deleted."``. Missing catalogues fall back to the untranslated key.
    """

    def __init__(self, language: str = "en", locale_dir: Optional[str] = None, domain: str = "tagadmin"):
        self.language = language
        self._translations = gettext.translation(
            domain,
            localedir=locale_dir,
            languages=[language],
            fallback=True
        )

    def translate(self, key: str, args: Optional[Dict[str, Any]] = None) -> str:
        """Translate a message key."""
        message = self._translations.gettext(key)
        return message.format(**args) if args else message

    def translate_plural(
        self,
        singular: str,
        plural: str,
        n: int,
        args: Optional[Dict[str, Any]] = None
    ) -> str:
        """Translate a message choosing singular or plural form by ``n``."""
        message = self._translations.ngettext(singular, plural, n)
        return message.format(**(args or {}))
