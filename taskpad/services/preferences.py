"""Theme preference persisted under its own storage key."""

import logging

from ..models.task import Theme
from .storage import StorageAdapter

logger = logging.getLogger(__name__)

DEFAULT_THEME_KEY = "theme"


class ThemePreferences:
    """Light/dark preference with best-effort persistence."""

    def __init__(
        self,
        storage: StorageAdapter,
        theme_key: str = DEFAULT_THEME_KEY,
        default: Theme = Theme.LIGHT,
    ):
        self._storage = storage
        self._theme_key = theme_key
        self._default = default
        self._theme = self._load()

    def _load(self) -> Theme:
        result = self._storage.load(self._theme_key)
        if not result.found:
            return self._default
        try:
            return Theme(result.value)
        except ValueError:
            logger.warning(f"Ignoring unknown stored theme {result.value!r}")
            return self._default

    def get_theme(self) -> Theme:
        return self._theme

    def set_theme(self, theme: Theme) -> Theme:
        self._theme = Theme(theme)
        self._storage.save(self._theme_key, self._theme.value)
        logger.info(f"Theme set to {self._theme.value}")
        return self._theme

    def toggle_theme(self) -> Theme:
        return self.set_theme(Theme.DARK if self._theme == Theme.LIGHT else Theme.LIGHT)
