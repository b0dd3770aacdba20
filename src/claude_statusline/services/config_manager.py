"""Status line configuration manager wrapping QSettings."""

import logging
import os
from typing import Any

from PySide6.QtCore import QSettings

from claude_statusline.types.settings import CostStrategyName, RenderSettings

logger = logging.getLogger(__name__)

ORGANIZATION = "claude-statusline"
APPLICATION = "statusline"
CONFIG_PATH_ENV = "CLAUDE_STATUSLINE_CONFIG"

# Default values
DEFAULTS: dict[str, Any] = {
    "layout/defaultWidth": 80,
    "layout/glyphBuffer": 4,
    "layout/indent": 2,
    "cost/strategy": CostStrategyName.AUTO.value,
    "git/enabled": True,
    "git/timeout": 1.0,
    "input/timeout": 2.0,
    "advanced/debugLogging": False,
}


class ConfigManager:
    """Typed access to the status line's INI settings.

    Reads ~/.config/claude-statusline/statusline.ini by default, or the file
    named by CLAUDE_STATUSLINE_CONFIG.
    """

    def __init__(self, path: str | None = None):
        path = path or os.environ.get(CONFIG_PATH_ENV)
        if path:
            self._settings = QSettings(str(path), QSettings.Format.IniFormat)
        else:
            self._settings = QSettings(
                QSettings.Format.IniFormat,
                QSettings.Scope.UserScope,
                ORGANIZATION,
                APPLICATION,
            )

    def get_string(self, key: str) -> str:
        return str(self._settings.value(key, DEFAULTS.get(key, "")))

    def get_int(self, key: str) -> int:
        val = self._settings.value(key, DEFAULTS.get(key, 0))
        try:
            return int(val)
        except (ValueError, TypeError):
            logger.warning("Setting %s=%r is not an integer, using default", key, val)
            return DEFAULTS.get(key, 0)

    def get_float(self, key: str) -> float:
        val = self._settings.value(key, DEFAULTS.get(key, 0.0))
        try:
            return float(val)
        except (ValueError, TypeError):
            logger.warning("Setting %s=%r is not a number, using default", key, val)
            return DEFAULTS.get(key, 0.0)

    def get_bool(self, key: str) -> bool:
        val = self._settings.value(key, DEFAULTS.get(key, False))
        if isinstance(val, bool):
            return val
        if isinstance(val, str):
            return val.lower() in ("true", "1", "yes")
        return bool(val)

    def load_render_settings(self) -> RenderSettings:
        """Resolve every setting into a RenderSettings, repairing bad values."""
        strategy_name = self.get_string("cost/strategy").strip().lower()
        try:
            strategy = CostStrategyName(strategy_name)
        except ValueError:
            logger.warning("Unknown cost strategy %r, using auto", strategy_name)
            strategy = CostStrategyName.AUTO

        default_width = self.get_int("layout/defaultWidth")
        git_timeout = self.get_float("git/timeout")
        input_timeout = self.get_float("input/timeout")

        return RenderSettings(
            default_width=default_width if default_width > 0 else DEFAULTS["layout/defaultWidth"],
            glyph_buffer=max(0, self.get_int("layout/glyphBuffer")),
            indent=max(0, self.get_int("layout/indent")),
            cost_strategy=strategy,
            git_enabled=self.get_bool("git/enabled"),
            git_timeout=git_timeout if git_timeout > 0 else DEFAULTS["git/timeout"],
            input_timeout=input_timeout if input_timeout > 0 else DEFAULTS["input/timeout"],
            debug_logging=self.get_bool("advanced/debugLogging"),
        )
