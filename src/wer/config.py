"""Runtime settings read from the environment."""

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel

DEFAULT_THEME = "monokai"


class WerSettings(BaseModel):
    """Settings that influence output, not attribution."""

    no_color: bool = False
    theme: str = DEFAULT_THEME
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WerSettings":
        """Read settings from ``environ`` (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ

        log_level = env.get("WER_LOG_LEVEL", "WARNING").upper()
        if env.get("WER_DEBUG"):
            log_level = "DEBUG"

        return cls(
            # https://no-color.org: any non-empty value disables color
            no_color=bool(env.get("NO_COLOR")),
            theme=env.get("WER_THEME") or DEFAULT_THEME,
            log_level=log_level,
        )

    @property
    def log_level_number(self) -> int:
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING
