"""Environment-driven settings for SpecFlow."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

TITLE_MAX_LENGTH_ENV = "SPECFLOW_TITLE_MAX_LENGTH"
STRICT_TRANSITIONS_ENV = "SPECFLOW_STRICT_TRANSITIONS"
LOG_LEVEL_ENV = "SPECFLOW_LOG_LEVEL"
LOG_FILE_ENV = "SPECFLOW_LOG_FILE"

DEFAULT_TITLE_MAX_LENGTH = 50

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(slots=True)
class SpecFlowSettings:
    """Runtime knobs for the store, the controller and logging."""

    title_max_length: int = DEFAULT_TITLE_MAX_LENGTH
    strict_transitions: bool = True
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SpecFlowSettings":
        """Build settings from ``SPECFLOW_*`` environment variables."""
        env = os.environ if environ is None else environ

        title_max_length = DEFAULT_TITLE_MAX_LENGTH
        raw_length = env.get(TITLE_MAX_LENGTH_ENV)
        if raw_length:
            try:
                title_max_length = int(raw_length)
            except ValueError:
                raise ValueError(
                    f"{TITLE_MAX_LENGTH_ENV} must be an integer, got '{raw_length}'"
                ) from None
            if title_max_length <= 0:
                raise ValueError(f"{TITLE_MAX_LENGTH_ENV} must be positive, got {title_max_length}")

        strict = True
        raw_strict = env.get(STRICT_TRANSITIONS_ENV)
        if raw_strict:
            lowered = raw_strict.strip().lower()
            if lowered in _TRUE_VALUES:
                strict = True
            elif lowered in _FALSE_VALUES:
                strict = False
            else:
                raise ValueError(
                    f"{STRICT_TRANSITIONS_ENV} must be a boolean flag, got '{raw_strict}'"
                )

        raw_level = env.get(LOG_LEVEL_ENV)
        log_level = (raw_level or "").strip().upper() or "INFO"
        # getLevelName maps known names to their numeric level
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"{LOG_LEVEL_ENV} must be a logging level name, got '{raw_level}'")

        raw_log_file = env.get(LOG_FILE_ENV)
        log_file = Path(raw_log_file).expanduser() if raw_log_file else None

        return cls(
            title_max_length=title_max_length,
            strict_transitions=strict,
            log_level=log_level,
            log_file=log_file,
        )
