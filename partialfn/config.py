"""Runtime settings for the partialfn command line.

Values come from the process environment, after merging a ``.env`` file
from the working directory (existing variables win).

  PARTIALFN_LOG_LEVEL      logging level name (default WARNING)
  PARTIALFN_SHOW_BINDINGS  "1"/"true"/"yes" to print clause bindings in ``probe``
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    show_bindings: bool = False

    @property
    def log_level_number(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> Settings:
        """Build settings from the environment.

        Raises ValueError for an unknown log level name.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        level = os.environ.get("PARTIALFN_LOG_LEVEL", "WARNING").strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"PARTIALFN_LOG_LEVEL: unknown logging level {level!r}")

        show = os.environ.get("PARTIALFN_SHOW_BINDINGS", "").strip().lower() in _TRUTHY
        return cls(log_level=level, show_bindings=show)
