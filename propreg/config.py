"""Runtime configuration and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    seed_manifest: Optional[str] = None  # YAML manifest loaded at startup

    @classmethod
    def from_env(cls) -> Settings:
        """Read settings from ``PROPREG_*`` environment variables."""
        return cls(
            host=os.environ.get("PROPREG_HOST", cls.host),
            port=int(os.environ.get("PROPREG_PORT", cls.port)),
            log_level=os.environ.get("PROPREG_LOG_LEVEL", cls.log_level).upper(),
            seed_manifest=os.environ.get("PROPREG_SEED_MANIFEST") or None,
        )


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler. Safe to call more than once."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())
