"""
flarematch – join flare-survey sites to flare-volume estimates and regress.
Top-level package.  Exposes a tiny public API and
configures logging early so every sub-module inherits it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Final

__all__ = ["logger", "INPUT_DIR", "PROJECT_ROOT", "__version__"]

__version__ = "0.3.0"

# ---------- paths ----------
PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parent.parent
INPUT_DIR: Final[Path] = PROJECT_ROOT / "input"

# ---------- logging ----------
LOG_LEVEL = os.getenv("FLAREMATCH_LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger("flarematch")
logger.debug("Logging initialised (level=%s)", LOG_LEVEL)
