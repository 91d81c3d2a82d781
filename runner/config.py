"""Environment-variable-based configuration for the timeline runner."""

from __future__ import annotations

import os
from pathlib import Path

_seed = os.environ.get("GHOSTING_SEED", "")

DEFAULT_SEED: int | None = int(_seed) if _seed.strip() else None
LOG_LEVEL: str = os.environ.get("GHOSTING_LOG_LEVEL", "INFO").upper()
OUTPUT_DIR: Path = Path(os.environ.get("GHOSTING_OUTPUT_DIR", ".")).expanduser()
