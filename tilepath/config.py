"""
Tilepath Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from .logging_utils import debug_enabled

# Load .env file if it exists
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    # Scheduler cadence. The idle interval is short enough to poll several
    # times per 640ms game tick.
    TICK_RATE_MS: int = int(os.getenv("TILEPATH_TICK_RATE_MS", "80"))

    # Node expansions performed per work slice, shared by all pending queries
    ITERATIONS_PER_CALCULATION: int = int(os.getenv("TILEPATH_ITERATIONS", "1000"))

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    DATA_DIR: Path = Path(os.getenv("TILEPATH_DATA_DIR", str(PROJECT_ROOT / "data")))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors for unusable values."""
        if cls.TICK_RATE_MS <= 0:
            raise ValueError(
                "TILEPATH_TICK_RATE_MS must be a positive number of milliseconds "
                f"(got {cls.TICK_RATE_MS})"
            )

        if cls.ITERATIONS_PER_CALCULATION <= 0:
            raise ValueError(
                "TILEPATH_ITERATIONS must be >= 1 so every work slice makes progress "
                f"(got {cls.ITERATIONS_PER_CALCULATION})"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Tilepath Configuration:",
            f"  Idle Tick Rate: {cls.TICK_RATE_MS}ms",
            f"  Iterations Per Slice: {cls.ITERATIONS_PER_CALCULATION}",
            f"  Data Directory: {cls.DATA_DIR}",
            f"  Debug Logging: {debug_enabled()}",
        ]
        return "\n".join(lines)
