"""Fixed visualizer settings for Loudbars."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict


CONFIG_DIR = Path.home() / ".loudbars"

AUDIO_PATH = Path("src") / "pink.mp3"

# Number of bars kept on screen.
WINDOW_SIZE = 100
CHUNKS_PER_SECOND = 20
CHUNK_SECONDS = 1.0 / CHUNKS_PER_SECOND
POLL_SECONDS = 0.05

DB_FLOOR = -60.0
DB_CEIL = 0.0
BAR_SCALE = 100

QUIT_KEY = "q"

CHART_TITLE = "Audio Visualization"
BAR_WIDTH = 1
BAR_GAP = 0
BAR_COLOR = "yellow"
VALUE_STYLE = "black on yellow"
MARGIN = 1


@dataclass(frozen=True)
class VisualizerConfig:
    """Bundle of the constants that drive extraction and rendering."""

    audio_path: Path = AUDIO_PATH
    window_size: int = WINDOW_SIZE
    chunks_per_second: int = CHUNKS_PER_SECOND
    poll_seconds: float = POLL_SECONDS
    db_floor: float = DB_FLOOR
    db_ceil: float = DB_CEIL
    bar_scale: int = BAR_SCALE
    quit_key: str = QUIT_KEY

    @property
    def chunk_seconds(self) -> float:
        return 1.0 / self.chunks_per_second

    def chunk_size(self, sample_rate: int) -> int:
        """Return the number of raw samples in one chunk at ``sample_rate``."""
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}")
        return max(sample_rate // self.chunks_per_second, 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a loggable dictionary."""
        data = asdict(self)
        data["audio_path"] = str(self.audio_path)
        return data
