"""Background loudness extraction paced to playback speed."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

import numpy as np

from loudbars.config import VisualizerConfig
from loudbars.levels import LevelBuffer
from loudbars.utils.levels_meter import chunk_loudness, iter_chunks
from loudbars.utils.logger import get_logger


logger = get_logger(__name__)

SleepFn = Callable[[float], None]


class LoudnessExtractor:
    """Turn the decoded sample stream into loudness values, one chunk at a time."""

    def __init__(
        self,
        samples: np.ndarray,
        sample_rate: int,
        levels: LevelBuffer,
        config: Optional[VisualizerConfig] = None,
        sleep: SleepFn = time.sleep,
    ) -> None:
        self._config = config or VisualizerConfig()
        self._samples = samples
        self._chunk_size = self._config.chunk_size(sample_rate)
        self._interval = self._config.chunk_seconds
        self._levels = levels
        self._sleep = sleep
        self._processed = 0
        self._thread: Optional[threading.Thread] = None

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def chunks_processed(self) -> int:
        """Number of loudness values emitted so far."""
        return self._processed

    def start(self) -> threading.Thread:
        """Run extraction on a daemon thread; it ends with the sample stream."""
        if self._thread is not None:
            raise RuntimeError("LoudnessExtractor.start called twice")
        self._thread = threading.Thread(target=self.run, name="loudness-extractor", daemon=True)
        self._thread.start()
        return self._thread

    def run(self) -> None:
        """Process every chunk in order, sleeping one chunk interval after each."""
        logger.info(
            "Extracting loudness from {} samples in chunks of {}",
            len(self._samples),
            self._chunk_size,
        )
        for chunk in iter_chunks(self._samples, self._chunk_size):
            self._levels.append(self._measure(chunk))
            self._processed += 1
            self._sleep(self._interval)
        logger.info("Loudness extraction finished after {} chunks", self._processed)

    def _measure(self, chunk: np.ndarray) -> float:
        try:
            return chunk_loudness(chunk, self._config.db_floor, self._config.db_ceil)
        except (ArithmeticError, ValueError) as exc:
            logger.bind(error=str(exc)).warning("Loudness of chunk {} clamped to 0", self._processed)
            return 0.0
