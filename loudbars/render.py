"""Foreground render loop that draws the chart and decides when to stop."""

from __future__ import annotations

import enum
from typing import List, Optional, Protocol, Sequence, Tuple

from loudbars.config import VisualizerConfig
from loudbars.levels import LevelBuffer
from loudbars.utils.logger import get_logger


logger = get_logger(__name__)


class ChartSurface(Protocol):
    def draw(self, data: Sequence[Tuple[str, int]]) -> None: ...

    def poll_key(self, timeout: float) -> Optional[str]: ...


class PlaybackStatus(Protocol):
    def empty(self) -> bool: ...


class LoopState(enum.Enum):
    RUNNING = "running"
    TERMINATING = "terminating"


def bar_data(levels: Sequence[float], scale: int = 100) -> List[Tuple[str, int]]:
    """Label each level by its window position and scale it to a bar height."""
    return [(str(index), int(round(level * scale))) for index, level in enumerate(levels)]


class RenderLoop:
    """Poll the level history and keyboard on a fixed tick until quit or playback ends."""

    def __init__(
        self,
        levels: LevelBuffer,
        surface: ChartSurface,
        player: PlaybackStatus,
        config: Optional[VisualizerConfig] = None,
    ) -> None:
        self._levels = levels
        self._surface = surface
        self._player = player
        self._config = config or VisualizerConfig()
        self._state = LoopState.RUNNING
        self._reason: Optional[str] = None
        self._frames = 0

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def reason(self) -> Optional[str]:
        """Why the loop stopped: ``"quit"`` or ``"playback-finished"``."""
        return self._reason

    @property
    def frames(self) -> int:
        return self._frames

    def step(self) -> LoopState:
        """Run one draw/input/completion cycle."""
        if self._state is LoopState.TERMINATING:
            return self._state

        self._surface.draw(bar_data(self._levels.snapshot(), self._config.bar_scale))
        self._frames += 1

        key = self._surface.poll_key(self._config.poll_seconds)
        if key == self._config.quit_key:
            self._terminate("quit")
        elif self._player.empty():
            self._terminate("playback-finished")
        return self._state

    def run(self) -> str:
        """Loop until terminating; return the reason."""
        logger.info("Render loop started")
        while self.step() is LoopState.RUNNING:
            pass
        return self._reason or ""

    def _terminate(self, reason: str) -> None:
        self._state = LoopState.TERMINATING
        self._reason = reason
        logger.info("Render loop stopping ({}) after {} frames", reason, self._frames)
