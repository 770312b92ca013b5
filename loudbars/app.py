"""Main application orchestration for Loudbars."""

from __future__ import annotations

import sys
from typing import Optional

from loudbars import __version__
from loudbars.audio import AudioPlayer, decode_file
from loudbars.config import VisualizerConfig
from loudbars.errors import LoudbarsError
from loudbars.extractor import LoudnessExtractor
from loudbars.levels import LevelBuffer
from loudbars.render import RenderLoop
from loudbars.terminal import Terminal
from loudbars.utils.logger import get_logger, setup_logging


logger = get_logger(__name__)


def run(config: VisualizerConfig, terminal: Optional[Terminal] = None) -> str:
    """Decode, play and chart the configured file; return why the chart closed.

    Everything is set up inside the terminal session so that a failing decode
    or audio device still leaves the terminal restored.
    """
    with terminal or Terminal(bar_scale=config.bar_scale) as surface:
        audio = decode_file(config.audio_path)
        levels = LevelBuffer(config.window_size)
        extractor = LoudnessExtractor(audio.samples, audio.sample_rate, levels, config)
        with AudioPlayer(audio) as player:
            extractor.start()
            player.play()
            return RenderLoop(levels, surface, player, config).run()


def main() -> int:
    """Launch the terminal loudness visualizer."""
    setup_logging()
    config = VisualizerConfig()
    logger.info("Starting loudbars {} config={}", __version__, config.to_dict())
    try:
        reason = run(config)
    except LoudbarsError as exc:
        logger.exception("Loudbars failed: {}", exc)
        print(f"loudbars: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        reason = "interrupted"
    logger.info("Loudbars exiting ({})", reason)
    return 0


if __name__ == "__main__":
    sys.exit(main())
