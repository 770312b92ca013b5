"""Terminal session and bar chart rendering built on rich."""

from __future__ import annotations

import os
import select
import sys
import termios
import tty
from typing import IO, List, Optional, Sequence, Tuple

from rich.console import Console, ConsoleOptions, RenderResult
from rich.live import Live
from rich.padding import Padding
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from loudbars.config import (
    BAR_COLOR,
    BAR_GAP,
    BAR_SCALE,
    BAR_WIDTH,
    CHART_TITLE,
    MARGIN,
    VALUE_STYLE,
)
from loudbars.errors import TerminalError
from loudbars.utils.logger import get_logger


logger = get_logger(__name__)

BarData = Sequence[Tuple[str, int]]

_EIGHTHS = " ▁▂▃▄▅▆▇█"


class BarChart:
    """Vertical bar chart: one column per ``(label, value)`` pair, labels underneath."""

    def __init__(
        self,
        data: BarData,
        max_value: int = BAR_SCALE,
        bar_width: int = BAR_WIDTH,
        bar_gap: int = BAR_GAP,
        bar_style: str = BAR_COLOR,
        value_style: str = VALUE_STYLE,
        height: Optional[int] = None,
    ) -> None:
        self.data = list(data)
        self.height = height
        self.max_value = max_value
        self.bar_width = bar_width
        self.bar_gap = bar_gap
        self.bar_style = Style.parse(bar_style)
        self.value_style = Style.parse(value_style)

    def visible_bars(self, width: int) -> List[Tuple[str, int]]:
        """Bars that fit into ``width`` columns, leftmost first."""
        count = (width + self.bar_gap) // (self.bar_width + self.bar_gap)
        return self.data[: max(count, 0)]

    def rows(self, width: int, height: int) -> List[Text]:
        bars = self.visible_bars(width)
        bar_rows = max(height - 1, 0)
        eighths = [self._eighths(value, bar_rows) for _, value in bars]
        gap = " " * self.bar_gap
        lines: List[Text] = []
        for row in reversed(range(bar_rows)):
            line = Text(no_wrap=True, overflow="crop")
            for index, ((_, value), filled) in enumerate(zip(bars, eighths)):
                if index:
                    line.append(gap)
                cell = min(max(filled - row * 8, 0), 8)
                label = str(value)
                if row == 0 and cell == 8 and len(label) <= self.bar_width:
                    line.append(label.center(self.bar_width), style=self.value_style)
                else:
                    line.append(_EIGHTHS[cell] * self.bar_width, style=self.bar_style)
            lines.append(line)
        if height > 0:
            labels = Text(no_wrap=True, overflow="crop")
            for index, (label, _) in enumerate(bars):
                if index:
                    labels.append(gap)
                labels.append(label[: self.bar_width].ljust(self.bar_width))
            lines.append(labels)
        return lines

    def _eighths(self, value: int, bar_rows: int) -> int:
        if self.max_value <= 0:
            return 0
        ratio = min(max(value / self.max_value, 0.0), 1.0)
        return int(round(ratio * bar_rows * 8))

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        height = self.height if self.height is not None else (options.height or options.size.height)
        yield from self.rows(options.max_width, height)


def build_chart(data: BarData, screen_height: int, max_value: int = BAR_SCALE) -> Padding:
    """Lay the bar chart out to fill ``screen_height`` rows inside a titled border and a one-cell margin."""
    panel_height = max(screen_height - 2 * MARGIN, 2)
    chart = BarChart(data, max_value=max_value, height=panel_height - 2)
    panel = Panel(chart, title=CHART_TITLE, expand=True, height=panel_height)
    return Padding(panel, MARGIN, expand=True)


class Terminal:
    """Own the terminal for the life of the chart: cbreak input plus alternate screen."""

    def __init__(
        self,
        console: Optional[Console] = None,
        stdin: Optional[IO[str]] = None,
        bar_scale: int = BAR_SCALE,
    ) -> None:
        self._console = console if console is not None else Console()
        self._stdin = stdin if stdin is not None else sys.stdin
        self._bar_scale = bar_scale
        self._saved_attrs: Optional[list] = None
        self._live: Optional[Live] = None

    @property
    def fd(self) -> int:
        return self._stdin.fileno()

    def __enter__(self) -> "Terminal":
        try:
            self._saved_attrs = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (termios.error, OSError, ValueError) as exc:
            raise TerminalError(f"Unable to configure terminal input: {exc}") from exc
        try:
            self._live = Live(
                self.chart([]),
                console=self._console,
                screen=True,
                auto_refresh=False,
                transient=True,
            )
            self._live.__enter__()
        except Exception:
            self._restore_input()
            raise
        logger.info("Terminal session started size={}", self._console.size)
        return self

    def __exit__(self, *exc_info) -> None:
        try:
            if self._live is not None:
                self._live.__exit__(None, None, None)
                self._live = None
        finally:
            self._restore_input()
        logger.info("Terminal restored")

    def draw(self, data: BarData) -> None:
        """Replace the screen contents with a chart of ``data``."""
        if self._live is None:
            raise TerminalError("Terminal.draw called outside of a session")
        try:
            self._live.update(self.chart(data), refresh=True)
        except OSError as exc:
            raise TerminalError(f"Terminal write failed: {exc}") from exc

    def chart(self, data: BarData) -> Padding:
        """Chart of ``data`` sized to the current console."""
        return build_chart(data, self._console.size.height, self._bar_scale)

    def poll_key(self, timeout: float) -> Optional[str]:
        """Wait up to ``timeout`` seconds for one keypress."""
        try:
            ready, _, _ = select.select([self.fd], [], [], timeout)
            if not ready:
                return None
            data = os.read(self.fd, 1)
        except OSError as exc:
            raise TerminalError(f"Terminal read failed: {exc}") from exc
        if not data:
            return None
        return data.decode("utf-8", errors="ignore") or None

    def _restore_input(self) -> None:
        if self._saved_attrs is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved_attrs)
        finally:
            self._saved_attrs = None
