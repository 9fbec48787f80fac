import numpy as np
import logging
from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Static
from rich.text import Text

from styles import COLOR_PRIMARY

logger = logging.getLogger(__name__)

MAX_BAR_HEIGHT = 12
BAR_WIDTH = 2
BAR_SCALE = 1000.0
BAR_FLOOR = 10.0
MIN_FULL_SCALE = 100.0
BAR_CHARS = " ▁▂▃▄▅▆▇█"


class SpectrumView(Container):
    """Bar chart of the analyzer's frequency buckets."""

    DEFAULT_CSS = """
    SpectrumView {
        height: auto;
        width: auto;
        border: round #ffd700;
        border-title-style: bold;
        padding: 0 1;
    }

    SpectrumView > Static {
        width: auto;
    }
    """

    def __init__(self, num_bars: int, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.num_bars = num_bars
        self.max_bar_height = MAX_BAR_HEIGHT
        self.border_title = "tickplay"

    def compose(self) -> ComposeResult:
        yield Static(self._render_bars(np.zeros(self.num_bars), COLOR_PRIMARY), id="spectrum-content")

    def bar_heights(self, bars: np.ndarray) -> np.ndarray:
        """Convert bar magnitudes to heights in eighths of a row.

        Magnitudes are scaled like a terminal bar chart (value * 1000 + 10) and
        fitted to the tallest bar, with a minimum full scale so silence stays
        near the baseline.

        Args:
            bars: Bar magnitudes from the analyzer

        Returns:
            Integer heights in eighths, between 0 and max_bar_height * 8
        """
        values = np.asarray(bars, dtype=np.float64) * BAR_SCALE + BAR_FLOOR
        full_scale = max(float(values.max(initial=0.0)), MIN_FULL_SCALE)
        eighths = values / full_scale * self.max_bar_height * 8
        return np.clip(eighths.astype(int), 0, self.max_bar_height * 8)

    def _render_bars(self, bars: np.ndarray, color: str) -> Text:
        """Render bars top row first, using partial blocks for the bar tips."""
        heights = self.bar_heights(bars)
        result = Text()

        for row in range(self.max_bar_height, 0, -1):
            line = ""
            for height in heights:
                filled = min(max(height - (row - 1) * 8, 0), 8)
                line += BAR_CHARS[filled] * BAR_WIDTH
            result.append(line, style=color)
            if row > 1:
                result.append("\n")

        return result

    def update_bars(self, bars: np.ndarray, color: str) -> None:
        """Redraw the chart with new bar magnitudes."""
        try:
            self.styles.border = ("round", color)
            content = self.query_one("#spectrum-content", Static)
            content.update(self._render_bars(bars, color))
        except Exception as e:
            logger.error(f"Error updating spectrum: {e}")
