from dataclasses import dataclass


@dataclass(frozen=True)
class AnalyzerConfig:
    """Configuration for the spectrum analyzer.
    
    Attributes:
        num_bars: Number of equal-width frequency buckets to display
        tick_rate_ms: Duration of one session tick in milliseconds
        window_size: Number of samples fed to each FFT window
        freq_low: Lower edge of the displayed frequency range (Hz)
        freq_high: Upper edge of the displayed frequency range (Hz)
    """
    num_bars: int = 48
    tick_rate_ms: int = 50
    window_size: int = 2048
    freq_low: float = 40.0
    freq_high: float = 5000.0
    
    def scratch_capacity(self, sample_rate: int) -> int:
        """Samples the scratch buffer holds: four ticks' worth of headroom."""
        return self.tick_rate_ms * 4 * sample_rate // 1000
    
    @property
    def tick_rate(self) -> float:
        """Tick duration in seconds."""
        return self.tick_rate_ms / 1000
