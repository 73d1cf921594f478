"""Mock audio playback for testing.

Records every buffer it is asked to play instead of producing sound.
"""

from collections.abc import Sequence


class MockAudioPlayback:
    """Mock audio playback for testing.

    Records all audio that would be played for later verification.
    Implements the AudioPlayback protocol.
    """

    def __init__(self) -> None:
        self._is_playing = False
        self._played: list[tuple[list[float], int, int]] = []

    def play(self, samples: Sequence[float], sample_rate: int, channel_count: int = 1) -> None:
        """Record audio that would be played."""
        self._played.append((list(samples), sample_rate, channel_count))

    def stop(self) -> None:
        """Stop mock playback."""
        self._is_playing = False

    @property
    def is_playing(self) -> bool:
        """Return True if 'playing'."""
        return self._is_playing

    @property
    def play_count(self) -> int:
        """Get number of times play was called."""
        return len(self._played)

    @property
    def played_samples(self) -> list[float] | None:
        """Get the last played samples (convenience property)."""
        if not self._played:
            return None
        return self._played[-1][0]

    @property
    def played_sample_rate(self) -> int | None:
        """Get the sample rate of the last played audio."""
        if not self._played:
            return None
        return self._played[-1][1]

    @property
    def all_played(self) -> list[tuple[list[float], int, int]]:
        """Get all (samples, sample_rate, channel_count) tuples that were played."""
        return self._played.copy()

    def clear(self) -> None:
        """Clear recorded audio."""
        self._played.clear()


__all__ = ["MockAudioPlayback"]
