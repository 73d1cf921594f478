"""Audio playback protocol.

Defines the interface decoded speech is handed to. How the samples reach a
speaker (or a file) is up to the implementation.
"""

from collections.abc import Sequence
from typing import Protocol


class AudioPlayback(Protocol):
    """Interface for audio output playback."""

    def play(self, samples: Sequence[float], sample_rate: int, channel_count: int = 1) -> None:
        """Play normalized float samples synchronously.

        Blocks until playback is complete.

        Args:
            samples: Interleaved samples in [-1, 1)
            sample_rate: Sample rate in Hz
            channel_count: Number of interleaved channels

        Raises:
            RuntimeError: If playback fails
        """
        ...

    def stop(self) -> None:
        """Stop current playback.

        Safe to call even if nothing is playing.
        """
        ...

    @property
    def is_playing(self) -> bool:
        """Return True if audio is currently playing."""
        ...


__all__ = ["AudioPlayback"]
