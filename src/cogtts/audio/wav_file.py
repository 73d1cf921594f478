"""Playback adapter that writes audio to a WAV file."""

import logging
from collections.abc import Sequence
from pathlib import Path

from .wav import encode_wav

logger = logging.getLogger(__name__)


class WavFilePlayback:
    """Writes each played buffer to a WAV file.

    Useful on headless machines and for saving synthesized speech.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize file playback.

        Args:
            path: Output file; overwritten on each play() call
        """
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        """Output file path."""
        return self._path

    def play(self, samples: Sequence[float], sample_rate: int, channel_count: int = 1) -> None:
        """Write samples to the output file."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_bytes(encode_wav(samples, sample_rate, channel_count))
        except OSError as e:
            raise RuntimeError(f"Failed to write {self._path}: {e}") from e
        logger.info(f"Wrote {len(samples)} samples at {sample_rate}Hz to {self._path}")

    def stop(self) -> None:
        """Nothing to stop; writes are synchronous."""

    @property
    def is_playing(self) -> bool:
        """Always False."""
        return False


__all__ = ["WavFilePlayback"]
