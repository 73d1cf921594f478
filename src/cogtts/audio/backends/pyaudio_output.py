"""Speaker output using PyAudio.

Provides an AudioPlayback implementation backed by PortAudio.
"""

import threading
from collections.abc import Sequence
from typing import Any

from ..wav import _floats_to_pcm16

# PyAudio import with fallback for type hints
try:
    import pyaudio

    PYAUDIO_AVAILABLE = True
except ImportError:
    PYAUDIO_AVAILABLE = False
    pyaudio = None

FRAMES_PER_WRITE = 1024


class PyAudioPlayback:
    """Audio playback through the default (or a named) output device.

    Implements the AudioPlayback protocol.
    """

    def __init__(self, device_name: str = "default") -> None:
        """Initialize PyAudio playback.

        Args:
            device_name: Audio output device name or "default"

        Raises:
            RuntimeError: If PyAudio is not available
        """
        if not PYAUDIO_AVAILABLE:
            raise RuntimeError("PyAudio not available. Install with: pip install pyaudio")

        self._device_name = device_name
        self._is_playing = False
        self._stop_flag = threading.Event()

    def _get_device_index(self, pa: Any) -> int | None:
        """Get device index for configured device name."""
        if self._device_name == "default":
            return None

        for i in range(pa.get_device_count()):
            info = pa.get_device_info_by_index(i)
            if self._device_name.lower() in info["name"].lower() and info["maxOutputChannels"] > 0:
                return i

        return None

    def play(self, samples: Sequence[float], sample_rate: int, channel_count: int = 1) -> None:
        """Play samples synchronously."""
        audio = _floats_to_pcm16(samples)
        bytes_per_write = FRAMES_PER_WRITE * 2 * channel_count

        self._is_playing = True
        self._stop_flag.clear()

        pa = pyaudio.PyAudio()
        try:
            stream = pa.open(
                format=pyaudio.paInt16,
                channels=channel_count,
                rate=sample_rate,
                output=True,
                output_device_index=self._get_device_index(pa),
            )

            try:
                for i in range(0, len(audio), bytes_per_write):
                    if self._stop_flag.is_set():
                        break
                    stream.write(audio[i : i + bytes_per_write])
            finally:
                stream.stop_stream()
                stream.close()
        except OSError as e:
            raise RuntimeError(f"PyAudio playback failed: {e}") from e
        finally:
            pa.terminate()
            self._is_playing = False

    def stop(self) -> None:
        """Stop current playback."""
        self._stop_flag.set()

    @property
    def is_playing(self) -> bool:
        """Return True if audio is playing."""
        return self._is_playing


__all__ = ["PYAUDIO_AVAILABLE", "PyAudioPlayback"]
