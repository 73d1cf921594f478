"""Audio module for cogtts.

Decodes synthesized WAV payloads and hands the samples to a playback backend.

Usage:
    buffer = decode_wav(audio_bytes)
    playback = create_audio_playback(config.audio)
    playback.play(buffer.samples, buffer.sample_rate)
"""

import logging
from typing import TYPE_CHECKING

from .mock import MockAudioPlayback
from .playback import AudioPlayback
from .wav import AudioBuffer, WavPcmDecoder, decode_wav, encode_wav

if TYPE_CHECKING:
    from ..config import AudioConfig

logger = logging.getLogger(__name__)


def create_audio_playback(
    config: "AudioConfig | None" = None,
    use_mock: bool = False,
) -> AudioPlayback:
    """Create the playback backend named by the configuration.

    Args:
        config: Audio configuration (uses defaults if None)
        use_mock: If True, return mock implementation for testing

    Returns:
        AudioPlayback implementation

    Raises:
        RuntimeError: If the backend is unknown or unavailable
    """
    backend = "pyaudio"
    output_device = "default"
    output_path = "output.wav"

    if config is not None:
        backend = config.backend
        output_device = config.output_device
        output_path = config.output_path

    if use_mock or backend == "mock":
        logger.info("Audio: Using MockAudioPlayback")
        return MockAudioPlayback()

    if backend == "wav":
        from .wav_file import WavFilePlayback

        logger.info(f"Audio: Writing WAV output to {output_path}")
        return WavFilePlayback(output_path)

    if backend == "pyaudio":
        from .backends.pyaudio_output import PyAudioPlayback

        logger.info(f"Audio: Using PyAudioPlayback (device: {output_device})")
        return PyAudioPlayback(device_name=output_device)

    raise RuntimeError(f"Unknown audio backend: {backend}")


__all__ = [
    "AudioBuffer",
    "AudioPlayback",
    "MockAudioPlayback",
    "WavPcmDecoder",
    "create_audio_playback",
    "decode_wav",
    "encode_wav",
]
