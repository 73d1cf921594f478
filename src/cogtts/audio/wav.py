"""RIFF/WAV decoding into normalized float samples.

Reads the header by fixed offsets, walks the chunk list to the "data" chunk
with bounds checks, and converts little-endian 16-bit PCM to floats in [-1, 1).
Multi-channel input keeps the first (left) channel only.
"""

import io
import logging
import struct
import wave
from collections.abc import Sequence
from dataclasses import dataclass

from ..tts.errors import DecodeError

logger = logging.getLogger(__name__)

RIFF_HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8
CHANNELS_OFFSET = 22
SAMPLE_RATE_OFFSET = 24
MIN_HEADER_SIZE = SAMPLE_RATE_OFFSET + 4

WAVE_FORMAT_PCM = 1
WAVE_FORMAT_EXTENSIBLE = 0xFFFE
# Streaming encoders write this when the final length is unknown
UNKNOWN_SIZE = 0xFFFFFFFF
RIFF_SIZE_OFFSET = 4


@dataclass
class AudioBuffer:
    """Decoded audio ready for playback.

    Attributes:
        samples: Normalized samples in [-1, 1)
        sample_rate: Sample rate in Hz
        channel_count: Number of interleaved channels in samples
    """

    samples: list[float]
    sample_rate: int
    channel_count: int = 1

    @property
    def frame_count(self) -> int:
        """Number of sample frames."""
        return len(self.samples) // max(1, self.channel_count)

    @property
    def duration_ms(self) -> int:
        """Audio duration in milliseconds."""
        if self.sample_rate <= 0:
            return 0
        return int(self.frame_count * 1000 / self.sample_rate)

    def to_pcm16(self) -> bytes:
        """Encode samples as little-endian 16-bit PCM."""
        return _floats_to_pcm16(self.samples)


def _floats_to_pcm16(samples: Sequence[float]) -> bytes:
    clipped = [max(-32768, min(32767, round(s * 32768.0))) for s in samples]
    return struct.pack(f"<{len(clipped)}h", *clipped)


def _find_chunk(data: bytes, chunk_id: bytes) -> tuple[int, int] | None:
    """Return (payload offset, declared size) of the first matching chunk."""
    pos = RIFF_HEADER_SIZE
    while pos + CHUNK_HEADER_SIZE <= len(data):
        current_id = data[pos : pos + 4]
        (size,) = struct.unpack_from("<I", data, pos + 4)
        if current_id == chunk_id:
            return pos + CHUNK_HEADER_SIZE, size
        pos += CHUNK_HEADER_SIZE + size
    return None


def _check_fmt_chunk(data: bytes) -> None:
    """Reject encodings other than 16-bit PCM when a fmt chunk is present."""
    found = _find_chunk(data, b"fmt ")
    if found is None:
        return
    offset, size = found
    if size < 16 or offset + 16 > len(data):
        raise DecodeError("truncated fmt chunk")
    format_tag = struct.unpack_from("<H", data, offset)[0]
    bits_per_sample = struct.unpack_from("<H", data, offset + 14)[0]
    if format_tag not in (WAVE_FORMAT_PCM, WAVE_FORMAT_EXTENSIBLE):
        raise DecodeError(f"unsupported format tag {format_tag:#06x}")
    if bits_per_sample != 16:
        raise DecodeError(f"unsupported bit depth {bits_per_sample}")


def decode_wav(data: bytes) -> AudioBuffer:
    """Decode a PCM16 WAV byte buffer.

    Args:
        data: Complete RIFF/WAV file contents

    Returns:
        AudioBuffer with mono samples, the file's sample rate, channel_count 1

    Raises:
        DecodeError: If the header is malformed, the stream is truncated,
            or no data chunk is present
    """
    data = bytes(data)
    if len(data) < MIN_HEADER_SIZE:
        raise DecodeError(f"truncated header ({len(data)} bytes)")
    if data[0:4] != b"RIFF" or data[8:12] != b"WAVE":
        raise DecodeError("missing RIFF/WAVE header")

    # Only the low byte of the 2-byte channel field is read
    channels = data[CHANNELS_OFFSET]
    (sample_rate,) = struct.unpack_from("<I", data, SAMPLE_RATE_OFFSET)
    if channels == 0:
        raise DecodeError("channel count is zero")
    if sample_rate == 0:
        raise DecodeError("sample rate is zero")

    _check_fmt_chunk(data)

    found = _find_chunk(data, b"data")
    if found is None:
        raise DecodeError("no data chunk")
    offset, size = found

    available = len(data) - offset
    (riff_size,) = struct.unpack_from("<I", data, RIFF_SIZE_OFFSET)
    # A zero data size is only a placeholder when the RIFF size is unset too
    if size == UNKNOWN_SIZE or (size == 0 and riff_size in (0, UNKNOWN_SIZE)):
        size = available
    elif size > available:
        raise DecodeError(f"truncated data chunk ({available} of {size} bytes)")

    sample_count = size // 2
    pcm = struct.unpack_from(f"<{sample_count}h", data, offset)
    if channels > 1:
        # Drop every channel but the first; a trailing partial frame is ignored
        frame_count = sample_count // channels
        pcm = pcm[0 : frame_count * channels : channels]

    samples = [s / 32768.0 for s in pcm]
    logger.debug(
        f"Decoded {len(samples)} samples at {sample_rate}Hz "
        f"(source channels: {channels})"
    )
    return AudioBuffer(samples=samples, sample_rate=sample_rate, channel_count=1)


class WavPcmDecoder:
    """Decoder object wrapping decode_wav."""

    def decode(self, data: bytes) -> AudioBuffer:
        """Decode a PCM16 WAV byte buffer. See decode_wav."""
        return decode_wav(data)


def encode_wav(samples: Sequence[float], sample_rate: int, channels: int = 1) -> bytes:
    """Encode interleaved float samples as a PCM16 WAV file.

    Args:
        samples: Interleaved samples in [-1, 1]
        sample_rate: Sample rate in Hz
        channels: Number of interleaved channels

    Returns:
        Complete WAV file bytes
    """
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav_file:
        wav_file.setnchannels(channels)
        wav_file.setsampwidth(2)
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(_floats_to_pcm16(samples))
    return buffer.getvalue()


__all__ = ["AudioBuffer", "WavPcmDecoder", "decode_wav", "encode_wav"]
