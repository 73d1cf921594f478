"""Unit tests for WAV decoding."""

import struct

import pytest

from cogtts.audio.wav import AudioBuffer, WavPcmDecoder, decode_wav, encode_wav
from cogtts.tts.errors import DecodeError


def build_wav(
    pcm: bytes,
    sample_rate: int = 16000,
    channels: int = 1,
    bits: int = 16,
    format_tag: int = 1,
    extra_chunks: list[tuple[bytes, bytes]] | None = None,
    data_size: int | None = None,
    include_data: bool = True,
) -> bytes:
    """Assemble a WAV file by hand so chunk layout can be controlled."""
    block_align = channels * bits // 8
    fmt = struct.pack(
        "<HHIIHH",
        format_tag,
        channels,
        sample_rate,
        sample_rate * block_align,
        block_align,
        bits,
    )
    body = b"WAVE" + b"fmt " + struct.pack("<I", len(fmt)) + fmt
    for chunk_id, payload in extra_chunks or []:
        body += chunk_id + struct.pack("<I", len(payload)) + payload
    if include_data:
        size = len(pcm) if data_size is None else data_size
        body += b"data" + struct.pack("<I", size) + pcm
    return b"RIFF" + struct.pack("<I", len(body)) + body


def pcm16(*values: int) -> bytes:
    return struct.pack(f"<{len(values)}h", *values)


class TestDecodeHeader:
    """Tests for header fields read by offset."""

    def test_reads_sample_rate(self) -> None:
        """Sample rate comes from the 4 bytes at offset 24."""
        buffer = decode_wav(build_wav(pcm16(0, 0), sample_rate=24000))
        assert buffer.sample_rate == 24000

    def test_output_is_always_mono(self) -> None:
        """Output channel count is normalized to 1."""
        buffer = decode_wav(build_wav(pcm16(1, 2, 3, 4), channels=2))
        assert buffer.channel_count == 1

    def test_converts_samples(self) -> None:
        """Samples are divided by 32768."""
        buffer = decode_wav(build_wav(pcm16(0, 16384, -16384, -32768, 32767)))
        assert buffer.samples == [0.0, 0.5, -0.5, -1.0, 32767 / 32768.0]

    def test_samples_in_range(self) -> None:
        """All samples fall in [-1, 1)."""
        buffer = decode_wav(build_wav(pcm16(-32768, 32767, 0)))
        assert all(-1.0 <= s < 1.0 for s in buffer.samples)


class TestChunkWalking:
    """Tests for locating the data chunk."""

    def test_skips_unrelated_chunks(self) -> None:
        """LIST and other chunks before data are skipped."""
        wav = build_wav(
            pcm16(100, 200),
            extra_chunks=[(b"LIST", b"INFOISFT" + b"\x00" * 10), (b"fact", b"\x02\x00\x00\x00")],
        )
        buffer = decode_wav(wav)
        assert buffer.samples == [100 / 32768.0, 200 / 32768.0]

    def test_missing_data_chunk(self) -> None:
        """A file without a data chunk raises DecodeError."""
        wav = build_wav(b"", include_data=False, extra_chunks=[(b"LIST", b"abcd")])
        with pytest.raises(DecodeError) as exc_info:
            decode_wav(wav)
        assert exc_info.value.reason == "no data chunk"

    def test_huge_chunk_size_does_not_loop(self) -> None:
        """A chunk claiming to be enormous ends the scan instead of reading past the end."""
        wav = build_wav(b"", include_data=False)
        wav += b"junk" + struct.pack("<I", 0xFFFFFFF0)
        with pytest.raises(DecodeError, match="no data chunk"):
            decode_wav(wav)

    def test_partial_chunk_header_at_end(self) -> None:
        """Trailing bytes shorter than a chunk header are ignored."""
        wav = build_wav(b"", include_data=False) + b"da"
        with pytest.raises(DecodeError, match="no data chunk"):
            decode_wav(wav)

    def test_truncated_data_chunk(self) -> None:
        """A data chunk declaring more bytes than present raises DecodeError."""
        wav = build_wav(pcm16(1, 2), data_size=100)
        with pytest.raises(DecodeError, match="truncated data chunk"):
            decode_wav(wav)

    def test_streaming_placeholder_size_reads_to_end(self) -> None:
        """A data size of 0xFFFFFFFF reads the rest of the buffer."""
        wav = build_wav(pcm16(5, 6, 7), data_size=0xFFFFFFFF)
        buffer = decode_wav(wav)
        assert len(buffer.samples) == 3

    def test_empty_data_chunk_before_other_chunks(self) -> None:
        """A data chunk declaring zero bytes yields no samples, even if chunks follow."""
        wav = build_wav(b"")
        wav += b"LIST" + struct.pack("<I", 4) + b"INFO"
        wav = wav[:4] + struct.pack("<I", len(wav) - 8) + wav[8:]

        buffer = decode_wav(wav)
        assert buffer.samples == []

    def test_zero_sizes_from_streaming_encoder_read_to_end(self) -> None:
        """Zero data and RIFF sizes together mean the length was never filled in."""
        wav = build_wav(pcm16(9, 8), data_size=0)
        wav = wav[:4] + struct.pack("<I", 0) + wav[8:]

        buffer = decode_wav(wav)
        assert buffer.samples == [9 / 32768.0, 8 / 32768.0]

    def test_trailing_odd_byte_ignored(self) -> None:
        """An odd final byte does not produce a sample."""
        wav = build_wav(pcm16(1, 2) + b"\x7f")
        buffer = decode_wav(wav)
        assert len(buffer.samples) == 2


class TestMalformedInput:
    """Tests for rejecting malformed payloads."""

    def test_empty_input(self) -> None:
        """Empty input raises DecodeError."""
        with pytest.raises(DecodeError, match="truncated header"):
            decode_wav(b"")

    def test_short_header(self) -> None:
        """Input shorter than the fixed header raises DecodeError."""
        with pytest.raises(DecodeError, match="truncated header"):
            decode_wav(b"RIFF\x00\x00\x00\x00WAVEfmt ")

    def test_not_riff(self) -> None:
        """Non-RIFF data (e.g. MP3) raises DecodeError."""
        with pytest.raises(DecodeError, match="RIFF"):
            decode_wav(b"ID3" + b"\x00" * 60)

    def test_zero_channels(self) -> None:
        """A zero channel count raises DecodeError."""
        with pytest.raises(DecodeError, match="channel"):
            decode_wav(build_wav(pcm16(1), channels=0))

    def test_mulaw_rejected(self) -> None:
        """8-bit mu-law WAV output is not decoded as PCM16."""
        wav = build_wav(b"\x7f\x80", bits=8, format_tag=7)
        with pytest.raises(DecodeError, match="unsupported"):
            decode_wav(wav)

    def test_decode_error_is_speech_error(self) -> None:
        """DecodeError is part of the SpeechError hierarchy."""
        from cogtts.tts.errors import SpeechError

        assert issubclass(DecodeError, SpeechError)


class TestStereo:
    """Tests for multi-channel input."""

    def test_keeps_left_channel_only(self) -> None:
        """N stereo frames decode to exactly N left-channel samples."""
        left = [1000, -2000, 3000, -4000]
        right = [7, 8, 9, 10]
        interleaved = [v for pair in zip(left, right, strict=True) for v in pair]
        buffer = decode_wav(build_wav(pcm16(*interleaved), channels=2))

        assert len(buffer.samples) == len(left)
        assert buffer.samples == [v / 32768.0 for v in left]

    def test_partial_stereo_frame_dropped(self) -> None:
        """A trailing left sample without its right partner is dropped."""
        buffer = decode_wav(build_wav(pcm16(1, 2, 3), channels=2))
        assert buffer.samples == [1 / 32768.0]


class TestRoundTrip:
    """Tests for encode_wav/decode_wav agreement."""

    def test_mono_round_trip_within_quantization(self) -> None:
        """Decoding an encoded buffer reproduces samples within 1/32768."""
        samples = [0.0, 0.25, -0.25, 0.999, -1.0, 0.123456, -0.654321]
        buffer = decode_wav(encode_wav(samples, 22050))

        assert buffer.sample_rate == 22050
        assert len(buffer.samples) == len(samples)
        for original, decoded in zip(samples, buffer.samples, strict=True):
            assert abs(original - decoded) <= 1 / 32768.0

    def test_stereo_encode_decodes_left(self) -> None:
        """encode_wav with two channels decodes to the left channel."""
        interleaved = [0.5, -0.5, 0.25, -0.25]
        buffer = decode_wav(encode_wav(interleaved, 16000, channels=2))
        assert buffer.samples == pytest.approx([0.5, 0.25], abs=1 / 32768.0)

    def test_encode_clips_out_of_range(self) -> None:
        """Samples outside [-1, 1] are clipped instead of wrapping."""
        buffer = decode_wav(encode_wav([1.5, -1.5], 8000))
        assert buffer.samples == [32767 / 32768.0, -1.0]


class TestAudioBuffer:
    """Tests for AudioBuffer helpers."""

    def test_duration(self) -> None:
        """Duration is derived from frames and sample rate."""
        buffer = AudioBuffer(samples=[0.0] * 24000, sample_rate=24000)
        assert buffer.duration_ms == 1000

    def test_to_pcm16(self) -> None:
        """to_pcm16 packs samples as little-endian int16."""
        buffer = AudioBuffer(samples=[0.5, -0.5], sample_rate=8000)
        assert buffer.to_pcm16() == pcm16(16384, -16384)

    def test_decoder_object(self) -> None:
        """WavPcmDecoder.decode delegates to decode_wav."""
        buffer = WavPcmDecoder().decode(build_wav(pcm16(0, 0, 0)))
        assert len(buffer.samples) == 3
