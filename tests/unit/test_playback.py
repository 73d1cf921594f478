"""Unit tests for audio playback backends."""

from pathlib import Path
from unittest import mock

import pytest

from cogtts.audio import MockAudioPlayback, create_audio_playback, decode_wav
from cogtts.audio.playback import AudioPlayback
from cogtts.audio.wav_file import WavFilePlayback
from cogtts.config import AudioConfig


class TestMockAudioPlayback:
    """Tests for MockAudioPlayback."""

    def test_records_played_audio(self) -> None:
        """Test that play() records samples and sample rate."""
        playback = MockAudioPlayback()
        playback.play([0.1, 0.2], 24000)

        assert playback.play_count == 1
        assert playback.played_samples == [0.1, 0.2]
        assert playback.played_sample_rate == 24000
        assert playback.all_played == [([0.1, 0.2], 24000, 1)]

    def test_empty_state(self) -> None:
        playback = MockAudioPlayback()
        assert playback.play_count == 0
        assert playback.played_samples is None
        assert playback.played_sample_rate is None
        assert playback.is_playing is False

    def test_clear(self) -> None:
        playback = MockAudioPlayback()
        playback.play([0.0], 8000)
        playback.clear()
        assert playback.play_count == 0

    def test_satisfies_protocol(self) -> None:
        playback: AudioPlayback = MockAudioPlayback()
        playback.stop()


class TestWavFilePlayback:
    """Tests for WavFilePlayback."""

    def test_writes_decodable_file(self, tmp_path: Path) -> None:
        """The written file decodes back to the played samples."""
        path = tmp_path / "nested" / "out.wav"
        playback = WavFilePlayback(path)

        playback.play([0.5, -0.5, 0.0], 24000)

        buffer = decode_wav(path.read_bytes())
        assert buffer.sample_rate == 24000
        assert buffer.samples == pytest.approx([0.5, -0.5, 0.0], abs=1 / 32768.0)
        assert playback.is_playing is False

    def test_overwrites_on_each_play(self, tmp_path: Path) -> None:
        path = tmp_path / "out.wav"
        playback = WavFilePlayback(path)
        playback.play([0.1] * 100, 16000)
        playback.play([0.1] * 10, 16000)

        assert len(decode_wav(path.read_bytes()).samples) == 10

    def test_write_failure_raises_runtime_error(self, tmp_path: Path) -> None:
        """A path that cannot be written raises RuntimeError."""
        blocker = tmp_path / "file"
        blocker.write_text("x")
        playback = WavFilePlayback(blocker / "out.wav")

        with pytest.raises(RuntimeError, match="Failed to write"):
            playback.play([0.0], 8000)


class TestCreateAudioPlayback:
    """Tests for the playback factory."""

    def test_use_mock(self) -> None:
        assert isinstance(create_audio_playback(use_mock=True), MockAudioPlayback)

    def test_mock_backend(self) -> None:
        playback = create_audio_playback(AudioConfig(backend="mock"))
        assert isinstance(playback, MockAudioPlayback)

    def test_wav_backend(self, tmp_path: Path) -> None:
        path = tmp_path / "speech.wav"
        playback = create_audio_playback(AudioConfig(backend="wav", output_path=str(path)))

        assert isinstance(playback, WavFilePlayback)
        assert playback.path == path

    def test_unknown_backend(self) -> None:
        with pytest.raises(RuntimeError, match="Unknown audio backend"):
            create_audio_playback(AudioConfig(backend="alsa"))

    def test_pyaudio_unavailable(self) -> None:
        """Selecting PyAudio without the library installed raises RuntimeError."""
        with mock.patch("cogtts.audio.backends.pyaudio_output.PYAUDIO_AVAILABLE", False):
            with pytest.raises(RuntimeError, match="PyAudio not available"):
                create_audio_playback(AudioConfig(backend="pyaudio"))
