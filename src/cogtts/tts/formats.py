"""Audio output formats accepted by the synthesis endpoint.

Each member's value is the literal sent in the X-Microsoft-OutputFormat header.
"""

from enum import Enum


class AudioOutputFormat(Enum):
    """Voice output formats."""

    RAW_8KHZ_8BIT_MONO_MULAW = "raw-8khz-8bit-mono-mulaw"
    RAW_16KHZ_16BIT_MONO_PCM = "raw-16khz-16bit-mono-pcm"
    RIFF_8KHZ_8BIT_MONO_MULAW = "riff-8khz-8bit-mono-mulaw"
    RIFF_16KHZ_16BIT_MONO_PCM = "riff-16khz-16bit-mono-pcm"
    # SSML with audio segment, audio compressed by SILK codec
    SSML_16KHZ_16BIT_MONO_SILK = "ssml-16khz-16bit-mono-silk"
    RAW_16KHZ_16BIT_MONO_TRUESILK = "raw-16khz-16bit-mono-truesilk"
    # SSML with audio segment, needs a TTS engine to play out
    SSML_16KHZ_16BIT_MONO_TTS = "ssml-16khz-16bit-mono-tts"
    AUDIO_16KHZ_128KBITRATE_MONO_MP3 = "audio-16khz-128kbitrate-mono-mp3"
    AUDIO_16KHZ_64KBITRATE_MONO_MP3 = "audio-16khz-64kbitrate-mono-mp3"
    AUDIO_16KHZ_32KBITRATE_MONO_MP3 = "audio-16khz-32kbitrate-mono-mp3"
    AUDIO_16KHZ_16KBPS_MONO_SIREN = "audio-16khz-16kbps-mono-siren"
    RIFF_16KHZ_16KBPS_MONO_SIREN = "riff-16khz-16kbps-mono-siren"
    RAW_24KHZ_16BIT_MONO_TRUESILK = "raw-24khz-16bit-mono-truesilk"
    RAW_24KHZ_16BIT_MONO_PCM = "raw-24khz-16bit-mono-pcm"
    RIFF_24KHZ_16BIT_MONO_PCM = "riff-24khz-16bit-mono-pcm"
    AUDIO_24KHZ_48KBITRATE_MONO_MP3 = "audio-24khz-48kbitrate-mono-mp3"
    AUDIO_24KHZ_96KBITRATE_MONO_MP3 = "audio-24khz-96kbitrate-mono-mp3"
    AUDIO_24KHZ_160KBITRATE_MONO_MP3 = "audio-24khz-160kbitrate-mono-mp3"

    @property
    def header_value(self) -> str:
        """Wire string for the X-Microsoft-OutputFormat header."""
        return self.value

    @property
    def is_riff_pcm(self) -> bool:
        """True when the response is a 16-bit PCM WAV the decoder can read."""
        return self.value.startswith("riff-") and self.value.endswith("16bit-mono-pcm")

    @classmethod
    def from_string(cls, value: str) -> "AudioOutputFormat":
        """Look up a format by wire string or member name.

        Args:
            value: e.g. "riff-24khz-16bit-mono-pcm" or "RIFF_24KHZ_16BIT_MONO_PCM"

        Raises:
            ValueError: If the value matches no format
        """
        normalized = value.strip()
        try:
            return cls(normalized.lower())
        except ValueError:
            pass
        try:
            return cls[normalized.upper().replace("-", "_")]
        except KeyError:
            raise ValueError(f"Unknown audio output format: {value!r}") from None


# Used when a request leaves the format unspecified
DEFAULT_OUTPUT_FORMAT = AudioOutputFormat.RIFF_16KHZ_16BIT_MONO_PCM


def output_format_header(output_format: AudioOutputFormat | None) -> str:
    """Map an output format to its header value, defaulting when unset."""
    if output_format is None:
        return DEFAULT_OUTPUT_FORMAT.header_value
    return output_format.header_value


__all__ = ["AudioOutputFormat", "DEFAULT_OUTPUT_FORMAT", "output_format_header"]
