"""Unit tests for output formats and the voice catalog."""

import pytest

from cogtts.tts.formats import DEFAULT_OUTPUT_FORMAT, AudioOutputFormat, output_format_header
from cogtts.tts.voices import (
    DEFAULT_VOICE,
    VOICE_CATALOG,
    Gender,
    VoiceInfo,
    VoiceName,
    get_voice_locale,
    resolve_voice,
)

# Literal strings the service expects in X-Microsoft-OutputFormat
EXPECTED_FORMAT_STRINGS = {
    AudioOutputFormat.RAW_8KHZ_8BIT_MONO_MULAW: "raw-8khz-8bit-mono-mulaw",
    AudioOutputFormat.RAW_16KHZ_16BIT_MONO_PCM: "raw-16khz-16bit-mono-pcm",
    AudioOutputFormat.RIFF_8KHZ_8BIT_MONO_MULAW: "riff-8khz-8bit-mono-mulaw",
    AudioOutputFormat.RIFF_16KHZ_16BIT_MONO_PCM: "riff-16khz-16bit-mono-pcm",
    AudioOutputFormat.SSML_16KHZ_16BIT_MONO_SILK: "ssml-16khz-16bit-mono-silk",
    AudioOutputFormat.RAW_16KHZ_16BIT_MONO_TRUESILK: "raw-16khz-16bit-mono-truesilk",
    AudioOutputFormat.SSML_16KHZ_16BIT_MONO_TTS: "ssml-16khz-16bit-mono-tts",
    AudioOutputFormat.AUDIO_16KHZ_128KBITRATE_MONO_MP3: "audio-16khz-128kbitrate-mono-mp3",
    AudioOutputFormat.AUDIO_16KHZ_64KBITRATE_MONO_MP3: "audio-16khz-64kbitrate-mono-mp3",
    AudioOutputFormat.AUDIO_16KHZ_32KBITRATE_MONO_MP3: "audio-16khz-32kbitrate-mono-mp3",
    AudioOutputFormat.AUDIO_16KHZ_16KBPS_MONO_SIREN: "audio-16khz-16kbps-mono-siren",
    AudioOutputFormat.RIFF_16KHZ_16KBPS_MONO_SIREN: "riff-16khz-16kbps-mono-siren",
    AudioOutputFormat.RAW_24KHZ_16BIT_MONO_TRUESILK: "raw-24khz-16bit-mono-truesilk",
    AudioOutputFormat.RAW_24KHZ_16BIT_MONO_PCM: "raw-24khz-16bit-mono-pcm",
    AudioOutputFormat.RIFF_24KHZ_16BIT_MONO_PCM: "riff-24khz-16bit-mono-pcm",
    AudioOutputFormat.AUDIO_24KHZ_48KBITRATE_MONO_MP3: "audio-24khz-48kbitrate-mono-mp3",
    AudioOutputFormat.AUDIO_24KHZ_96KBITRATE_MONO_MP3: "audio-24khz-96kbitrate-mono-mp3",
    AudioOutputFormat.AUDIO_24KHZ_160KBITRATE_MONO_MP3: "audio-24khz-160kbitrate-mono-mp3",
}


class TestAudioOutputFormat:
    """Tests for the output format wire mapping."""

    def test_every_format_has_a_fixture(self) -> None:
        """The fixture table covers the whole enum."""
        assert set(EXPECTED_FORMAT_STRINGS) == set(AudioOutputFormat)

    @pytest.mark.parametrize("fmt,expected", list(EXPECTED_FORMAT_STRINGS.items()))
    def test_header_value_matches_literal(self, fmt: AudioOutputFormat, expected: str) -> None:
        assert output_format_header(fmt) == expected

    def test_mapping_is_injective(self) -> None:
        values = [output_format_header(fmt) for fmt in AudioOutputFormat]
        assert len(values) == len(set(values))

    def test_unspecified_defaults_to_riff_16khz(self) -> None:
        assert DEFAULT_OUTPUT_FORMAT is AudioOutputFormat.RIFF_16KHZ_16BIT_MONO_PCM
        assert output_format_header(None) == "riff-16khz-16bit-mono-pcm"

    def test_riff_pcm_detection(self) -> None:
        playable = {fmt for fmt in AudioOutputFormat if fmt.is_riff_pcm}
        assert playable == {
            AudioOutputFormat.RIFF_16KHZ_16BIT_MONO_PCM,
            AudioOutputFormat.RIFF_24KHZ_16BIT_MONO_PCM,
        }

    def test_from_string_accepts_wire_string_and_name(self) -> None:
        assert (
            AudioOutputFormat.from_string("riff-24khz-16bit-mono-pcm")
            is AudioOutputFormat.RIFF_24KHZ_16BIT_MONO_PCM
        )
        assert (
            AudioOutputFormat.from_string("audio_16khz_32kbitrate_mono_mp3")
            is AudioOutputFormat.AUDIO_16KHZ_32KBITRATE_MONO_MP3
        )

    def test_from_string_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown audio output format"):
            AudioOutputFormat.from_string("wav")


class TestVoiceCatalog:
    """Tests for the static voice catalog."""

    def test_every_voice_is_catalogued(self) -> None:
        assert set(VOICE_CATALOG) == set(VoiceName)
        assert len(VOICE_CATALOG) == 29

    def test_wire_names(self) -> None:
        assert (
            VOICE_CATALOG[VoiceName.EN_US_JESSA_RUS].wire_name
            == "Microsoft Server Speech Text to Speech Voice (en-US, JessaRUS)"
        )
        assert (
            VOICE_CATALOG[VoiceName.EN_GB_SUSAN_APOLLO].wire_name
            == "Microsoft Server Speech Text to Speech Voice (en-GB, Susan, Apollo)"
        )

    def test_locale_matches_wire_name(self) -> None:
        """Every locale appears at the start of the parenthesized wire name."""
        for info in VOICE_CATALOG.values():
            assert info.wire_name[46:51] == info.locale

    def test_wire_names_unique(self) -> None:
        names = [info.wire_name for info in VOICE_CATALOG.values()]
        assert len(names) == len(set(names))

    def test_get_voice_locale(self) -> None:
        assert get_voice_locale(VoiceName.FR_CA_HARMONIE_RUS) == "fr-CA"
        assert get_voice_locale(VoiceName.DE_CH_KARSTEN) == "de-CH"

    def test_resolve_missing_voice_falls_back_to_default(self) -> None:
        catalog = {DEFAULT_VOICE: VoiceInfo(locale="en-US", wire_name="Default")}
        assert resolve_voice(VoiceName.FR_FR_JULIE_APOLLO, catalog).wire_name == "Default"

    def test_voice_from_string(self) -> None:
        assert VoiceName.from_string("en_us_zira_rus") is VoiceName.EN_US_ZIRA_RUS
        assert VoiceName.from_string("enUSZiraRUS") is VoiceName.EN_US_ZIRA_RUS
        with pytest.raises(ValueError, match="Unknown voice"):
            VoiceName.from_string("nobody")


class TestGender:
    """Tests for Gender coercion."""

    def test_from_value(self) -> None:
        assert Gender.from_value("Male") is Gender.MALE
        assert Gender.from_value("male") is Gender.MALE
        assert Gender.from_value(Gender.MALE) is Gender.MALE
        assert Gender.from_value("Female") is Gender.FEMALE
        assert Gender.from_value(None) is Gender.FEMALE
