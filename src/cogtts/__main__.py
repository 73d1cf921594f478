"""cogtts entry point.

Usage:
    python -m cogtts [OPTIONS] [TEXT]

Options:
    --config PATH    Path to YAML config file
    --profile NAME   Profile name (dev, prod, test)
    --output PATH    Write a WAV file instead of playing
    --help           Show this help message
    --version        Show version
"""

# Load .env file before anything else
try:
    from pathlib import Path as _Path

    from dotenv import load_dotenv

    # Try to find .env in project root (parent of src/)
    _project_root = _Path(__file__).parent.parent.parent
    _env_file = _project_root / ".env"
    if _env_file.exists():
        load_dotenv(_env_file)
    else:
        load_dotenv()  # Fall back to current directory
except ImportError:
    pass  # python-dotenv not installed, skip

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .audio import create_audio_playback
from .audio.wav_file import WavFilePlayback
from .config.loader import detect_profile, load_config
from .config.secrets import Credential, apply_env_secrets
from .speech import SpeechService
from .tts.errors import SpeechError
from .tts.formats import AudioOutputFormat
from .tts.voices import VOICE_CATALOG, Gender, VoiceName


def setup_logging(level: str) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="cogtts",
        description="Speak text with the Cognitive Services text-to-speech API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cogtts "Hello world"              # Speak with the default voice
  python -m cogtts --voice EN_GB_HAZEL_RUS "Hi" # Pick a voice
  python -m cogtts --pitch -5 -o out.wav "Hi"   # Lower pitch, save to file
  echo "Hi" | python -m cogtts                  # Read text from stdin

Environment:
  SPEECH_SERVICE_KEY     Speech resource key (required)
  SPEECH_SERVICE_REGION  Speech resource region (e.g. westus)
  COGTTS_PROFILE         Set profile (dev, prod, test)
""",
    )

    parser.add_argument("text", nargs="?", help="Text to speak (reads stdin if omitted)")
    parser.add_argument("--config", type=Path, help="Path to YAML config file", metavar="PATH")
    parser.add_argument(
        "--profile",
        choices=["dev", "prod", "test"],
        help="Configuration profile to use",
    )
    parser.add_argument("--voice", help="Voice name, e.g. EN_US_ZIRA_RUS")
    parser.add_argument("--gender", choices=[g.value for g in Gender], help="Voice gender")
    parser.add_argument("--pitch", type=int, help="Pitch delta in Hz (plus/minus)")
    parser.add_argument(
        "--format",
        dest="output_format",
        help="Output format wire string, e.g. riff-24khz-16bit-mono-pcm",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="PATH",
        help="Write the decoded audio to a WAV file instead of playing it",
    )
    parser.add_argument(
        "--mock-audio",
        action="store_true",
        help="Use mock audio playback (for testing without hardware)",
    )
    parser.add_argument("--list-voices", action="store_true", help="List voices and exit")
    parser.add_argument("--list-formats", action="store_true", help="List output formats and exit")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load config and exit (for testing)",
    )
    parser.add_argument("--log-level", help="Override the configured log level")
    parser.add_argument(
        "--version",
        action="version",
        version=f"cogtts v{__version__}",
    )

    return parser.parse_args(argv)


def list_voices() -> None:
    """Print the voice catalog."""
    for voice, info in VOICE_CATALOG.items():
        print(f"{voice.name:<22} {info.locale:<6} {info.wire_name}")


def list_formats() -> None:
    """Print the output formats."""
    for fmt in AudioOutputFormat:
        marker = "*" if fmt.is_riff_pcm else " "
        print(f"{marker} {fmt.value}")
    print("\n* playable after decoding")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for cogtts.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parse_args(argv)

    if args.list_voices:
        list_voices()
        return 0
    if args.list_formats:
        list_formats()
        return 0

    # Load configuration
    try:
        if args.config:
            config = load_config(path=args.config)
        else:
            config = load_config(profile=args.profile or detect_profile())
    except FileNotFoundError as e:
        print(f"Error: Config file not found: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging(args.log_level or config.logging.level)
    logger = logging.getLogger("cogtts")
    logger.info(f"cogtts v{__version__}")

    apply_env_secrets(config.speech)

    if args.dry_run:
        logger.info("Dry run mode - exiting after config load")
        logger.info(f"Region: {config.speech.region}")
        logger.info(f"Voice: {config.speech.voice}")
        logger.info(f"Output format: {config.speech.output_format}")
        logger.info(f"Audio backend: {config.audio.backend}")
        return 0

    text = args.text if args.text is not None else sys.stdin.read()
    text = text.strip()
    if not text:
        logger.error("No text to speak")
        return 1

    try:
        voice = VoiceName.from_string(args.voice) if args.voice else None
        output_format = (
            AudioOutputFormat.from_string(args.output_format) if args.output_format else None
        )
        credential = Credential.from_config(config.speech)
    except ValueError as e:
        logger.error(str(e))
        return 1

    try:
        if args.output is not None:
            playback = WavFilePlayback(args.output)
        else:
            playback = create_audio_playback(config.audio, use_mock=args.mock_audio)
    except RuntimeError as e:
        logger.error(f"Failed to initialize audio output: {e}")
        return 1

    with SpeechService(credential, config.speech, playback=playback) as service:
        try:
            service.start()
            buffer = service.speak(
                text,
                voice=voice,
                gender=args.gender,
                pitch_delta_hz=args.pitch,
                output_format=output_format,
            )
        except SpeechError as e:
            logger.error(f"Speech synthesis failed: {e}")
            return 1
        except RuntimeError as e:
            logger.error(f"Playback failed: {e}")
            return 1

    logger.info(f"Spoke {buffer.duration_ms}ms of audio")
    return 0


if __name__ == "__main__":
    sys.exit(main())
