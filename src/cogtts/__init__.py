"""cogtts - Cognitive Services text-to-speech client.

cogtts provides:
- Bearer token acquisition with background renewal
- SSML request construction
- REST synthesis with cancellation
- WAV/PCM16 decoding into float samples for playback

Usage:
    python -m cogtts "Hello there"
    python -m cogtts --voice EN_GB_HAZEL_RUS --pitch -5 --output hello.wav "Hello"
"""

__version__ = "0.1.0"

from .config import CogTTSConfig
from .config.loader import load_config
from .config.secrets import Credential
from .speech import SpeechService

__all__ = [
    "CogTTSConfig",
    "Credential",
    "SpeechService",
    "__version__",
    "load_config",
]
