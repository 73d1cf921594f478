"""Text-to-speech client for Cognitive Services.

Provides the pieces of a REST synthesis round trip:
- TokenAuthenticator: API key -> bearer token, renewed every 9 minutes
- build_ssml: request tuple -> SSML document
- SynthesisClient: SSML + token -> audio bytes
"""

from .auth import TokenAuthenticator, TokenState, token_endpoint
from .client import CancellationToken, SynthesisClient, SynthesisRequest, synthesis_endpoint
from .errors import (
    AuthError,
    DecodeError,
    NetworkError,
    SpeechError,
    SsmlBuildError,
    SynthesisCancelledError,
    SynthesisError,
    TokenNotReadyError,
)
from .formats import AudioOutputFormat, output_format_header
from .ssml import SsmlRequestBuilder, build_ssml
from .voices import VOICE_CATALOG, Gender, VoiceInfo, VoiceName, resolve_voice

__all__ = [
    "AudioOutputFormat",
    "AuthError",
    "CancellationToken",
    "DecodeError",
    "Gender",
    "NetworkError",
    "SpeechError",
    "SsmlBuildError",
    "SsmlRequestBuilder",
    "SynthesisCancelledError",
    "SynthesisClient",
    "SynthesisError",
    "SynthesisRequest",
    "TokenAuthenticator",
    "TokenNotReadyError",
    "TokenState",
    "VOICE_CATALOG",
    "VoiceInfo",
    "VoiceName",
    "build_ssml",
    "output_format_header",
    "resolve_voice",
    "synthesis_endpoint",
    "token_endpoint",
]
