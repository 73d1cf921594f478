"""Error types for the speech synthesis client.

Custom exceptions for token acquisition, synthesis requests and audio decoding.
"""


class SpeechError(Exception):
    """Base exception for speech-related errors."""

    pass


class AuthError(SpeechError):
    """Raised when the token endpoint is unreachable or rejects the key."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize authentication error.

        Args:
            message: Error message.
            status_code: HTTP status code if available.
        """
        super().__init__(message)
        self.status_code = status_code


class TokenNotReadyError(AuthError):
    """Raised when synthesis is attempted before a token has been obtained."""

    pass


class SynthesisError(SpeechError):
    """Raised when the synthesis endpoint returns a non-success status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        """Initialize synthesis error.

        Args:
            status_code: HTTP status code of the response.
            body: Response body text, kept for diagnostics.
        """
        super().__init__(f"Synthesis failed with HTTP {status_code}: {body[:200]}")
        self.status_code = status_code
        self.body = body


class NetworkError(SpeechError):
    """Raised on transport-level failures (DNS, connect, timeout)."""

    pass


class SynthesisCancelledError(NetworkError):
    """Raised when a synthesis call is cancelled before it completes."""

    pass


class SsmlBuildError(SpeechError):
    """Raised when text cannot be represented in an SSML document."""

    pass


class DecodeError(SpeechError):
    """Raised when an audio payload is not a decodable PCM16 WAV."""

    def __init__(self, reason: str) -> None:
        """Initialize decode error.

        Args:
            reason: Diagnostic reason, e.g. "no data chunk".
        """
        super().__init__(f"Cannot decode WAV audio: {reason}")
        self.reason = reason


__all__ = [
    "AuthError",
    "DecodeError",
    "NetworkError",
    "SpeechError",
    "SsmlBuildError",
    "SynthesisCancelledError",
    "SynthesisError",
    "TokenNotReadyError",
]
