"""Configuration module for cogtts.

This module provides typed configuration sections and profile loading.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


@dataclass
class SpeechConfig:
    """Speech service configuration."""

    region: str = "westus"
    api_key: str | None = None
    token_endpoint: str | None = None
    synthesis_endpoint: str | None = None
    voice: str = "EN_US_JESSA_RUS"
    gender: str = "Female"
    locale: str | None = None
    pitch_delta_hz: int = 0
    output_format: str = "riff-24khz-16bit-mono-pcm"
    timeout_seconds: float = 30.0
    token_renew_minutes: float = 9.0
    user_agent: str = "CogTTSClient"


@dataclass
class AudioConfig:
    """Audio output configuration."""

    backend: str = "pyaudio"
    output_device: str = "default"
    output_path: str = "output.wav"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class CogTTSConfig:
    """Main cogtts configuration."""

    speech: SpeechConfig = field(default_factory=SpeechConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader(Protocol):
    """Protocol for configuration loading."""

    def load(self, path: Path) -> CogTTSConfig:
        """Load configuration from file path."""
        ...

    def load_profile(self, profile: str) -> CogTTSConfig:
        """Load configuration by profile name (dev, prod)."""
        ...

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        ...


# Public API
__all__ = [
    "AudioConfig",
    "CogTTSConfig",
    "ConfigLoader",
    "LoggingConfig",
    "SpeechConfig",
]
