"""YAML configuration loader with inheritance support.

Supports:
- Loading YAML config files
- Config inheritance via 'extends' key
- Deep merging of nested config
- Profile selection via COGTTS_PROFILE
"""

import os
from pathlib import Path
from typing import Any

import yaml

from ..tts.formats import AudioOutputFormat
from ..tts.voices import VoiceName
from . import AudioConfig, CogTTSConfig, ConfigLoader, LoggingConfig, SpeechConfig

PROFILE_ENV_VAR = "COGTTS_PROFILE"
DEFAULT_PROFILE = "dev"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Values from override take precedence. Nested dicts are merged recursively.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_with_inheritance(path: Path) -> dict[str, Any]:
    """Load YAML file with inheritance support.

    If the file contains an 'extends' key, the base config is loaded first
    and merged with the current config.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        config = yaml.safe_load(f) or {}

    if "extends" in config:
        base_name = config.pop("extends")
        base_path = path.parent / base_name
        base_config = load_yaml_with_inheritance(base_path)
        config = deep_merge(base_config, config)

    return config


def dict_to_config(data: dict[str, Any]) -> CogTTSConfig:
    """Convert raw dict to typed CogTTSConfig dataclass."""
    root = data.get("cogtts", {}) or {}

    # Helper to safely get dict values (handles None from YAML)
    def safe_get(key: str) -> dict[str, Any]:
        value = root.get(key, {})
        return value if value is not None else {}

    return CogTTSConfig(
        speech=validate_speech_config(SpeechConfig(**safe_get("speech"))),
        audio=AudioConfig(**safe_get("audio")),
        logging=LoggingConfig(**safe_get("logging")),
    )


def validate_speech_config(config: SpeechConfig) -> SpeechConfig:
    """Check that the voice and output format name known values.

    Raises:
        ValueError: If either value is unknown
    """
    try:
        VoiceName.from_string(str(config.voice))
        AudioOutputFormat.from_string(str(config.output_format))
    except ValueError as e:
        raise ValueError(f"Invalid speech configuration: {e}") from e
    return config


def detect_profile() -> str:
    """Return the profile named by COGTTS_PROFILE, or the default."""
    return os.environ.get(PROFILE_ENV_VAR, "").strip().lower() or DEFAULT_PROFILE


class YAMLConfigLoader:
    """YAML configuration loader.

    Implements the ConfigLoader protocol.
    """

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize loader with optional config directory.

        Args:
            config_dir: Directory containing config files.
                        Defaults to 'config' relative to project root.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent.parent / "config"
        self._config_dir = config_dir

    def load(self, path: Path) -> CogTTSConfig:
        """Load configuration from file path.

        Args:
            path: Path to YAML config file

        Returns:
            Parsed CogTTSConfig
        """
        raw_config = load_yaml_with_inheritance(path)
        return dict_to_config(raw_config)

    def load_profile(self, profile: str) -> CogTTSConfig:
        """Load configuration by profile name.

        Args:
            profile: Profile name (e.g., 'dev', 'prod')

        Returns:
            Parsed CogTTSConfig for the profile
        """
        config_path = self._config_dir / f"{profile}.yaml"
        return self.load(config_path)

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        return self._config_dir


def load_config(path: str | Path | None = None, profile: str | None = None) -> CogTTSConfig:
    """Load cogtts configuration.

    Args:
        path: Direct path to config file (takes precedence)
        profile: Profile name ('dev', 'prod') if path not given

    Returns:
        Parsed CogTTSConfig

    Examples:
        >>> config = load_config(profile="dev")
        >>> config = load_config(path="/path/to/config.yaml")
    """
    loader: ConfigLoader = YAMLConfigLoader()

    if path is not None:
        return loader.load(Path(path))
    return loader.load_profile(profile or detect_profile())


__all__ = [
    "YAMLConfigLoader",
    "deep_merge",
    "detect_profile",
    "dict_to_config",
    "load_config",
    "load_yaml_with_inheritance",
    "validate_speech_config",
]
