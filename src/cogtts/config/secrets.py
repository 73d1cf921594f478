"""Secret binding from environment variables.

Each secret-bearing config field is listed explicitly with the variable it is
read from. A value already present in the config is kept unless overwrite is
requested.
"""

import logging
import os
from dataclasses import dataclass, field

from ..tts.auth import token_endpoint
from ..tts.client import synthesis_endpoint
from . import SpeechConfig

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "SPEECH_SERVICE_KEY"
REGION_ENV_VAR = "SPEECH_SERVICE_REGION"

# SpeechConfig field -> environment variable
SECRET_ENV_VARS: dict[str, str] = {
    "api_key": API_KEY_ENV_VAR,
    "region": REGION_ENV_VAR,
}


def apply_env_secrets(config: SpeechConfig, overwrite: bool = False) -> SpeechConfig:
    """Fill secret fields of a SpeechConfig from the environment.

    Args:
        config: Configuration to update in place
        overwrite: Replace values that are already set

    Returns:
        The same config, for chaining
    """
    defaults = SpeechConfig()
    for field_name, env_var in SECRET_ENV_VARS.items():
        current = getattr(config, field_name)
        is_default = not current or current == getattr(defaults, field_name)
        if not overwrite and not is_default:
            continue

        value = os.environ.get(env_var, "").strip()
        if not value:
            if not current:
                logger.warning(
                    f"SpeechConfig.{field_name} is not set and the environment "
                    f"variable {env_var} is missing or empty"
                )
            continue

        setattr(config, field_name, value)

    return config


@dataclass(frozen=True)
class Credential:
    """API key and region of a Speech resource."""

    api_key: str = field(repr=False)
    region: str

    @property
    def token_endpoint(self) -> str:
        """Regional issueToken URL."""
        return token_endpoint(self.region)

    @property
    def synthesis_endpoint(self) -> str:
        """Regional synthesis URL."""
        return synthesis_endpoint(self.region)

    @classmethod
    def from_config(cls, config: SpeechConfig) -> "Credential":
        """Create a credential from a SpeechConfig with secrets applied.

        Raises:
            ValueError: If the API key or region is missing
        """
        api_key = (config.api_key or "").strip()
        if not api_key:
            raise ValueError(
                f"{API_KEY_ENV_VAR} environment variable is not set. "
                "Set it to your Speech resource key to use speech synthesis."
            )
        region = (config.region or "").strip()
        if not region:
            raise ValueError(f"{REGION_ENV_VAR} environment variable is not set.")
        return cls(api_key=api_key, region=region)

    @classmethod
    def from_env(cls) -> "Credential":
        """Create a credential from SPEECH_SERVICE_KEY / SPEECH_SERVICE_REGION.

        Raises:
            ValueError: If SPEECH_SERVICE_KEY is not set
        """
        return cls.from_config(apply_env_secrets(SpeechConfig()))


__all__ = [
    "API_KEY_ENV_VAR",
    "Credential",
    "REGION_ENV_VAR",
    "SECRET_ENV_VARS",
    "apply_env_secrets",
]
