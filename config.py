"""Runtime configuration for the code assistant simulator.

Settings are read from ``CODESHELL_*`` environment variables. A ``.env`` file
in the working directory is loaded first so local overrides (API keys in
particular) don't need to be exported in the shell.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "CODESHELL_"


class Settings(BaseModel):
    """Application settings.

    Args:
        generation_base_url: Base URL of the generation service.
        generation_api_key: Optional API key sent with generation requests.
        generation_model: Upstream model identifier used for every request.
        generation_max_tokens: Token budget for one generated response.
        generation_timeout: Transport timeout in seconds.
        home_directory: Initial working directory of every session.
        log_level: Root logging level name.
    """

    generation_base_url: str = Field(
        default="https://api.anthropic.com",
        description="Base URL of the generation service",
    )
    generation_api_key: str | None = Field(
        default=None, description="API key sent with generation requests"
    )
    generation_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Upstream model identifier",
    )
    generation_max_tokens: int = Field(
        default=2000, ge=1, description="Token budget for one response"
    )
    generation_timeout: float = Field(
        default=30.0, gt=0, description="Transport timeout in seconds"
    )
    home_directory: str = Field(
        default="/home/user", description="Initial working directory"
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("home_directory")
    @classmethod
    def validate_home_directory(cls, value: str) -> str:
        """Require an absolute path without a trailing slash.

        Raises:
            ValueError: If the path is relative or ends with a slash.
        """
        if not value.startswith("/"):
            raise ValueError("Home directory must be an absolute path")
        if len(value) > 1 and value.endswith("/"):
            raise ValueError("Home directory must not end with '/'")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize the level name to upper case."""
        return value.upper()

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Only variables that are actually set override the defaults.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``).

        Returns:
            A validated Settings instance.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw != "":
                values[name] = raw
        return cls(**values)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loading ``.env`` on first use."""
    load_dotenv()
    return Settings.from_env()
