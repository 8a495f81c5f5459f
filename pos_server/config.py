"""Configuration loaded from the environment (and an optional .env file)."""

import logging
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from .errors import ConfigurationError
from .messages import LANGUAGES

logger = logging.getLogger(__name__)

# Checked in order; the last two are accepted for existing deployments
API_URL_VARIABLES = ("POS_API_URL", "NEXT_PUBLIC_API_URL", "API_ENDPOINT")


class Settings(BaseModel):
    """Runtime settings for the terminal."""

    api_url: str = Field(description="POS backend base URL")
    operator_code: str = Field("", description="Operator code sent with purchases")
    timeout: float = Field(10.0, gt=0, description="HTTP timeout in seconds")
    language: str = Field("ja", description="Message language")


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Build settings from environment variables.

    Args:
        env_file: Path to a .env file (default: .env in the working directory).
            Variables already set in the environment take precedence.

    Raises:
        ConfigurationError: If the backend URL is missing or a value is invalid
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    api_url = next((os.environ[name] for name in API_URL_VARIABLES if os.environ.get(name)), None)
    if not api_url:
        raise ConfigurationError(f"Backend URL not configured (set {API_URL_VARIABLES[0]})")

    raw_timeout = os.environ.get("POS_TIMEOUT", "10")
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigurationError(f"POS_TIMEOUT must be a number, got {raw_timeout!r}")
    if timeout <= 0:
        raise ConfigurationError(f"POS_TIMEOUT must be positive, got {raw_timeout!r}")

    language = os.environ.get("POS_LANGUAGE", "ja")
    if language not in LANGUAGES:
        raise ConfigurationError(f"POS_LANGUAGE must be one of {', '.join(LANGUAGES)}, got {language!r}")

    settings = Settings(
        api_url=api_url.rstrip("/"),
        operator_code=os.environ.get("POS_OPERATOR_CODE", ""),
        timeout=timeout,
        language=language,
    )
    logger.info(f"Backend URL: {settings.api_url} (language: {settings.language})")
    return settings
