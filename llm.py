from typing import Optional
import logging

import openai

from config import Settings
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_AZURE_API_VERSION = "2024-06-01"


def has_openai_credentials(api_key: Optional[str], settings: Settings) -> bool:
    return bool(api_key) or bool(settings.azure_openai_api_key and settings.azure_openai_endpoint)


def initialize_openai_client(api_key: Optional[str], settings: Settings, key_name: str = "OPENAI_API_KEY"):
    """Initialize an async OpenAI client with fallback to Azure OpenAI."""
    if api_key:
        return openai.AsyncOpenAI(api_key=api_key)

    if settings.azure_openai_api_key and settings.azure_openai_endpoint:
        logger.info(f"{key_name} not set, falling back to Azure OpenAI")
        return openai.AsyncAzureOpenAI(
            api_key=settings.azure_openai_api_key,
            azure_endpoint=settings.azure_openai_endpoint,
            api_version=settings.azure_openai_api_version or DEFAULT_AZURE_API_VERSION,
        )

    raise ConfigurationError(
        f"{key_name} not found in environment variables and no Azure OpenAI credentials are configured"
    )
