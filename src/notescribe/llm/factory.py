"""Factory for creating LLM clients based on configuration."""

import logging
from typing import Any, Optional

from ..exceptions import ConfigurationError
from .base_client import BaseLLMClient
from .litellm_client import LiteLLMClient
from .claude_client import ClaudeClient


logger = logging.getLogger(__name__)


# Registry of available LLM clients
CLIENT_REGISTRY = {
    'litellm': LiteLLMClient,
    'anthropic': ClaudeClient,
}


def create_llm_client(config: Any, provider_name: Optional[str] = None) -> BaseLLMClient:
    """
    Create an LLM client based on configuration.

    The API key is checked before the client is built, so a missing key
    never reaches the network.

    Args:
        config: Configuration object containing LLM settings
        provider_name: Optional override for the provider name

    Returns:
        BaseLLMClient: Configured LLM client instance

    Raises:
        ConfigurationError: If the provider is unknown, the API key is
            missing, or the client configuration is invalid
    """
    if provider_name is None:
        provider_name = getattr(config, 'llm_provider', None) or 'litellm'

    if provider_name not in CLIENT_REGISTRY:
        available_providers = list(CLIENT_REGISTRY.keys())
        raise ConfigurationError(
            f"Unsupported LLM provider: {provider_name}. "
            f"Available providers: {available_providers}"
        )

    if not getattr(config, 'api_key', ''):
        logger.error("API_KEY is missing; set it in the environment or a .env file")
        raise ConfigurationError("API key is not configured. Set the API_KEY environment variable.")

    client_class = CLIENT_REGISTRY[provider_name]
    client = client_class(config)

    if not client.validate_config():
        raise ConfigurationError(f"Invalid configuration for {provider_name} provider")

    logger.info(f"Created {provider_name} client: {client.model_name}")
    return client


def list_available_providers() -> list[str]:
    """
    Get a list of available LLM providers.

    Returns:
        List of provider names that can be used
    """
    return list(CLIENT_REGISTRY.keys())
