"""Base abstract class for LLM clients."""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    def __init__(self, config: Any):
        """
        Initialize the LLM client.

        Args:
            config: Configuration object containing LLM settings
        """
        self.config = config

    @abstractmethod
    def send_message(self, prompt: Dict[str, str], **kwargs) -> str:
        """
        Send a message to the LLM and get response.

        Args:
            prompt: Dictionary with 'system' and 'user' prompts
            **kwargs: Additional parameters (response_schema, max_tokens, etc.)

        Returns:
            LLM's response as a string

        Raises:
            ConfigurationError: If the service rejects the credential
            TransportError: If the call fails for any other reason
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of the LLM provider."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model name being used."""
        pass

    def get_usage_info(self) -> Optional[Dict[str, Any]]:
        """
        Get usage information for the last request (tokens, cost, etc.).

        Returns:
            Dictionary with usage information, or None if not available
        """
        return None

    def validate_config(self) -> bool:
        """
        Validate that the client configuration is correct.

        Returns:
            True if configuration is valid, False otherwise
        """
        return bool(getattr(self.config, 'api_key', ''))
