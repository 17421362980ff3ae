"""LiteLLM client implementation for unified LLM access."""

import logging
from typing import Dict, Any, Optional

import litellm
from litellm import completion

from ..exceptions import ConfigurationError, TransportError
from .base_client import BaseLLMClient


logger = logging.getLogger(__name__)


class LiteLLMClient(BaseLLMClient):
    """LiteLLM client; the default model is Gemini."""

    def __init__(self, config: Any):
        """
        Initialize LiteLLM client.

        Args:
            config: Configuration object with LLM settings
        """
        super().__init__(config)

        # Provider-specific overrides from the llm settings section
        self.llm_config = getattr(config, 'llm', None) or {}
        self.provider_config = self.llm_config.get('providers', {}).get('litellm', {})

        # Core parameters
        self._model = self.provider_config.get('model', config.model)
        self._max_tokens = self.provider_config.get('max_tokens', config.max_tokens)
        self._temperature = self.provider_config.get('temperature', config.temperature)
        self._api_key = self.provider_config.get('api_key') or config.api_key

        # Configure LiteLLM settings
        litellm.set_verbose = self.provider_config.get('verbose', False)

        # Track usage for the last request
        self._last_usage = None

        logger.info(f"Initialized LiteLLM client with model: {self._model}")

    def send_message(self, prompt: Dict[str, str], **kwargs) -> str:
        """
        Send a message using LiteLLM.

        Args:
            prompt: Dictionary with 'system' and 'user' prompts
            **kwargs: response_schema (JSON schema for the reply), max_tokens,
                temperature

        Returns:
            LLM's response as a string
        """
        messages = []

        # Add system message if provided
        if prompt.get('system'):
            messages.append({
                "role": "system",
                "content": prompt['system']
            })

        # Add user message
        messages.append({
            "role": "user",
            "content": prompt.get('user', '')
        })

        # Prepare completion parameters
        completion_kwargs = {
            'model': self._model,
            'messages': messages,
            'max_tokens': kwargs.get('max_tokens', self._max_tokens),
            'temperature': kwargs.get('temperature', self._temperature),
            'api_key': self._api_key,
        }

        response_schema = kwargs.get('response_schema')
        if response_schema:
            completion_kwargs['response_format'] = {
                'type': 'json_schema',
                'json_schema': {'name': 'note_enhancement', 'schema': response_schema}
            }

        try:
            response = completion(**completion_kwargs)
        except litellm.AuthenticationError as e:
            logger.error(f"{self.provider_name} rejected the API key: {e}")
            raise ConfigurationError(f"API key rejected by {self.provider_name}") from e
        except Exception as e:
            logger.error(f"LLM request to {self.provider_name} failed: {e}")
            raise TransportError(f"Enhancement request failed: {e}") from e

        # Store usage information
        self._last_usage = getattr(response, 'usage', None)

        content = response.choices[0].message.content
        logger.info(f"Successfully received response from {self.provider_name}")
        return content or ""

    @property
    def provider_name(self) -> str:
        """Return the name of the LLM provider."""
        provider = self._extract_provider_from_model(self._model)
        return f"litellm/{provider}"

    @property
    def model_name(self) -> str:
        """Return the model name being used."""
        return self._model

    def get_usage_info(self) -> Optional[Dict[str, Any]]:
        """
        Get usage information for the last request.

        Returns:
            Dictionary with usage information, or None if not available
        """
        if self._last_usage is None:
            return None

        return {
            'prompt_tokens': getattr(self._last_usage, 'prompt_tokens', None),
            'completion_tokens': getattr(self._last_usage, 'completion_tokens', None),
            'total_tokens': getattr(self._last_usage, 'total_tokens', None),
        }

    def validate_config(self) -> bool:
        """Validate that the client configuration is correct."""
        if not self._api_key:
            logger.error("No API key found in configuration")
            return False

        if not self._model:
            logger.error("No model specified in LiteLLM configuration")
            return False

        return True

    def _extract_provider_from_model(self, model: str) -> str:
        """Extract the provider name from the model string."""
        if '/' in model:
            # Format like "gemini/gemini-3-flash-preview" or "openai/gpt-4o"
            return model.split('/')[0]
        elif model.startswith('gemini'):
            return 'gemini'
        elif model.startswith('claude'):
            return 'anthropic'
        elif model.startswith('gpt'):
            return 'openai'
        else:
            return 'unknown'
