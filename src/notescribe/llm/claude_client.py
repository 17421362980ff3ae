"""Claude API client implementation."""

import logging
from typing import Any, Dict, Optional

import anthropic
from anthropic import APIError, AuthenticationError

from ..exceptions import ConfigurationError, TransportError
from .base_client import BaseLLMClient

# Constants
DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-20250514"


logger = logging.getLogger(__name__)


class ClaudeClient(BaseLLMClient):
    """Client for interacting with Claude API."""

    def __init__(self, config: Any):
        """
        Initialize Claude client.

        Args:
            config: Configuration object with API key, model and token settings
        """
        super().__init__(config)

        llm_config = getattr(config, 'llm', None) or {}
        provider_config = llm_config.get('providers', {}).get('anthropic', {})

        self._model = provider_config.get('model', DEFAULT_CLAUDE_MODEL)
        self._max_tokens = provider_config.get('max_tokens', config.max_tokens)
        self._temperature = provider_config.get('temperature', config.temperature)
        self._last_usage = None

        self.client = anthropic.Anthropic(api_key=config.api_key)
        logger.info(f"Initialized Claude client with model: {self._model}")

    def send_message(self, prompt: Dict[str, str], **kwargs) -> str:
        """
        Send a message to Claude and get response.

        The Messages API has no schema-constrained output here, so the JSON
        shape is carried by the system prompt and response_schema is ignored.

        Args:
            prompt: Dictionary with 'system' and 'user' prompts

        Returns:
            Claude's response as a string
        """
        try:
            message = self.client.messages.create(
                model=self._model,
                max_tokens=kwargs.get('max_tokens', self._max_tokens),
                temperature=kwargs.get('temperature', self._temperature),
                system=prompt.get('system', ''),
                messages=[
                    {
                        "role": "user",
                        "content": prompt.get('user', '')
                    }
                ]
            )
        except AuthenticationError as e:
            logger.error(f"Claude rejected the API key: {e}")
            raise ConfigurationError("API key rejected by anthropic") from e
        except APIError as e:
            logger.error(f"Claude API error: {e}")
            raise TransportError(f"Enhancement request failed: {e}") from e

        self._last_usage = getattr(message, 'usage', None)
        response_text = self._extract_text_from_response(message.content)
        logger.info("Successfully received response from Claude")
        return response_text

    @property
    def provider_name(self) -> str:
        """Return the name of the LLM provider."""
        return "anthropic/claude"

    @property
    def model_name(self) -> str:
        """Return the model name being used."""
        return self._model

    def get_usage_info(self) -> Optional[Dict[str, Any]]:
        if self._last_usage is None:
            return None
        return {
            'input_tokens': getattr(self._last_usage, 'input_tokens', None),
            'output_tokens': getattr(self._last_usage, 'output_tokens', None),
        }

    def _extract_text_from_response(self, content) -> str:
        """
        Extract text from Claude's response content, handling different block types.

        Args:
            content: Response content from Claude API

        Returns:
            Extracted text content
        """
        if not content:
            return ""

        for block in content:
            if getattr(block, 'type', 'text') == 'text' and hasattr(block, 'text'):
                return block.text

        logger.warning("No text content found in Claude response")
        return ""
