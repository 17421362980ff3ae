"""LLM abstraction layer for the note scribe."""

from .base_client import BaseLLMClient
from .factory import create_llm_client, list_available_providers
from .litellm_client import LiteLLMClient
from .claude_client import ClaudeClient

__all__ = [
    'BaseLLMClient',
    'LiteLLMClient',
    'ClaudeClient',
    'create_llm_client',
    'list_available_providers'
]
