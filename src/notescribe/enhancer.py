"""Enhancement client: one service round trip per requested action."""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from .exceptions import ParseError
from .llm import BaseLLMClient, create_llm_client
from .models import Action, ENHANCEMENT_RESPONSE_SCHEMA, EnhancementResponse, Note, dedupe_tags
from .prompt_manager import PromptManager

SUMMARY_DELIMITER = "\n\n--- AI Summary ---\n"


logger = logging.getLogger(__name__)


class EnhancementClient:
    """
    Turns a note's content and an action into one request to the service.

    The LLM client is built on every call, so a missing API key raises
    ConfigurationError before anything is sent. Responses are never cached
    and failed calls are never retried.
    """

    def __init__(self, config, client_factory: Callable[[Any], BaseLLMClient] = create_llm_client):
        """
        Initialize the enhancement client.

        Args:
            config: Configuration object with LLM settings and API key
            client_factory: Builds the LLM client from config
        """
        self.config = config
        self.client_factory = client_factory
        self.prompt_manager = PromptManager(config)

    async def enhance(self, content: str, action: Action) -> EnhancementResponse:
        """
        Ask the service to perform an action on note content.

        Args:
            content: The note body
            action: Which enhancement to perform

        Returns:
            Parsed response; an empty response when the reply cannot be parsed

        Raises:
            ConfigurationError: If the API key is missing or rejected
            TransportError: If the service call fails
        """
        action = Action(action)
        llm_client = self.client_factory(self.config)
        prompt = self.prompt_manager.format_prompt(content, action)

        logger.info(f"Requesting '{action.value}' from {llm_client.provider_name}")
        # The SDK call blocks, so run it off the event loop
        response_text = await asyncio.to_thread(
            llm_client.send_message, prompt, response_schema=ENHANCEMENT_RESPONSE_SCHEMA
        )

        try:
            return self.prompt_manager.parse_response(response_text)
        except ParseError as e:
            logger.error(f"Failed to parse AI response for '{action.value}': {e}")
            logger.debug(f"Raw response that failed to parse: {response_text!r}")
            return EnhancementResponse.empty()


def merge_enhancement(note: Note, action: Action, response: EnhancementResponse) -> Dict[str, Any]:
    """
    Work out the note changes an enhancement response calls for.

    Each action reads exactly one response field. Summaries are appended
    after the existing content; the other actions replace in place.

    Args:
        note: The note as it is now
        action: The action that produced the response
        response: Parsed service response

    Returns:
        Field changes for NoteStore.update, empty when the relevant field is absent
    """
    action = Action(action)

    if action is Action.TITLE and response.suggested_title:
        return {'title': response.suggested_title}
    if action is Action.TAG and response.tags:
        return {'tags': dedupe_tags(list(note.tags) + list(response.tags))}
    if action is Action.IMPROVE and response.improved_content:
        return {'content': response.improved_content}
    if action is Action.SUMMARIZE and response.summary:
        return {'content': f"{note.content}{SUMMARY_DELIMITER}{response.summary}"}

    return {}


def describe_response(response: Optional[EnhancementResponse]) -> str:
    """Short log-friendly list of the fields a response filled in."""
    if response is None or response.is_empty():
        return "no suggestions"
    present = [name for name, value in vars(response).items() if value is not None]
    return ", ".join(present)
