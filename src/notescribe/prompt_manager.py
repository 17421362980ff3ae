"""Prompt management for enhancement requests."""

import json
import yaml
from pathlib import Path
from typing import Dict, Any
import logging

from .exceptions import ParseError
from .models import Action, EnhancementResponse


logger = logging.getLogger(__name__)


DEFAULT_INSTRUCTIONS = {
    'summarize': "Provide a concise summary of this note.",
    'tag': "Suggest 3-5 relevant hashtags for this content.",
    'improve': "Correct grammar and improve the clarity of this note while preserving the original meaning.",
    'title': "Generate a short, catchy title for this note based on its content."
}

DEFAULT_SYSTEM_PROMPT = """You are an AI assistant helping to organize and enhance notes.

Always respond with a single JSON object. Use only these optional fields:
- suggestedTitle: string
- summary: string
- tags: array of strings
- improvedContent: string

Only fill in the fields the task asks for."""

# Maps response JSON keys to EnhancementResponse attributes
RESPONSE_FIELDS = {
    'suggestedTitle': 'suggested_title',
    'summary': 'summary',
    'improvedContent': 'improved_content'
}


class PromptManager:
    """Builds enhancement prompts and parses the service's replies."""

    def __init__(self, config):
        """
        Initialize the prompt manager.

        Args:
            config: Configuration object containing settings
        """
        self.config = config
        self.system_prompt, self.instructions = self._load_prompts()

    def _load_prompts(self):
        """Load prompts from YAML configuration, falling back to the built-in set."""
        prompts_path = Path(__file__).parent.parent.parent / 'config' / 'prompts.yaml'
        instructions = dict(DEFAULT_INSTRUCTIONS)
        system_prompt = DEFAULT_SYSTEM_PROMPT

        if prompts_path.exists():
            with open(prompts_path, 'r') as f:
                prompt_config = yaml.safe_load(f) or {}
            prompts = prompt_config.get('prompts', {})
            system_prompt = prompts.get('system', system_prompt)
            instructions.update(prompts.get('actions', {}))

        return system_prompt, instructions

    def format_prompt(self, content: str, action: Action) -> Dict[str, str]:
        """
        Format a prompt pairing the note content with the action's instruction.

        Args:
            content: The note content to enhance
            action: Requested enhancement

        Returns:
            Dict with system and user prompts
        """
        action = Action(action)
        task = self.instructions[action.value]

        return {
            'system': self.system_prompt,
            'user': f"Content: {content}\n\nTask: {task}"
        }

    def parse_response(self, response: str) -> EnhancementResponse:
        """
        Parse the service's reply into an EnhancementResponse.

        Args:
            response: Raw response text

        Returns:
            Parsed response; fields the service left out stay None

        Raises:
            ParseError: If the reply is empty, not JSON, not an object, or a
                field has the wrong type
        """
        if not response or not response.strip():
            raise ParseError("Empty response body")

        # Strip markdown code blocks if present
        response_clean = response.strip()
        if response_clean.startswith('```'):
            lines = response_clean.split('\n')
            if lines[0].strip() in ('```', '```json') and lines[-1].strip() == '```':
                response_clean = '\n'.join(lines[1:-1])

        try:
            parsed = json.loads(response_clean)
        except json.JSONDecodeError as e:
            raise ParseError(f"Response is not valid JSON: {e}") from e

        if not isinstance(parsed, dict):
            raise ParseError(f"Response is not a JSON object, got {type(parsed).__name__}")

        logger.debug(f"Parsed response keys: {list(parsed.keys())}")

        values: Dict[str, Any] = {}
        for key, attr in RESPONSE_FIELDS.items():
            value = parsed.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ParseError(f"Field '{key}' should be a string, got {type(value).__name__}")
            values[attr] = value

        tags = parsed.get('tags')
        if tags is not None:
            if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
                raise ParseError("Field 'tags' should be a list of strings")
            values['tags'] = tags

        return EnhancementResponse(**values)
