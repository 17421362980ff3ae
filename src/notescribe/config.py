"""Configuration management for the note scribe."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any
from dataclasses import dataclass, field

from .models import DEFAULT_UNTITLED_TITLE

# Default configuration constants
DEFAULT_DATA_DIR = Path.home() / ".notescribe"
DEFAULT_NAMESPACE_KEY = "gemini-scribe-notes"
DEFAULT_LLM_PROVIDER = "litellm"
DEFAULT_MODEL = "gemini/gemini-3-flash-preview"
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.3


@dataclass
class Config:
    """Application configuration."""

    # Environment variables (will be loaded in __post_init__)
    api_key: str = ""
    storage_path: str = ""
    export_dir: str = ""

    # Storage settings
    namespace_key: str = DEFAULT_NAMESPACE_KEY

    # Note defaults
    untitled_title: str = DEFAULT_UNTITLED_TITLE

    # LLM configuration
    llm: Dict[str, Any] = field(default_factory=dict)
    llm_provider: str = DEFAULT_LLM_PROVIDER
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        """Initialize configuration from environment and config files after dataclass init."""
        # Load from environment. The API key is checked when an enhancement is
        # requested, so a missing key does not stop the notes from loading.
        self.api_key = os.environ.get('API_KEY', self.api_key)
        self.storage_path = os.environ.get(
            'NOTESCRIBE_DATA_PATH', self.storage_path or str(DEFAULT_DATA_DIR / 'notes.json')
        )
        self.export_dir = os.environ.get(
            'NOTESCRIBE_EXPORT_DIR', self.export_dir or str(DEFAULT_DATA_DIR / 'exports')
        )

        # Load settings from YAML if exists
        config_path = Path(__file__).parent.parent.parent / 'config' / 'settings.yaml'
        if config_path.exists():
            with open(config_path, 'r') as f:
                settings = yaml.safe_load(f)
                if settings:
                    self._load_settings(settings)

    def _load_settings(self, settings: Dict[str, Any]):
        """Load settings from YAML configuration."""
        if 'storage' in settings:
            storage = settings['storage']
            # Environment wins over the settings file for paths
            if 'NOTESCRIBE_DATA_PATH' not in os.environ:
                self.storage_path = storage.get('path') or self.storage_path
            self.namespace_key = storage.get('namespace_key', self.namespace_key)

        if 'notes' in settings:
            self.untitled_title = settings['notes'].get('untitled_title', self.untitled_title)

        if 'export' in settings:
            if 'NOTESCRIBE_EXPORT_DIR' not in os.environ:
                self.export_dir = settings['export'].get('directory') or self.export_dir

        # Load LLM configuration
        if 'llm' in settings:
            self.llm = settings['llm'] or {}
            self.llm_provider = self.llm.get('provider', self.llm_provider)
            self.model = self.llm.get('model', self.model)
            self.max_tokens = self.llm.get('max_tokens', self.max_tokens)
            self.temperature = self.llm.get('temperature', self.temperature)

        if 'logging' in settings:
            self.log_level = settings['logging'].get('level', self.log_level)
