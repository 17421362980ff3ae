"""Note Scribe - note taking with AI-assisted titles, tags, summaries and rewrites."""

__version__ = "0.1.0"

from .config import Config
from .enhancer import EnhancementClient, merge_enhancement
from .exceptions import (
    NoteScribeError,
    ConfigurationError,
    TransportError,
    ParseError,
    NotFoundError
)
from .exporter import ExportAdapter, MarkdownExporter
from .models import Action, EnhancementResponse, Note
from .note_store import NoteStore
from .prompt_manager import PromptManager
from .session import NoteSession
from .storage import StorageAdapter, JsonFileStorage, MemoryStorage

__all__ = [
    "Config",
    "EnhancementClient",
    "merge_enhancement",
    "NoteScribeError",
    "ConfigurationError",
    "TransportError",
    "ParseError",
    "NotFoundError",
    "ExportAdapter",
    "MarkdownExporter",
    "Action",
    "EnhancementResponse",
    "Note",
    "NoteStore",
    "PromptManager",
    "NoteSession",
    "StorageAdapter",
    "JsonFileStorage",
    "MemoryStorage"
]
