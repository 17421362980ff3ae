"""Test configuration and fixtures for pytest."""

import sys
import tempfile
from pathlib import Path
from unittest.mock import Mock, MagicMock
import pytest

# Add src to path so we can import modules without installing
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from notescribe.models import Note
from notescribe.note_store import NoteStore
from notescribe.storage import MemoryStorage


class FakeClock:
    """Deterministic millisecond clock that advances on every read."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def temp_dir():
    """Create a temporary working directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def store(memory_storage, clock):
    """An empty note store backed by in-memory storage."""
    return NoteStore(memory_storage, clock=clock)


@pytest.fixture
def sample_notes():
    """Provide persisted-form notes for testing."""
    return [
        {
            "id": "note-1",
            "title": "Groceries",
            "content": "buy milk and eggs",
            "tags": ["home"],
            "createdAt": 1000,
            "updatedAt": 3000
        },
        {
            "id": "note-2",
            "title": "Meeting",
            "content": "Discuss the Q3 roadmap with the team",
            "tags": ["work", "Planning"],
            "createdAt": 1500,
            "updatedAt": 5000
        },
        {
            "id": "note-3",
            "title": "Untitled Note",
            "content": "",
            "tags": [],
            "createdAt": 2000,
            "updatedAt": 2000
        }
    ]


@pytest.fixture
def mock_config(temp_dir):
    """Create a mock configuration object."""
    from notescribe.config import Config

    config = Mock(spec=Config)
    config.api_key = "test-api-key"
    config.storage_path = str(temp_dir / "notes.json")
    config.export_dir = str(temp_dir / "exports")
    config.namespace_key = "gemini-scribe-notes"
    config.untitled_title = "Untitled Note"
    config.llm = {}
    config.llm_provider = "litellm"
    config.model = "gemini/gemini-3-flash-preview"
    config.max_tokens = 4096
    config.temperature = 0.3
    config.log_level = "INFO"
    return config


@pytest.fixture
def mock_llm_client():
    """Mock LLM client returning a canned JSON reply."""
    client = Mock()
    client.provider_name = "test/provider"
    client.model_name = "test-model"
    client.send_message = MagicMock(return_value='{"suggestedTitle": "Grocery List"}')
    return client


def make_note(note_id="note-x", title="", content="", tags=None, created_at=1000, updated_at=None):
    """Build a Note directly for merge and rendering tests."""
    return Note(
        id=note_id,
        title=title,
        content=content,
        tags=list(tags or []),
        created_at=created_at,
        updated_at=created_at if updated_at is None else updated_at
    )
