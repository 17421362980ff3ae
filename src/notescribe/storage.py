"""Persistence adapters for the note collection."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from .models import Note


logger = logging.getLogger(__name__)


class StorageAdapter(ABC):
    """Durable key-value boundary that stores the whole collection as one blob."""

    def __init__(self, namespace_key: str):
        self.namespace_key = namespace_key

    @abstractmethod
    def read_blob(self) -> Optional[str]:
        """Return the serialized collection, or None when nothing is stored."""
        pass

    @abstractmethod
    def write_blob(self, blob: str):
        """Replace the stored collection with the given serialized text."""
        pass

    def load(self) -> Optional[List[Note]]:
        """
        Load the persisted collection.

        Malformed records are skipped one at a time; the rest still load.

        Returns:
            List of notes, or None when no collection has been saved yet or
            the stored entry cannot be read
        """
        try:
            blob = self.read_blob()
        except OSError as e:
            logger.error(f"Error reading stored notes: {e}")
            return None

        if not blob:
            return None

        try:
            raw_notes = json.loads(blob)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable stored notes under '{self.namespace_key}': {e}")
            return None
        if not isinstance(raw_notes, list):
            logger.warning(f"Stored collection under '{self.namespace_key}' is not a list, got {type(raw_notes)}")
            return None

        notes = []
        for index, item in enumerate(raw_notes):
            if not isinstance(item, dict):
                logger.warning(f"Skipping stored note #{index}: not an object")
                continue
            try:
                notes.append(Note.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping stored note #{index}: {e!r}")
        return notes

    def save(self, notes: List[Note]):
        """Serialize and store the full collection."""
        blob = json.dumps([note.to_dict() for note in notes], ensure_ascii=False)
        self.write_blob(blob)
        logger.debug(f"Saved {len(notes)} notes under '{self.namespace_key}'")


class MemoryStorage(StorageAdapter):
    """In-process storage, keyed like the file store."""

    def __init__(self, namespace_key: str = "gemini-scribe-notes"):
        super().__init__(namespace_key)
        self.entries: Dict[str, str] = {}

    def read_blob(self) -> Optional[str]:
        return self.entries.get(self.namespace_key)

    def write_blob(self, blob: str):
        self.entries[self.namespace_key] = blob


class JsonFileStorage(StorageAdapter):
    """Stores each namespace key as an entry of a single JSON file."""

    def __init__(self, file_path: str, namespace_key: str = "gemini-scribe-notes"):
        """
        Initialize file storage.

        Args:
            file_path: Path to the JSON file holding the entries
            namespace_key: Key the note collection is stored under
        """
        super().__init__(namespace_key)
        self.file_path = Path(file_path).expanduser()
        logger.info(f"Initialized file storage at: {self.file_path}")

    def _read_entries(self) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}
        text = self.file_path.read_text(encoding='utf-8')
        if not text.strip():
            return {}
        try:
            entries = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Storage file {self.file_path} is not valid JSON: {e}")
            return {}
        if not isinstance(entries, dict):
            logger.warning(f"Storage file {self.file_path} does not hold a key-value object")
            return {}
        return entries

    def read_blob(self) -> Optional[str]:
        value = self._read_entries().get(self.namespace_key)
        return value if isinstance(value, str) else None

    def write_blob(self, blob: str):
        try:
            entries = self._read_entries()
            entries[self.namespace_key] = blob
            self.file_path.parent.mkdir(parents=True, exist_ok=True)

            # Write next to the target then swap, so a reader never sees half a file
            tmp_path = self.file_path.with_suffix(self.file_path.suffix + '.tmp')
            tmp_path.write_text(json.dumps(entries, ensure_ascii=False), encoding='utf-8')
            tmp_path.replace(self.file_path)
        except OSError as e:
            logger.error(f"Error writing notes to {self.file_path}: {e}")
            raise
