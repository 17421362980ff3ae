"""In-memory note collection kept in step with durable storage."""

import dataclasses
import logging
from typing import Callable, Iterable, List, Optional

from .exceptions import NotFoundError
from .models import DEFAULT_UNTITLED_TITLE, Note, dedupe_tags, now_ms
from .storage import StorageAdapter

# Fields callers may change through update()
EDITABLE_FIELDS = ('title', 'content', 'tags')


logger = logging.getLogger(__name__)


class NoteStore:
    """
    Owns the note collection, the active-note selection and the search filter.

    Every mutation writes the full collection to the storage adapter before
    returning, so the stored copy never lags behind memory.
    """

    def __init__(self, storage: StorageAdapter, clock: Callable[[], int] = now_ms,
                 untitled_title: str = DEFAULT_UNTITLED_TITLE):
        """
        Initialize the store and load any persisted notes.

        Args:
            storage: Adapter the collection is loaded from and saved to
            clock: Returns the current time in epoch milliseconds
            untitled_title: Title given to newly created notes
        """
        self.storage = storage
        self.clock = clock
        self.untitled_title = untitled_title
        self.active_note_id: Optional[str] = None
        self.search_term = ""
        self._notes: List[Note] = self._bootstrap()

    def _bootstrap(self) -> List[Note]:
        try:
            loaded = self.storage.load()
        except Exception as e:
            logger.error(f"Failed to load notes, starting empty: {e}", exc_info=True)
            return []

        if not loaded:
            logger.info("No stored notes found, starting with an empty collection")
            return []

        # Drop repeated ids, keeping the first occurrence
        seen = set()
        notes = []
        for note in loaded:
            if note.id in seen:
                logger.warning(f"Skipping duplicate stored note id: {note.id}")
                continue
            seen.add(note.id)
            notes.append(note)

        logger.info(f"Loaded {len(notes)} notes")
        return notes

    def _commit(self, notes: List[Note]):
        """Save the given collection, then make it the in-memory one."""
        try:
            self.storage.save(notes)
        except Exception as e:
            logger.error(f"Failed to save notes, keeping previous state: {e}")
            raise
        self._notes = notes

    @property
    def notes(self) -> List[Note]:
        """Snapshot of the collection in storage order (newest created first)."""
        return list(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def get(self, note_id: Optional[str]) -> Optional[Note]:
        """Return the note with this id, or None."""
        if note_id is None:
            return None
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def require(self, note_id: str) -> Note:
        """
        Return the note with this id.

        Raises:
            NotFoundError: If no such note exists
        """
        note = self.get(note_id)
        if note is None:
            raise NotFoundError(note_id)
        return note

    @property
    def active_note(self) -> Optional[Note]:
        return self.get(self.active_note_id)

    def select(self, note_id: Optional[str]) -> Optional[Note]:
        """Make a note active (or clear the selection with None)."""
        if note_id is not None and self.get(note_id) is None:
            logger.debug(f"Ignoring selection of unknown note: {note_id}")
            return self.active_note
        self.active_note_id = note_id
        return self.active_note

    def create(self) -> Note:
        """
        Create an empty note at the head of the collection and make it active.

        Returns:
            The new note
        """
        existing_ids = {note.id for note in self._notes}
        note = Note.new(title=self.untitled_title, timestamp=self.clock())
        while note.id in existing_ids:
            note = Note.new(title=self.untitled_title, timestamp=note.created_at)

        self._commit([note] + self._notes)
        self.active_note_id = note.id
        logger.info(f"Created note {note.id}")
        return note

    def update(self, note_id: str, **fields) -> Optional[Note]:
        """
        Merge field changes into a note and refresh its updated_at.

        Only title, content and tags can be changed; anything else (id,
        created_at, updated_at) is ignored. An unknown id is a silent no-op.

        Returns:
            The updated note, or None if the id was not found

        Raises:
            TypeError: If title/content is not a string or tags is not a
                list of strings; the note is left unchanged
            OSError: If the collection cannot be saved; the note is left
                unchanged
        """
        try:
            note = self.require(note_id)
        except NotFoundError:
            logger.debug(f"Update skipped, note not found: {note_id}")
            return None

        ignored = [name for name in fields if name not in EDITABLE_FIELDS]
        if ignored:
            logger.debug(f"Ignoring non-editable fields on update: {ignored}")

        changes = {}
        for name in ('title', 'content'):
            if name in fields:
                if not isinstance(fields[name], str):
                    raise TypeError(f"Note {name} must be a string, got {type(fields[name]).__name__}")
                changes[name] = fields[name]
        if 'tags' in fields:
            tags = fields['tags']
            if not isinstance(tags, (list, tuple)) or not all(isinstance(t, str) for t in tags):
                raise TypeError("Note tags must be a list of strings")
            changes['tags'] = dedupe_tags(tags)
        changes['updated_at'] = max(self.clock(), note.created_at)

        # Save the edited copy first so a failed write leaves the note untouched
        updated = dataclasses.replace(note, **changes)
        self._commit([updated if n is note else n for n in self._notes])

        # Keep the caller's Note object current
        for name, value in changes.items():
            setattr(note, name, value)
        self._notes = [note if n is updated else n for n in self._notes]
        return note

    def add_tags(self, note_id: str, tags: Iterable[str]) -> Optional[Note]:
        """Union new tags into a note's tags, keeping existing order first."""
        note = self.get(note_id)
        if note is None:
            logger.debug(f"Tag merge skipped, note not found: {note_id}")
            return None
        return self.update(note_id, tags=list(note.tags) + list(tags))

    def delete(self, note_id: str) -> bool:
        """
        Remove a note unconditionally.

        Confirmation belongs to the caller. Deleting the active note clears
        the selection.

        Returns:
            True if a note was removed
        """
        try:
            note = self.require(note_id)
        except NotFoundError:
            logger.debug(f"Delete skipped, note not found: {note_id}")
            return False

        self._commit([n for n in self._notes if n is not note])
        if self.active_note_id == note_id:
            self.active_note_id = None
        logger.info(f"Deleted note {note_id}")
        return True

    def search(self, term: str = "") -> List[Note]:
        """
        Find notes whose title, content or tags contain the term.

        Matching is case-insensitive. Results are ordered most recently
        updated first; an empty term returns every note.
        """
        if term:
            matches = [note for note in self._notes if note.matches(term)]
        else:
            matches = list(self._notes)
        # sorted() is stable, so equal timestamps keep collection order
        return sorted(matches, key=lambda n: n.updated_at, reverse=True)

    def filtered_notes(self) -> List[Note]:
        """Notes matching the current search filter."""
        return self.search(self.search_term)
