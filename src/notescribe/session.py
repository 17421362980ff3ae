"""Session controller: the seam a list/editor view drives."""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from .enhancer import EnhancementClient, describe_response, merge_enhancement
from .exporter import ExportAdapter
from .models import Action, Note
from .note_store import NoteStore


logger = logging.getLogger(__name__)


class NoteSession:
    """Wires user intents to the note store, the enhancement client and the exporter."""

    def __init__(self, store: NoteStore, enhancer: EnhancementClient,
                 exporter: Optional[ExportAdapter] = None):
        self.store = store
        self.enhancer = enhancer
        self.exporter = exporter
        self.preview = False
        self._busy = False

    @property
    def is_busy(self) -> bool:
        """True while an enhancement request is in flight."""
        return self._busy

    @property
    def active_note(self) -> Optional[Note]:
        return self.store.active_note

    def new_note(self) -> Note:
        self.preview = False
        return self.store.create()

    def open_note(self, note_id: str) -> Optional[Note]:
        return self.store.select(note_id)

    def close_note(self):
        self.store.select(None)

    def edit(self, **fields) -> Optional[Note]:
        """Apply user edits to the active note."""
        note = self.store.active_note
        if note is None:
            return None
        return self.store.update(note.id, **fields)

    def set_search(self, term: str):
        self.store.search_term = term or ""

    def visible_notes(self) -> List[Note]:
        return self.store.filtered_notes()

    def toggle_preview(self) -> bool:
        self.preview = not self.preview
        return self.preview

    def delete_note(self, note_id: str, confirm: Callable[[], bool]) -> bool:
        """
        Delete a note once the user confirms.

        Args:
            note_id: Note to delete
            confirm: Asks the user; deletion only happens if it returns True

        Returns:
            True if the note was deleted
        """
        if not confirm():
            logger.debug(f"Deletion of {note_id} cancelled by user")
            return False
        return self.store.delete(note_id)

    async def run_action(self, action: Action) -> bool:
        """
        Run an enhancement on the active note and merge the result.

        The result is applied to the note that was active when the request
        started, and dropped if that note was deleted in the meantime.
        ConfigurationError and TransportError propagate to the caller.

        Returns:
            True if the note was changed
        """
        action = Action(action)
        note = self.store.active_note
        if note is None or not note.content:
            logger.debug(f"Skipping '{action.value}': no active note with content")
            return False
        if self._busy:
            logger.warning(f"Skipping '{action.value}': another enhancement is in progress")
            return False

        note_id = note.id
        self._busy = True
        try:
            response = await self.enhancer.enhance(note.content, action)
        finally:
            self._busy = False

        logger.info(f"'{action.value}' returned: {describe_response(response)}")

        target = self.store.get(note_id)
        if target is None:
            logger.info(f"Discarding '{action.value}' result, note {note_id} no longer exists")
            return False

        changes = merge_enhancement(target, action, response)
        if not changes:
            return False
        self.store.update(note_id, **changes)
        return True

    def export_active(self) -> Optional[Path]:
        """Export the active note, named after its title."""
        note = self.store.active_note
        if note is None or self.exporter is None:
            return None
        return self.exporter.export(note, note.title or 'Note')
