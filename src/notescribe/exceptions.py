"""Exception types for the note scribe."""


class NoteScribeError(Exception):
    """Base class for all note scribe errors."""


class ConfigurationError(NoteScribeError):
    """Raised when a required setting (usually the API key) is missing or rejected."""


class TransportError(NoteScribeError):
    """Raised when the enhancement service cannot be reached or fails the call."""


class ParseError(NoteScribeError):
    """Raised when an enhancement response does not match the expected structure."""


class NotFoundError(NoteScribeError):
    """Raised when a note id does not exist in the collection."""

    def __init__(self, note_id: str):
        super().__init__(f"Note not found: {note_id}")
        self.note_id = note_id
