"""Data types shared by the note store and the enhancement client."""

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

DEFAULT_UNTITLED_TITLE = "Untitled Note"


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def dedupe_tags(tags: Iterable[str]) -> List[str]:
    """
    Remove duplicate tags while keeping first-seen order.

    Matching is exact and case-sensitive, so "Home" and "home" are both kept.
    """
    seen = set()
    unique = []
    for tag in tags:
        if tag not in seen:
            seen.add(tag)
            unique.append(tag)
    return unique


class Action(str, Enum):
    """Enhancement operations the service can perform on a note."""
    SUMMARIZE = "summarize"
    TAG = "tag"
    IMPROVE = "improve"
    TITLE = "title"


@dataclass
class Note:
    """A single user document."""

    id: str
    title: str = DEFAULT_UNTITLED_TITLE
    content: str = ""
    tags: List[str] = field(default_factory=list)
    created_at: int = 0
    updated_at: int = 0

    @classmethod
    def new(cls, title: str = DEFAULT_UNTITLED_TITLE, timestamp: Optional[int] = None) -> "Note":
        """
        Create an empty note with a fresh id.

        Args:
            title: Placeholder title for the note
            timestamp: Creation time in epoch milliseconds (defaults to now)

        Returns:
            Note with created_at == updated_at
        """
        stamp = now_ms() if timestamp is None else timestamp
        return cls(
            id=str(uuid.uuid4()),
            title=title,
            created_at=stamp,
            updated_at=stamp
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the persisted field names."""
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'tags': list(self.tags),
            'createdAt': self.created_at,
            'updatedAt': self.updated_at
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Note":
        """
        Build a Note from its persisted form.

        Null text fields load as empty strings; tags are kept only when
        stored as a list, and only their string entries.

        Raises:
            KeyError: If the id is missing or empty
            ValueError: If a timestamp is not numeric
        """
        if not data.get('id'):
            raise KeyError('id')
        created_at = int(data.get('createdAt') or 0)
        updated_at = int(data.get('updatedAt') or created_at)
        raw_tags = data.get('tags')
        if not isinstance(raw_tags, list):
            raw_tags = []
        return cls(
            id=str(data['id']),
            title=str(data.get('title') or ''),
            content=str(data.get('content') or ''),
            tags=dedupe_tags(t for t in raw_tags if isinstance(t, str)),
            created_at=created_at,
            updated_at=max(updated_at, created_at)
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match against title, content or any tag."""
        needle = term.lower()
        return (
            needle in self.title.lower()
            or needle in self.content.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


@dataclass
class EnhancementResponse:
    """
    Structured reply from the enhancement service.

    Every field is optional. A missing field means the service had no
    suggestion for it, which is not an error.
    """

    suggested_title: Optional[str] = None
    summary: Optional[str] = None
    tags: Optional[List[str]] = None
    improved_content: Optional[str] = None

    @classmethod
    def empty(cls) -> "EnhancementResponse":
        return cls()

    def is_empty(self) -> bool:
        return (
            self.suggested_title is None
            and self.summary is None
            and self.tags is None
            and self.improved_content is None
        )


# JSON schema the service is asked to follow
ENHANCEMENT_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "suggestedTitle": {"type": "string"},
        "summary": {"type": "string"},
        "tags": {"type": "array", "items": {"type": "string"}},
        "improvedContent": {"type": "string"}
    }
}
