"""Export adapters that render a note to a document file."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from .models import Note
from .utils import format_timestamp, generate_frontmatter, safe_filename


logger = logging.getLogger(__name__)


class ExportAdapter(ABC):
    """Renders one note to a file and returns where it was written."""

    @abstractmethod
    def export(self, note: Note, filename_hint: str) -> Path:
        pass


class MarkdownExporter(ExportAdapter):
    """Writes a note as Markdown with YAML frontmatter."""

    def __init__(self, export_dir: str):
        """
        Initialize the exporter.

        Args:
            export_dir: Directory the documents are written to
        """
        self.export_dir = Path(export_dir).expanduser()

    def render(self, note: Note) -> str:
        metadata = {
            'title': note.title,
            'tags': list(note.tags),
            'created': format_timestamp(note.created_at),
            'updated': format_timestamp(note.updated_at)
        }
        heading = f"# {note.title}\n\n" if note.title else ""
        return generate_frontmatter(metadata) + heading + note.content + "\n"

    def export(self, note: Note, filename_hint: str) -> Path:
        """
        Write the note to <export_dir>/<safe filename hint>.md.

        Args:
            note: Note to export
            filename_hint: Preferred file stem, usually the title

        Returns:
            Path of the written file
        """
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            target = self.export_dir / f"{safe_filename(filename_hint)}.md"
            target.write_text(self.render(note), encoding='utf-8')
            logger.info(f"Exported note {note.id} to {target}")
            return target
        except OSError as e:
            logger.error(f"Error exporting note {note.id}: {e}")
            raise
