#!/usr/bin/env python3
"""Main entry point and composition root for the note scribe."""

import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .config import Config
from .enhancer import EnhancementClient
from .exporter import MarkdownExporter
from .note_store import NoteStore
from .session import NoteSession
from .storage import JsonFileStorage


def setup_logging(level: str = "INFO"):
    """
    Configure logging for the application.

    Returns:
        Logger instance for the main module
    """
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    return logging.getLogger(__name__)


def create_session(config: Config) -> NoteSession:
    """
    Build a session with file storage, the enhancement client and the exporter.

    Args:
        config: Loaded configuration

    Returns:
        NoteSession ready for a view to drive
    """
    storage = JsonFileStorage(config.storage_path, namespace_key=config.namespace_key)
    store = NoteStore(storage, untitled_title=config.untitled_title)
    return NoteSession(
        store=store,
        enhancer=EnhancementClient(config),
        exporter=MarkdownExporter(config.export_dir)
    )


def main():
    """Load configuration, build the session and report the stored notes."""
    # Load environment variables from .env if it exists
    env_file = Path.cwd() / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    config = Config()
    logger = setup_logging(config.log_level)

    try:
        logger.info("Starting note scribe")
        session = create_session(config)

        notes = session.visible_notes()
        logger.info(f"{len(notes)} notes available")
        for note in notes:
            logger.info(f"  {note.title or '(untitled)'} [{', '.join(note.tags)}]")

        if not config.api_key:
            logger.warning("API_KEY is not set; AI actions will be unavailable")

    except Exception as e:
        logger.error(f"Fatal error in main: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
