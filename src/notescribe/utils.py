"""Utility functions for the note scribe."""

import re
import yaml
from datetime import datetime, timezone
from typing import Dict, Any

DEFAULT_FILENAME = "Note"
MAX_FILENAME_LENGTH = 80


def format_timestamp(epoch_ms: int) -> str:
    """
    Format an epoch-millisecond timestamp for humans.

    Args:
        epoch_ms: Milliseconds since the epoch

    Returns:
        str: e.g. "Jan 07, 2025 14:30:25 UTC"
    """
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return moment.strftime("%b %d, %Y %H:%M:%S UTC")


def safe_filename(hint: str) -> str:
    """
    Turn a title into a filesystem-safe file stem.

    Args:
        hint: Usually the note title; may be empty

    Returns:
        str: Stem with unsafe characters replaced, "Note" when nothing is left
    """
    stem = re.sub(r'[\\/:*?"<>|\x00-\x1f]+', '-', hint or '').strip(' .-')
    stem = re.sub(r'\s+', ' ', stem)[:MAX_FILENAME_LENGTH].rstrip(' .-')
    return stem or DEFAULT_FILENAME


def generate_frontmatter(metadata: Dict[str, Any]) -> str:
    """
    Generate YAML frontmatter from metadata.

    Args:
        metadata: Dictionary of metadata fields

    Returns:
        str: Formatted YAML frontmatter with --- delimiters
    """
    # Ensure consistent ordering - only include exported fields
    ordered_keys = [
        'title',
        'tags',
        'created',
        'updated'
    ]

    ordered_metadata = {}
    for key in ordered_keys:
        if key in metadata:
            ordered_metadata[key] = metadata[key]

    yaml_content = yaml.dump(
        ordered_metadata,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False
    )

    return f"---\n{yaml_content}---\n"
