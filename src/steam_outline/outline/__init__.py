"""
Outline documents.

Parsing helpers for org-style text and the synchronizer that
appends catalog entries to it.
"""

from steam_outline.outline.document import OutlineDocument, resolve_id_at_cursor
from steam_outline.outline.sync import (
    EntryParts,
    EntryRenderer,
    ImageEntryRenderer,
    link_label,
    render_entry,
    sync,
    text_entry,
)

__all__ = [
    "EntryParts",
    "EntryRenderer",
    "ImageEntryRenderer",
    "OutlineDocument",
    "link_label",
    "render_entry",
    "resolve_id_at_cursor",
    "sync",
    "text_entry",
]
