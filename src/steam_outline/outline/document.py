"""
Outline document model.

An OutlineDocument is the text of an org-style file plus a cursor
offset. Headings are lines starting with one or more ``*`` followed
by a space; links are ``[[target][label]]``.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from steam_outline.catalog.models import LAUNCH_TOKEN_PREFIX
from steam_outline.errors import NotFoundError

HEADING_RE = re.compile(r"^(\*+)[ \t]", re.MULTILINE)
LINK_RE = re.compile(r"\[\[([^\[\]]+)\]\[([^\[\]]*)\]\]")
LAUNCH_TARGET_RE = re.compile(rf"^{re.escape(LAUNCH_TOKEN_PREFIX)}(\d+)$")
# Any mention of a launch token in the text, not only inside links
LAUNCH_MENTION_RE = re.compile(rf"{re.escape(LAUNCH_TOKEN_PREFIX)}(\d+)(?!\d)")


@dataclass
class OutlineDocument:
    """Mutable document text with a cursor position (character offset)."""

    text: str = ""
    cursor: int | None = None

    @classmethod
    def load(cls, path: Path | str) -> "OutlineDocument":
        """Read a document from disk; a missing file gives an empty document."""
        path = Path(path)
        if not path.exists():
            return cls()
        return cls(text=path.read_text(encoding="utf-8"))

    def save(self, path: Path | str) -> None:
        Path(path).write_text(self.text, encoding="utf-8")

    def append(self, entry: str) -> None:
        """Append text at the end, keeping existing lines intact."""
        if self.text and not self.text.endswith("\n"):
            self.text += "\n"
        self.text += entry

    def heading_depth(self, position: int | None = None) -> int:
        """
        Outline depth at a position.

        The depth is the number of stars of the closest heading that starts
        at or before the position; 0 when there is none or no position.
        """
        if position is None:
            position = self.cursor
        if position is None:
            return 0

        depth = 0
        for match in HEADING_RE.finditer(self.text):
            if match.start() > position:
                break
            depth = len(match.group(1))
        return depth

    def launch_ids(self) -> set[str]:
        """Ids of every launch token mentioned anywhere in the text."""
        return {match.group(1) for match in LAUNCH_MENTION_RE.finditer(self.text)}


def resolve_id_at_cursor(document: OutlineDocument, position: int | None = None) -> str:
    """
    Return the game id of the launch link under the cursor.

    A position touching either end of the link counts as on it.

    Raises:
        NotFoundError: If the position is not on a ``steam://run/<id>`` link
    """
    if position is None:
        position = document.cursor
    if position is None:
        raise NotFoundError("No cursor position given")

    for link in LINK_RE.finditer(document.text):
        if link.start() > position:
            break
        if position <= link.end():
            target = LAUNCH_TARGET_RE.match(link.group(1))
            if target is not None:
                return target.group(1)
            raise NotFoundError(f"Link at {position} is not a launch link: {link.group(1)}")

    raise NotFoundError(f"No launch link at position {position}")
