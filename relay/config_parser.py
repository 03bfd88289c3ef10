"""
Parser for the relay's line-oriented configuration format.

    key=value
    anotherKey = trimmed value
    keyWithNoEquals

    [sectionName]
    block=SomeBlockName
    surface=1

Lines are trimmed before they are classified. The root section ignores blank
lines; a named section ends at the first blank line or at end of input.
A section header inside a named section is an error.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from common.constants import ROOT_SECTION_NAME
from relay.exceptions import MalformedConfigError

logger = logging.getLogger(__name__)

LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")
SECTION_HEADER_RE = re.compile(r"^\[(.+)\]$")
INTEGER_RE = re.compile(r"^[+-]?\d+$")


@dataclass
class ConfigSection:
    """
    A named (or root) collection of key/value entries.

    Attributes:
        name: Section name, "" for the implicit root
        entries: Key/value pairs; a later duplicate key overwrites an earlier one
        children: Sections opened from the root, in input order
    """
    name: str = ROOT_SECTION_NAME
    entries: Dict[str, str] = field(default_factory=dict)
    children: List['ConfigSection'] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.name == ROOT_SECTION_NAME

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value for key, or default when absent."""
        return self.entries.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        """
        Return the value for key as an integer.

        Raises:
            MalformedConfigError: If the value is present but not numeric
        """
        raw = self.entries.get(key)
        if raw is None:
            return default
        if not INTEGER_RE.match(raw):
            raise MalformedConfigError(
                f"Value '{raw}' for '{key}' in [{self.name}] is not an integer"
            )
        return int(raw)

    def sections(self, name: str) -> Iterator['ConfigSection']:
        """Iterate children with the given name, in input order."""
        return (child for child in self.children if child.name == name)


class LineCursor:
    """
    Forward-only position over an immutable sequence of lines.

    The root parse and every child parse share one cursor, so a sibling
    section resumes exactly where the previous one stopped.
    """

    def __init__(self, lines: Tuple[str, ...]):
        self._lines = lines
        self._position = 0

    @property
    def line_number(self) -> int:
        """1-based number of the line most recently returned."""
        return self._position

    def next_line(self) -> Optional[str]:
        """Return the next line, or None at end of input."""
        if self._position >= len(self._lines):
            return None
        line = self._lines[self._position]
        self._position += 1
        return line


def split_lines(text: str) -> Tuple[str, ...]:
    """Split text on \\r\\n, \\n or \\r."""
    return tuple(LINE_BREAK_RE.split(text))


def parse_config(text: str) -> ConfigSection:
    """
    Parse configuration text into a section tree.

    Args:
        text: Raw configuration text

    Returns:
        Root ConfigSection

    Raises:
        MalformedConfigError: If a section header appears inside a named section
    """
    cursor = LineCursor(split_lines(text))
    root = _parse_section(cursor, ROOT_SECTION_NAME)
    logger.debug(
        f"Parsed config: {len(root.entries)} root entries, {len(root.children)} sections"
    )
    return root


def _parse_section(cursor: LineCursor, name: str) -> ConfigSection:
    section = ConfigSection(name=name)

    while True:
        raw = cursor.next_line()
        if raw is None:
            break
        line = raw.strip()

        if line == "":
            if section.is_root:
                continue
            break

        match = SECTION_HEADER_RE.match(line)
        if match:
            if not section.is_root:
                raise MalformedConfigError(
                    f"Found section [{match.group(1)}] inside section [{name}]. "
                    "Close a section with an empty line before opening another.",
                    line_number=cursor.line_number,
                )
            section.children.append(_parse_section(cursor, match.group(1)))
            continue

        key, value = _split_entry(line)
        section.entries[key] = value

    return section


def _split_entry(line: str) -> Tuple[str, str]:
    key, separator, value = line.partition("=")
    if not separator:
        return line, ""
    return key.strip(), value.strip()


def serialize_config(root: ConfigSection) -> str:
    """
    Render a section tree back into configuration text.

    Root entries come first, then one block per child separated by blank
    lines. Parsing the result yields an equal tree.

    Args:
        root: Root ConfigSection

    Returns:
        Configuration text
    """
    blocks = []
    if root.entries:
        blocks.append(_render_entries(root.entries))
    for child in root.children:
        lines = [f"[{child.name}]"]
        if child.entries:
            lines.append(_render_entries(child.entries))
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n" if blocks else ""


def _render_entries(entries: Dict[str, str]) -> str:
    return "\n".join(f"{key}={value}" for key, value in entries.items())
