from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import islice
from typing import TextIO

from reward_registry.errors import ParseError

STANZA_SEPARATOR = "\n"


def format_int(value: int) -> str:
    return str(int(value))


def format_float(value: float) -> str:
    """Shortest text that reads back to the same float."""

    return repr(float(value))


def parse_int(text: str) -> int:
    """Parse a stored decimal integer.

    Raises:
        ValueError: If the line is not an integer.
    """

    return int(text.strip())


def parse_float(text: str) -> float:
    return float(text.strip())


def render_stanza(fields: Iterable[str]) -> str:
    """Render one record as its field lines followed by a blank separator.

    Args:
        fields: Field values in stanza order.

    Returns:
        Text block ready to be written.

    Raises:
        ValueError: If a field contains a line break, or the first field is
            blank and would be skipped as a separator on load.
    """

    lines: list[str] = []
    for value in fields:
        if not lines and not value.strip():
            raise ValueError("First field of a record cannot be blank")
        if "\n" in value or "\r" in value:
            raise ValueError(f"Field value {value!r} contains a line break")
        lines.append(value)
    return "\n".join(lines) + "\n" + STANZA_SEPARATOR


def read_stanzas(handle: TextIO, size: int, kind: str) -> Iterator[list[str]]:
    """Split an open text file into fixed-size groups of lines.

    Blank lines before a stanza are skipped; inside a stanza every line is
    taken as-is, so empty field values survive.

    Args:
        handle: File opened for reading in text mode.
        size: Number of lines per stanza.
        kind: Record kind used in error messages.

    Yields:
        Lists of exactly ``size`` lines, newline stripped.

    Raises:
        ParseError: If the file ends in the middle of a stanza.
    """

    lines = (line.removesuffix("\n") for line in handle)
    for first in lines:
        if not first.strip():
            continue
        stanza = [first, *islice(lines, size - 1)]
        if len(stanza) < size:
            raise ParseError(
                f"Error parsing {kind} data: record starting with {first!r} has "
                f"{len(stanza)} of {size} lines"
            )
        yield stanza
