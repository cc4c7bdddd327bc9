from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import ClassVar, Generic, TypeVar

from reward_registry.errors import ParseError
from reward_registry.repositories._serialization import read_stanzas, render_stanza

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StanzaRepository(ABC, Generic[T]):
    """Persist an ordered collection of records as fixed-size line stanzas.

    Each record is written as one line per field, in ``fields`` order,
    followed by a single blank line. Records are read back in file order.
    """

    kind: ClassVar[str]
    fields: ClassVar[tuple[str, ...]]

    def __init__(self, path: str | Path) -> None:
        """Create a repository bound to a file.

        Args:
            path: File the collection is saved to and loaded from.
        """
        self.path: Path = Path(path)

    @abstractmethod
    def _to_lines(self, record: T) -> list[str]:
        """Render a record's fields as stanza lines."""

    @abstractmethod
    def _from_lines(self, lines: list[str]) -> T:
        """Rebuild a record from stanza lines.

        May raise ``ValueError`` (including ``pydantic.ValidationError``),
        which ``load`` turns into ``ParseError``.
        """

    def save(self, records: Iterable[T]) -> None:
        """Overwrite the file with ``records``.

        Args:
            records: Records in the order they should be stored.

        Raises:
            OSError: If the file cannot be opened for writing.
            ValueError: If a field value contains a line break or a record
                starts with a blank field.
        """
        text = "".join(render_stanza(self._to_lines(record)) for record in records)

        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with self.path.open("w", encoding="utf-8", newline="\n") as f:
                f.write(text)
        except OSError:
            logger.exception("Failed to write %s records to %s", self.kind, self.path)
            raise

    def load(self) -> list[T]:
        """Read every record stored in the file.

        Returns:
            Records in file order; empty for an empty file.

        Raises:
            OSError: If the file cannot be opened for reading.
            ParseError: If a stanza is truncated, a numeric field does not
                parse, or the record fails validation.
        """
        return self._read(self._from_lines)

    def _read(self, build: Callable[[list[str]], T]) -> list[T]:
        records: list[T] = []
        with self.path.open("r", encoding="utf-8") as f:
            for lines in read_stanzas(f, len(self.fields), self.kind):
                try:
                    records.append(build(lines))
                except ValueError as exc:
                    raise ParseError(f"Error parsing {self.kind} data: {exc}") from exc
        logger.debug("Loaded %d %s records from %s", len(records), self.kind, self.path)
        return records
