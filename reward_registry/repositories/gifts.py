from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import yaml
from pydantic import ValidationError

from reward_registry.errors import ParseError
from reward_registry.models.gift import Gift

logger = logging.getLogger(__name__)


class GiftRepository:
    """Persist the gift catalog as a YAML list.

    Example:
    - gift_name: Coffee Mug
      required_points: 500
    """

    def __init__(self, path: str | Path, indent: int = 2) -> None:
        self.path: Path = Path(path)
        self.indent: int = indent

    def save(self, gifts: Iterable[Gift]) -> None:
        """Overwrite the catalog file.

        Raises:
            OSError: If the file cannot be opened for writing.
        """
        payload: list[dict[str, object]] = [gift.model_dump() for gift in gifts]

        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with self.path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(
                    payload,
                    f,
                    allow_unicode=True,
                    sort_keys=False,
                    default_flow_style=False,
                    indent=self.indent,
                )
        except OSError:
            logger.exception("Failed to write gift catalog to %s", self.path)
            raise

    def load(self) -> list[Gift]:
        """Read the catalog in file order.

        Raises:
            OSError: If the file cannot be opened for reading.
            ParseError: If the YAML is malformed or an entry is invalid.
        """
        with self.path.open("r", encoding="utf-8") as f:
            try:
                raw: object = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ParseError(f"Error parsing gift data: {exc}") from exc

        if raw is None:
            return []
        if not isinstance(raw, list):
            raise ParseError(
                f"Error parsing gift data: expected a list, got {type(raw).__name__}"
            )

        gifts: list[Gift] = []
        for entry in raw:
            try:
                gifts.append(Gift.model_validate(entry))
            except ValidationError as exc:
                raise ParseError(f"Error parsing gift data: {exc}") from exc
        return gifts
