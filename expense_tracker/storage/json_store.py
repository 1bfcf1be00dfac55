"""Mini README: JSON file persistence for the expense ledger.

Structure:
    * JsonExpenseStore - loads and saves ledger snapshots as a JSON list.

The file holds a list of objects with ``amount``, ``category``, ``date`` and
``description`` keys, matching ``ExpenseLedger.snapshot()``. Identifiers are
not stored; the ledger assigns fresh ones when it is rehydrated. Records are
returned as plain dictionaries so validation stays in one place (the ledger).
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Iterable, List, Mapping

from ..ledger.errors import PersistenceError
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class JsonExpenseStore:
    """Read and write ledger snapshots at a fixed path."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> List[Dict[str, object]]:
        """Return stored records, or an empty list when nothing was saved yet."""

        if not self.path.exists():
            LOGGER.debug("No ledger file at %s; starting empty", self.path)
            return []

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except (json.JSONDecodeError, UnicodeDecodeError) as error:
            raise PersistenceError(f"Ledger file {self.path} is not valid UTF-8 JSON") from error

        if not isinstance(payload, list):
            raise PersistenceError(f"Ledger file {self.path} must contain a JSON list")
        for index, record in enumerate(payload):
            if not isinstance(record, dict):
                raise PersistenceError(
                    f"Ledger file {self.path} entry {index} is not a JSON object"
                )
        LOGGER.info("Loaded %s expenses from %s", len(payload), self.path)
        return payload

    def save(self, records: Iterable[Mapping[str, object]]) -> None:
        """Replace the stored ledger with ``records``."""

        serialisable = [dict(record) for record in records]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            temp_path.write_text(
                json.dumps(serialisable, indent=2, ensure_ascii=False), encoding="utf-8"
            )
            os.replace(temp_path, self.path)
        finally:
            temp_path.unlink(missing_ok=True)
        LOGGER.debug("Saved %s expenses to %s", len(serialisable), self.path)
