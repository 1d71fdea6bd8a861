"""
Analysis history.

A bounded, most-recent-first list of past analyses persisted as JSON. Each
record keeps the analyzed input, a UTC timestamp and the document summary
(tokens, symbols, errors, valid lines). Persistence is best effort: a
corrupted file is discarded, records without the expected fields are
dropped, and write failures are logged, never raised.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Any

from .config import DEFAULT_HISTORY_LIMIT

logger = logging.getLogger(__name__)

RECORD_KEYS = frozenset({"id", "input", "timestamp", "summary"})


class HistoryStore:
    """JSON-file backed history, newest record first."""

    def __init__(self, path: Path, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self.path = Path(path)
        self.limit = limit

    def list(self) -> List[Dict[str, Any]]:
        """Return all stored records, newest first."""
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("discarding unreadable history file %s: %s", self.path, e)
            self._remove()
            return []

        if not isinstance(data, list):
            logger.warning("discarding malformed history file %s", self.path)
            self._remove()
            return []

        records = [r for r in data if _is_record(r)]
        if len(records) != len(data):
            logger.warning(
                "dropping %d malformed history records from %s",
                len(data) - len(records), self.path
            )
            self._write(records)
        return records

    def add(self, input_text: str, summary: Optional[Dict[str, int]] = None) -> Dict[str, Any]:
        """
        Prepend a record and truncate to the most recent `limit` entries.

        Returns:
            The stored record
        """
        record = {
            "id": uuid.uuid4().hex,
            "input": input_text,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "summary": summary,
        }
        updated = [record] + self.list()
        self._write(updated[:self.limit])
        return record

    def clear(self) -> None:
        """Remove every stored record."""
        self._remove()

    def _write(self, records: List[Dict[str, Any]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("failed to save history to %s: %s", self.path, e)

    def _remove(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error("failed to remove history file %s: %s", self.path, e)


def _is_record(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and RECORD_KEYS <= value.keys()
        and isinstance(value["input"], str)
        and (value["summary"] is None or isinstance(value["summary"], dict))
    )
