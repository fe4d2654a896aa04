from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

from app.application.exceptions import StoreUnavailableError
from app.infrastructure.store.memory_store import MemoryBookingStore


class JsonBookingStore(MemoryBookingStore):
    """Memory store that writes the whole booking tree to a JSON file after every change."""

    def __init__(
        self,
        file_path: str = "./data/bookings.json",
        key_factory: Callable[[], str] | None = None,
    ) -> None:
        self._file_path = Path(file_path)
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._json_logger = logging.getLogger(__name__)
        super().__init__(records=self._load(), key_factory=key_factory)

    def _load(self) -> dict[str, dict[str, Any]]:
        """Load the booking tree from disk, return empty if missing or corrupted."""
        if not self._file_path.exists():
            return {}

        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            self._json_logger.warning(
                "Booking file unreadable, starting empty",
                extra={"path": str(self._file_path), "error": str(e)},
            )
            return {}

        bookings = data.get("bookings") if isinstance(data, dict) else None
        if not isinstance(bookings, dict):
            return {}
        return {str(k): v for k, v in bookings.items() if isinstance(v, dict)}

    def _persist(self, records: dict[str, dict[str, Any]]) -> None:
        """Save the booking tree atomically."""
        data = {"version": 1, "bookings": records}
        temp_path = self._file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise StoreUnavailableError(f"Could not write {self._file_path}: {e}") from e
