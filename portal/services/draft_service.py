"""Expiring drafts on top of local storage (in-progress form data)."""
from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from typing import Any

from portal.db import LocalStorage, local_storage

logger = logging.getLogger(__name__)


class DraftService:
    def __init__(
        self,
        storage: LocalStorage | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage or local_storage
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def save_draft(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Store ``value`` under ``key`` until ``ttl_seconds`` from now."""
        record = {"value": value, "expiry": self._now_ms() + int(ttl_seconds * 1000)}
        self._storage.set_item(key, json.dumps(record))

    def load_draft(self, key: str) -> Any | None:
        raw = self._storage.get_item(key)
        if raw is None:
            return None
        try:
            record = json.loads(raw)
            expiry = int(record["expiry"])
        except (ValueError, TypeError, KeyError):
            logger.warning("Discarding unreadable draft %r", key)
            self._storage.remove_item(key)
            return None
        if self._now_ms() > expiry:
            logger.info("Draft %r expired, removing it", key)
            self._storage.remove_item(key)
            return None
        return record.get("value")

    def clear_draft(self, key: str) -> None:
        self._storage.remove_item(key)


draft_service = DraftService()
