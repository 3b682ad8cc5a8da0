"""Bounded delivery failure log.

Keeps the most recent delivery failures as a store list (oldest first), one
JSON document per item. Appending and trimming are a single atomic store
operation, so concurrent writers, in one process or several, never drop each
other's entries.
"""

import json
from typing import List, Optional

from pydantic import ValidationError

from infrastructure.configuration.infrastructure import FailureLogSettings
from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import FailureLogEntry
from infrastructure.storage.base import KeyValueStore
from infrastructure.storage.exceptions import StorageError

logger = get_module_logger()


class FailureLog:
    """FIFO-capped record of delivery failures.

    Attributes:
        max_records: Entries retained; the oldest are evicted beyond this
        default_limit: Entries returned by ``list()`` without a limit
        key: Store key holding the log

    Example:
        failure_log = FailureLog(store, settings.failure_log)
        failure_log.record(entry)
        recent = failure_log.list(10)
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[FailureLogSettings] = None,
    ):
        settings = settings or FailureLogSettings()
        self.store = store
        self.max_records = settings.max_records
        self.default_limit = settings.default_limit
        self.key = settings.key

    def _read(self) -> List[dict]:
        entries = []
        for raw in self.store.get_list(self.key):
            try:
                entry = json.loads(raw)
            except ValueError:
                logger.warning("failure_log_entry_corrupted", key=self.key)
                continue
            if isinstance(entry, dict):
                entries.append(entry)
        return entries

    def record(self, entry: FailureLogEntry) -> bool:
        """Append one entry, evicting the oldest beyond ``max_records``.

        Storage failures are logged, never raised: losing a log entry must
        not block delivery.

        Returns:
            True if the entry was persisted
        """
        try:
            self.store.append_capped(
                self.key, json.dumps(entry.model_dump(mode="json")), self.max_records
            )
            return True
        except StorageError as e:
            logger.error(
                "failure_log_record_failed",
                channel=entry.channel,
                subscription_id=entry.subscription_id,
                error=str(e),
            )
            return False

    def list(self, limit: Optional[int] = None) -> List[FailureLogEntry]:
        """Most recent entries, newest first.

        Args:
            limit: Maximum entries to return, defaults to ``default_limit``
                and is clamped to the stored count

        Raises:
            StorageUnavailableError: When the store cannot be reached
        """
        if limit is None:
            limit = self.default_limit
        entries = self._read()
        limit = max(0, min(limit, len(entries)))

        result: List[FailureLogEntry] = []
        for raw in reversed(entries):
            if len(result) >= limit:
                break
            try:
                result.append(FailureLogEntry.model_validate(raw))
            except ValidationError:
                logger.warning("failure_log_entry_invalid", key=self.key)
        return result

    def clear(self) -> None:
        """Remove every entry.

        Raises:
            StorageUnavailableError: When the store cannot be reached
        """
        self.store.delete(self.key)
        logger.info("failure_log_cleared", key=self.key)
