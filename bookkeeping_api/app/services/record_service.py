"""
Service layer for transaction records.

``RecordService`` validates caller input and composes store reads and
mutations into the operations exposed by the API: create, list, get,
partial update, delete and the per-user summary.

Validation rules shared by create and update:

* ``user`` and ``item`` are stripped of surrounding whitespace and
  must not be empty afterwards.
* ``amount`` must be a finite number; any sign is accepted.
* ``timestamp`` must be a non-negative integer number of seconds.

The summary matches users by exact string equality.  Stored names are
already trimmed, so callers must query with the trimmed form.
"""

from __future__ import annotations

import logging
import math
import time
import uuid
from typing import Any, Dict, List, Optional

from bookkeeping_api.app.core.exceptions import RecordNotFoundError, RecordValidationError
from bookkeeping_api.app.core.store import Collection, DurableStore
from bookkeeping_api.app.schemas.transaction import Transaction, UserSummary

logger = logging.getLogger(__name__)


def _clean_text(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise RecordValidationError(f"{field} must be a string")
    cleaned = value.strip()
    if not cleaned:
        raise RecordValidationError(f"{field} cannot be empty")
    return cleaned


def _check_amount(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RecordValidationError("amount must be a finite number")
    try:
        amount = float(value)
    except OverflowError:
        raise RecordValidationError("amount must be a finite number") from None
    if not math.isfinite(amount):
        raise RecordValidationError("amount must be a finite number")
    return amount


def _check_timestamp(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise RecordValidationError("timestamp must be a non-negative integer")
    return value


def _as_uuid(record_id: Any) -> Optional[uuid.UUID]:
    if isinstance(record_id, uuid.UUID):
        return record_id
    try:
        return uuid.UUID(str(record_id))
    except ValueError:
        return None


def _find(records: Collection, record_id: Any) -> int:
    """Return the index of the record with ``record_id`` or raise."""
    wanted = _as_uuid(record_id)
    if wanted is not None:
        for index, record in enumerate(records):
            if record.id == wanted:
                return index
    raise RecordNotFoundError(record_id)


class RecordService:
    """Validated CRUD and reporting over a shared transaction store."""

    def __init__(self, store: DurableStore) -> None:
        self._store = store

    @property
    def store(self) -> DurableStore:
        return self._store

    async def create(
        self,
        user: Any,
        item: Any,
        amount: Any,
        timestamp: Optional[int] = None,
    ) -> Transaction:
        """Validate the input, assign an id and append a new transaction.

        When ``timestamp`` is omitted the current time is used.
        """
        record = Transaction(
            id=uuid.uuid4(),
            user=_clean_text("user", user),
            item=_clean_text("item", item),
            amount=_check_amount(amount),
            timestamp=_check_timestamp(timestamp) if timestamp is not None else int(time.time()),
        )
        created = await self._store.mutate(lambda records: (records + (record,), record))
        logger.info("Created transaction %s for user %r", created.id, created.user)
        return created

    async def list(self) -> List[Transaction]:
        """Return all transactions in insertion order."""
        return await self._store.snapshot()

    async def get(self, record_id: Any) -> Transaction:
        """Return the transaction with ``record_id``.

        Raises ``RecordNotFoundError`` when there is none.
        """
        return await self._store.read(lambda records: records[_find(records, record_id)])

    async def update(
        self,
        record_id: Any,
        *,
        user: Any = None,
        item: Any = None,
        amount: Any = None,
        timestamp: Any = None,
    ) -> Transaction:
        """Apply a partial update and return the updated transaction.

        Only arguments that are not ``None`` are changed; each one is
        validated with the same rules as :meth:`create`.  A missing
        record is reported before any field is validated.  The record
        keeps its id and its position in the collection.
        """

        def apply(records: Collection):
            index = _find(records, record_id)
            changes: Dict[str, Any] = {}
            if user is not None:
                changes["user"] = _clean_text("user", user)
            if item is not None:
                changes["item"] = _clean_text("item", item)
            if amount is not None:
                changes["amount"] = _check_amount(amount)
            if timestamp is not None:
                changes["timestamp"] = _check_timestamp(timestamp)
            updated = records[index].model_copy(update=changes)
            return records[:index] + (updated,) + records[index + 1:], updated

        updated = await self._store.mutate(apply)
        logger.info("Updated transaction %s", updated.id)
        return updated

    async def delete(self, record_id: Any) -> None:
        """Remove the transaction with ``record_id``.

        Absence is detected by the collection length staying the same.
        """
        wanted = _as_uuid(record_id)

        def remove(records: Collection):
            remaining = tuple(record for record in records if record.id != wanted)
            if len(remaining) == len(records):
                raise RecordNotFoundError(record_id)
            return remaining, None

        await self._store.mutate(remove)
        logger.info("Deleted transaction %s", record_id)

    async def user_summary(self, user: str) -> UserSummary:
        """Return count, total amount and entries for ``user``.

        ``user`` is compared verbatim: no trimming, no case folding.
        """

        def summarize(records: Collection) -> UserSummary:
            matching = [record for record in records if record.user == user]
            return UserSummary(
                user=user,
                count=len(matching),
                total_amount=sum((record.amount for record in matching), 0.0),
                records=matching,
            )

        return await self._store.read(summarize)
