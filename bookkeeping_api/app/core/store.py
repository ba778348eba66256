"""
Shared in-memory transaction collection with durable JSON mirroring.

``DurableStore`` owns the authoritative collection for the lifetime of
the process.  The collection is an immutable tuple of
:class:`~bookkeeping_api.app.schemas.transaction.Transaction` values
which is replaced wholesale by every mutation, so a reader always
works on a consistent view.

Access is arbitrated by a :class:`~bookkeeping_api.app.core.locks.ReadWriteLock`:

* :meth:`DurableStore.read` holds shared access while a pure function
  inspects the collection.  It never touches the disk.
* :meth:`DurableStore.mutate` holds exclusive access while a pure
  function computes the next collection, swaps it in and releases the
  lock.  Only then is the new state written to disk.

Disk writes happen outside the lock in a worker thread.  Each mutation
queues its write behind the write of the mutation before it, so the
file goes through the same sequence of states as the in-memory
collection.  A failed write is reported to the caller as
:class:`~bookkeeping_api.app.core.exceptions.PersistenceError`; the
in-memory state is kept and the next mutation rewrites the whole
file.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence, Tuple, TypeVar

from bookkeeping_api.app.core.locks import ReadWriteLock
from bookkeeping_api.app.core.persistence import load_transactions, persist_transactions
from bookkeeping_api.app.schemas.transaction import Transaction

T = TypeVar("T")
Collection = Tuple[Transaction, ...]

logger = logging.getLogger(__name__)


class DurableStore:
    """Process-wide owner of the transaction collection."""

    def __init__(self, path: str | os.PathLike[str], records: Iterable[Transaction] = ()) -> None:
        self.path = Path(path)
        self._records: Collection = tuple(records)
        self._lock = ReadWriteLock()
        self._last_write: Optional[asyncio.Task] = None

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> "DurableStore":
        """Create a store initialised from the file at ``path``.

        A missing or unparseable file yields an empty store.
        """
        return cls(path, load_transactions(path))

    async def read(self, fn: Callable[[Collection], T]) -> T:
        """Apply ``fn`` to the current collection under shared access."""
        async with self._lock.read():
            return fn(self._records)

    async def mutate(self, fn: Callable[[Collection], Tuple[Sequence[Transaction], T]]) -> T:
        """Replace the collection with the one computed by ``fn`` and persist it.

        ``fn`` receives the current collection and returns the new
        collection together with the value handed back to the caller.
        If ``fn`` raises, the collection is left unchanged, nothing is
        written and the exception propagates.

        Raises
        ------
        PersistenceError
            If the new state could not be written.  The in-memory
            collection keeps the mutation.
        """
        async with self._lock.write():
            new_records, result = fn(self._records)
            self._records = tuple(new_records)
            previous = self._last_write
            write = asyncio.get_running_loop().create_task(
                self._write_after(previous, self._records)
            )
            self._last_write = write
        # The write task keeps running if the caller is cancelled so the
        # next mutation still finds the file in order.
        await asyncio.shield(write)
        return result

    async def _write_after(self, previous: Optional[asyncio.Task], records: Collection) -> None:
        if previous is not None and not previous.done():
            await asyncio.wait([previous])
        await asyncio.to_thread(persist_transactions, records, self.path)

    async def snapshot(self) -> list[Transaction]:
        """Return a list copy of the collection in insertion order."""
        return await self.read(list)

    async def count(self) -> int:
        return await self.read(len)

    async def wait_persisted(self) -> None:
        """Wait until the most recently queued write has finished.

        Failures of that write are not raised here; they were already
        reported to the caller of the corresponding mutation.
        """
        last = self._last_write
        if last is not None and not last.done():
            await asyncio.wait([last])
