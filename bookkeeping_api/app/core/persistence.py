"""
JSON file persistence for the transaction collection.

The collection is stored as a single JSON array.  Writes always
replace the whole file: the data is written to a temporary file in
the destination directory, flushed to disk and then renamed over the
target with :func:`os.replace`.  Readers of ``path`` therefore only
ever see the previous complete file or the new complete file.

Loading is lenient.  A missing file, unreadable JSON or an entry that
does not validate as a transaction all yield an empty collection so
that a damaged file never prevents the service from starting.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Tuple

from pydantic import ValidationError

from bookkeeping_api.app.core.exceptions import PersistenceError
from bookkeeping_api.app.schemas.transaction import Transaction

logger = logging.getLogger(__name__)


def load_transactions(path: str | os.PathLike[str]) -> Tuple[Transaction, ...]:
    """Read the collection stored at ``path``.

    Returns an empty tuple when the file does not exist or cannot be
    parsed.  Problems are logged but never raised.
    """
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.info("Transactions file %s not found; starting empty", p)
        return ()
    except json.JSONDecodeError:
        logger.warning("Transactions file %s is corrupted; starting empty", p)
        return ()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Error reading %s: %s; starting empty", p, e)
        return ()

    if not isinstance(raw, list):
        logger.warning("Transactions file %s does not hold a JSON array; starting empty", p)
        return ()
    try:
        records = tuple(Transaction.model_validate(item) for item in raw)
    except ValidationError as e:
        logger.warning("Transactions file %s holds invalid entries (%s); starting empty", p, e)
        return ()
    logger.info("Loaded %d transactions from %s", len(records), p)
    return records


def persist_transactions(records: Iterable[Transaction], path: str | os.PathLike[str]) -> None:
    """Atomically replace ``path`` with the serialized ``records``.

    Raises
    ------
    PersistenceError
        If serialization, writing or the final rename fails.  ``path``
        is left untouched and the temporary file is removed.
    """
    dest = Path(path)
    payload = [record.model_dump(mode="json") for record in records]
    tmp_path = None
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(dest.parent), prefix=f".{dest.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2, allow_nan=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, dest)
    except (OSError, TypeError, ValueError) as e:
        logger.error("Failed to persist %d transactions to %s: %s", len(payload), dest, e)
        raise PersistenceError(f"failed to save transactions: {e}") from e
    finally:
        if tmp_path is not None:
            try:
                os.remove(tmp_path)
            except FileNotFoundError:
                pass
            except OSError:
                logger.warning("Could not remove temporary file %s", tmp_path)
    logger.debug("Persisted %d transactions to %s", len(payload), dest)
