"""
Transaction endpoints for API v1.

These routes expose CRUD operations over the shared transaction
store.  Identifiers in the path must be UUIDs; a malformed id is a
client error (400) rather than a missing record (404).  Service
exceptions are mapped to HTTP statuses here:

* ``RecordValidationError`` → 400
* ``RecordNotFoundError`` → 404
* ``PersistenceError`` → 500
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from bookkeeping_api.app.api.deps import get_record_service
from bookkeeping_api.app.core.exceptions import (
    PersistenceError,
    RecordNotFoundError,
    RecordValidationError,
)
from bookkeeping_api.app.schemas.transaction import Transaction, TransactionCreate, TransactionUpdate
from bookkeeping_api.app.services.record_service import RecordService

router = APIRouter()


def _parse_id(transaction_id: str) -> UUID:
    try:
        return UUID(transaction_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid uuid") from None


@router.post("", response_model=Transaction, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: TransactionCreate,
    service: RecordService = Depends(get_record_service),
) -> Transaction:
    """Record a new transaction.

    ``user`` and ``item`` are trimmed and must not be empty; ``amount``
    must be finite.  Returns 500 if the transaction was accepted but
    could not be saved to disk.
    """
    try:
        return await service.create(payload.user, payload.item, payload.amount, payload.timestamp)
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to save transaction"
        ) from e


@router.get("", response_model=List[Transaction])
async def list_transactions(service: RecordService = Depends(get_record_service)) -> List[Transaction]:
    """Return every transaction in insertion order."""
    return await service.list()


@router.get("/{transaction_id}", response_model=Transaction)
async def get_transaction(
    transaction_id: str,
    service: RecordService = Depends(get_record_service),
) -> Transaction:
    """Retrieve a single transaction by its UUID."""
    record_id = _parse_id(transaction_id)
    try:
        return await service.get(record_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found") from e


@router.put("/{transaction_id}", response_model=Transaction)
async def update_transaction(
    transaction_id: str,
    payload: TransactionUpdate,
    service: RecordService = Depends(get_record_service),
) -> Transaction:
    """Update an existing transaction.

    Only fields present in the body are changed.  The id cannot be
    modified.
    """
    record_id = _parse_id(transaction_id)
    try:
        return await service.update(record_id, **payload.model_dump(exclude_unset=True))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found") from e
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to save changes"
        ) from e


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: str,
    service: RecordService = Depends(get_record_service),
) -> Response:
    """Delete a transaction by its UUID."""
    record_id = _parse_id(transaction_id)
    try:
        await service.delete(record_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found") from e
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to persist delete"
        ) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
