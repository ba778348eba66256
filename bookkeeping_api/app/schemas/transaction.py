"""
Pydantic models for transaction data.

``Transaction`` is the unit of storage: an immutable value carrying a
UUID, the user and item it concerns, a finite amount and a UNIX
timestamp.  The same model validates entries read back from the JSON
file and is returned by the API.  ``TransactionCreate`` and
``TransactionUpdate`` describe request bodies; trimming and the
non-empty and finite checks are applied by the service layer so that
direct callers get the same rules as HTTP clients.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class Transaction(BaseModel):
    """A single stored financial entry."""

    id: UUID
    user: str = Field(..., min_length=1, examples=["alice"])
    item: str = Field(..., min_length=1, examples=["Book"])
    amount: float = Field(..., allow_inf_nan=False, examples=[9.5])
    timestamp: int = Field(..., ge=0, description="UNIX timestamp (seconds since epoch)")

    model_config = {
        "frozen": True,
    }


class TransactionCreate(BaseModel):
    """Schema for creating a transaction.

    ``timestamp`` is optional; the server fills in the current time
    when it is omitted.
    """

    user: str = Field(..., examples=["alice"])
    item: str = Field(..., examples=["Book"])
    amount: float = Field(..., examples=[9.5])
    timestamp: Optional[int] = Field(None, description="UNIX timestamp (seconds since epoch)")


class TransactionUpdate(BaseModel):
    """Schema for updating a transaction.

    All fields are optional; only provided fields will be updated.
    The id is never updatable.
    """

    user: Optional[str] = None
    item: Optional[str] = None
    amount: Optional[float] = None
    timestamp: Optional[int] = None


class UserSummary(BaseModel):
    """Aggregate of all transactions recorded for one user."""

    user: str
    count: int
    total_amount: float
    records: List[Transaction]
