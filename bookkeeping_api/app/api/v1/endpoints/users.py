"""
Per-user reporting endpoints for API v1.
"""

from fastapi import APIRouter, Depends

from bookkeeping_api.app.api.deps import get_record_service
from bookkeeping_api.app.schemas.transaction import UserSummary
from bookkeeping_api.app.services.record_service import RecordService

router = APIRouter()


@router.get("/{user}/summary", response_model=UserSummary)
async def user_summary(
    user: str,
    service: RecordService = Depends(get_record_service),
) -> UserSummary:
    """Return the number of transactions, their total amount and the entries for ``user``.

    The user name is matched exactly as given.  A user without any
    transactions yields a zero summary rather than 404.
    """
    return await service.user_summary(user)
