"""
Health endpoint for API v1.

Reports that the process is serving requests and how many
transactions the in-memory collection currently holds.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from bookkeeping_api.app.api.deps import get_store
from bookkeeping_api.app.core.store import DurableStore

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def health(store: DurableStore = Depends(get_store)) -> Dict[str, Any]:
    return {"status": "ok", "records": await store.count()}
