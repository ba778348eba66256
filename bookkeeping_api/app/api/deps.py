"""
FastAPI dependencies shared by the endpoint modules.

The store is created once by ``create_app`` and kept on
``app.state``.  Handlers receive it, or a service wrapping it, through
these dependencies instead of importing a module-level global.
"""

from fastapi import Depends, Request

from bookkeeping_api.app.core.store import DurableStore
from bookkeeping_api.app.services.record_service import RecordService


def get_store(request: Request) -> DurableStore:
    """Return the store attached to the running application."""
    return request.app.state.store


def get_record_service(store: DurableStore = Depends(get_store)) -> RecordService:
    return RecordService(store)
