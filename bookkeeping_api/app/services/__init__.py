"""
Service layer abstraction.

Services encapsulate business rules and operate on the shared
:class:`~bookkeeping_api.app.core.store.DurableStore` they are given,
so API handlers never touch the collection directly.
"""
