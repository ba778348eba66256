"""
Pydantic schema definitions for API payloads.

The stored transaction type doubles as the response model; request
bodies and derived views (per-user summaries) have their own models.
"""
