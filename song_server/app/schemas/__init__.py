"""
Pydantic schema definitions for API payloads.

Schemas are separated from storage so that the in‑memory and SQL song
stores exchange the same representation with the API layer.
"""
