"""
Top‑level API router.

Mounts the songs router at ``/songs``.  The routes keep the exact
paths used by the browser client, so no version prefix is applied.
"""

from fastapi import APIRouter

from .endpoints import songs

router = APIRouter()

router.include_router(songs.router, prefix="/songs", tags=["songs"])
