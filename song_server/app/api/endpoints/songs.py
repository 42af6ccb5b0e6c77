"""
Song endpoints.

``GET /songs`` returns every stored song as a JSON array and
``POST /songs`` appends one.  The store is looked up on
``app.state`` through the ``get_song_store`` dependency, so tests can
swap it with ``app.dependency_overrides``.

Storage failures are not handled here: ``StorageUnavailable``
propagates to the application's exception handler, which answers with
an empty 500 response.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from song_server.app.schemas.song import Song
from song_server.app.services.song_store import SongStore

router = APIRouter()

SONG_FIELDS = ("artist", "track", "rank", "published")


def get_song_store(request: Request) -> SongStore:
    """Return the store created by ``create_app``."""
    return request.app.state.song_store


async def read_song(request: Request) -> Song:
    """Build a ``Song`` from a JSON or form request body.

    Only the four song fields are read; anything else in the body is
    ignored.  Missing fields become ``None``.
    """
    content_type = request.headers.get("content-type", "")
    data: Dict[str, Any]
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as exc:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
            ) from exc
        data = body if isinstance(body, dict) else {}
    else:
        form = await request.form()
        data = dict(form)
    try:
        return Song.model_validate({key: data.get(key) for key in SONG_FIELDS})
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


@router.get("", response_model=List[Song])
async def list_songs(store: SongStore = Depends(get_song_store)) -> List[Song]:
    """Return all songs."""
    return await store.list()


@router.post("", response_class=Response)
async def create_song(
    song: Song = Depends(read_song),
    store: SongStore = Depends(get_song_store),
) -> Response:
    """Append a song and answer with an empty body.

    The status is 201 when the store persists records and 200 for the
    in‑memory store.
    """
    await store.append(song)
    code = status.HTTP_201_CREATED if store.persistent else status.HTTP_200_OK
    return Response(status_code=code)
