"""
Public media serving for uploaded post images.

Object keys embed a millisecond timestamp and are never rewritten, so
responses are cached as immutable.
"""

import mimetypes

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from src.adapters.fs.filestore import FileSystemObjectStore
from src.api.deps import get_object_store

router = APIRouter()

# Cache for 1 year (immutable content)
CACHE_MAX_AGE = 31536000  # 365 days in seconds
CACHE_CONTROL_IMMUTABLE = f"public, max-age={CACHE_MAX_AGE}, immutable"


@router.get("/{key:path}")
def get_media(
    key: str,
    storage: FileSystemObjectStore = Depends(get_object_store),
) -> Response:
    try:
        data = storage.get(key)
    except (FileNotFoundError, ValueError) as err:
        raise HTTPException(status_code=404, detail="Media not found") from err

    media_type = mimetypes.guess_type(key)[0] or "application/octet-stream"
    return Response(
        content=data,
        media_type=media_type,
        headers={
            "Cache-Control": CACHE_CONTROL_IMMUTABLE,
            "X-Content-Type-Options": "nosniff",
        },
    )
