"""Photo operations."""

from typing import Any, Optional, Sequence

from enrollment.photo import schemas
from gateway.deps import Context
from gateway.routing import Router

router = Router()


@router.operation("replacePhotos")
async def replace_photos(
    ctx: Context,
    record_id: int,
    photos: Sequence[Optional[Any]],
) -> schemas.PhotoUploadResponse:
    """
    Replace the photos of a record.

    ``photos`` holds up to four entries, each a mapping with ``name`` and
    ``data`` (or a PhotoUpload), or None for an empty slot. The position of
    an entry is its slot number.
    """
    uploads = [
        schemas.PhotoUpload.model_validate(photo) if photo is not None else None
        for photo in photos
    ]
    stored = await ctx.photos.replace_all(record_id, uploads)
    return schemas.PhotoUploadResponse(success=True, stored=stored)


@router.operation("listPhotos")
async def list_photos(ctx: Context, record_id: int) -> schemas.PhotoListResponse:
    """Get the photos of a record by slot order."""
    photos = await ctx.photos.get_for_record(record_id)
    return schemas.PhotoListResponse(success=True, photos=photos)
