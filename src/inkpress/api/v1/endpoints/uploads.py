# src/inkpress/api/v1/endpoints/uploads.py
"""Media uploads for avatars and featured images."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, File, HTTPException, UploadFile, status
from pydantic import BaseModel

from inkpress.api.v1.dependencies import CurrentUserDep, StorageDep
from inkpress.services.errors import StorageError

router = APIRouter(prefix="/uploads", tags=["uploads"])


class UploadResponse(BaseModel):
    """Public location of a stored file."""

    url: str


@router.post("/{kind}", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    kind: Literal["avatar", "featured"],
    _: CurrentUserDep,
    storage: StorageDep,
    file: UploadFile = File(...),
) -> UploadResponse:
    """Store an image and return its public URL."""
    contents = await file.read()
    try:
        url = storage.save(kind, file.filename, contents)
    except StorageError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    return UploadResponse(url=url)
