"""
Media routes for uploading and managing files.
"""
import uuid
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile, status

from ..auth import get_required_user
from ..dependencies import get_media_service
from ..models.user import User
from ..responses import message
from ..services.media import MediaService

router = APIRouter(prefix="/api/media", tags=["media"])


@router.post("/upload", status_code=status.HTTP_201_CREATED)
def upload_media(
    file: UploadFile = File(...),
    current_user: User = Depends(get_required_user),
    media: MediaService = Depends(get_media_service),
):
    """Upload one image, GIF or video."""
    uploaded = media.upload(current_user.id, file.filename or "", file.file.read())
    return uploaded.to_dict()


@router.post("/upload-multiple", status_code=status.HTTP_201_CREATED)
def upload_multiple_media(
    files: List[UploadFile] = File(...),
    current_user: User = Depends(get_required_user),
    media: MediaService = Depends(get_media_service),
):
    """Upload several files; files that fail validation are skipped."""
    uploaded = media.upload_many(
        current_user.id,
        [(f.filename or "", f.file.read()) for f in files],
    )
    return {
        "uploaded_files": [m.to_dict() for m in uploaded],
        "total_uploaded": len(uploaded),
        "total_files": len(files),
    }


@router.get("/post/{post_id}")
def get_post_media(post_id: uuid.UUID, media: MediaService = Depends(get_media_service)):
    items = media.post_media(post_id)
    return {"media": [m.to_dict() for m in items], "total": len(items)}


@router.get("/{media_id}")
def get_media(media_id: uuid.UUID, media: MediaService = Depends(get_media_service)):
    return media.get(media_id).to_dict()


@router.delete("/{media_id}")
def delete_media(
    media_id: uuid.UUID,
    current_user: User = Depends(get_required_user),
    media: MediaService = Depends(get_media_service),
):
    media.delete(media_id, current_user.id)
    return message("media deleted successfully")
