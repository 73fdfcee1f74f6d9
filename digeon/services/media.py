"""
Media upload, storage and lifecycle.

Files are written under ``<upload_dir>/images`` or ``<upload_dir>/videos``
and served back from ``<base_url>/uploads/...``.
"""
import io
import os
import re
import uuid
from datetime import timedelta
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from PIL import Image, UnidentifiedImageError
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import errors
from ..config import Settings, get_settings
from ..logging_config import media_logger, timed
from ..models.media import Media, MediaType
from ..models.mixins import utcnow
from ..models.post import Post

EXTENSION_TYPES = {
    ".jpg": MediaType.IMAGE,
    ".jpeg": MediaType.IMAGE,
    ".png": MediaType.IMAGE,
    ".webp": MediaType.IMAGE,
    ".gif": MediaType.GIF,
    ".mp4": MediaType.VIDEO,
    ".mov": MediaType.VIDEO,
    ".avi": MediaType.VIDEO,
    ".mkv": MediaType.VIDEO,
    ".webm": MediaType.VIDEO,
}

SUBDIRECTORIES = {
    MediaType.IMAGE: "images",
    MediaType.GIF: "images",
    MediaType.VIDEO: "videos",
}


def sanitize_filename(filename: str) -> str:
    """Strip path components and unsafe characters from a client file name."""
    filename = os.path.basename((filename or "").replace("\\", "/"))
    name, ext = os.path.splitext(filename)
    name = re.sub(r"[^a-zA-Z0-9._-]", "_", name)[:100]
    ext = re.sub(r"[^a-zA-Z0-9.]", "", ext)[:10]
    if not name.strip("_"):
        name = uuid.uuid4().hex[:8]
    return name + ext


def media_type_for(filename: str) -> MediaType:
    ext = os.path.splitext(filename or "")[1].lower()
    media_type = EXTENSION_TYPES.get(ext)
    if media_type is None:
        allowed = ", ".join(sorted(EXTENSION_TYPES))
        raise errors.validation_error(f"unsupported file type '{ext or filename}'. Allowed: {allowed}")
    return media_type


class MediaService:
    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    @property
    def upload_root(self) -> Path:
        return Path(self.settings.upload_dir)

    def _public_url(self, subdir: str, name: str) -> str:
        return f"{self.settings.base_url.rstrip('/')}/uploads/{subdir}/{name}"

    def _path_for_url(self, url: Optional[str]) -> Optional[Path]:
        if not url or "/uploads/" not in url:
            return None
        relative = url.split("/uploads/", 1)[1]
        return self.upload_root / relative

    def _live(self):
        return self.db.query(Media).filter(Media.deleted_at.is_(None))

    def _max_size(self, media_type: MediaType) -> int:
        if media_type is MediaType.VIDEO:
            return self.settings.max_video_size
        return self.settings.max_image_size

    # ------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------

    def _inspect_image(self, data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise errors.validation_error(f"invalid image file: {e}")
        return image

    def _write_thumbnail(self, image: Image.Image, directory: Path) -> Optional[str]:
        limit = self.settings.thumbnail_size
        if image.width <= limit and image.height <= limit:
            return None

        thumb = image.copy()
        if thumb.mode not in ("RGB", "L"):
            thumb = thumb.convert("RGB")
        thumb.thumbnail((limit, limit), Image.Resampling.LANCZOS)
        name = f"{uuid.uuid4()}_thumb.jpg"
        thumb.save(directory / name, "JPEG", quality=85, optimize=True)
        return self._public_url(SUBDIRECTORIES[MediaType.IMAGE], name)

    def upload(self, user_id: uuid.UUID, filename: str, data: bytes) -> Media:
        """Validate, store and record one uploaded file."""
        media_type = media_type_for(filename)
        size = len(data)
        if size == 0:
            raise errors.validation_error("file is empty")
        max_size = self._max_size(media_type)
        if size > max_size:
            raise errors.validation_error(
                f"file too large ({size / (1024 * 1024):.1f}MB). Maximum size: {max_size // (1024 * 1024)}MB"
            )

        width = height = 0
        image = None
        if media_type is not MediaType.VIDEO:
            image = self._inspect_image(data)
            width, height = image.size

        subdir = SUBDIRECTORIES[media_type]
        directory = self.upload_root / subdir
        directory.mkdir(parents=True, exist_ok=True)

        ext = os.path.splitext(filename)[1].lower()
        stored_name = f"{uuid.uuid4()}{ext}"
        path = directory / stored_name
        path.write_bytes(data)

        thumbnail_url = None
        if media_type is MediaType.IMAGE:
            thumbnail_url = self._write_thumbnail(image, directory)

        media = Media(
            user_id=user_id,
            type=media_type,
            url=self._public_url(subdir, stored_name),
            thumbnail_url=thumbnail_url,
            file_name=sanitize_filename(filename),
            file_size=size,
            width=width,
            height=height,
        )
        try:
            self.db.add(media)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            self._remove_files(path, self._path_for_url(thumbnail_url))
            raise
        self.db.refresh(media)

        media_logger.info(
            "Media uploaded",
            media_id=str(media.id),
            user_id=str(user_id),
            type=media_type.value,
            size=size,
        )
        return media

    def upload_many(self, user_id: uuid.UUID, files: Sequence[Tuple[str, bytes]]) -> List[Media]:
        """Upload up to ``max_upload_files`` files, skipping the ones that fail."""
        if not files:
            raise errors.validation_error("no files provided")
        if len(files) > self.settings.max_upload_files:
            raise errors.validation_error(f"maximum {self.settings.max_upload_files} files allowed")

        uploaded = []
        for filename, data in files:
            try:
                uploaded.append(self.upload(user_id, filename, data))
            except errors.ServiceError as e:
                media_logger.warning("Skipping file in batch upload", file_name=filename, reason=e.message)

        if not uploaded:
            raise errors.validation_error("all file uploads failed")
        return uploaded

    # ------------------------------------------------------------
    # Lookup & attachment
    # ------------------------------------------------------------

    def get(self, media_id: uuid.UUID) -> Media:
        media = self._live().filter(Media.id == media_id).first()
        if not media:
            raise errors.not_found("media")
        return media

    def post_media(self, post_id: uuid.UUID) -> List[Media]:
        return self._live().filter(Media.post_id == post_id).order_by(Media.order).all()

    def attach_to_post(
        self,
        post_id: uuid.UUID,
        owner_id: uuid.UUID,
        media_ids: Iterable[uuid.UUID] = (),
        media_urls: Iterable[str] = (),
    ) -> int:
        """Attach the owner's unattached media to a post, in the order given.

        Does not commit; the caller's write owns the transaction.
        """
        refs = [("id", ref) for ref in media_ids] + [("url", ref) for ref in media_urls]
        if not refs:
            return 0

        ids = [ref for kind, ref in refs if kind == "id"]
        urls = [ref for kind, ref in refs if kind == "url"]
        candidates = self._live().filter(
            Media.user_id == owner_id,
            Media.post_id.is_(None),
            or_(Media.id.in_(ids), Media.url.in_(urls)),
        ).all()
        by_id = {media.id: media for media in candidates}
        by_url = {media.url: media for media in candidates}

        attached = 0
        for kind, ref in refs:
            media = by_id.get(ref) if kind == "id" else by_url.get(ref)
            if media is None or media.post_id is not None:
                media_logger.warning("Media not attachable", ref=str(ref), post_id=str(post_id))
                continue
            media.post_id = post_id
            media.order = attached
            attached += 1
        return attached

    # ------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------

    def _remove_files(self, *paths: Optional[Path]):
        for path in paths:
            if path is None:
                continue
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                media_logger.warning("Failed to remove media file", path=str(path), reason=str(e))

    def delete(self, media_id: uuid.UUID, user_id: uuid.UUID):
        media = self.get(media_id)

        owner_id = media.user_id
        if media.post_id:
            post = self.db.query(Post).filter(Post.id == media.post_id).first()
            if post is not None:
                owner_id = post.author_id
        if owner_id != user_id:
            raise errors.forbidden("you can only delete your own media")

        self._remove_files(self._path_for_url(media.url), self._path_for_url(media.thumbnail_url))
        media.soft_delete()
        self.db.commit()
        media_logger.info("Media deleted", media_id=str(media_id), user_id=str(user_id))

    @timed(media_logger)
    def cleanup_orphaned_media(self, max_age_hours: Optional[int] = None) -> int:
        """Delete media never attached to a post and older than ``max_age_hours``."""
        if max_age_hours is None:
            max_age_hours = self.settings.orphan_media_max_age_hours
        cutoff = utcnow() - timedelta(hours=max_age_hours)

        orphans = self._live().filter(Media.post_id.is_(None), Media.created_at < cutoff).all()
        for media in orphans:
            self._remove_files(self._path_for_url(media.url), self._path_for_url(media.thumbnail_url))
            media.soft_delete()
        self.db.commit()

        media_logger.info("Orphaned media cleaned up", count=len(orphans), max_age_hours=max_age_hours)
        return len(orphans)
