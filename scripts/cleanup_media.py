#!/usr/bin/env python3
"""
Remove orphaned media uploads
=============================
Deletes uploaded files that were never attached to a post and are older
than the configured age, along with their database rows.

Usage:
    python scripts/cleanup_media.py [--max-age-hours 24] [--dry-run]
"""

import argparse
from datetime import timedelta

from digeon.config import get_settings
from digeon.database import SessionLocal
from digeon.models.media import Media
from digeon.models.mixins import utcnow
from digeon.services.media import MediaService


def count_orphans(db, max_age_hours: int) -> int:
    cutoff = utcnow() - timedelta(hours=max_age_hours)
    return db.query(Media).filter(
        Media.deleted_at.is_(None),
        Media.post_id.is_(None),
        Media.created_at < cutoff,
    ).count()


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Remove media never attached to a post")
    parser.add_argument(
        "--max-age-hours",
        type=int,
        default=settings.orphan_media_max_age_hours,
        help=f"Only remove uploads older than this (default: {settings.orphan_media_max_age_hours})"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report how many files would be removed without removing them"
    )
    args = parser.parse_args()

    db = SessionLocal()
    try:
        if args.dry_run:
            print(f"[DRY RUN] Would remove {count_orphans(db, args.max_age_hours)} orphaned media files")
            return
        removed = MediaService(db).cleanup_orphaned_media(args.max_age_hours)
        print(f"Removed {removed} orphaned media files")
    finally:
        db.close()


if __name__ == "__main__":
    main()
