"""Read and replace the single site settings row."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from inkpress.core.settings import settings
from inkpress.models.site_settings import SITE_SETTINGS_ID, SiteSettings
from inkpress.schemas.site_settings import SiteSettingsUpdate

logger = logging.getLogger(__name__)


def get_site_settings(db: Session) -> SiteSettings:
    """Return the site settings, creating the default row on first use."""
    row = db.get(SiteSettings, SITE_SETTINGS_ID)
    if row is None:
        row = SiteSettings(
            id=SITE_SETTINGS_ID,
            site_name=settings.app_name,
            site_url=settings.public_base_url,
            posts_per_page=settings.feed_page_size,
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("Initialized default site settings")
    return row


def update_site_settings(db: Session, data: SiteSettingsUpdate) -> SiteSettings:
    """Overwrite every editable field of the site settings."""
    row = get_site_settings(db)
    for field, value in data.model_dump().items():
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    logger.info("Updated site settings")
    return row
