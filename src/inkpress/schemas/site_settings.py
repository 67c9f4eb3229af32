"""Site settings Pydantic schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SiteSettingsBase(BaseModel):
    """Fields editable from the admin settings page."""

    site_name: str = Field(..., min_length=1, max_length=100)
    site_description: str = ""
    site_url: str = ""
    site_logo: str | None = None
    site_favicon: str | None = None
    seo_title: str = ""
    seo_description: str = ""
    seo_keywords: str = ""
    allow_comments: bool = True
    comment_moderation: bool = False
    posts_per_page: int = Field(10, ge=1, le=100)
    enable_rss: bool = True
    enable_sitemap: bool = True


class SiteSettingsUpdate(SiteSettingsBase):
    """Full replacement of the site settings."""


class SiteSettingsResponse(SiteSettingsBase):
    """Site settings returned by the API."""

    model_config = ConfigDict(from_attributes=True)
