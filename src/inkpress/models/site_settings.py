# src/inkpress/models/site_settings.py
"""SQLAlchemy model for the single-row site configuration."""

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from inkpress.db.session import Base

SITE_SETTINGS_ID = 1


class SiteSettings(Base):
    """Editable site-wide options managed from the admin console."""

    __tablename__ = "site_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SITE_SETTINGS_ID)

    site_name: Mapped[str] = mapped_column(String(100), nullable=False, default="Inkpress")
    site_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    site_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    site_logo: Mapped[str | None] = mapped_column(Text, nullable=True)
    site_favicon: Mapped[str | None] = mapped_column(Text, nullable=True)

    seo_title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    seo_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    seo_keywords: Mapped[str] = mapped_column(Text, nullable=False, default="")

    allow_comments: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    comment_moderation: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    posts_per_page: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    enable_rss: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    enable_sitemap: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
