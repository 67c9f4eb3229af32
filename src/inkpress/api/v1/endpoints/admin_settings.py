# src/inkpress/api/v1/endpoints/admin_settings.py
"""Site settings endpoints for the admin console."""

from __future__ import annotations

from fastapi import APIRouter

from inkpress.api.v1.dependencies import AdminSessionDep, SessionDep
from inkpress.models.site_settings import SiteSettings
from inkpress.schemas.site_settings import SiteSettingsResponse, SiteSettingsUpdate
from inkpress.services.site_settings import get_site_settings, update_site_settings

router = APIRouter(prefix="/admin/settings", tags=["admin", "settings"])


@router.get("", response_model=SiteSettingsResponse)
async def read_settings(db: SessionDep, _: AdminSessionDep) -> SiteSettings:
    """Return the current site settings."""
    return get_site_settings(db)


@router.put("", response_model=SiteSettingsResponse)
async def replace_settings(data: SiteSettingsUpdate, db: SessionDep, _: AdminSessionDep) -> SiteSettings:
    """Replace every editable site setting."""
    return update_site_settings(db, data)
