"""Theme preference routes."""

import logging

from fastapi import APIRouter, Depends

from ..deps import get_theme_preferences
from ..schemas import ThemeResponse, ThemeUpdate
from ..services.preferences import ThemePreferences

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/theme", response_model=ThemeResponse)
async def get_theme(
    preferences: ThemePreferences = Depends(get_theme_preferences)
) -> ThemeResponse:
    return ThemeResponse(theme=preferences.get_theme())


@router.put("/theme", response_model=ThemeResponse)
async def set_theme(
    update: ThemeUpdate,
    preferences: ThemePreferences = Depends(get_theme_preferences)
) -> ThemeResponse:
    return ThemeResponse(theme=preferences.set_theme(update.theme))


@router.post("/theme/toggle", response_model=ThemeResponse)
async def toggle_theme(
    preferences: ThemePreferences = Depends(get_theme_preferences)
) -> ThemeResponse:
    return ThemeResponse(theme=preferences.toggle_theme())
