"""UI configuration — the read-only presentation settings shared by every screen."""

from fastapi import APIRouter

from app.config import get_settings

router = APIRouter(prefix="/api", tags=["UI"])

CHART_THEMES = {
    "light": {
        "backgroundColor": "#ffffff",
        "textColor": "#1f2937",
        "gridColor": "#e5e7eb",
        "lineColor": "#40E0D0",
    },
    "dark": {
        "backgroundColor": "#1f2937",
        "textColor": "#f3f4f6",
        "gridColor": "#374151",
        "lineColor": "#40E0D0",
    },
}


@router.get("/ui-config")
def ui_config():
    """Get the theme and chart colours."""
    theme = get_settings().UI_THEME
    if theme not in CHART_THEMES:
        theme = "light"
    return {"theme": theme, "chart": CHART_THEMES[theme], "chart_themes": CHART_THEMES}
