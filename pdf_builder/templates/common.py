"""Small drawing and formatting helpers shared by the procedural templates."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from ..layout import COLORS

BOLD = "Helvetica-Bold"
REGULAR = "Helvetica"


def to_float(value: Any) -> float | None:
    try:
        return float(str(value).replace(",", "").replace("$", ""))
    except (TypeError, ValueError):
        return None


def money(value: Any, decimals: int = 2) -> str:
    """``1234.5`` -> ``$1,234.50``; unparseable values come back as ``""``."""
    amount = to_float(value)
    if amount is None:
        return ""
    return f"${amount:,.{decimals}f}"


def today() -> str:
    return date.today().strftime("%m/%d/%Y")


def format_date(value: Any) -> str:
    """Render an ISO timestamp as a short date; other strings pass through."""
    if not value:
        return today()
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).strftime("%m/%d/%Y")
    except ValueError:
        return str(value)


def section_heading(surface, text: str, x: float, y: float, size: float = 16, color: str = COLORS["navy"]):
    return surface.font_size(size).font(BOLD).fill_color(color).text(text, x, y)


def body(surface, size: float = 12, color: str = COLORS["black"]):
    return surface.font_size(size).font(REGULAR).fill_color(color)
