"""
Layout helpers shared by the generator and the procedural templates.

Centralizes the default named styles and the colour palette so templates and
the declarative renderer pull from one place.
"""

from .models import StyleDef

# Brand colours used by the procedural templates.
COLORS = {
    "navy": "#1e2a45",
    "brand": "#1a365d",
    "ink": "#2d3748",
    "slate": "#4a5568",
    "muted": "#666666",
    "faint": "#a0aec0",
    "footer": "#718096",
    "rule": "#e2e8f0",
    "zebra": "#f7fafc",
    "accent": "#2a73d2",
    "blue": "#3182ce",
    "green": "#38a169",
    "red": "#e53e3e",
    "purple": "#805ad5",
    "amber": "#f39c12",
    "good": "#27ae60",
    "bad": "#e74c3c",
    "bar_grey": "#e1e4e8",
    "black": "#000000",
    "white": "#ffffff",
    "on_track_bg": "#f0fff4",
    "attention_bg": "#fef5e7",
}

DEFAULT_STYLES = {
    "title": StyleDef(font="Helvetica-Bold", font_size=24, fill_color="#333333"),
    "subtitle": StyleDef(font="Helvetica-Bold", font_size=18, fill_color="#666666"),
    "heading": StyleDef(font="Helvetica-Bold", font_size=16, fill_color="#333333"),
    "body": StyleDef(font="Helvetica", font_size=12, fill_color="#000000"),
    "caption": StyleDef(font="Helvetica", font_size=10, fill_color="#666666"),
    "highlight": StyleDef(font="Helvetica-Bold", font_size=12, fill_color="#0066cc"),
}


def build_styles():
    """
    Return a fresh style registry seeded with the default named styles.
    """
    from .registry import StyleRegistry

    registry = StyleRegistry()
    for name, style in DEFAULT_STYLES.items():
        registry.register(name, style)
    return registry


__all__ = ["COLORS", "DEFAULT_STYLES", "build_styles"]
