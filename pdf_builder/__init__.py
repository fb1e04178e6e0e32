"""Template-driven PDF document generation."""

from .generator import DocumentGenerator
from .interpolation import get_nested_value, interpolate_data, interpolate_text
from .models import Diagnostic, GeneratorConfig, RenderResult, StyleDef
from .registry import StyleRegistry, TemplateRegistry, default_template_registry
from .surface import Surface, SurfaceClosedError

__all__ = [
    "DocumentGenerator",
    "Diagnostic",
    "GeneratorConfig",
    "RenderResult",
    "StyleDef",
    "StyleRegistry",
    "TemplateRegistry",
    "default_template_registry",
    "Surface",
    "SurfaceClosedError",
    "get_nested_value",
    "interpolate_data",
    "interpolate_text",
]
