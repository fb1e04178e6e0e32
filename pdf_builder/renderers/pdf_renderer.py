"""
PDF renderer orchestration.

Keeps surface setup and the render/finalize sequence separate from the
generator facade, so the CLI, the PDF service and tests all open surfaces and
finalize them the same way.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping

from ..logging_utils import get_logger
from ..models import Diagnostic, GeneratorConfig
from ..surface import Surface
from ..templates.base import Template

logger = get_logger(__name__)


def open_surface(config: GeneratorConfig, output_path: str | Path | None = None) -> Surface:
    """
    Open a new surface sized per ``config``; pipe it to ``output_path`` if given.
    """
    surface = Surface(
        page_size=config.page_size,
        margins=config.margin,
        font=config.font,
        font_size=config.font_size,
        line_height=config.line_height,
        title=config.title,
        author=config.author,
        subject=config.subject,
    )
    if output_path:
        surface.pipe(output_path)
    return surface


def render_template(surface: Surface, template: Template, data: Mapping[str, Any], renderer) -> List[Diagnostic]:
    diagnostics = template.render(surface, data, renderer)
    for diagnostic in diagnostics:
        logger.debug("Render diagnostic: %s", diagnostic)
    return diagnostics


def finalize(surface: Surface) -> bytes:
    data = surface.end()
    logger.info("Finalized document: %d page(s), %d bytes", surface.page_count, len(data))
    return data


__all__ = ["open_surface", "render_template", "finalize"]
