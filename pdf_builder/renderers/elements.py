"""
Element renderer for declarative templates.

Each element dict is parsed into its typed Element and drawn with the
matching surface primitive. Rendering is best-effort: bad data, missing files
and unknown element types turn into diagnostics and the next element is
drawn as usual.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping

from ..interpolation import interpolate_data, interpolate_text
from ..logging_utils import get_logger
from ..models import (
    Diagnostic,
    GeneratorConfig,
    HeadingElement,
    ImageElement,
    LineElement,
    ListElement,
    SpacerElement,
    TableElement,
    TextElement,
    UnknownElementType,
    parse_element,
)
from ..registry import StyleRegistry
from ..surface import Surface, SurfaceClosedError

logger = get_logger(__name__)

TABLE_ROW_HEIGHT = 20
BULLET_RADIUS = 2
LIST_OPTION_KEYS = {"x", "y", "listType", "list_type", "bulletRadius", "textIndent"}


class ElementRenderer:
    def __init__(self, config: GeneratorConfig | None = None, styles: StyleRegistry | None = None):
        self.config = config or GeneratorConfig.default()
        self.styles = styles if styles is not None else StyleRegistry()
        self._handlers: Dict[type, Callable[..., None]] = {
            TextElement: self._render_text,
            HeadingElement: self._render_heading,
            ImageElement: self._render_image,
            TableElement: self._render_table,
            ListElement: self._render_list,
            LineElement: self._render_line,
            SpacerElement: self._render_spacer,
        }

    # ------------------------------------------------------------------

    def apply_style(self, surface: Surface, style_name: str | None) -> Surface:
        """Apply font, size, fill and stroke from a named style, in that order."""
        style = self.styles.resolve(style_name)
        if style_name and style.is_empty():
            logger.debug("Style %r is not registered; nothing applied", style_name)
        if style.font:
            surface.font(style.font)
        if style.font_size:
            surface.font_size(style.font_size)
        if style.fill_color:
            surface.fill_color(style.fill_color)
        if style.stroke_color:
            surface.stroke_color(style.stroke_color)
        return surface

    def render_section(self, surface: Surface, section: Any, data: Mapping[str, Any]) -> List[Diagnostic]:
        diagnostics: List[Diagnostic] = []
        elements = section if isinstance(section, (list, tuple)) else [section]
        for element in elements:
            diagnostics.extend(self.render_element(surface, element, data))
        return diagnostics

    def render_element(self, surface: Surface, element: Any, data: Mapping[str, Any]) -> List[Diagnostic]:
        diagnostics: List[Diagnostic] = []
        kind = element.get("type") if isinstance(element, Mapping) else type(element).__name__
        try:
            parsed = parse_element(element)
            kind = parsed.kind
            if parsed.style:
                self.apply_style(surface, parsed.style)
            self._handlers[type(parsed)](surface, parsed, data or {}, diagnostics)
        except UnknownElementType as exc:
            _warn(diagnostics, "unknown_element", str(exc))
        except SurfaceClosedError:
            raise
        except Exception as exc:
            logger.exception("Failed to render %s element", kind)
            diagnostics.append(
                Diagnostic("element_failed", f"{kind} element failed: {exc}", level="error")
            )
        return diagnostics

    # ------------------------------------------------------------------
    # element types
    # ------------------------------------------------------------------

    def _render_text(self, surface: Surface, element: TextElement, data, diagnostics) -> None:
        surface.text(interpolate_text(element.content, data), **element.options)

    def _render_heading(self, surface: Surface, element: HeadingElement, data, diagnostics) -> None:
        size = self.config.font_size + (6 - element.level) * 2
        (
            surface.font_size(size)
            .font(self.config.bold_font)
            .text(interpolate_text(element.content, data), **element.options)
            .font(self.config.font)
            .font_size(self.config.font_size)
        )

    def _render_image(self, surface: Surface, element: ImageElement, data, diagnostics) -> None:
        path = interpolate_text(element.path, data)
        if not path or not Path(str(path)).is_file():
            _warn(diagnostics, "image_not_found", f"Image not found: {path}")
            return
        surface.image(str(path), **element.options)

    def _render_table(self, surface: Surface, element: TableElement, data, diagnostics) -> None:
        table = interpolate_data(element.content, data)
        headers = table.get("headers") if isinstance(table, Mapping) else None
        rows = table.get("rows") if isinstance(table, Mapping) else None
        if not headers or rows is None or not isinstance(headers, (list, tuple)) or not isinstance(rows, (list, tuple)):
            _warn(diagnostics, "table_invalid", "Table data must have headers and rows")
            return

        start_x = element.options.get("x")
        start_x = surface.margins.left if start_x is None else float(start_x)
        start_y = element.options.get("y")
        current_y = surface.y if start_y is None else float(start_y)
        column_width = surface.content_width / len(headers)

        surface.font(self.config.bold_font)
        for i, header in enumerate(headers):
            surface.text(str(header), x=start_x + i * column_width, y=current_y, width=column_width, align="left")
        current_y += TABLE_ROW_HEIGHT
        surface.font(self.config.font)

        for index, row in enumerate(rows):
            if isinstance(row, Mapping):
                cells = [row.get(str(h), "") for h in headers]
            elif isinstance(row, (list, tuple)):
                cells = row
            else:
                _warn(diagnostics, "table_row_invalid", f"Table row {index} is not a list")
                continue
            if current_y + TABLE_ROW_HEIGHT > surface.bottom_limit:
                surface.add_page()
                current_y = surface.y
            for i, cell in enumerate(cells[: len(headers)]):
                surface.text(str(cell), x=start_x + i * column_width, y=current_y, width=column_width, align="left")
            current_y += TABLE_ROW_HEIGHT

        surface.x = start_x
        surface.y = current_y

    def _render_list(self, surface: Surface, element: ListElement, data, diagnostics) -> None:
        items = interpolate_data(element.items, data)
        if not isinstance(items, (list, tuple)):
            _warn(diagnostics, "list_invalid", "List content must be an array of items")
            return
        options = element.options
        extra = {k: v for k, v in options.items() if k not in LIST_OPTION_KEYS}
        surface.draw_list(
            items,
            x=options.get("x"),
            y=options.get("y"),
            list_type=element.list_type,
            bullet_radius=options.get("bulletRadius", BULLET_RADIUS),
            text_indent=options.get("textIndent", 15),
            **extra,
        )

    def _render_line(self, surface: Surface, element: LineElement, data, diagnostics) -> None:
        options = element.options
        y = options.get("y")
        y = surface.y if y is None else float(y)
        start_x = options.get("startX")
        end_x = options.get("endX")
        start_x = surface.margins.left if start_x is None else float(start_x)
        end_x = surface.page_width - surface.margins.right if end_x is None else float(end_x)
        surface.line(start_x, y, end_x, y)

    def _render_spacer(self, surface: Surface, element: SpacerElement, data, diagnostics) -> None:
        surface.move_down(float(element.height) / surface.current_line_height())


def _warn(diagnostics: List[Diagnostic], code: str, message: str) -> None:
    logger.warning(message)
    diagnostics.append(Diagnostic(code, message))


__all__ = ["ElementRenderer", "TABLE_ROW_HEIGHT"]
