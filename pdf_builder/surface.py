"""
Drawing surface for PDF documents.

Wraps a reportlab canvas with a top-down cursor so templates can be written in
"x from the left, y from the top" page coordinates, with the current font,
size and colours kept on the surface between calls. A surface is open until
``end()`` is called exactly once; after that only ``getvalue()`` is allowed.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

from reportlab.lib import pagesizes
from reportlab.lib.colors import toColor
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import getAscentDescent, stringWidth
from reportlab.pdfgen.canvas import Canvas

from .logging_utils import get_logger

logger = get_logger(__name__)


class SurfaceClosedError(RuntimeError):
    """Raised when drawing on, or finalizing, an already finalized surface."""


@dataclass(frozen=True)
class Margins:
    top: float
    bottom: float
    left: float
    right: float

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(top=value, bottom=value, left=value, right=value)


def resolve_page_size(page_size: Any) -> Tuple[float, float]:
    """
    Accept a reportlab page tuple or a name such as ``"LETTER"`` / ``"A4"``.
    """
    if isinstance(page_size, (tuple, list)) and len(page_size) == 2:
        return float(page_size[0]), float(page_size[1])
    name = str(page_size or "LETTER").strip()
    size = getattr(pagesizes, name.upper(), None) or getattr(pagesizes, name.lower(), None)
    if size is None:
        raise ValueError(f"Unknown page size: {page_size}")
    return float(size[0]), float(size[1])


class Surface:
    def __init__(
        self,
        page_size: Any = "LETTER",
        margins: Margins | float = 50,
        font: str = "Helvetica",
        font_size: float = 12,
        line_height: float = 1.4,
        title: Optional[str] = None,
        author: Optional[str] = None,
        subject: Optional[str] = None,
    ):
        self.page_width, self.page_height = resolve_page_size(page_size)
        self.margins = margins if isinstance(margins, Margins) else Margins.uniform(float(margins))
        self.line_height = line_height

        self._buffer = io.BytesIO()
        self.canvas = Canvas(self._buffer, pagesize=(self.page_width, self.page_height))
        if title:
            self.canvas.setTitle(title)
        if author:
            self.canvas.setAuthor(author)
        if subject:
            self.canvas.setSubject(subject)

        self.current_font = font
        self.current_font_size = font_size
        self.current_fill_color = "#000000"
        self.current_stroke_color = "#000000"
        self.current_line_width = 1.0

        self.x = self.margins.left
        self.y = self.margins.top
        self.page_count = 1
        self.output_path: Optional[Path] = None
        self.finalized = False

    # ------------------------------------------------------------------
    # geometry
    # ------------------------------------------------------------------

    @property
    def content_width(self) -> float:
        return self.page_width - self.margins.left - self.margins.right

    @property
    def bottom_limit(self) -> float:
        return self.page_height - self.margins.bottom

    def current_line_height(self) -> float:
        return self.current_font_size * self.line_height

    def _pdf_y(self, top: float) -> float:
        return self.page_height - top

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self.finalized:
            raise SurfaceClosedError("Surface has already been finalized")

    def pipe(self, output_path: str | Path) -> "Surface":
        """Write the finished PDF to ``output_path`` when the surface ends."""
        self._ensure_open()
        self.output_path = Path(output_path)
        return self

    def add_page(self) -> "Surface":
        self._ensure_open()
        self.canvas.showPage()
        self.page_count += 1
        self.x = self.margins.left
        self.y = self.margins.top
        return self

    def end(self) -> bytes:
        """Finalize the document; returns the PDF bytes."""
        self._ensure_open()
        self.canvas.save()
        self.finalized = True
        data = self._buffer.getvalue()
        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_bytes(data)
            logger.info("Wrote %s (%d bytes)", self.output_path, len(data))
        return data

    def getvalue(self) -> bytes:
        if not self.finalized:
            raise SurfaceClosedError("Surface is still open; call end() first")
        return self._buffer.getvalue()

    # ------------------------------------------------------------------
    # graphics state
    # ------------------------------------------------------------------

    def font(self, name: str) -> "Surface":
        self._ensure_open()
        self.current_font = name
        return self

    def font_size(self, size: float) -> "Surface":
        self._ensure_open()
        self.current_font_size = float(size)
        return self

    def fill_color(self, color: str) -> "Surface":
        self._ensure_open()
        toColor(color)  # reject unknown colours before any drawing
        self.current_fill_color = color
        return self

    def stroke_color(self, color: str) -> "Surface":
        self._ensure_open()
        toColor(color)
        self.current_stroke_color = color
        return self

    def line_width(self, width: float) -> "Surface":
        self._ensure_open()
        self.current_line_width = float(width)
        return self

    def move_down(self, lines: float = 1) -> "Surface":
        self._ensure_open()
        self.y += lines * self.current_line_height()
        return self

    def _apply_fill(self) -> None:
        self.canvas.setFillColor(toColor(self.current_fill_color))

    def _apply_stroke(self) -> None:
        self.canvas.setStrokeColor(toColor(self.current_stroke_color))
        self.canvas.setLineWidth(self.current_line_width)

    # ------------------------------------------------------------------
    # text
    # ------------------------------------------------------------------

    def wrap_lines(self, text: Any, width: Optional[float] = None) -> list[str]:
        width = width or self.content_width
        lines: list[str] = []
        for paragraph in str(text).split("\n"):
            lines.extend(simpleSplit(paragraph, self.current_font, self.current_font_size, width) or [""])
        return lines

    def height_of_string(self, text: Any, width: Optional[float] = None) -> float:
        return len(self.wrap_lines(text, width)) * self.current_line_height()

    def text(self, text: Any, x: Optional[float] = None, y: Optional[float] = None, **options) -> "Surface":
        """
        Draw ``text`` wrapped to ``width`` starting at (x, y), or at the cursor.

        Recognised options: ``width``, ``align`` (left | center | right).
        Other keys are ignored. The cursor ends below the last line.
        """
        self._ensure_open()
        flowing = y is None
        if x is not None:
            self.x = float(x)
        if y is not None:
            self.y = float(y)

        width = options.get("width") or (self.page_width - self.margins.right - self.x)
        align = options.get("align") or "left"
        leading = self.current_line_height()
        ascent, _ = getAscentDescent(self.current_font, self.current_font_size)

        self.canvas.setFont(self.current_font, self.current_font_size)
        self._apply_fill()
        for line in self.wrap_lines(text, width):
            if flowing and self.y + leading > self.bottom_limit and self.y > self.margins.top:
                self.add_page()
                self.canvas.setFont(self.current_font, self.current_font_size)
                self._apply_fill()
            line_x = self.x
            if align in ("center", "right"):
                slack = width - stringWidth(line, self.current_font, self.current_font_size)
                line_x += slack / 2 if align == "center" else slack
            self.canvas.drawString(line_x, self._pdf_y(self.y + ascent), line)
            self.y += leading
        return self

    # ------------------------------------------------------------------
    # shapes
    # ------------------------------------------------------------------

    def line(self, x1: float, y1: float, x2: float, y2: float) -> "Surface":
        self._ensure_open()
        self._apply_stroke()
        self.canvas.line(x1, self._pdf_y(y1), x2, self._pdf_y(y2))
        return self

    def rect(self, x: float, y: float, width: float, height: float, fill: bool = True, stroke: bool = False) -> "Surface":
        self._ensure_open()
        self._apply_fill()
        self._apply_stroke()
        self.canvas.rect(x, self._pdf_y(y + height), width, height, stroke=int(stroke), fill=int(fill))
        return self

    def rounded_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        fill: bool = True,
        stroke: bool = False,
    ) -> "Surface":
        self._ensure_open()
        self._apply_fill()
        self._apply_stroke()
        self.canvas.roundRect(x, self._pdf_y(y + height), width, height, radius, stroke=int(stroke), fill=int(fill))
        return self

    def circle(self, x: float, y: float, radius: float, fill: bool = True, stroke: bool = False) -> "Surface":
        self._ensure_open()
        self._apply_fill()
        self._apply_stroke()
        self.canvas.circle(x, self._pdf_y(y), radius, stroke=int(stroke), fill=int(fill))
        return self

    def link(self, x: float, y: float, width: float, height: float, url: str) -> "Surface":
        self._ensure_open()
        rect = (x, self._pdf_y(y + height), x + width, self._pdf_y(y))
        self.canvas.linkURL(url, rect, relative=0, thickness=0)
        return self

    # ------------------------------------------------------------------
    # images and lists
    # ------------------------------------------------------------------

    def image(
        self,
        source: str | Path | bytes,
        x: Optional[float] = None,
        y: Optional[float] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        **options,
    ) -> "Surface":
        """
        Draw an image from a file path or raw bytes.

        Missing dimensions keep the image aspect ratio; with neither given the
        image is shrunk to the content width. When ``y`` is omitted the cursor
        moves below the image.
        """
        self._ensure_open()
        if isinstance(source, (bytes, bytearray)):
            reader = ImageReader(io.BytesIO(bytes(source)))
        else:
            reader = ImageReader(str(source))
        img_w, img_h = reader.getSize()

        if width and not height:
            height = width * img_h / img_w
        elif height and not width:
            width = height * img_w / img_h
        elif not width and not height:
            width = min(float(img_w), self.content_width)
            height = width * img_h / img_w

        draw_x = self.x if x is None else float(x)
        draw_y = self.y if y is None else float(y)
        self.canvas.drawImage(reader, draw_x, self._pdf_y(draw_y + height), width=width, height=height, mask="auto")
        if y is None:
            self.y = draw_y + height
        return self

    def draw_list(
        self,
        items: Iterable[Any],
        x: Optional[float] = None,
        y: Optional[float] = None,
        list_type: str = "bullet",
        bullet_radius: float = 2,
        text_indent: float = 15,
        **options,
    ) -> "Surface":
        """
        Draw a bulleted or numbered list; nested lists are indented one level.
        """
        self._ensure_open()
        if x is not None:
            self.x = float(x)
        if y is not None:
            self.y = float(y)
        base_x = self.x
        self._draw_list_level(items, base_x, 0, list_type, bullet_radius, text_indent, options)
        self.x = base_x
        return self

    def _draw_list_level(self, items, base_x, level, list_type, bullet_radius, text_indent, options):
        number = 0
        item_x = base_x + level * text_indent
        for item in items:
            if isinstance(item, (list, tuple)):
                self._draw_list_level(item, base_x, level + 1, list_type, bullet_radius, text_indent, options)
                continue
            number += 1
            if list_type == "numbered":
                marker = f"{number}."
                self.canvas.setFont(self.current_font, self.current_font_size)
                self._apply_fill()
                ascent, _ = getAscentDescent(self.current_font, self.current_font_size)
                self.canvas.drawString(item_x, self._pdf_y(self.y + ascent), marker)
            else:
                self.circle(item_x + bullet_radius, self.y + self.current_font_size * 0.45, bullet_radius)
            width = options.get("width") or (self.page_width - self.margins.right - item_x - text_indent)
            self.text(item, x=item_x + text_indent, width=width, align=options.get("align"))


__all__ = ["Surface", "SurfaceClosedError", "Margins", "resolve_page_size"]
