from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Mapping, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .surface import Surface


@dataclass
class GeneratorConfig:
    """Page and typography options for a document generator."""

    page_size: str = "LETTER"
    margin: float = 50
    font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    font_size: float = 12
    line_height: float = 1.4
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None

    # camelCase spellings accepted from JSON/YAML inputs.
    ALIASES: ClassVar[Dict[str, str]] = {
        "pageSize": "page_size",
        "fontSize": "font_size",
        "lineHeight": "line_height",
        "boldFont": "bold_font",
    }

    @classmethod
    def default(cls) -> "GeneratorConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "GeneratorConfig":
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (data or {}).items():
            name = cls.ALIASES.get(key, key)
            if name in known and value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    def merged(self, overrides: Mapping[str, Any] | None) -> "GeneratorConfig":
        """Return a copy with ``overrides`` applied on top of this config."""
        base = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in (overrides or {}).items():
            name = self.ALIASES.get(key, key)
            if name in base and value is not None:
                base[name] = value
        return GeneratorConfig(**base)

    def validated(self) -> "GeneratorConfig":
        """
        Return a copy with the numeric settings coerced to floats.

        Raises ValueError naming the first setting that is not a number, or
        is out of range (negative margin, non-positive font size or line height).
        """
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for name, minimum in (("margin", 0), ("font_size", 1e-9), ("line_height", 1e-9)):
            raw = values[name]
            try:
                number = float(raw)
            except (TypeError, ValueError):
                raise ValueError(f"{name} must be a number, got {raw!r}") from None
            if isinstance(raw, bool) or not math.isfinite(number) or number < minimum:
                raise ValueError(f"{name} is out of range: {raw!r}")
            values[name] = number
        return GeneratorConfig(**values)


@dataclass(frozen=True)
class StyleDef:
    """Visual attributes applied to the surface before drawing an element."""

    font: Optional[str] = None
    font_size: Optional[float] = None
    fill_color: Optional[str] = None
    stroke_color: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "StyleDef":
        data = data or {}
        return cls(
            font=data.get("font"),
            font_size=data.get("fontSize", data.get("font_size")),
            fill_color=data.get("fillColor", data.get("fill_color")),
            stroke_color=data.get("strokeColor", data.get("stroke_color")),
        )

    def is_empty(self) -> bool:
        return not any((self.font, self.font_size, self.fill_color, self.stroke_color))


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem noticed while rendering."""

    code: str
    message: str
    level: str = "warning"

    def __str__(self) -> str:
        return f"[{self.level}] {self.code}: {self.message}"


@dataclass
class RenderResult:
    """Outcome of ``DocumentGenerator.create_document``."""

    template_name: Optional[str]
    surface: "Surface"
    diagnostics: List[Diagnostic] = field(default_factory=list)
    rendered: bool = False

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "warning"]

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "error"]

    @property
    def output_path(self) -> Optional[Path]:
        return self.surface.output_path

    def pdf_bytes(self) -> bytes:
        return self.surface.getvalue()


# -------------------------------------------------------------------
# ELEMENTS
# -------------------------------------------------------------------


class UnknownElementType(ValueError):
    """Raised when an element dict names a type the renderer cannot draw."""


@dataclass
class Element:
    style: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)

    kind: ClassVar[str] = ""

    @classmethod
    def build(cls, content: Any, style: Optional[str], options: Dict[str, Any]) -> "Element":
        return cls(style=style, options=options)


@dataclass
class TextElement(Element):
    content: Any = ""

    kind: ClassVar[str] = "text"

    @classmethod
    def build(cls, content, style, options):
        return cls(style=style, options=options, content=content)


@dataclass
class HeadingElement(Element):
    content: Any = ""
    level: int = 1

    kind: ClassVar[str] = "heading"

    @classmethod
    def build(cls, content, style, options):
        return cls(style=style, options=options, content=content, level=int(options.get("level") or 1))


@dataclass
class ImageElement(Element):
    path: Any = None

    kind: ClassVar[str] = "image"

    @classmethod
    def build(cls, content, style, options):
        return cls(style=style, options=options, path=content)


@dataclass
class TableElement(Element):
    content: Any = None

    kind: ClassVar[str] = "table"

    @classmethod
    def build(cls, content, style, options):
        return cls(style=style, options=options, content=content)


@dataclass
class ListElement(Element):
    items: Any = None
    list_type: str = "bullet"

    kind: ClassVar[str] = "list"

    @classmethod
    def build(cls, content, style, options):
        list_type = options.get("listType") or options.get("list_type") or "bullet"
        return cls(style=style, options=options, items=content, list_type=list_type)


@dataclass
class LineElement(Element):
    kind: ClassVar[str] = "line"


@dataclass
class SpacerElement(Element):
    height: float = 20

    kind: ClassVar[str] = "spacer"

    @classmethod
    def build(cls, content, style, options):
        return cls(style=style, options=options, height=options.get("height") or 20)


ELEMENT_TYPES: Dict[str, type] = {
    cls.kind: cls
    for cls in (
        TextElement,
        HeadingElement,
        ImageElement,
        TableElement,
        ListElement,
        LineElement,
        SpacerElement,
    )
}


def parse_element(raw: Mapping[str, Any] | Element) -> Element:
    """
    Turn a declarative element dict into its typed Element.

    ``type``, ``style`` and ``content`` are pulled out; every other key is kept
    as a render option. Options nested under ``props`` are merged in.
    """
    if isinstance(raw, Element):
        return raw
    if not isinstance(raw, Mapping):
        raise UnknownElementType(f"Element must be a mapping, got {type(raw).__name__}")

    options = dict(raw)
    element_type = options.pop("type", None)
    style = options.pop("style", None)
    content = options.pop("content", None)
    props = options.pop("props", None)
    if isinstance(props, Mapping):
        options.update(props)

    cls = ELEMENT_TYPES.get(element_type)
    if cls is None:
        raise UnknownElementType(f"Unknown element type: {element_type}")
    return cls.build(content, style, options)
