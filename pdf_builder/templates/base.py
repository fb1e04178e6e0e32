"""
Template capability shared by procedural and declarative templates.

A procedural template is a plain function ``(surface, data)`` that draws
directly. A declarative template is a mapping with ``header`` / ``content`` /
``footer`` sections of element dicts, walked by the element renderer. Both
are wrapped so callers only ever see ``render(surface, data, renderer)``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Mapping

from ..models import Diagnostic

SECTIONS = ("header", "content", "footer")


class Template(ABC):
    definition: Any

    @abstractmethod
    def render(self, surface, data: Mapping[str, Any], renderer) -> List[Diagnostic]:
        """Draw onto ``surface``; returns the non-fatal diagnostics."""


class ProceduralTemplate(Template):
    def __init__(self, func: Callable[..., Any]):
        self.definition = func

    def render(self, surface, data, renderer):
        result = self.definition(surface, data)
        # Procedural templates may hand back their own diagnostics.
        if isinstance(result, list):
            return [d for d in result if isinstance(d, Diagnostic)]
        return []

    def __repr__(self) -> str:
        return f"ProceduralTemplate({getattr(self.definition, '__name__', self.definition)!r})"


class DeclarativeTemplate(Template):
    def __init__(self, definition: Mapping[str, Any]):
        self.definition = definition

    def render(self, surface, data, renderer):
        diagnostics: List[Diagnostic] = []
        for section in SECTIONS:
            body = self.definition.get(section)
            if body:
                diagnostics.extend(renderer.render_section(surface, body, data))
        return diagnostics

    def __repr__(self) -> str:
        present = [s for s in SECTIONS if self.definition.get(s)]
        return f"DeclarativeTemplate(sections={present})"


def as_template(definition: Any) -> Template:
    """Wrap a raw definition; raises TypeError for anything unusable."""
    if isinstance(definition, Template):
        return definition
    if callable(definition):
        return ProceduralTemplate(definition)
    if isinstance(definition, Mapping):
        return DeclarativeTemplate(definition)
    raise TypeError(f"Template must be a mapping or a callable, got {type(definition).__name__}")


__all__ = ["Template", "ProceduralTemplate", "DeclarativeTemplate", "as_template", "SECTIONS"]
