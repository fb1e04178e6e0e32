"""
Named registries for styles and templates.

Each generator owns its own registries; nothing here is module-global, so two
generators (or two tests) never see each other's registrations.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from .models import ELEMENT_TYPES, StyleDef
from .templates.base import SECTIONS, Template, as_template

T = TypeVar("T")


class Registry(Generic[T]):
    """Last-write-wins name → value mapping that keeps registration order."""

    def __init__(self):
        self._items: Dict[str, T] = {}

    def _coerce(self, value: Any) -> T:
        return value

    def register(self, name: str, value: Any) -> "Registry[T]":
        self._items[name] = self._coerce(value)
        return self

    def get(self, name: str) -> Optional[T]:
        return self._items.get(name)

    def has(self, name: str) -> bool:
        return name in self._items

    def list(self) -> List[str]:
        return list(self._items.keys())

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return len(self._items)


class StyleRegistry(Registry[StyleDef]):
    def _coerce(self, value):
        if isinstance(value, StyleDef):
            return value
        return StyleDef.from_dict(value)

    def resolve(self, name: Optional[str]) -> StyleDef:
        """Like ``get`` but an unknown name yields an empty style."""
        return (self.get(name) if name else None) or StyleDef()


class TemplateRegistry(Registry[Template]):
    def _coerce(self, value):
        return as_template(value)

    @staticmethod
    def from_json(source: str | Mapping[str, Any]) -> Mapping[str, Any]:
        """Parse a declarative template from JSON text (mappings pass through)."""
        if isinstance(source, str):
            return json.loads(source)
        return source

    @staticmethod
    def validate(template: Any) -> List[str]:
        """
        Check a template definition and return the problems found.

        An empty list means the template is usable. Never raises.
        """
        errors: List[str] = []

        if isinstance(template, Template):
            template = template.definition

        if template is None or template == "":
            errors.append("Template is required")
            return errors

        if callable(template):
            return errors

        if not isinstance(template, Mapping):
            errors.append("Template must be an object or function")
            return errors

        if not any(template.get(section) for section in SECTIONS):
            errors.append("Template must have at least one section (header, content, or footer)")
            return errors

        for section in SECTIONS:
            body = template.get(section)
            if not body:
                continue
            elements = body if isinstance(body, (list, tuple)) else [body]
            for index, element in enumerate(elements):
                where = f"{section}[{index}]"
                if not isinstance(element, Mapping):
                    errors.append(f"{where}: element must be an object")
                elif element.get("type") not in ELEMENT_TYPES:
                    errors.append(f"{where}: unknown element type {element.get('type')!r}")
        return errors


def default_template_registry() -> TemplateRegistry:
    """Return a registry holding the built-in procedural templates."""
    from .templates import DEFAULT_TEMPLATES

    registry = TemplateRegistry()
    for name, func in DEFAULT_TEMPLATES.items():
        registry.register(name, func)
    return registry


__all__ = ["Registry", "StyleRegistry", "TemplateRegistry", "default_template_registry"]
