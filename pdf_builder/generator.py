"""
Document generator facade.

Opens a surface, resolves a template by name, renders it against the caller's
data and finalizes the document exactly once. Rendering never aborts halfway:
problems come back as diagnostics on the RenderResult.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional

from .layout import build_styles
from .logging_utils import get_logger
from .models import Diagnostic, GeneratorConfig, RenderResult, StyleDef
from .registry import StyleRegistry, TemplateRegistry, default_template_registry
from .renderers.elements import ElementRenderer
from .renderers.pdf_renderer import finalize, open_surface, render_template
from .surface import Surface, SurfaceClosedError

logger = get_logger(__name__)


class DocumentGenerator:
    def __init__(
        self,
        config: GeneratorConfig | None = None,
        templates: TemplateRegistry | None = None,
        styles: StyleRegistry | None = None,
        **options: Any,
    ):
        self.config = (config or GeneratorConfig.default()).merged(options)
        self.templates = templates if templates is not None else default_template_registry()
        self.styles = styles if styles is not None else build_styles()
        self.renderer = ElementRenderer(self.config, self.styles)

    # ------------------------------------------------------------------
    # registration
    # ------------------------------------------------------------------

    def register_template(self, name: str, template: Any) -> "DocumentGenerator":
        self.templates.register(name, template)
        return self

    def register_style(self, name: str, style: StyleDef | Mapping[str, Any]) -> "DocumentGenerator":
        self.styles.register(name, style)
        return self

    def get_style(self, name: str) -> StyleDef:
        return self.styles.resolve(name)

    def apply_style(self, surface: Surface, name: str) -> Surface:
        return self.renderer.apply_style(surface, name)

    @staticmethod
    def validate_template(template: Any) -> List[str]:
        return TemplateRegistry.validate(template)

    # ------------------------------------------------------------------
    # rendering
    # ------------------------------------------------------------------

    def render_template(self, surface: Surface, name: str, data: Mapping[str, Any] | None = None) -> List[Diagnostic]:
        template = self.templates.get(name)
        if template is None:
            message = f"Template '{name}' not found"
            logger.warning(message)
            return [Diagnostic("template_not_found", message)]

        try:
            return render_template(surface, template, data or {}, self.renderer)
        except SurfaceClosedError:
            raise
        except Exception as exc:
            logger.exception("Template %r failed part-way through", name)
            return [Diagnostic("template_failed", f"Template '{name}' failed: {exc}", level="error")]

    def create_document(
        self,
        template_name: Optional[str],
        data: Mapping[str, Any] | None = None,
        output_path: str | Path | None = None,
    ) -> RenderResult:
        """
        Open a surface and, when ``template_name`` is registered, render and finalize it.

        An unregistered name returns the surface open and unrendered so the
        caller can draw on it and call ``surface.end()`` itself.
        """
        surface = open_surface(self.config, output_path)
        result = RenderResult(template_name=template_name, surface=surface)

        if not template_name or not self.templates.has(template_name):
            if template_name:
                logger.info("Template %r is not registered; returning an open surface", template_name)
            return result

        logger.info("Rendering template %r", template_name)
        result.diagnostics.extend(self.render_template(surface, template_name, data))
        finalize(surface)
        result.rendered = True
        if result.diagnostics:
            logger.warning("Template %r rendered with %d diagnostic(s)", template_name, len(result.diagnostics))
        return result

    # ------------------------------------------------------------------
    # shortcuts
    # ------------------------------------------------------------------

    @classmethod
    def invoice(cls, data, output_path=None) -> RenderResult:
        return cls().create_document("invoice", data, output_path)

    @classmethod
    def report(cls, data, output_path=None) -> RenderResult:
        return cls().create_document("report", data, output_path)

    @classmethod
    def resume(cls, data, output_path=None) -> RenderResult:
        return cls().create_document("resume", data, output_path)

    @classmethod
    def retirement(cls, data, output_path=None) -> RenderResult:
        return cls().create_document("retirement", data, output_path)

    @classmethod
    def letter(cls, data, output_path=None) -> RenderResult:
        return cls().create_document("letter", data, output_path)

    @classmethod
    def contract(cls, data, output_path=None) -> RenderResult:
        return cls().create_document("contract", data, output_path)


__all__ = ["DocumentGenerator"]
