"""
Pipeline entrypoints for building documents.

A thin orchestration layer so the CLI (and scripts) can supply file paths and
a YAML config without touching the generator directly: load the data, apply
config overrides, register a template file if one was given, then render.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from .data_sources import (
    DataFileError,
    load_and_apply_config,
    load_json_data,
    load_template_file,
    load_yaml_config,
)
from .generator import DocumentGenerator
from .logging_utils import get_logger
from .models import GeneratorConfig, RenderResult
from .surface import resolve_page_size

logger = get_logger(__name__)

DEFAULT_OUTPUTS = {
    "retirement": "retirement-analysis.pdf",
    "invoice": "invoice.pdf",
    "report": "report.pdf",
    "resume": "resume.pdf",
    "letter": "letter.pdf",
    "contract": "contract.pdf",
}


class TemplateConfigError(ValueError):
    """A template could not be resolved or failed validation."""


def default_output_for(template_name: str) -> Path:
    return Path(DEFAULT_OUTPUTS.get(template_name, f"{template_name}.pdf"))


def build_generator(config_path: str | Path | None = None) -> DocumentGenerator:
    """
    Create a generator with settings, styles and templates from ``config_path``.
    """
    cfg: Dict[str, Any] = load_yaml_config(config_path)
    try:
        config = GeneratorConfig.from_dict(cfg.get("generator")).validated()
        resolve_page_size(config.page_size)
    except (AttributeError, TypeError, ValueError) as exc:
        raise DataFileError(f"Invalid generator settings in {config_path}: {exc}") from exc
    generator = DocumentGenerator(config)
    if cfg:
        load_and_apply_config(generator, config_path)
    return generator


def build_pdf(
    template_name: str,
    data_path: str | Path,
    output_path: str | Path | None = None,
    config_path: str | Path | None = None,
    template_path: str | Path | None = None,
) -> RenderResult:
    """
    Render ``template_name`` against the JSON data at ``data_path``.

    When ``template_path`` is given the declarative template in that file is
    validated and registered under ``template_name`` first.
    """
    generator = build_generator(config_path)

    if template_path:
        definition = load_template_file(template_path)
        errors = generator.validate_template(definition)
        if errors:
            raise TemplateConfigError(f"Invalid template {template_path}: " + "; ".join(errors))
        generator.register_template(template_name, definition)

    if not generator.templates.has(template_name):
        available = ", ".join(generator.templates.list())
        raise TemplateConfigError(f"Unknown template '{template_name}'. Available: {available}")

    data = load_json_data(data_path)
    output = Path(output_path) if output_path else default_output_for(template_name)
    result = generator.create_document(template_name, data, output)
    for diagnostic in result.diagnostics:
        logger.warning("%s: %s", diagnostic.code, diagnostic.message)
    return result


__all__ = ["DEFAULT_OUTPUTS", "TemplateConfigError", "default_output_for", "build_generator", "build_pdf"]
