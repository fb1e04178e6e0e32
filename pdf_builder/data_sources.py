from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .logging_utils import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = {".yml", ".yaml"}


class DataFileError(ValueError):
    """An input file (data, template or config) could not be read or parsed."""


def load_json_data(path: str | Path) -> Dict[str, Any]:
    """
    Read the JSON data context for a document. The top level must be an object.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise DataFileError(f"Could not read data file {path}: {exc.strerror or exc}") from exc
    except json.JSONDecodeError as exc:
        raise DataFileError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise DataFileError(f"Data file {path} must contain a JSON object")
    return data


def load_yaml_config(path: str | Path | None) -> Dict[str, Any]:
    """
    Load a generator YAML config. Returns empty dict if no path is given or
    the file is missing.
    """
    if not path:
        return {}
    cfg_path = Path(path)
    if not cfg_path.exists():
        logger.warning("Config file not found: %s", cfg_path)
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise DataFileError(f"Invalid YAML in {cfg_path}: {exc}") from exc


def load_template_file(path: str | Path) -> Mapping[str, Any]:
    """
    Read a declarative template (header/content/footer) from JSON or YAML.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                definition = yaml.safe_load(f)
            else:
                definition = json.load(f)
    except OSError as exc:
        raise DataFileError(f"Could not read template file {path}: {exc.strerror or exc}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise DataFileError(f"Invalid template file {path}: {exc}") from exc
    if not isinstance(definition, Mapping):
        raise DataFileError(f"Template file {path} must contain an object")
    return definition


def merge_overrides(target: dict, override: dict):
    """
    Shallow merge of override dict into target; modifies target in place.
    """
    if not override:
        return
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(target.get(k), dict):
            target[k].update(v)
        else:
            target[k] = v


def apply_config_overrides(generator, cfg: Mapping[str, Any], base_dir: Path | None = None):
    """
    Register the styles and declarative templates a config declares.

    Templates may be inline mappings or paths to template files (relative to
    ``base_dir``). Templates that fail validation are skipped with a warning.
    """
    for name, style in (cfg.get("styles") or {}).items():
        generator.register_style(name, style)

    for name, source in (cfg.get("templates") or {}).items():
        if isinstance(source, str):
            source_path = Path(source)
            if base_dir and not source_path.is_absolute():
                source_path = base_dir / source_path
            source = load_template_file(source_path)
        errors = generator.validate_template(source)
        if errors:
            logger.warning("Skipping template %r from config: %s", name, "; ".join(errors))
            continue
        generator.register_template(name, source)


def load_and_apply_config(generator, path: str | Path | None):
    """Load ``path`` and apply its styles/templates to ``generator``."""
    cfg = load_yaml_config(path)
    apply_config_overrides(generator, cfg, base_dir=Path(path).resolve().parent if path else None)
    return cfg


__all__ = [
    "DataFileError",
    "load_json_data",
    "load_yaml_config",
    "load_template_file",
    "merge_overrides",
    "apply_config_overrides",
    "load_and_apply_config",
]
