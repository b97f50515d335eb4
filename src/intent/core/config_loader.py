"""
Config file loading for Intent.

Reads design systems, extracted usages, and themes from YAML or JSON files
and parses them into IR models.

Default location: {project_root}/intent.config.yaml
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ConfigError, SchemaDefinitionError, make_config_error
from .ir import ComponentUsage, DesignSystemConfig, Theme, UsageBatch

logger = logging.getLogger(__name__)

CONFIG_FILE = "intent.config.yaml"
CONFIG_CANDIDATES = ("intent.config.yaml", "intent.config.yml", "intent.config.json")


# =============================================================================
# Path helpers
# =============================================================================


def find_config_path(project_root: Path) -> Path | None:
    """First existing config file in ``project_root``, if any."""
    for candidate in CONFIG_CANDIDATES:
        path = project_root / candidate
        if path.exists():
            return path
    return None


def _resolve_config_path(path: Path) -> Path:
    if path.is_dir():
        found = find_config_path(path)
        if found is None:
            raise ConfigError(f"No {CONFIG_FILE} found in {path}")
        return found
    return path


# =============================================================================
# Raw Reading
# =============================================================================


def read_data_file(path: Path) -> Any:
    """
    Read a YAML or JSON file.

    JSON is chosen by the ``.json`` suffix; everything else is parsed as
    YAML (a superset of JSON).

    Raises:
        ConfigError: if the file is missing, empty, or not well-formed
    """
    if not path.exists():
        raise ConfigError(f"File not found: {path}")

    content = path.read_text(encoding="utf-8")
    try:
        if path.suffix == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except json.JSONDecodeError as e:
        raise make_config_error(f"Invalid JSON: {e.msg}", path, e.lineno, e.colno) from e
    except yaml.MarkedYAMLError as e:
        mark = e.problem_mark
        line = mark.line + 1 if mark else None
        column = mark.column + 1 if mark else None
        raise make_config_error(f"Invalid YAML: {e.problem}", path, line, column) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        raise ConfigError(f"Empty file: {path}")
    return data


# =============================================================================
# Loaders
# =============================================================================


def load_design_system(path: Path) -> DesignSystemConfig:
    """Load a design system from a config file (or a directory containing one).

    Raises:
        ConfigError: if the file cannot be read or does not describe a valid
            design system.
    """
    path = _resolve_config_path(path)
    data = read_data_file(path)
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top level of {path}")

    try:
        config = DesignSystemConfig.model_validate(data)
    except SchemaDefinitionError as e:
        raise ConfigError(f"Invalid design system in {path}: {e.message}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid design system in {path}: {e}") from e

    logger.debug("Loaded design system %s from %s", config.name, path)
    return config


def _group_usages(records: list[dict[str, Any]], path: Path) -> list[UsageBatch]:
    batches: dict[str, list[ComponentUsage]] = {}
    for record in records:
        usage = ComponentUsage.model_validate(record)
        file = usage.location.file if usage.location else str(path)
        batches.setdefault(file, []).append(usage)
    return [UsageBatch(file=file, usages=usages) for file, usages in batches.items()]


def load_usages(path: Path) -> list[UsageBatch]:
    """
    Load extracted component usages.

    Two shapes are accepted: a list of ``{file, usages}`` batches, or a flat
    list of usage records (grouped into batches by ``location.file``). A
    top-level ``{usages: [...]}`` mapping is unwrapped first.

    Raises:
        ConfigError: if the file cannot be read or a record is malformed
    """
    data = read_data_file(path)
    if isinstance(data, dict) and "usages" in data and "file" not in data:
        data = data["usages"]
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ConfigError(f"Expected a list of usages in {path}")

    try:
        if all(isinstance(item, dict) and "usages" in item for item in data):
            batches = [UsageBatch.model_validate(item) for item in data]
        else:
            batches = _group_usages(data, path)
    except ValidationError as e:
        raise ConfigError(f"Invalid usage record in {path}: {e}") from e

    logger.debug("Loaded %d usage batches from %s", len(batches), path)
    return batches


def load_themes(path: Path) -> list[Theme]:
    """
    Load theme definitions.

    Accepts a list of themes, a ``{themes: [...]}`` mapping, or a single
    theme mapping.

    Raises:
        ConfigError: if the file cannot be read or a theme is malformed
    """
    data = read_data_file(path)
    if isinstance(data, dict):
        data = data.get("themes", [data])
    if not isinstance(data, list):
        raise ConfigError(f"Expected a list of themes in {path}")

    try:
        themes = [Theme.model_validate(item) for item in data]
    except ValidationError as e:
        raise ConfigError(f"Invalid theme in {path}: {e}") from e

    logger.debug("Loaded %d themes from %s", len(themes), path)
    return themes
