"""
Definition loader — reads a script directory into a ScriptRegistry.

Every ``*.json`` / ``*.yml`` / ``*.yaml`` file in the directory is a
mapping of script name to record:

    build:
      command: ["echo A"]
    deploy:${env}:
      pre: ["echo setup"]
      command: ["echo deploy ${env}"]
      config:
        pre: run-once

``.json`` files are parsed with ``json.loads``, YAML files with
``yaml.safe_load``. Each file is validated against the Pydantic models
and merged into one registry, in file-name order.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from bnrun.core.engine.registry import ScriptRegistry
from bnrun.core.errors import InvalidScriptDefinition

logger = logging.getLogger(__name__)

# Default script directory, relative to the working directory
DEFAULT_SCRIPT_DIR = ".run"
SCRIPT_DIR_ENV = "BNRUN_SCRIPT_DIR"
SCRIPT_FILE_SUFFIXES = (".json", ".yml", ".yaml")


def default_script_dir() -> Path:
    """Script directory from ``BNRUN_SCRIPT_DIR``, else ``./.run``."""
    return Path(os.environ.get(SCRIPT_DIR_ENV) or DEFAULT_SCRIPT_DIR)


def script_files(script_dir: Path) -> list[Path]:
    """Definition files in a script directory, sorted by name."""
    return sorted(
        p for p in script_dir.iterdir()
        if p.is_file() and p.suffix.lower() in SCRIPT_FILE_SUFFIXES
    )


def load_script_file(path: Path) -> dict[str, Any]:
    """Read and parse one definition file.

    Raises:
        InvalidScriptDefinition: If the file cannot be read or is not a
            mapping.
    """
    logger.debug("Loading script file %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidScriptDefinition(f"cannot read file: {e}", str(path)) from e

    if path.suffix.lower() == ".json":
        try:
            data = json.loads(raw) if raw.strip() else None
        except json.JSONDecodeError as e:
            raise InvalidScriptDefinition(f"invalid JSON: {e}", str(path)) from e
    else:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise InvalidScriptDefinition(f"invalid YAML: {e}", str(path)) from e

    if data is None:
        # Empty file: declares nothing
        return {}

    if not isinstance(data, dict):
        raise InvalidScriptDefinition(
            f"expected a mapping of script names, got {type(data).__name__}",
            str(path),
        )
    return data


def load_scripts(script_dir: Path | None = None) -> ScriptRegistry:
    """Load every definition file in a directory into one registry.

    Args:
        script_dir: Directory to read (default: ``default_script_dir()``).

    Returns:
        Registry holding all scripts, in file then declaration order.

    Raises:
        InvalidScriptDefinition: If the directory is missing, or any file
            or script in it is invalid.
    """
    if script_dir is None:
        script_dir = default_script_dir()

    if not script_dir.is_dir():
        raise InvalidScriptDefinition(f"Script directory not found: {script_dir}")

    registry = ScriptRegistry()
    files = script_files(script_dir)
    for path in files:
        data = load_script_file(path)
        ScriptRegistry.from_mapping(data, source=str(path), registry=registry)

    logger.debug("Loaded %d scripts from %d files in %s", len(registry), len(files), script_dir)
    return registry
