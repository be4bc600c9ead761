"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path

import pytest

from bnrun.core.engine.registry import ScriptRegistry

# The two-script registry used throughout the docs:
#   deploy:prod  →  pre "echo setup", command "echo deploy prod"
EXAMPLE_SCRIPTS = {
    "build": {"command": ["echo A"]},
    "deploy:${env}": {
        "pre": ["echo setup"],
        "command": ["echo deploy ${env}"],
    },
    "all": {"command": ["bnrun build", "bnrun deploy:prod"]},
}


@pytest.fixture
def example_registry() -> ScriptRegistry:
    """Registry built from EXAMPLE_SCRIPTS."""
    return ScriptRegistry.from_mapping(EXAMPLE_SCRIPTS, source="example")


@pytest.fixture
def script_dir(tmp_path: Path) -> Path:
    """A .run directory holding EXAMPLE_SCRIPTS as JSON."""
    run_dir = tmp_path / ".run"
    run_dir.mkdir()
    (run_dir / "scripts.json").write_text(json.dumps(EXAMPLE_SCRIPTS))
    return run_dir
