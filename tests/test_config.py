"""
Tests for definition loading — script directory parsing and validation.
"""

import json
import textwrap
from pathlib import Path

import pytest

from bnrun.core.config.loader import (
    DEFAULT_SCRIPT_DIR,
    default_script_dir,
    load_script_file,
    load_scripts,
    script_files,
)
from bnrun.core.errors import InvalidScriptDefinition


@pytest.fixture
def yaml_scripts(tmp_path: Path) -> Path:
    """A script directory with one YAML and one JSON file."""
    run_dir = tmp_path / ".run"
    run_dir.mkdir()
    (run_dir / "b.yml").write_text(textwrap.dedent("""\
        test:
          description: "Run the test suite"
          command:
            - pytest
        deploy:${env}:
          pre:
            - echo setup
          command:
            - echo deploy ${env}
          config:
            pre: run-once
    """))
    (run_dir / "a.json").write_text(json.dumps({"build": {"command": ["make"]}}))
    (run_dir / "notes.txt").write_text("not a script file")
    return run_dir


class TestScriptFiles:
    def test_sorted_and_filtered(self, yaml_scripts: Path):
        names = [p.name for p in script_files(yaml_scripts)]
        assert names == ["a.json", "b.yml"]

    def test_ignores_directories(self, yaml_scripts: Path):
        (yaml_scripts / "nested.yml").mkdir()
        assert "nested.yml" not in [p.name for p in script_files(yaml_scripts)]


class TestLoadScripts:
    def test_loads_all_files(self, yaml_scripts: Path):
        registry = load_scripts(yaml_scripts)
        assert registry.names() == ["build", "test", "deploy:${env}"]
        assert registry.get("test").description == "Run the test suite"
        assert registry.get("deploy:${env}").pre_runs_once

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(InvalidScriptDefinition, match="not found"):
            load_scripts(tmp_path / "missing")

    def test_empty_directory(self, tmp_path: Path):
        assert len(load_scripts(tmp_path)) == 0

    def test_duplicate_across_files(self, yaml_scripts: Path):
        (yaml_scripts / "c.json").write_text(json.dumps({"build": {"command": ["x"]}}))
        with pytest.raises(InvalidScriptDefinition, match="duplicate") as exc:
            load_scripts(yaml_scripts)
        assert exc.value.source.endswith("c.json")

    def test_invalid_record(self, tmp_path: Path):
        (tmp_path / "bad.json").write_text(json.dumps({"build": {"command": []}}))
        with pytest.raises(InvalidScriptDefinition, match="bad.json"):
            load_scripts(tmp_path)

    def test_default_dir_from_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("BNRUN_SCRIPT_DIR", str(tmp_path))
        assert default_script_dir() == tmp_path

    def test_default_dir(self, monkeypatch):
        monkeypatch.delenv("BNRUN_SCRIPT_DIR", raising=False)
        assert default_script_dir() == Path(DEFAULT_SCRIPT_DIR)


class TestLoadScriptFile:
    def test_json(self, tmp_path: Path):
        path = tmp_path / "s.json"
        path.write_text('{"a": {"command": ["x"]}}')
        assert load_script_file(path) == {"a": {"command": ["x"]}}

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "s.yml"
        path.write_text("")
        assert load_script_file(path) == {}

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "s.json"
        path.write_text('["a", "b"]')
        with pytest.raises(InvalidScriptDefinition, match="expected a mapping"):
            load_script_file(path)

    def test_malformed(self, tmp_path: Path):
        path = tmp_path / "s.yml"
        path.write_text("a: [unclosed\n")
        with pytest.raises(InvalidScriptDefinition, match="invalid YAML"):
            load_script_file(path)

    def test_tab_indented_json(self, tmp_path: Path):
        path = tmp_path / "s.json"
        path.write_text('{\n\t"build": {\n\t\t"command": ["echo A"]\n\t}\n}\n')
        assert load_script_file(path) == {"build": {"command": ["echo A"]}}

    def test_malformed_json(self, tmp_path: Path):
        path = tmp_path / "s.json"
        path.write_text('{"a": {"command": ["x"],}}')
        with pytest.raises(InvalidScriptDefinition, match="invalid JSON") as exc:
            load_script_file(path)
        assert str(path) in str(exc.value)

    def test_empty_json_file(self, tmp_path: Path):
        path = tmp_path / "s.json"
        path.write_text("\n")
        assert load_script_file(path) == {}

    def test_undecodable_bytes(self, tmp_path: Path):
        path = tmp_path / "s.json"
        path.write_bytes(b'{"build": {"command": ["echo \xff"]}}')
        with pytest.raises(InvalidScriptDefinition, match="cannot read file") as exc:
            load_script_file(path)
        assert str(path) in str(exc.value)
