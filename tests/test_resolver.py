"""
Tests for the resolver — exact and parameterized name matching.
"""

import pytest

from bnrun.core.engine.registry import ScriptRegistry
from bnrun.core.engine.resolver import Resolver, parameter_value
from bnrun.core.errors import ScriptNotFound


def _resolver(scripts: dict) -> Resolver:
    return Resolver(ScriptRegistry.from_mapping(scripts))


class TestParameterValue:
    def test_segment_after_base_name(self):
        assert parameter_value("deploy:prod") == "prod"

    def test_only_first_segment(self):
        assert parameter_value("deploy:prod:eu") == "prod"

    def test_no_separator(self):
        assert parameter_value("deploy") is None

    def test_empty_segment(self):
        assert parameter_value("deploy:") is None


class TestExactMatch:
    def test_exact_has_no_bindings(self, example_registry: ScriptRegistry):
        inv = Resolver(example_registry).resolve("build")
        assert inv.template.name == "build"
        assert inv.bindings == []

    def test_exact_beats_pattern(self):
        resolver = _resolver({
            "deploy:${env}": {"command": ["echo generic"]},
            "deploy:prod": {"command": ["echo special"]},
        })
        inv = resolver.resolve("deploy:prod")
        assert inv.template.name == "deploy:prod"
        assert inv.bindings == []

    def test_plain_name_never_matches_other_requests(self):
        resolver = _resolver({"build": {"command": ["make"]}})
        for name in ("buil", "build:x", "Build", "build "):
            with pytest.raises(ScriptNotFound):
                resolver.resolve(name)


class TestPatternMatch:
    def test_single_placeholder(self, example_registry: ScriptRegistry):
        inv = Resolver(example_registry).resolve("deploy:prod")
        assert inv.template.name == "deploy:${env}"
        assert [(b.token, b.value) for b in inv.bindings] == [("${env}", "prod")]
        assert inv.display_name == "deploy:prod"

    def test_repeated_placeholder_same_value(self):
        resolver = _resolver({"copy:${x}:${x}": {"command": ["cp ${x} ${x}.bak"]}})
        inv = resolver.resolve("copy:a:a")
        assert all(b.value == "a" for b in inv.bindings)
        assert inv.substitute("cp ${x} ${x}.bak") == "cp a a.bak"

    def test_distinct_placeholders_share_value(self):
        resolver = _resolver({"pair:${a}:${b}": {"command": ["echo ${a} ${b}"]}})
        inv = resolver.resolve("pair:x:x")
        assert [(b.token, b.value) for b in inv.bindings] == [("${a}", "x"), ("${b}", "x")]
        with pytest.raises(ScriptNotFound):
            resolver.resolve("pair:x:y")

    def test_extra_segments_do_not_match(self, example_registry: ScriptRegistry):
        with pytest.raises(ScriptNotFound):
            Resolver(example_registry).resolve("deploy:prod:eu")

    def test_missing_value_does_not_match(self, example_registry: ScriptRegistry):
        with pytest.raises(ScriptNotFound):
            Resolver(example_registry).resolve("deploy:")

    def test_first_template_in_load_order_wins(self):
        resolver = _resolver({
            "run:${a}": {"command": ["echo first"]},
            "run:${b}": {"command": ["echo second"]},
        })
        assert resolver.resolve("run:x").template.name == "run:${a}"

    def test_placeholder_not_at_end(self):
        resolver = _resolver({"${svc}:restart": {"command": ["systemctl restart ${svc}"]}})
        # the value comes from the segment after the first ":", so the
        # placeholder would need to equal "restart" here
        inv = resolver.resolve("restart:restart")
        assert inv.display_name == "restart:restart"
        with pytest.raises(ScriptNotFound):
            resolver.resolve("nginx:restart")


class TestNotFound:
    def test_error_names_request(self, example_registry: ScriptRegistry):
        with pytest.raises(ScriptNotFound) as exc:
            Resolver(example_registry).resolve("missing")
        assert exc.value.name == "missing"
        assert "missing" in str(exc.value)
