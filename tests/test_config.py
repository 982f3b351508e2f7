"""Tests for funcbench.config: comparison configuration and profiles."""

from __future__ import annotations

import io
import sys
import tempfile
import unittest
from pathlib import Path

from funcbench_test_helpers import noop

from funcbench.config import (
    ComparisonConfig,
    build_comparison,
    config_from_profile,
    load_profile,
    parse_inline_candidate,
    resolve_candidate,
    validate_config,
)
from funcbench.errors import ProfileError


class TestComparisonConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        config = ComparisonConfig()
        self.assertEqual(config.num_runs, 5000)
        self.assertEqual(config.formatter, "auto")
        self.assertEqual(config.candidates, {})


class TestValidateConfig(unittest.TestCase):
    def test_valid(self) -> None:
        config = ComparisonConfig(candidates={"a": "funcbench_test_helpers:noop"})
        self.assertEqual(validate_config(config), [])

    def test_no_candidates_is_warning(self) -> None:
        errors = validate_config(ComparisonConfig())
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].field, "candidates")
        self.assertEqual(errors[0].severity, "warning")

    def test_zero_runs_is_warning(self) -> None:
        config = ComparisonConfig(num_runs=0, candidates={"a": "m:f"})
        errors = validate_config(config)
        self.assertEqual([(e.field, e.severity) for e in errors], [("num_runs", "warning")])

    def test_bad_target(self) -> None:
        config = ComparisonConfig(candidates={"a": "no_colon"})
        errors = validate_config(config)
        self.assertEqual(errors[0].field, "candidates.a")
        self.assertEqual(errors[0].severity, "error")

    def test_blank_label(self) -> None:
        config = ComparisonConfig(candidates={"  ": "m:f"})
        fields = [e.field for e in validate_config(config)]
        self.assertIn("candidates", fields)

    def test_unknown_formatter(self) -> None:
        config = ComparisonConfig(formatter="pdf", candidates={"a": "m:f"})
        errors = validate_config(config)
        self.assertEqual(errors[0].field, "formatter")


class TestLoadProfile(unittest.TestCase):
    def _write(self, text: str) -> Path:
        tmp = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False)
        tmp.write(text)
        tmp.close()
        self.addCleanup(Path(tmp.name).unlink)
        return Path(tmp.name)

    def test_load(self) -> None:
        path = self._write(
            "name: joins\n"
            "num_runs: 100\n"
            "candidates:\n"
            "  first: funcbench_test_helpers:noop\n"
        )
        data = load_profile(path)
        self.assertEqual(data["name"], "joins")
        self.assertEqual(data["candidates"], {"first": "funcbench_test_helpers:noop"})

    def test_missing(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_profile(Path("/nonexistent/profile.yaml"))

    def test_not_a_mapping(self) -> None:
        path = self._write("- a\n- b\n")
        with self.assertRaises(ProfileError):
            load_profile(path)

    def test_invalid_yaml(self) -> None:
        path = self._write("candidates: [unclosed\n")
        with self.assertRaises(ProfileError):
            load_profile(path)


class TestConfigFromProfile(unittest.TestCase):
    def test_basic(self) -> None:
        config = config_from_profile(
            {
                "name": "joins",
                "num_runs": 250,
                "formatter": "markdown",
                "candidates": {"b": "m:b", "a": "m:a"},
            }
        )
        self.assertEqual(config.name, "joins")
        self.assertEqual(config.num_runs, 250)
        self.assertEqual(config.formatter, "markdown")
        self.assertEqual(list(config.candidates), ["b", "a"])

    def test_defaults(self) -> None:
        config = config_from_profile({})
        self.assertEqual(config.num_runs, 5000)
        self.assertEqual(config.formatter, "auto")
        self.assertEqual(config.candidates, {})

    def test_cli_overrides(self) -> None:
        config = config_from_profile(
            {"name": "p", "num_runs": 10, "formatter": "html"},
            cli_overrides={"name": "cli", "num_runs": 0, "formatter": "table"},
        )
        self.assertEqual(config.name, "cli")
        self.assertEqual(config.num_runs, 0)
        self.assertEqual(config.formatter, "table")

    def test_none_overrides_ignored(self) -> None:
        config = config_from_profile(
            {"num_runs": 10},
            cli_overrides={"name": None, "num_runs": None, "formatter": None},
        )
        self.assertEqual(config.num_runs, 10)

    def test_null_name_and_formatter_use_defaults(self) -> None:
        config = config_from_profile({"name": None, "formatter": None})
        self.assertEqual(config.name, "")
        self.assertEqual(config.formatter, "auto")
        self.assertEqual(validate_config(config)[0].field, "candidates")

    def test_null_values_from_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "p.yaml"
            path.write_text("name:\nformatter: ~\n")
            config = config_from_profile(load_profile(path))
        self.assertEqual(config.name, "")
        self.assertEqual(config.formatter, "auto")

    def test_num_runs_must_be_int(self) -> None:
        with self.assertRaises(ProfileError):
            config_from_profile({"num_runs": "many"})

    def test_candidates_must_be_mapping(self) -> None:
        with self.assertRaises(ProfileError):
            config_from_profile({"candidates": ["m:a"]})

    def test_candidate_target_must_be_string(self) -> None:
        with self.assertRaises(ProfileError):
            config_from_profile({"candidates": {"a": 3}})


class TestParseInlineCandidate(unittest.TestCase):
    def test_label_and_target(self) -> None:
        self.assertEqual(parse_inline_candidate("join = pkg.mod:join"), ("join", "pkg.mod:join"))

    def test_bare_target(self) -> None:
        self.assertEqual(parse_inline_candidate("pkg.mod:join"), ("pkg.mod:join", "pkg.mod:join"))

    def test_missing_colon(self) -> None:
        with self.assertRaises(ProfileError):
            parse_inline_candidate("join=pkg.mod.join")

    def test_empty_label(self) -> None:
        with self.assertRaises(ProfileError):
            parse_inline_candidate("=pkg.mod:join")


class TestResolveCandidate(unittest.TestCase):
    def test_function(self) -> None:
        self.assertIs(resolve_candidate("funcbench_test_helpers:noop"), noop)

    def test_dotted_attribute(self) -> None:
        func = resolve_candidate("funcbench.config:ComparisonConfig.__init__")
        self.assertTrue(callable(func))

    def test_missing_module(self) -> None:
        with self.assertRaises(ProfileError):
            resolve_candidate("no_such_module_xyz:func")

    def test_module_raising_on_import(self) -> None:
        self._assert_broken_module("raise RuntimeError('boom at import')\n", RuntimeError)

    def test_module_with_syntax_error(self) -> None:
        self._assert_broken_module("def broken(:\n", SyntaxError)

    def _assert_broken_module(self, source: str, cause: type[BaseException]) -> None:
        module_name = f"funcbench_broken_{cause.__name__.lower()}"
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / f"{module_name}.py").write_text(source)
            sys.path.insert(0, tmpdir)
            try:
                with self.assertRaises(ProfileError) as cm:
                    resolve_candidate(f"{module_name}:func")
            finally:
                sys.path.remove(tmpdir)
                sys.modules.pop(module_name, None)
        self.assertIn(module_name, str(cm.exception))
        self.assertIsInstance(cm.exception.__cause__, cause)

    def test_missing_attribute(self) -> None:
        with self.assertRaises(ProfileError):
            resolve_candidate("funcbench_test_helpers:does_not_exist")

    def test_not_callable(self) -> None:
        with self.assertRaises(ProfileError):
            resolve_candidate("funcbench_test_helpers:ANSWER")

    def test_malformed(self) -> None:
        with self.assertRaises(ProfileError):
            resolve_candidate("funcbench_test_helpers:")


class TestBuildComparison(unittest.TestCase):
    def test_registers_candidates(self) -> None:
        config = ComparisonConfig(
            num_runs=3,
            formatter="table",
            candidates={"x": "funcbench_test_helpers:noop", "y": "funcbench_test_helpers:noop"},
        )
        comparison = build_comparison(config)
        self.assertEqual(comparison.get_num_runs(), 3)
        self.assertEqual(comparison.labels, ["x", "y"])
        self.assertEqual(comparison.run().labels, ["x", "y"])

    def test_formatter_applied(self) -> None:
        config = ComparisonConfig(num_runs=1, formatter="table")
        text = build_comparison(config).exec(is_terminal=False, file=io.StringIO())
        self.assertNotIn("<table", text)

    def test_unresolvable_candidate(self) -> None:
        config = ComparisonConfig(candidates={"x": "no_such_module_xyz:f"})
        with self.assertRaises(ProfileError):
            build_comparison(config)


if __name__ == "__main__":
    unittest.main()
