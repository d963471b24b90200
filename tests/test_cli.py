"""Tests for CLI commands: external tools replaced by FakeToolchain."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from linkage_audit.auditor import PackageAuditor
from linkage_audit.cli import (
    EXIT_CLEAN,
    EXIT_EXECUTION_FAILED,
    EXIT_INVALID_PATTERN,
    EXIT_ISSUES_FOUND,
    EXIT_MISSING_TOOL,
    EXIT_UNSUPPORTED_STRATEGY,
    _split_csv,
    main,
)
from linkage_audit.models.settings import AuditSettings, OutputFormat, Strategy
from linkage_audit.testing import FakeToolchain


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with patch("linkage_audit.cli.setup_logging"):
        yield


def _invoke(args: list[str], toolchain: FakeToolchain):
    """Run the CLI with *toolchain* injected; return (result, captured settings)."""
    captured: list[AuditSettings] = []

    def _factory(settings: AuditSettings) -> PackageAuditor:
        captured.append(settings)
        return PackageAuditor(settings, toolchain=toolchain)

    with patch("linkage_audit.cli.PackageAuditor", side_effect=_factory):
        result = CliRunner().invoke(main, args)
    return result, (captured[0] if captured else None)


class TestSplitCsv:
    def test_flattens(self):
        assert _split_csv(None, None, ("a,b", "c", " d , ,e")) == ("a", "b", "c", "d", "e")

    def test_empty(self):
        assert _split_csv(None, None, ()) == ()


class TestArguments:
    def test_packages_required(self):
        result, _ = _invoke(["ldd"], FakeToolchain())
        assert result.exit_code == 2
        assert "--all-packages" in result.output

    def test_packages_and_all_conflict(self):
        result, _ = _invoke(["ldd", "foo", "-a"], FakeToolchain())
        assert result.exit_code == 2

    def test_settings_built(self):
        toolchain = FakeToolchain(owned_files={"foo": [], "bar": []})
        result, settings = _invoke(
            ["-c", "-j", "--workers", "3", "ldd", "foo,bar", "foo", "-i", "liba.so,libb.so", "-r", "^libQt"],
            toolchain,
        )
        assert result.exit_code == EXIT_CLEAN, result.output
        assert settings.strategy is Strategy.LDD
        assert settings.packages == ("foo", "bar")
        assert settings.ignore_libraries == frozenset({"liba.so", "libb.so"})
        assert settings.ignore_patterns == ("^libQt",)
        assert settings.show_candidates is True
        assert settings.output is OutputFormat.JSON
        assert settings.grouping.by_containing_package is True
        assert settings.workers == 3

    def test_explicit_grouping(self):
        toolchain = FakeToolchain(owned_files={"foo": []})
        _, settings = _invoke(["-c", "--group-by-library", "ldd", "foo"], toolchain)
        assert settings.grouping.by_library is True
        assert settings.grouping.by_file is False
        assert settings.grouping.by_containing_package is False


class TestExitCodes:
    def test_clean(self):
        result, _ = _invoke(["ldd", "foo"], FakeToolchain(owned_files={"foo": []}))
        assert result.exit_code == EXIT_CLEAN
        assert "Package: foo" in result.output

    def test_issues_found(self, make_files):
        (path,) = make_files("usr/bin/baz")
        toolchain = FakeToolchain(owned_files={"baz": [path]}, unresolved={path: ["libqux.so.2"]})
        result, _ = _invoke(["-j", "ldd", "baz"], toolchain)

        assert result.exit_code == EXIT_ISSUES_FOUND
        data = json.loads(result.output)
        assert data[0]["package_name"] == "baz"
        assert data[0]["library_requirements"] == [
            {"library_name": "libqux.so.2", "files_requiring": [path]}
        ]

    def test_ignored_library_is_clean(self, make_files):
        (path,) = make_files("usr/bin/baz")
        toolchain = FakeToolchain(owned_files={"baz": [path]}, unresolved={path: ["libqux.so.2"]})
        result, _ = _invoke(["ldd", "baz", "-i", "libqux.so.2"], toolchain)
        assert result.exit_code == EXIT_CLEAN

    def test_missing_tool(self):
        toolchain = FakeToolchain(owned_files={"foo": []}, installed={"pacman", "file"})
        result, _ = _invoke(["ldd", "foo"], toolchain)
        assert result.exit_code == EXIT_MISSING_TOOL
        assert "Dependency missing: ldd" in result.output
        assert "Package:" not in result.output

    def test_execution_failure(self):
        result, _ = _invoke(["ldd", "nope"], FakeToolchain())
        assert result.exit_code == EXIT_EXECUTION_FAILED
        assert result.output.startswith("Error: ")
        assert "Package:" not in result.output

    def test_invalid_pattern(self):
        result, _ = _invoke(["ldd", "foo", "-r", "lib(("], FakeToolchain(owned_files={"foo": []}))
        assert result.exit_code == EXIT_INVALID_PATTERN
        assert "lib((" in result.output

    def test_readelf_unsupported(self):
        result, _ = _invoke(["readelf", "foo"], FakeToolchain(owned_files={"foo": []}))
        assert result.exit_code == EXIT_UNSUPPORTED_STRATEGY
        assert "not implemented" in result.output

    def test_all_packages(self):
        toolchain = FakeToolchain(owned_files={"yay": []}, local_packages=["yay"])
        result, _ = _invoke(["ldd", "-a"], toolchain)
        assert result.exit_code == EXIT_CLEAN
        assert "Package: yay" in result.output
