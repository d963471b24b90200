"""Tests for AuditSettings and grouping defaults."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from linkage_audit.models.settings import AuditSettings, Grouping, OutputFormat, Strategy


class TestGroupingResolve:
    def test_defaults_without_candidates(self):
        assert Grouping.resolve() == Grouping(True, True, False)

    def test_defaults_with_candidates(self):
        assert Grouping.resolve(show_candidates=True) == Grouping(True, True, True)

    def test_explicit_grouping_wins(self):
        assert Grouping.resolve(by_library=True, show_candidates=True) == Grouping(
            False, True, False
        )

    def test_explicit_containing_package_only(self):
        assert Grouping.resolve(by_containing_package=True) == Grouping(False, False, True)


class TestAuditSettings:
    def test_defaults(self):
        settings = AuditSettings()
        assert settings.strategy is Strategy.LDD
        assert settings.output is OutputFormat.CONSOLE
        assert settings.packages == ()
        assert settings.grouping == Grouping()

    def test_immutable(self):
        with pytest.raises(FrozenInstanceError):
            AuditSettings().show_candidates = True  # type: ignore[misc]

    def test_with_packages_dedupes_in_order(self):
        settings = AuditSettings().with_packages(["b", "a", "b", "c"])
        assert settings.packages == ("b", "a", "c")
