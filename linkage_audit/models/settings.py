"""Run settings shared (read-only) by every stage of the audit pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class Strategy(Enum):
    """Ways to check binaries for unresolved shared libraries."""

    LDD = "ldd"
    READELF = "readelf"


class OutputFormat(Enum):
    CONSOLE = "console"
    JSON = "json"


@dataclass(frozen=True)
class Grouping:
    """Which indexes the report shows."""

    by_file: bool = True
    by_library: bool = True
    by_containing_package: bool = False

    @classmethod
    def resolve(
        cls,
        by_file: bool = False,
        by_library: bool = False,
        by_containing_package: bool = False,
        show_candidates: bool = False,
    ) -> Grouping:
        """Apply the default grouping when no grouping flag was given.

        Files and libraries are shown by default; containing packages only
        when candidate lookup is on.
        """
        if not (by_file or by_library or by_containing_package):
            return cls(
                by_file=True,
                by_library=True,
                by_containing_package=show_candidates,
            )
        return cls(
            by_file=by_file,
            by_library=by_library,
            by_containing_package=by_containing_package,
        )


@dataclass(frozen=True)
class AuditSettings:
    """Immutable settings built once by the CLI."""

    strategy: Strategy = Strategy.LDD
    packages: tuple[str, ...] = ()
    all_packages: bool = False
    ignore_libraries: frozenset[str] = frozenset()
    ignore_patterns: tuple[str, ...] = ()
    show_candidates: bool = False
    output: OutputFormat = OutputFormat.CONSOLE
    grouping: Grouping = field(default_factory=Grouping)
    workers: int | None = None  # None = os.cpu_count()
    tool_timeout: float | None = None  # seconds; None = wait indefinitely

    def with_packages(self, packages: list[str] | tuple[str, ...]) -> AuditSettings:
        """Return a copy with *packages* (deduplicated, first occurrence kept)."""
        return replace(self, packages=tuple(dict.fromkeys(packages)))
