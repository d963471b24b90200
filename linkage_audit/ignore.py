"""Ignore policy: drop unresolved libraries that should not be reported."""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass, field
from typing import Iterable

from linkage_audit.exceptions import InvalidIgnorePatternError
from linkage_audit.models.package import FileDependency
from linkage_audit.models.settings import AuditSettings


def compile_ignore_patterns(patterns: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    """Compile user-supplied ignore regexes, failing on the first bad one."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise InvalidIgnorePatternError(pattern, str(e)) from e
    return tuple(compiled)


def owned_file_names(files: Iterable[str]) -> frozenset[str]:
    """Base names of every regular path a package owns (directories end in '/')."""
    return frozenset(posixpath.basename(f) for f in files if f and not f.endswith("/"))


@dataclass(frozen=True)
class IgnorePolicy:
    """
    Filter unresolved library names.

    A name is dropped when it is listed literally, when it matches one of
    the regexes (``re.search``), or when its base name is one of the
    package's own files (the loader just does not search there).
    """

    libraries: frozenset[str] = frozenset()
    patterns: tuple[re.Pattern[str], ...] = field(default_factory=tuple)

    @classmethod
    def from_settings(cls, settings: AuditSettings) -> IgnorePolicy:
        return cls(
            libraries=frozenset(settings.ignore_libraries),
            patterns=compile_ignore_patterns(settings.ignore_patterns),
        )

    def is_ignored(self, library: str, package_files: frozenset[str] = frozenset()) -> bool:
        if library in self.libraries:
            return True
        if posixpath.basename(library) in package_files:
            return True
        return any(p.search(library) for p in self.patterns)

    def apply(
        self,
        dependencies: Iterable[FileDependency],
        package_files: frozenset[str] = frozenset(),
    ) -> list[FileDependency]:
        """Return *dependencies* with ignored names removed and empty entries dropped."""
        kept = []
        for dep in dependencies:
            remaining = frozenset(
                lib for lib in dep.library_dependencies if not self.is_ignored(lib, package_files)
            )
            if remaining:
                kept.append(FileDependency(dep.file_name, remaining))
        return kept
