"""Data models for per-package verification results."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FileDependency:
    """A package file together with the shared libraries it fails to resolve."""

    file_name: str  # absolute path as listed by the package manager
    library_dependencies: frozenset[str] = field(default_factory=frozenset)


@dataclass
class LibraryRequired:
    """Inverted index entry: one unresolved library and the files needing it."""

    library_name: str
    files_requiring: list[str] = field(default_factory=list)


@dataclass
class PackagesContaining:
    """Packages the file index reports as possibly providing a library."""

    library_name: str
    packages_containing: list[str] = field(default_factory=list)


@dataclass(order=True)
class Package:
    """Verification record for one installed package, ordered by name."""

    name: str
    file_dependencies: list[FileDependency] = field(default_factory=list, compare=False)
    library_requirements: list[LibraryRequired] = field(default_factory=list, compare=False)
    packages_containing: list[PackagesContaining] = field(default_factory=list, compare=False)

    @property
    def has_issues(self) -> bool:
        return bool(self.file_dependencies)
