"""Aggregation: derive the by-library and by-providing-package indexes."""

from __future__ import annotations

from linkage_audit.models.package import FileDependency, LibraryRequired, PackagesContaining
from linkage_audit.tooling.base import Toolchain


def build_library_requirements(dependencies: list[FileDependency]) -> list[LibraryRequired]:
    """Invert file -> libraries into library -> files.

    File paths are unique within *dependencies*, so each file lands in a
    library's list at most once.
    """
    by_library: dict[str, LibraryRequired] = {}
    for dep in dependencies:
        for library in dep.library_dependencies:
            entry = by_library.get(library)
            if entry is None:
                entry = by_library[library] = LibraryRequired(library_name=library)
            entry.files_requiring.append(dep.file_name)
    return list(by_library.values())


def build_packages_containing(
    requirements: list[LibraryRequired],
    toolchain: Toolchain,
) -> list[PackagesContaining]:
    """Ask the package file index which packages could provide each library."""
    return [
        PackagesContaining(
            library_name=req.library_name,
            packages_containing=toolchain.lookup_providing_packages(req.library_name),
        )
        for req in requirements
    ]
