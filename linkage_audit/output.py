"""Report rendering: console text and JSON."""

from __future__ import annotations

import json

from linkage_audit.models.package import Package
from linkage_audit.models.settings import Grouping, OutputFormat

_BANNER = "=" * 40


def render(packages: list[Package], grouping: Grouping, output: OutputFormat) -> str:
    if output is OutputFormat.JSON:
        return render_json(packages, grouping)
    return render_console(packages, grouping)


def render_console(packages: list[Package], grouping: Grouping) -> str:
    lines: list[str] = []
    for i, package in enumerate(packages):
        if i:
            lines.append("")
        lines += [_BANNER, f"Package: {package.name}", _BANNER]

        if grouping.by_file:
            for dep in sorted(package.file_dependencies, key=lambda d: d.file_name):
                lines.append(f'\nelf file "{dep.file_name}" is missing:')
                lines += [f"\t{lib}" for lib in sorted(dep.library_dependencies)]

        if grouping.by_library:
            for req in sorted(package.library_requirements, key=lambda r: r.library_name):
                lines.append(f'\nlibrary "{req.library_name}" is required by:')
                lines += [f"\t{f}" for f in sorted(req.files_requiring)]

        if grouping.by_containing_package:
            for entry in sorted(package.packages_containing, key=lambda e: e.library_name):
                lines.append(f'\nlibrary "{entry.library_name}" is packaged in:')
                lines += [f"\t{p}" for p in entry.packages_containing]
    return "\n".join(lines)


def to_dict(package: Package, grouping: Grouping) -> dict:
    """JSON-ready view of one package, limited to the enabled groupings."""
    data: dict = {"package_name": package.name}
    if grouping.by_file:
        data["file_dependencies"] = [
            {
                "file_name": dep.file_name,
                "library_dependencies": sorted(dep.library_dependencies),
            }
            for dep in sorted(package.file_dependencies, key=lambda d: d.file_name)
        ]
    if grouping.by_library:
        data["library_requirements"] = [
            {
                "library_name": req.library_name,
                "files_requiring": sorted(req.files_requiring),
            }
            for req in sorted(package.library_requirements, key=lambda r: r.library_name)
        ]
    if grouping.by_containing_package:
        data["packages_containing"] = [
            {
                "library_name": entry.library_name,
                "packages_containing": list(entry.packages_containing),
            }
            for entry in sorted(package.packages_containing, key=lambda e: e.library_name)
        ]
    return data


def render_json(packages: list[Package], grouping: Grouping) -> str:
    return json.dumps([to_dict(p, grouping) for p in packages], indent=2)
