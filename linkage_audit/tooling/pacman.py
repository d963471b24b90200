"""Arch Linux toolchain: pacman, file, ldd and pkgfile."""

from __future__ import annotations

from linkage_audit.exceptions import ExternalToolExecutionError
from linkage_audit.tooling.base import Toolchain
from linkage_audit.tooling.command import output_lines, run_command, run_process

# Marker ldd prints after a library the loader cannot locate
NOT_FOUND_MARKER = "=> not found"

# ldd message for statically linked files (exit status 1)
_NOT_DYNAMIC = "not a dynamic executable"

# pacman -Qqm and pkgfile exit 1 when there is nothing to list
_EMPTY_OK = frozenset({0, 1})


def parse_ldd_output(output: str) -> list[str]:
    """Extract unresolved library names from ldd output.

    Example line::

        \tlibbar.so.1 => not found
    """
    missing = []
    for line in output.splitlines():
        line = line.rstrip()
        if line.endswith(NOT_FOUND_MARKER):
            library = line[: -len(NOT_FOUND_MARKER)].strip()
            if library:
                missing.append(library)
    return missing


def is_dynamic_binary(file_output: str) -> bool:
    """Interpret ``file -b`` output: ELF, and not statically linked."""
    return "ELF" in file_output and "statically linked" not in file_output


class PacmanToolchain(Toolchain):
    """Toolchain backed by pacman's local database and pkgfile's file index."""

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "pacman"

    @property
    def base_programs(self) -> list[str]:
        return ["pacman", "file"]

    @property
    def lookup_program(self) -> str:
        return "pkgfile"

    def list_all_local_packages(self) -> list[str]:
        out = run_command(["pacman", "-Qqm"], allowed_returncodes=_EMPTY_OK, timeout=self._timeout)
        return output_lines(out)

    def list_owned_files(self, package: str) -> list[str]:
        out = run_command(["pacman", "-Qql", package], timeout=self._timeout)
        return output_lines(out)

    def probe_file_type(self, path: str) -> bool:
        out = run_command(["file", "-b", path], timeout=self._timeout)
        return is_dynamic_binary(out)

    def inspect_dynamic_linkage(self, path: str) -> list[str]:
        cmd = ["ldd", path]
        result = run_process(cmd, timeout=self._timeout)
        if result.returncode != 0:
            if _NOT_DYNAMIC in result.stdout or _NOT_DYNAMIC in result.stderr:
                return []
            raise ExternalToolExecutionError(cmd, result.returncode, result.stderr)
        return parse_ldd_output(result.stdout)

    def lookup_providing_packages(self, library: str) -> list[str]:
        out = run_command(["pkgfile", library], allowed_returncodes=_EMPTY_OK, timeout=self._timeout)
        return output_lines(out)
