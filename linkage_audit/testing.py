"""Test doubles for linkage_audit: use in unit / integration tests.

Usage::

    from linkage_audit.testing import FakeToolchain

    toolchain = FakeToolchain(
        owned_files={"foo": ["/usr/bin/foo"]},
        unresolved={"/usr/bin/foo": ["libbar.so.1"]},
    )
    auditor = PackageAuditor(settings, toolchain=toolchain)

File paths still go through the candidate filter, which checks the real
filesystem, so point them at files created under ``tmp_path``.
"""

from __future__ import annotations

import threading

from linkage_audit.exceptions import ExternalToolExecutionError
from linkage_audit.tooling.base import Toolchain


class FakeToolchain(Toolchain):
    """In-memory Toolchain driven by dictionaries.

    Parameters
    ----------
    owned_files:
        package name -> owned paths. Unknown packages fail like
        ``pacman -Qql`` does.
    binaries:
        Paths the type probe accepts. ``None`` (default) accepts every path.
    unresolved:
        path -> unresolved library names reported by the inspector.
    providers:
        library -> packages reported by the file index.
    local_packages:
        Result of ``list_all_local_packages``.
    installed:
        Programs reported as present. ``None`` (default) means all of them.
    failing:
        Package names, paths or library names whose tool call fails.
    """

    def __init__(
        self,
        *,
        owned_files: dict[str, list[str]] | None = None,
        binaries: set[str] | None = None,
        unresolved: dict[str, list[str]] | None = None,
        providers: dict[str, list[str]] | None = None,
        local_packages: list[str] | None = None,
        installed: set[str] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.owned_files = owned_files or {}
        self.binaries = binaries
        self.unresolved = unresolved or {}
        self.providers = providers or {}
        self.local_packages = local_packages or []
        self.installed = installed
        self.failing = failing or set()
        self._calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    @property
    def calls(self) -> list[tuple[str, str]]:
        """(method, argument) pairs received, useful for assertions in tests."""
        with self._lock:
            return list(self._calls)

    @property
    def name(self) -> str:
        return "fake"

    @property
    def base_programs(self) -> list[str]:
        return ["pacman", "file"]

    @property
    def lookup_program(self) -> str:
        return "pkgfile"

    def check_prerequisites(self, programs: list[str]) -> list[str]:
        if self.installed is None:
            return []
        return [p for p in programs if p not in self.installed]

    def list_all_local_packages(self) -> list[str]:
        self._record("list_all_local_packages", "")
        return list(self.local_packages)

    def list_owned_files(self, package: str) -> list[str]:
        self._record("list_owned_files", package)
        if package not in self.owned_files:
            self._fail(["pacman", "-Qql", package], f"error: package '{package}' was not found")
        return list(self.owned_files[package])

    def probe_file_type(self, path: str) -> bool:
        self._record("probe_file_type", path)
        return self.binaries is None or path in self.binaries

    def inspect_dynamic_linkage(self, path: str) -> list[str]:
        self._record("inspect_dynamic_linkage", path)
        return list(self.unresolved.get(path, []))

    def lookup_providing_packages(self, library: str) -> list[str]:
        self._record("lookup_providing_packages", library)
        return list(self.providers.get(library, []))

    def _record(self, method: str, arg: str) -> None:
        with self._lock:
            self._calls.append((method, arg))
        if arg and arg in self.failing:
            self._fail([method, arg], f"{method} failed for {arg}")

    @staticmethod
    def _fail(cmd: list[str], stderr: str) -> None:
        raise ExternalToolExecutionError(cmd, 1, stderr)
