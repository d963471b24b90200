"""Abstract interface to the external programs the audit depends on."""

from __future__ import annotations

from abc import ABC, abstractmethod

from linkage_audit.tooling.command import program_available


class Toolchain(ABC):
    """
    Adapter over the package manager, the file-type prober, the linkage
    inspector and the package file index.

    Every method blocks until its subprocess exits and turns failures into
    ``ExternalToolExecutionError``. Implementations must be safe to call
    from several worker threads at once.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Toolchain identifier, e.g. 'pacman'."""
        ...

    @property
    @abstractmethod
    def base_programs(self) -> list[str]:
        """Programs needed for every run (package manager, type prober)."""
        ...

    @property
    @abstractmethod
    def lookup_program(self) -> str:
        """Program needed only when candidate lookup is requested."""
        ...

    @abstractmethod
    def list_all_local_packages(self) -> list[str]:
        """Names of all locally installed (foreign) packages."""
        ...

    @abstractmethod
    def list_owned_files(self, package: str) -> list[str]:
        """Absolute paths of every file owned by *package*."""
        ...

    @abstractmethod
    def probe_file_type(self, path: str) -> bool:
        """True if *path* is a dynamically linked binary worth inspecting."""
        ...

    @abstractmethod
    def inspect_dynamic_linkage(self, path: str) -> list[str]:
        """Library names the dynamic loader cannot resolve for *path*."""
        ...

    @abstractmethod
    def lookup_providing_packages(self, library: str) -> list[str]:
        """Packages the file index reports as containing *library*."""
        ...

    def required_programs(self, strategy_program: str, show_candidates: bool) -> list[str]:
        """Programs to check before a run, in the order they are reported."""
        programs = [*self.base_programs, strategy_program]
        if show_candidates:
            programs.append(self.lookup_program)
        return programs

    def check_prerequisites(self, programs: list[str]) -> list[str]:
        """
        Check prerequisites.
        Returns list of missing programs (empty = can run).
        """
        return [p for p in programs if not program_available(p)]
