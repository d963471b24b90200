"""Abstract base class for linkage verification strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod

from linkage_audit.models.package import FileDependency


class VerificationStrategy(ABC):
    """
    One way of finding the shared libraries a binary cannot resolve.
    Selected once at startup; every file of every package goes through the
    same instance, so implementations must be thread-safe.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy identifier, e.g. 'ldd'."""
        ...

    @property
    @abstractmethod
    def program(self) -> str:
        """External program this strategy needs on PATH."""
        ...

    @property
    def implemented(self) -> bool:
        return True

    @abstractmethod
    def unresolved_libraries(self, path: str) -> list[str]:
        """Raw unresolved library names for *path* (may repeat)."""
        ...

    def verify(self, path: str) -> FileDependency | None:
        """
        Check one confirmed binary.

        Returns:
            FileDependency with the deduplicated unresolved names, or None
            when every library resolves.
        """
        missing = frozenset(self.unresolved_libraries(path))
        if not missing:
            return None
        return FileDependency(file_name=path, library_dependencies=missing)
