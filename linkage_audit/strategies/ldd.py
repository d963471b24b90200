"""Dynamic-link inspection via the system loader (ldd)."""

from __future__ import annotations

from linkage_audit.strategies.base import VerificationStrategy
from linkage_audit.tooling.base import Toolchain


class DynamicLinkInspection(VerificationStrategy):
    """Ask the dynamic loader which libraries of a binary are not found."""

    def __init__(self, toolchain: Toolchain) -> None:
        self._toolchain = toolchain

    @property
    def name(self) -> str:
        return "ldd"

    @property
    def program(self) -> str:
        return "ldd"

    def unresolved_libraries(self, path: str) -> list[str]:
        return self._toolchain.inspect_dynamic_linkage(path)
