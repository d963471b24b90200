"""Static header inspection (readelf): reserved, not implemented."""

from __future__ import annotations

from linkage_audit.exceptions import UnsupportedStrategyError
from linkage_audit.strategies.base import VerificationStrategy
from linkage_audit.tooling.base import Toolchain


class StaticHeaderInspection(VerificationStrategy):
    """
    Would resolve DT_NEEDED entries from the binary's dynamic section
    against the loader search path. Until that exists every call fails
    loudly instead of reporting a clean result.
    """

    def __init__(self, toolchain: Toolchain) -> None:
        self._toolchain = toolchain

    @property
    def name(self) -> str:
        return "readelf"

    @property
    def program(self) -> str:
        return "readelf"

    @property
    def implemented(self) -> bool:
        return False

    def unresolved_libraries(self, path: str) -> list[str]:
        raise UnsupportedStrategyError(self.name)
