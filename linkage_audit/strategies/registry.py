"""Strategy registry: map the configured strategy to its implementation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import structlog

from linkage_audit.models.settings import Strategy
from linkage_audit.strategies.base import VerificationStrategy
from linkage_audit.strategies.ldd import DynamicLinkInspection
from linkage_audit.strategies.readelf import StaticHeaderInspection
from linkage_audit.tooling.base import Toolchain

log = structlog.get_logger("linkage_audit.strategies")


@dataclass(frozen=True)
class StrategyDescriptor:
    """Strategy declaration."""

    strategy: Strategy
    description: str
    factory: Callable[[Toolchain], VerificationStrategy]


STRATEGIES: dict[Strategy, StrategyDescriptor] = {
    Strategy.LDD: StrategyDescriptor(
        strategy=Strategy.LDD,
        description="Checks packages using ldd",
        factory=DynamicLinkInspection,
    ),
    Strategy.READELF: StrategyDescriptor(
        strategy=Strategy.READELF,
        description="Checks packages using readelf",
        factory=StaticHeaderInspection,
    ),
}


def create_strategy(strategy: Strategy, toolchain: Toolchain) -> VerificationStrategy:
    """Instantiate the verification strategy selected for this run."""
    descriptor = STRATEGIES[strategy]
    instance = descriptor.factory(toolchain)
    log.debug("strategy.selected", strategy=instance.name, implemented=instance.implemented)
    return instance
