"""linkage-audit: find installed binaries with unresolved shared libraries."""

__version__ = "0.1.0"

from linkage_audit.auditor import PackageAuditor
from linkage_audit.exceptions import (
    AuditError,
    ExternalToolExecutionError,
    InvalidIgnorePatternError,
    MissingDependencyToolError,
    UnsupportedStrategyError,
)
from linkage_audit.ignore import IgnorePolicy
from linkage_audit.models.package import (
    FileDependency,
    LibraryRequired,
    Package,
    PackagesContaining,
)
from linkage_audit.models.settings import AuditSettings, Grouping, OutputFormat, Strategy

__all__ = [
    "AuditError",
    "AuditSettings",
    "ExternalToolExecutionError",
    "FileDependency",
    "Grouping",
    "IgnorePolicy",
    "InvalidIgnorePatternError",
    "LibraryRequired",
    "MissingDependencyToolError",
    "OutputFormat",
    "Package",
    "PackageAuditor",
    "PackagesContaining",
    "Strategy",
    "UnsupportedStrategyError",
]
