"""Custom exceptions for linkage-audit."""

from __future__ import annotations


class AuditError(Exception):
    """Base exception for all audit errors."""


class MissingDependencyToolError(AuditError):
    """Raised when a required external program is not installed."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"Dependency missing: {tool}")


class ExternalToolExecutionError(AuditError):
    """Raised when an external program cannot be spawned or exits with an error."""

    def __init__(self, command: list[str], returncode: int | None = None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else "no error output"
        if returncode is None:
            message = f"Command execution error: {' '.join(command)}: {detail}"
        else:
            message = f"Command execution error: {' '.join(command)} (exit {returncode}): {detail}"
        super().__init__(message)


class InvalidIgnorePatternError(AuditError):
    """Raised when an ignore regex does not compile."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Regex error in ignore pattern '{pattern}': {reason}")


class UnsupportedStrategyError(AuditError):
    """Raised when the selected verification strategy has no implementation."""

    def __init__(self, strategy: str):
        self.strategy = strategy
        super().__init__(
            f"Verification strategy '{strategy}' is not implemented yet; use 'ldd' instead"
        )
