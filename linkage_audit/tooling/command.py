"""Subprocess helpers shared by every external-tool adapter."""

from __future__ import annotations

import shutil
import subprocess

import structlog

from linkage_audit.exceptions import ExternalToolExecutionError

log = structlog.get_logger("linkage_audit.tooling")


def program_available(program: str) -> bool:
    """Return True if *program* resolves on PATH."""
    return shutil.which(program) is not None


def run_process(cmd: list[str], *, timeout: float | None = None) -> subprocess.CompletedProcess:
    """Run *cmd* to completion without judging its exit status.

    Raises ``ExternalToolExecutionError`` if the program cannot be spawned
    or does not finish within *timeout* seconds.
    """
    log.debug("command.run", cmd=cmd)
    try:
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        log.error("command.timeout", cmd=cmd, timeout=timeout)
        raise ExternalToolExecutionError(cmd, stderr=f"timed out after {timeout}s")
    except OSError as e:
        log.error("command.spawn_failed", cmd=cmd, error=str(e))
        raise ExternalToolExecutionError(cmd, stderr=str(e)) from e


def run_command(
    cmd: list[str],
    *,
    allowed_returncodes: frozenset[int] = frozenset({0}),
    timeout: float | None = None,
) -> str:
    """Run *cmd* and return its stdout.

    Non-zero exits listed in *allowed_returncodes* count as success; any
    other exit status raises ``ExternalToolExecutionError``.
    """
    result = run_process(cmd, timeout=timeout)
    if result.returncode not in allowed_returncodes:
        log.warning("command.failed", cmd=cmd, returncode=result.returncode)
        raise ExternalToolExecutionError(cmd, result.returncode, result.stderr)
    return result.stdout


def output_lines(output: str) -> list[str]:
    """Split tool output into stripped, non-blank lines."""
    return [line.strip() for line in output.splitlines() if line.strip()]
