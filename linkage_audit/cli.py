"""CLI entry point: linkage-audit.

Subcommands:
    linkage-audit ldd foo,bar                 # check two packages with ldd
    linkage-audit ldd -a -i libfoo.so.1       # all local packages, ignoring one library
    linkage-audit -c -j ldd foo               # JSON output with candidate packages
    linkage-audit readelf foo                 # header inspection (not implemented yet)
"""

from __future__ import annotations

import os
import sys
from dataclasses import replace

import click
import structlog

from linkage_audit.auditor import PackageAuditor
from linkage_audit.core.logging import setup_logging
from linkage_audit.exceptions import (
    ExternalToolExecutionError,
    InvalidIgnorePatternError,
    MissingDependencyToolError,
    UnsupportedStrategyError,
)
from linkage_audit.models.settings import AuditSettings, Grouping, OutputFormat, Strategy
from linkage_audit.output import render
from linkage_audit.strategies.registry import STRATEGIES

log = structlog.get_logger("linkage_audit.cli")

EXIT_CLEAN = 0
EXIT_ISSUES_FOUND = 1
EXIT_MISSING_TOOL = 3
EXIT_EXECUTION_FAILED = 4
EXIT_INVALID_PATTERN = 5
EXIT_UNSUPPORTED_STRATEGY = 6

# Defaults overridable via env vars
_DEFAULT_WORKERS = os.environ.get("LINKAGE_AUDIT_WORKERS")
_DEFAULT_TIMEOUT = os.environ.get("LINKAGE_AUDIT_TOOL_TIMEOUT")

_CANDIDATES_HELP = """Prints a list of packages containing the missing library.
The listed packages may or may not add the library to the system path,
so a listed package is not guaranteed to satisfy the requirement.
Requires pkgfile."""


def _split_csv(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]) -> tuple[str, ...]:
    """Flatten repeated and comma-delimited values (eg lib1,lib2 -i lib3)."""
    items = (item.strip() for v in value for item in v.split(","))
    return tuple(i for i in items if i)


@click.group()
@click.option("-c", "--show-candidates", is_flag=True, help=_CANDIDATES_HELP)
@click.option("-j", "--output-json", is_flag=True, help="Uses json for the list of missing libraries")
@click.option("-q", "--quiet", "--silent", is_flag=True, help="Hides all messages")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option("--group-by-file", is_flag=True, help="Groups output by files missing libraries")
@click.option("--group-by-library", is_flag=True, help="Groups output by libraries required in files")
@click.option(
    "--group-by-containing-package",
    is_flag=True,
    help="Groups output by packages containing libraries",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=_DEFAULT_WORKERS,
    help="Parallel workers (default: CPU count)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=_DEFAULT_TIMEOUT,
    help="Seconds to wait for each external command (default: no limit)",
)
@click.pass_context
def main(
    ctx: click.Context,
    show_candidates: bool,
    output_json: bool,
    quiet: bool,
    verbose: bool,
    group_by_file: bool,
    group_by_library: bool,
    group_by_containing_package: bool,
    workers: int | None,
    timeout: float | None,
) -> None:
    """Find binaries in installed packages whose shared libraries cannot be resolved."""
    if verbose:
        setup_logging(level="DEBUG")
    elif quiet:
        setup_logging(level="ERROR")
    else:
        setup_logging()

    ctx.obj = AuditSettings(
        show_candidates=show_candidates,
        output=OutputFormat.JSON if output_json else OutputFormat.CONSOLE,
        grouping=Grouping.resolve(
            by_file=group_by_file,
            by_library=group_by_library,
            by_containing_package=group_by_containing_package,
            show_candidates=show_candidates,
        ),
        workers=workers,
        tool_timeout=timeout,
    )


def _strategy_command(strategy: Strategy) -> click.Command:
    """Build the subcommand for one verification strategy."""

    @click.command(strategy.value, help=STRATEGIES[strategy].description)
    @click.argument("packages", nargs=-1, callback=_split_csv)
    @click.option(
        "-a",
        "--all-packages",
        is_flag=True,
        help="Checks all installed packages marked as local",
    )
    @click.option(
        "-i",
        "--ignore-libs",
        multiple=True,
        callback=_split_csv,
        help="List of libraries to ignore (eg lib1,lib2)",
    )
    @click.option(
        "-r",
        "--ignore-regex",
        multiple=True,
        help="Regular expression for libraries to ignore (repeatable)",
    )
    @click.pass_obj
    def command(
        settings: AuditSettings,
        packages: tuple[str, ...],
        all_packages: bool,
        ignore_libs: tuple[str, ...],
        ignore_regex: tuple[str, ...],
    ) -> None:
        if packages and all_packages:
            raise click.UsageError("PACKAGES and --all-packages are mutually exclusive")
        if not packages and not all_packages:
            raise click.UsageError("Provide PACKAGES or --all-packages")

        run_settings = replace(
            settings.with_packages(packages),
            strategy=strategy,
            all_packages=all_packages,
            ignore_libraries=frozenset(ignore_libs),
            ignore_patterns=ignore_regex,
        )
        sys.exit(run_audit(run_settings))

    return command


def run_audit(settings: AuditSettings, auditor: PackageAuditor | None = None) -> int:
    """Run the audit, print the report and return the process exit code."""
    try:
        auditor = auditor or PackageAuditor(settings)
        packages = auditor.run()
    except InvalidIgnorePatternError as e:
        click.echo(f"Error: {e}", err=True)
        return EXIT_INVALID_PATTERN
    except MissingDependencyToolError as e:
        click.echo(f"Error: {e}", err=True)
        return EXIT_MISSING_TOOL
    except UnsupportedStrategyError as e:
        click.echo(f"Error: {e}", err=True)
        return EXIT_UNSUPPORTED_STRATEGY
    except ExternalToolExecutionError as e:
        click.echo(f"Error: {e}", err=True)
        return EXIT_EXECUTION_FAILED

    click.echo(render(packages, settings.grouping, settings.output))
    issues = sum(1 for p in packages if p.has_issues)
    log.info("cli.audit_finished", packages=len(packages), packages_with_issues=issues)
    return EXIT_ISSUES_FOUND if issues else EXIT_CLEAN


for _strategy in Strategy:
    main.add_command(_strategy_command(_strategy))


if __name__ == "__main__":
    main()
