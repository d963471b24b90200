"""Package auditor: fan out linkage verification over packages and their files."""

from __future__ import annotations

import os
import threading
from concurrent.futures import Executor, ThreadPoolExecutor

import structlog

from linkage_audit.aggregate import build_library_requirements, build_packages_containing
from linkage_audit.candidate import is_binary_candidate
from linkage_audit.exceptions import MissingDependencyToolError, UnsupportedStrategyError
from linkage_audit.ignore import IgnorePolicy, owned_file_names
from linkage_audit.models.package import FileDependency, Package, PackagesContaining
from linkage_audit.models.settings import AuditSettings
from linkage_audit.parallel import fail_fast_map
from linkage_audit.strategies.base import VerificationStrategy
from linkage_audit.strategies.registry import create_strategy
from linkage_audit.tooling.base import Toolchain
from linkage_audit.tooling.pacman import PacmanToolchain

log = structlog.get_logger("linkage_audit.auditor")


class PackageAuditor:
    """
    Run the verification pipeline for a set of packages.

    Per package:
        1. list owned files (toolchain)
        2. collect base names for the self-satisfaction check
        3. candidate filter + type probe + strategy, one task per file
        4. ignore policy
        5. library -> files index
        6. library -> providing packages (only with candidate lookup)

    Packages run concurrently on one pool, files on another. The first
    failure anywhere aborts the whole run: queued package tasks are
    cancelled, queued file tasks see the abort flag and return at once so
    every package still waiting on its files wakes up and exits.
    """

    def __init__(
        self,
        settings: AuditSettings,
        toolchain: Toolchain | None = None,
        strategy: VerificationStrategy | None = None,
    ) -> None:
        self.settings = settings
        self.toolchain = toolchain or PacmanToolchain(timeout=settings.tool_timeout)
        self.strategy = strategy or create_strategy(settings.strategy, self.toolchain)
        self.ignore_policy = IgnorePolicy.from_settings(settings)
        self.workers = settings.workers or os.cpu_count() or 1
        self._aborted = threading.Event()

    def check_prerequisites(self) -> None:
        """Fail on the first required program that is not installed."""
        programs = self.toolchain.required_programs(
            self.strategy.program, self.settings.show_candidates
        )
        missing = self.toolchain.check_prerequisites(programs)
        if missing:
            log.error("auditor.missing_tool", tool=missing[0], missing=missing)
            raise MissingDependencyToolError(missing[0])
        if not self.strategy.implemented:
            raise UnsupportedStrategyError(self.strategy.name)

    def resolve_packages(self) -> list[str]:
        """Package names to check: the explicit list, or every local package."""
        if self.settings.all_packages:
            names = self.toolchain.list_all_local_packages()
            log.info("auditor.all_packages", count=len(names))
        else:
            names = list(self.settings.packages)
        return list(dict.fromkeys(names))

    def run(self) -> list[Package]:
        """Prerequisites, package resolution, then the full pipeline."""
        self.check_prerequisites()
        return self.verify_packages(self.resolve_packages())

    def verify_packages(self, names: list[str]) -> list[Package]:
        """Verify every package in parallel and return the records sorted by name."""
        self._aborted = threading.Event()
        package_pool = ThreadPoolExecutor(self.workers, thread_name_prefix="audit-pkg")
        file_pool = ThreadPoolExecutor(self.workers, thread_name_prefix="audit-file")
        try:
            packages = fail_fast_map(
                package_pool,
                lambda name: self.verify_package(name, file_pool),
                list(dict.fromkeys(names)),
            )
        except BaseException:
            self._aborted.set()
            log.info("auditor.aborted", packages=len(names))
            raise
        finally:
            # Queued file futures must not be cancelled here: a sibling package
            # may be blocked in wait() on them, and cancel() never wakes it.
            package_pool.shutdown(wait=False, cancel_futures=True)
            file_pool.shutdown(wait=False)
        return sorted(packages)

    def verify_package(self, name: str, file_pool: Executor | None = None) -> Package:
        """Run all pipeline stages for one package."""
        if file_pool is None:
            with ThreadPoolExecutor(self.workers, thread_name_prefix="audit-file") as pool:
                return self.verify_package(name, pool)

        plog = log.bind(package=name)
        files = list(dict.fromkeys(self.toolchain.list_owned_files(name)))
        if self._aborted.is_set():
            # Another package failed; this record is discarded.
            return Package(name=name)
        own_names = owned_file_names(files)

        results = fail_fast_map(file_pool, self.verify_file, files)
        dependencies = self.ignore_policy.apply(
            (r for r in results if r is not None), own_names
        )

        requirements = build_library_requirements(dependencies)
        containing: list[PackagesContaining] = []
        if self.settings.show_candidates:
            containing = build_packages_containing(requirements, self.toolchain)

        plog.info(
            "auditor.package_verified",
            files=len(files),
            files_with_issues=len(dependencies),
            libraries=len(requirements),
        )
        return Package(
            name=name,
            file_dependencies=dependencies,
            library_requirements=requirements,
            packages_containing=containing,
        )

    def verify_file(self, path: str) -> FileDependency | None:
        """Candidate filter, type probe and strategy for one file."""
        if self._aborted.is_set():
            return None
        if not is_binary_candidate(path, self.toolchain):
            return None
        dependency = self.strategy.verify(path)
        if dependency is not None:
            log.debug(
                "auditor.unresolved",
                file=path,
                libraries=sorted(dependency.library_dependencies),
            )
        return dependency
