"""Gather, deduplicate, order and execute initializers from many providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .config import Config
from .console import log_verbose
from .errors import OrchestrationError, ScaffoldError
from .fs import Filesystem
from .initializers import ApplyResult, Initializer, Kind, Renderer
from .providers import Provider

# Execution order. Directories exist before files are written into them.
PHASES: tuple[Kind, ...] = (Kind.DIRECTORY, Kind.CONFIG_FILE, Kind.COMMAND_SET)

_missing = set(Kind) - set(PHASES)
if _missing:
    raise RuntimeError(f"initializer kinds without a phase: {sorted(k.value for k in _missing)}")


@dataclass(frozen=True)
class PlannedStep:
    key: str
    kind: Kind
    targets_home: bool
    already_applied: bool


def dedupe(initializers: Iterable[Initializer], verbose: bool = False) -> list[Initializer]:
    """Drop initializers whose key was already seen; the first one wins."""
    seen: set[str] = set()
    unique: list[Initializer] = []
    for init in initializers:
        if init.key in seen:
            log_verbose(f"skip duplicate {init.key}", verbose)
            continue
        seen.add(init.key)
        unique.append(init)
    return unique


def partition(initializers: Iterable[Initializer]) -> list[tuple[Kind, list[Initializer]]]:
    buckets: dict[Kind, list[Initializer]] = {kind: [] for kind in PHASES}
    for init in initializers:
        buckets[init.kind].append(init)
    return [(kind, buckets[kind]) for kind in PHASES]


class Orchestrator:
    def __init__(
        self,
        project_fs: Filesystem,
        home_fs: Filesystem,
        config: Config,
        renderer: Renderer,
        verbose: bool = False,
    ) -> None:
        self.project_fs = project_fs
        self.home_fs = home_fs
        self.config = config
        self.renderer = renderer
        self.verbose = verbose

    def fs_for(self, init: Initializer) -> Filesystem:
        return self.home_fs if init.targets_home else self.project_fs

    def gather(self, providers: Sequence[Provider]) -> list[Initializer]:
        steps: list[Initializer] = []
        for provider in providers:
            steps.extend(provider.initializers())
        return steps

    def phases(self, providers: Sequence[Provider]) -> list[tuple[Kind, list[Initializer]]]:
        steps = self.gather(providers)
        log_verbose(f"gathered {len(steps)} initializer(s) from {len(providers)} provider(s)", self.verbose)
        return partition(dedupe(steps, self.verbose))

    def plan(self, providers: Sequence[Provider]) -> list[PlannedStep]:
        """Steps ``run`` would execute, in order, without writing anything."""
        planned = []
        for _, bucket in self.phases(providers):
            for init in bucket:
                planned.append(PlannedStep(
                    key=init.key,
                    kind=init.kind,
                    targets_home=init.targets_home,
                    already_applied=init.already_applied(self.fs_for(init), self.config),
                ))
        return planned

    def run(self, providers: Sequence[Provider]) -> ApplyResult:
        """Apply every unique initializer once, phase by phase.

        Stops at the first failure and raises ``OrchestrationError`` whose
        ``result`` holds what was created or updated up to that point.
        """
        result = ApplyResult()
        for kind, bucket in self.phases(providers):
            log_verbose(f"phase {kind.value}: {len(bucket)} step(s)", self.verbose)
            for init in bucket:
                log_verbose(f"apply {init.key}", self.verbose)
                try:
                    step = init.apply(self.fs_for(init), self.config, self.renderer)
                except (ScaffoldError, OSError) as exc:
                    partial = getattr(exc, "partial", None)
                    if partial is not None:
                        result.extend(partial)
                    raise OrchestrationError(init.key, kind, result, exc) from exc
                result.extend(step)
        return result
