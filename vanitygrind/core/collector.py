"""
Output Collection
=================

Relocates the keypair files a generator run produced and reports where
they ended up.

Only files that were not present before the run are ever moved. When the
caller passed the generator's own output-control flags, nothing is moved.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import structlog

from vanitygrind.core.errors import InputError
from vanitygrind.core.models import CollectionReport, CommandPlan, Routing, RunResult

log = structlog.get_logger()

DEFAULT_ARTIFACT_SUFFIX = ".json"


def snapshot_artifacts(directory: Path, suffix: str = DEFAULT_ARTIFACT_SUFFIX) -> frozenset[Path]:
    """Return the artifact files currently present in *directory*."""
    if not directory.is_dir():
        return frozenset()
    return frozenset(p.resolve() for p in directory.iterdir() if p.is_file() and p.suffix == suffix)


def list_directory(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file())


class OutputCollector:
    """Moves newly generated artifacts into the requested output directory.

    Usage:
        collector = OutputCollector(Path.cwd())
        collector.prepare(out_dir)
        # ... run the generator ...
        report = collector.collect(result, plan, out_dir)
    """

    def __init__(self, working_dir: Path, artifact_suffix: str = DEFAULT_ARTIFACT_SUFFIX) -> None:
        self.working_dir = Path(working_dir)
        self.artifact_suffix = artifact_suffix

    def prepare(self, out_dir: Path | None) -> None:
        """Create *out_dir* before the run so an unusable path fails early."""
        if out_dir is None:
            return
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InputError(f"Cannot create output directory {out_dir}: {e}") from e
        log.debug("Output directory ready", path=str(out_dir))

    def collect(self, result: RunResult, plan: CommandPlan, out_dir: Path | None) -> CollectionReport:
        """Route the artifacts of a successful run.

        Args:
            result: Result of a completed, non-interrupted run
            plan: Command plan the run was started with
            out_dir: Requested output directory, if any

        Returns:
            CollectionReport describing moves, failures and the inventory

        Raises:
            InputError: If *out_dir* cannot be created
        """
        if plan.explicit_output_control:
            log.info("Output routed by passthrough arguments, not moving files")
            destination = out_dir if out_dir is not None else self.working_dir
            inventory = list_directory(out_dir) if out_dir is not None else []
            return CollectionReport(routing=Routing.EXPLICIT, destination=destination, inventory=inventory)

        if out_dir is None or out_dir.resolve() == self.working_dir.resolve():
            return CollectionReport(
                routing=Routing.WORKING_DIR,
                destination=self.working_dir,
                inventory=sorted(self._artifacts(result)),
            )

        self.prepare(out_dir)
        report = CollectionReport(routing=Routing.MOVED, destination=out_dir)

        for artifact in sorted(self._artifacts(result)):
            target = out_dir / artifact.name
            if target.exists():
                report.failed[artifact] = f"{target} already exists"
                log.error("Refusing to overwrite artifact", source=str(artifact), target=str(target))
                continue
            try:
                shutil.move(str(artifact), str(target))
                report.moved.append(target)
                log.info("Moved artifact", source=str(artifact), target=str(target))
            except OSError as e:
                report.failed[artifact] = str(e)
                log.error("Failed to move artifact", source=str(artifact), error=str(e))

        report.inventory = list_directory(out_dir)
        return report

    def _artifacts(self, result: RunResult) -> list[Path]:
        # The generator may also write elsewhere; only the working directory is collected
        working_dir = self.working_dir.resolve()
        return [
            p
            for p in result.generated_files
            if p.suffix == self.artifact_suffix and p.parent == working_dir and p.exists()
        ]
