"""Staging pipeline assembling the directory pushed to the deploy bucket."""

from __future__ import annotations

import dataclasses
import shutil
import sys
import typing as typ
from pathlib import Path

from .errors import UploadError
from .fs_utils import copy_entry, format_size, staged_destination

if typ.TYPE_CHECKING:
    from .config import UploadConfig

__all__ = [
    "StageResult",
    "print_listing",
    "render_listing",
    "stage_artefacts",
    "stage_cpu_usage",
    "stage_dist",
    "stage_metrics",
    "stage_toolstates",
]


@dataclasses.dataclass(slots=True)
class StageResult:
    """Outcome of :func:`stage_artefacts`."""

    staging_dir: Path
    staged: list[Path] = dataclasses.field(default_factory=list)

    def files(self) -> list[Path]:
        """Return every regular file beneath :attr:`staging_dir`, sorted."""
        return sorted(
            path for path in self.staging_dir.rglob("*") if path.is_file()
        )


def _require_source(path: Path, description: str) -> Path:
    if not path.exists():
        message = f"{description} not found at {path}"
        raise UploadError(message)
    return path


def _copy_into(staging_dir: Path, source: Path, name: str) -> Path:
    destination = staged_destination(staging_dir, name)
    if destination.exists():
        message = f"Refusing to overwrite staged file: {name}"
        raise UploadError(message)
    copy_entry(source, destination)
    print(f"Staged '{source}' -> '{destination.relative_to(staging_dir.resolve())}'")
    return destination


def _remove_docs(doc: Path) -> None:
    if doc.is_symlink() or doc.is_file():
        doc.unlink()
    elif doc.is_dir():
        shutil.rmtree(doc)


def stage_dist(config: UploadConfig, staging_dir: Path) -> list[Path]:
    """Copy the release tarballs produced by a dist builder into staging.

    The ``doc`` subtree is removed from the dist directory first, matching
    the layout the release tooling expects in the bucket.

    Raises
    ------
    UploadError
        Raised when the dist directory is missing or empty.
    """

    dist_dir = _require_source(config.dist_dir, "Dist directory")
    _remove_docs(dist_dir / "doc")
    entries = sorted(dist_dir.iterdir())
    if not entries:
        message = f"Dist directory {dist_dir} is empty"
        raise UploadError(message)
    return [_copy_into(staging_dir, entry, entry.name) for entry in entries]


def stage_cpu_usage(config: UploadConfig, staging_dir: Path) -> Path:
    """Copy the CPU usage statistics, named after the CI job."""
    source = _require_source(config.cpu_usage_source, "CPU usage statistics")
    return _copy_into(staging_dir, source, f"cpu-{config.ci_job_name}.csv")


def stage_metrics(config: UploadConfig, staging_dir: Path) -> Path:
    """Copy the build metrics generated by ``x.py``, named after the CI job."""
    source = _require_source(config.metrics_source, "Build metrics")
    return _copy_into(staging_dir, source, f"metrics-{config.ci_job_name}.json")


def stage_toolstates(config: UploadConfig, staging_dir: Path) -> Path | None:
    """Copy the toolstate record when ``DEPLOY_TOOLSTATES_JSON`` names a file."""
    if config.toolstates_json is None:
        return None
    source = _require_source(config.toolstate_source, "Toolstate data")
    return _copy_into(staging_dir, source, config.toolstates_json)


def stage_artefacts(config: UploadConfig, staging_dir: Path) -> StageResult:
    """Populate ``staging_dir`` with every artefact this job uploads.

    Parameters
    ----------
    config : UploadConfig
        Configuration describing which artefacts apply to this job.
    staging_dir : Path
        Existing, empty directory that receives the artefacts.

    Returns
    -------
    StageResult
        The staging directory and the top-level entries placed in it, in
        staging order.

    Raises
    ------
    UploadError
        Raised when ``staging_dir`` is not empty or a required source is
        missing. The first failure aborts staging.
    """

    if any(staging_dir.iterdir()):
        message = f"Staging directory {staging_dir} is not empty"
        raise UploadError(message)

    result = StageResult(staging_dir)
    if config.deploy_mode:
        result.staged.extend(stage_dist(config, staging_dir))
    result.staged.append(stage_cpu_usage(config, staging_dir))
    result.staged.append(stage_metrics(config, staging_dir))
    if (toolstates := stage_toolstates(config, staging_dir)) is not None:
        result.staged.append(toolstates)
    return result


def render_listing(result: StageResult) -> str:
    """Return the operator-facing listing of files about to be uploaded."""
    lines = ["Files that will be uploaded:"]
    for path in result.files():
        size = format_size(path.stat().st_size)
        relative = path.relative_to(result.staging_dir).as_posix()
        lines.append(f"  {size:>7}  {relative}")
    return "\n".join(lines) + "\n"


def print_listing(result: StageResult, stream: typ.TextIO | None = None) -> None:
    """Write :func:`render_listing` to ``stream`` (standard output by default)."""
    print(render_listing(result), file=stream or sys.stdout)
