"""End-to-end upload run: stage, list, upload."""

from __future__ import annotations

import contextlib
import tempfile
import time
import typing as typ
from pathlib import Path

from .staging import StageResult, print_listing, stage_artefacts
from .upload import upload_staging_dir

if typ.TYPE_CHECKING:
    from .config import UploadConfig

__all__ = ["STAGING_PREFIX", "upload_artefacts"]

STAGING_PREFIX = "upload-artifacts-"


@contextlib.contextmanager
def _staging_directory(
    *, keep: bool, parent: Path | None
) -> typ.Iterator[Path]:
    if keep:
        yield Path(tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=parent))
        return
    with tempfile.TemporaryDirectory(prefix=STAGING_PREFIX, dir=parent) as tmp:
        yield Path(tmp)


def upload_artefacts(
    config: UploadConfig,
    *,
    dry_run: bool = False,
    keep_staging: bool = False,
    staging_parent: Path | None = None,
    aws: typ.Any = None,
    sleep: typ.Callable[[float], None] = time.sleep,
) -> StageResult:
    """Stage every artefact for ``config`` and push them to the deploy bucket.

    Parameters
    ----------
    config : UploadConfig
        Configuration loaded once at startup.
    dry_run : bool
        Stage and list the artefacts but only print the upload command.
    keep_staging : bool
        Leave the staging directory on disk after the run.
    staging_parent : Path | None
        Directory the staging directory is created in; the system temporary
        directory when ``None``.
    aws, sleep
        Forwarded to :func:`upload_staging_dir`.

    Returns
    -------
    StageResult
        Summary of the staged entries. Unless ``keep_staging`` is set the
        directory it names no longer exists once this returns.
    """
    with _staging_directory(keep=keep_staging, parent=staging_parent) as staging_dir:
        result = stage_artefacts(config, staging_dir)
        print_listing(result)
        upload_staging_dir(
            staging_dir, config.deploy_url, dry_run=dry_run, aws=aws, sleep=sleep
        )
    return result
