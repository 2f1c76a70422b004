"""Push the staging directory to the deploy bucket with the ``aws`` CLI."""

from __future__ import annotations

import time
import typing as typ
from pathlib import Path

from plumbum import local
from plumbum.commands import ProcessExecutionError

from .retry import retry

__all__ = ["AWS_CP_OPTIONS", "build_upload_args", "upload_staging_dir"]

AWS_CP_OPTIONS = (
    "--storage-class",
    "INTELLIGENT_TIERING",
    "--no-progress",
    "--recursive",
    "--acl",
    "public-read",
)


def build_upload_args(staging_dir: Path, deploy_url: str) -> tuple[str, ...]:
    """Return the ``aws`` arguments copying ``staging_dir`` to ``deploy_url``.

    Examples
    --------
    >>> build_upload_args(Path("/tmp/stage"), "s3://b/rustc-builds/abc")[-2:]
    ('/tmp/stage', 's3://b/rustc-builds/abc')
    """
    return ("s3", "cp", *AWS_CP_OPTIONS, str(staging_dir), deploy_url)


def upload_staging_dir(
    staging_dir: Path,
    deploy_url: str,
    *,
    dry_run: bool = False,
    aws: typ.Any = None,
    sleep: typ.Callable[[float], None] = time.sleep,
) -> None:
    """Upload ``staging_dir`` recursively to ``deploy_url``.

    Parameters
    ----------
    staging_dir : Path
        Directory holding the staged artefacts.
    deploy_url : str
        ``s3://`` destination prefix.
    dry_run : bool
        When ``True``, print the planned ``aws`` invocation without running it.
    aws : plumbum command, optional
        Command used in place of ``local["aws"]``.
    sleep : Callable[[float], None]
        Wait function handed to :func:`retry`.

    Raises
    ------
    ProcessExecutionError
        If every upload attempt exits with a non-zero status.
    CommandNotFound
        If the ``aws`` executable is not available in ``PATH``.
    """
    args = build_upload_args(staging_dir, deploy_url)
    rendered = " ".join(("aws", *args))
    if dry_run:
        print(f"[dry-run] {rendered}")
        return

    aws_cmd = aws if aws is not None else local["aws"]
    output = retry(
        lambda: aws_cmd[args](),
        description=rendered,
        retry_on=(ProcessExecutionError,),
        sleep=sleep,
    )
    if output:
        print(output, end="" if output.endswith("\n") else "\n")
