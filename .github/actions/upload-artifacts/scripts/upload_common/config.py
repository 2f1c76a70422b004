"""Configuration model and loader for the upload helper.

The CI job communicates exclusively through environment variables. This
module reads them once into an immutable :class:`UploadConfig` that the rest
of the toolchain receives explicitly.

Usage
-----
Load the configuration for the current job::

    import os
    from upload_common.config import load_config

    config = load_config(os.environ)
    print(f"Uploading to {config.deploy_url}")
"""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path

from .environment import ci_commit, coerce_flag, is_linux, require_env

__all__ = [
    "DEFAULT_TOOLSTATE_SOURCE",
    "DEPLOY_DIR_PREFIX",
    "UploadConfig",
    "load_config",
]

DEPLOY_DIR_PREFIX = "rustc-builds"
DEFAULT_TOOLSTATE_SOURCE = Path("/tmp/toolstate/toolstates.json")  # noqa: S108 - path is fixed by the toolstate step.


@dataclasses.dataclass(slots=True, frozen=True)
class UploadConfig:
    """Concrete configuration produced by :func:`load_config`.

    Parameters
    ----------
    workspace : Path
        Directory the relative build paths are resolved against.
    ci_job_name : str
        Name of the running CI job, embedded in the statistics filenames.
    deploy_bucket : str
        Destination S3 bucket.
    commit : str
        Commit identifier appended to the deploy path.
    deploy : bool, default=False
        Stage the release tarballs produced by a dist builder.
    deploy_alt : bool, default=False
        Same as :attr:`deploy` but publish under the ``-alt`` path.
    linux : bool, default=True
        Selects the ``obj/build`` layout used by the Linux builders.
    s3_path_suffix : str, default=""
        Optional suffix appended to :data:`DEPLOY_DIR_PREFIX`.
    toolstates_json : str | None, optional
        Staged filename for the toolstate record, when one should be uploaded.
    toolstate_source : Path
        Location the toolstate step writes its JSON record to.

    Examples
    --------
    >>> config = UploadConfig(  # doctest: +SKIP
    ...     workspace=Path("/checkout"),
    ...     ci_job_name="x86_64-linux",
    ...     deploy_bucket="b",
    ...     commit="abc123",
    ...     deploy=True,
    ... )
    >>> config.deploy_url  # doctest: +SKIP
    's3://b/rustc-builds/abc123'
    """

    workspace: Path
    ci_job_name: str
    deploy_bucket: str
    commit: str
    deploy: bool = False
    deploy_alt: bool = False
    linux: bool = True
    s3_path_suffix: str = ""
    toolstates_json: str | None = None
    toolstate_source: Path = DEFAULT_TOOLSTATE_SOURCE

    @property
    def deploy_mode(self) -> bool:
        """``True`` when either the normal or the alternate deploy is active."""
        return self.deploy or self.deploy_alt

    @property
    def build_dir(self) -> Path:
        """Build output directory for the current platform."""
        relative = Path("obj", "build") if self.linux else Path("build")
        return self.workspace / relative

    @property
    def dist_dir(self) -> Path:
        """Directory holding the release tarballs."""
        return self.build_dir / "dist"

    @property
    def cpu_usage_source(self) -> Path:
        """CPU usage statistics; always written beneath ``build/``."""
        return self.workspace / "build" / "cpu-usage.csv"

    @property
    def metrics_source(self) -> Path:
        """Build metrics generated by ``x.py``."""
        return self.build_dir / "metrics.json"

    @property
    def deploy_dir(self) -> str:
        """Bucket prefix for this build variant."""
        deploy_dir = f"{DEPLOY_DIR_PREFIX}{self.s3_path_suffix}"
        if self.deploy_alt:
            deploy_dir = f"{deploy_dir}-alt"
        return deploy_dir

    @property
    def deploy_url(self) -> str:
        """Full ``s3://`` URL the staging directory is copied to."""
        return f"s3://{self.deploy_bucket}/{self.deploy_dir}/{self.commit}"


def load_config(
    environ: typ.Mapping[str, str],
    *,
    workspace: Path | None = None,
    platform: str | None = None,
) -> UploadConfig:
    """Build an :class:`UploadConfig` from ``environ``.

    Parameters
    ----------
    environ : Mapping[str, str]
        Environment to read, usually :data:`os.environ`.
    workspace : Path | None, optional
        Root for the relative build paths. Defaults to the current directory.
    platform : str | None, optional
        Platform identifier overriding :data:`sys.platform`.

    Returns
    -------
    UploadConfig
        Fully realised configuration.

    Raises
    ------
    UploadError
        Raised when a required variable is missing, a flag cannot be parsed,
        or the commit identifier is unavailable.
    """
    return UploadConfig(
        workspace=Path(workspace) if workspace is not None else Path.cwd(),
        ci_job_name=require_env(environ, "CI_JOB_NAME"),
        deploy_bucket=require_env(environ, "DEPLOY_BUCKET"),
        commit=ci_commit(environ),
        deploy=coerce_flag(environ, "DEPLOY"),
        deploy_alt=coerce_flag(environ, "DEPLOY_ALT"),
        linux=is_linux(platform),
        s3_path_suffix=environ.get("S3_PATH_SUFFIX", ""),
        toolstates_json=_toolstate_name(environ),
    )


def _toolstate_name(environ: typ.Mapping[str, str]) -> str | None:
    """Return the staged toolstate filename, or ``None`` when not requested.

    A variable that is set but empty keeps the record's own filename.
    """
    name = environ.get("DEPLOY_TOOLSTATES_JSON")
    if name is None:
        return None
    return name or DEFAULT_TOOLSTATE_SOURCE.name
