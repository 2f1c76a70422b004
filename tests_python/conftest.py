"""Shared fixtures for the upload helper test suite."""

from __future__ import annotations

import importlib
import sys
import typing as typ
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent
MODULE_DIR = REPO_ROOT / ".github" / "actions" / "upload-artifacts" / "scripts"


@pytest.fixture(scope="session")
def upload_common() -> object:
    """Load the upload helper package once for reuse across tests."""
    sys_path = str(MODULE_DIR)

    sys.path.insert(0, sys_path)
    try:
        return importlib.import_module("upload_common")
    finally:
        sys.path.remove(sys_path)


@pytest.fixture
def upload_staging(upload_common: object) -> object:
    """Expose the staging module for unit-level assertions."""

    return importlib.import_module("upload_common.staging")


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create an isolated checkout root."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    """Provide an empty staging directory."""
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def ci_environ(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Export the minimal CI environment and return it as a mapping."""
    environ = {
        "CI_JOB_NAME": "x86_64-linux",
        "DEPLOY_BUCKET": "b",
        "GITHUB_SHA": "0123abcd",
    }
    for name in (
        "DEPLOY",
        "DEPLOY_ALT",
        "DEPLOY_TOOLSTATES_JSON",
        "S3_PATH_SUFFIX",
    ):
        monkeypatch.delenv(name, raising=False)
    for name, value in environ.items():
        monkeypatch.setenv(name, value)
    return environ


@pytest.fixture
def make_config(
    upload_common: typ.Any, workspace: Path, tmp_path: Path
) -> typ.Callable[..., typ.Any]:
    """Return a factory building ``UploadConfig`` rooted at ``workspace``."""

    def _make(**overrides: object) -> typ.Any:
        values: dict[str, object] = {
            "workspace": workspace,
            "ci_job_name": "x86_64-linux",
            "deploy_bucket": "b",
            "commit": "0123abcd",
            "toolstate_source": tmp_path / "toolstate" / "toolstates.json",
        }
        values.update(overrides)
        return upload_common.UploadConfig(**values)

    return _make
