"""Lightweight checks for the upload composite GitHub Action."""

from __future__ import annotations

from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
ACTION_FILE = REPO_ROOT / ".github" / "actions" / "upload-artifacts" / "action.yml"


def test_action_installs_uv() -> None:
    """The composite action must ensure ``uv`` is available."""

    content = ACTION_FILE.read_text(encoding="utf-8")

    assert "uses: astral-sh/setup-uv@" in content
    assert "python-version: '3.11'" in content


def test_action_invokes_cli_script() -> None:
    """The action should run the upload script via ``uv run``."""

    content = ACTION_FILE.read_text(encoding="utf-8")

    assert "uv run" in content
    assert "scripts/upload_artifacts.py" in content


def test_action_forwards_dry_run() -> None:
    """Dry runs requested by the workflow reach the CLI."""

    content = ACTION_FILE.read_text(encoding="utf-8")

    assert "inputs.dry-run" in content
    assert "--dry-run" in content
