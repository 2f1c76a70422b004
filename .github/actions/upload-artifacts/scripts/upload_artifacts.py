# /// script
# requires-python = ">=3.11"
# dependencies = [
#   "cyclopts>=2.9",
#   "plumbum",
#   "tenacity>=8.2",
# ]
# ///

"""Command-line entry point for the artefact upload helper.

Every file staged by this script is uploaded to the deploy bucket and later
signed and released from there.

Examples
--------
Stage and list the artefacts without touching the bucket::

    export CI_JOB_NAME=x86_64-linux DEPLOY_BUCKET=my-bucket GITHUB_SHA=abc123
    uv run .github/actions/upload-artifacts/scripts/upload_artifacts.py --dry-run
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from plumbum.commands import CommandNotFound, ProcessExecutionError
from upload_common import UploadError, load_config, upload_artefacts

import cyclopts

app = cyclopts.App(help="Upload CI build artefacts to the deploy bucket.")


@app.default
def main(
    *,
    workspace: Path | None = None,
    dry_run: bool = False,
    keep_staging: bool = False,
) -> None:
    """Stage this job's artefacts and upload them.

    Parameters
    ----------
    workspace:
        Checkout root the build directories are resolved against. Defaults to
        the current directory.
    dry_run:
        Stage and list the artefacts, then print the upload command instead
        of running it.
    keep_staging:
        Leave the staging directory behind for inspection.
    """
    try:
        config = load_config(os.environ, workspace=workspace)
        result = upload_artefacts(
            config, dry_run=dry_run, keep_staging=keep_staging
        )
    except (OSError, UploadError, ProcessExecutionError, CommandNotFound) as exc:
        print(f"::error title=Upload Failure::{exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    verb = "Planned upload of" if dry_run else "Uploaded"
    print(
        f"{verb} {len(result.staged)} artefact(s) to '{config.deploy_url}'.",
        file=sys.stderr,
    )


if __name__ == "__main__":
    app()
