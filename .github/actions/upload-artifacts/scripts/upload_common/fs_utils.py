"""Filesystem helpers for staging."""

from __future__ import annotations

import shutil
from pathlib import Path

from .errors import UploadError

__all__ = ["copy_entry", "format_size", "staged_destination"]


def staged_destination(staging_dir: Path, name: str) -> Path:
    """Return ``name`` resolved beneath ``staging_dir``.

    Parameters
    ----------
    staging_dir : Path
        Root directory under which staged files must reside.
    name : str
        Relative filename rendered from the job configuration.

    Returns
    -------
    Path
        Absolute destination located below ``staging_dir``.

    Raises
    ------
    UploadError
        Raised when ``name`` is empty or resolves outside ``staging_dir``.
    """

    staging_root = staging_dir.resolve()
    target = (staging_root / name).resolve()
    if not name or target == staging_root or not target.is_relative_to(staging_root):
        message = f"Destination escapes staging directory: {name!r}"
        raise UploadError(message)
    target.parent.mkdir(parents=True, exist_ok=True)
    return target


def copy_entry(source: Path, destination: Path) -> None:
    """Copy a file or a whole directory tree from ``source`` to ``destination``."""
    if source.is_dir():
        shutil.copytree(source, destination, symlinks=True)
    else:
        shutil.copy2(source, destination)


def format_size(size: int) -> str:
    """Render ``size`` the way ``ls -h`` does.

    Examples
    --------
    >>> format_size(512)
    '512'
    >>> format_size(2048)
    '2.0K'
    """
    if size < 1024:
        return str(size)
    value = size / 1024
    for unit in ("K", "M", "G"):
        if value < 1024:
            return f"{value:.1f}{unit}"
        value /= 1024
    return f"{value:.1f}T"
