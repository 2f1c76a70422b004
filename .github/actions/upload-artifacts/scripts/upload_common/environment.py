"""Environment helpers shared by the upload toolchain."""

from __future__ import annotations

import sys
import typing as typ

from .errors import UploadError

__all__ = ["ci_commit", "coerce_flag", "is_linux", "require_env"]


def require_env(environ: typ.Mapping[str, str], name: str) -> str:
    """Return the value of ``name`` from ``environ`` or raise :class:`UploadError`.

    Parameters
    ----------
    environ:
        Mapping to read from, usually :data:`os.environ`.
    name:
        Name of the environment variable to fetch.

    Raises
    ------
    UploadError
        Raised when the environment variable is unset or empty.
    """
    value = environ.get(name)
    if not value:
        message = f"Environment variable '{name}' is not set."
        raise UploadError(message)
    return value


def coerce_flag(environ: typ.Mapping[str, str], name: str) -> bool:
    """Return the boolean flag ``name``; unset or empty values are ``False``."""
    raw = environ.get(name)
    if raw is None:
        return False
    normalised = raw.strip().lower()
    if normalised in {"", "false", "0", "no", "off"}:
        return False
    if normalised in {"true", "1", "yes", "on"}:
        return True
    message = f"Cannot interpret {name}={raw!r} as a boolean"
    raise UploadError(message)


def is_linux(platform: str | None = None) -> bool:
    """Return ``True`` when running on Linux.

    Examples
    --------
    >>> is_linux("linux")
    True
    >>> is_linux("darwin")
    False
    """
    return (platform or sys.platform).startswith("linux")


def ci_commit(environ: typ.Mapping[str, str]) -> str:
    """Return the commit being built, as reported by the CI provider."""
    commit = environ.get("GITHUB_SHA")
    if not commit:
        message = "ci_commit only works inside CI: GITHUB_SHA is not set."
        raise UploadError(message)
    return commit
