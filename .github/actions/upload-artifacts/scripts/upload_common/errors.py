"""Exception types raised by the upload helper."""

from __future__ import annotations

__all__ = ["UploadError"]


class UploadError(RuntimeError):
    """Raised when the upload inputs are invalid or incomplete."""
