"""Public interface for the artefact upload helper package."""

from .config import UploadConfig, load_config
from .environment import ci_commit, is_linux, require_env
from .errors import UploadError
from .retry import retry
from .runner import upload_artefacts
from .staging import StageResult, render_listing, stage_artefacts
from .upload import build_upload_args, upload_staging_dir

__all__ = [
    "build_upload_args",
    "ci_commit",
    "is_linux",
    "load_config",
    "render_listing",
    "require_env",
    "retry",
    "stage_artefacts",
    "StageResult",
    "upload_artefacts",
    "upload_staging_dir",
    "UploadConfig",
    "UploadError",
]
