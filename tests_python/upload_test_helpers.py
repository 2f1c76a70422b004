"""Shared helpers for the upload test suites."""

from __future__ import annotations

from pathlib import Path

__all__ = ["FakeAws", "write_build_outputs"]


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def write_build_outputs(
    root: Path, *, linux: bool = True, toolstate: Path | None = None
) -> Path:
    """Populate ``root`` with the files a dist builder leaves behind.

    Parameters
    ----------
    root : Path
        Checkout root to populate.
    linux : bool
        Use the ``obj/build`` layout of the Linux builders.
    toolstate : Path | None
        Where to write a toolstate record, if anywhere.

    Returns
    -------
    Path
        The dist directory that was created.
    """
    build_dir = root / "obj" / "build" if linux else root / "build"
    dist_dir = build_dir / "dist"
    _write(dist_dir / "rustc-nightly-x86_64-unknown-linux-gnu.tar.xz", "rustc")
    _write(dist_dir / "cargo-nightly-x86_64-unknown-linux-gnu.tar.xz", "cargo")
    _write(dist_dir / "manifests" / "channel.toml", "[pkg]")
    _write(dist_dir / "doc" / "index.html", "<html></html>")
    _write(root / "build" / "cpu-usage.csv", "time,idle\n0,99\n")
    _write(build_dir / "metrics.json", '{"invocations": []}')
    if toolstate is not None:
        _write(toolstate, '{"miri": "test-pass"}')
    return dist_dir


class FakeAws:
    """Record ``aws`` invocations, failing a configurable number of times."""

    def __init__(self, failures: int = 0, error: BaseException | None = None) -> None:
        self.failures = failures
        self.error = error
        self.calls: list[tuple[str, ...]] = []

    def __getitem__(self, args: tuple[str, ...]) -> object:
        def _run() -> str:
            self.calls.append(tuple(args))
            if len(self.calls) <= self.failures:
                assert self.error is not None
                raise self.error
            return "upload: done\n"

        return _run
