"""
Filesystem helpers for writing into the mirrored output tree.

This module creates output folders, claims an output path for a single job
and guarantees that a failed job never leaves a half-written artefact behind.
"""
import contextlib
from pathlib import Path
from typing import Iterator

from assetopt.utils import LogLevel, logger


def ensure_parent_dir(path: Path) -> None:
    """
    Create every missing ancestor of ``path``.
    An existing directory is fine; any other OSError propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def remove_quietly(path: Path) -> bool:
    """Delete a file if it exists. Returns True when something was removed."""
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False


@contextlib.contextmanager
def tentative_output(path: Path) -> Iterator[Path]:
    """
    Claim ``path`` for writing.

    Any stale file at the exact target is removed on entry so re-runs start
    clean. If the block raises, the partial output is deleted before the
    exception propagates.
    """
    ensure_parent_dir(path)
    remove_quietly(path)
    try:
        yield path
    except BaseException:
        try:
            if remove_quietly(path):
                logger.log("output.cleanup", LogLevel.DEBUG, path=path)
        except OSError as e:
            logger.log("output.cleanup_failed", LogLevel.WARN, path=path, error=str(e))
        raise


def set_root_folders(*folders: Path) -> None:
    """Create the output and cache roots. Failure here is fatal for the caller."""
    for folder in folders:
        folder.mkdir(parents=True, exist_ok=True)
