"""
A module providing constants, configuration, utility functions, and logging
mechanisms for asset optimisation.

This module includes the fixed asset extension sets and encoder defaults,
the immutable pipeline configuration, helpers for running external commands
and for writing into the output tree, and a structured logger that is safe
to use from worker threads.
"""

from .constants import (
    AUDIO_EXTENSIONS,
    CACHE_FOLDER,
    FONT_TTF_EXTENSIONS,
    FONT_WOFF2_EXTENSIONS,
    OUTPUT_FOLDER,
    RASTER_IMAGE_EXTENSIONS,
    STATUS_COPY,
    STATUS_FAIL,
    STATUS_OK,
    STATUS_SKIP,
    VECTOR_EXTENSIONS,
    VIDEO_EXTENSIONS,
    WATCH_FOLDER,
    WORKERS,
)
from .logger import LogLevel

__all__ = [
    "RASTER_IMAGE_EXTENSIONS",
    "VECTOR_EXTENSIONS",
    "AUDIO_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "FONT_TTF_EXTENSIONS",
    "FONT_WOFF2_EXTENSIONS",
    "WATCH_FOLDER",
    "OUTPUT_FOLDER",
    "CACHE_FOLDER",
    "STATUS_OK",
    "STATUS_COPY",
    "STATUS_FAIL",
    "STATUS_SKIP",
    "WORKERS",
    "LogLevel",
]
