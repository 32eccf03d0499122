"""
A watched asset-optimisation pipeline for static web projects.

This package watches a development asset tree for images, vector graphics,
audio, video and fonts, transcodes each file into a compressed web-ready
format, and mirrors the result into a parallel output tree. Core
functionalities include extension-based classification, mirrored path
mapping, per-format transcoding strategies (with hardware AV1 encoder
detection for video) and before/after size reporting.

The package is organized into several categories:
- Pipeline: classification, path mapping, size reporting and the per-file job runner.
- Transcoding: one strategist per asset category plus encoder capability probing.
- Watching: the backfill pass and live filesystem event dispatch.
- Utility functions for configuration, logging and running external commands.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
