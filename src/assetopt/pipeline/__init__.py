"""Classification, path mapping and size reporting for the optimisation pipeline.

The per-file job runner lives in ``assetopt.pipeline.job``; it is not
re-exported here because it depends on the strategists, which in turn depend
on this package.
"""

from .classifier import (
    Category,
    classify,
    extension_of,
    is_watched,
)
from .paths import (
    TranscodeJob,
    build_job,
    display_path,
    image_depth,
    map_output_path,
    with_format,
)
from .report import (
    SizeReport,
    file_size,
    kib,
    report,
)

__all__ = [
    # Classification
    "Category",
    "classify",
    "extension_of",
    "is_watched",
    # Path mapping
    "TranscodeJob",
    "build_job",
    "display_path",
    "image_depth",
    "map_output_path",
    "with_format",
    # Reporting
    "SizeReport",
    "file_size",
    "kib",
    "report",
]
