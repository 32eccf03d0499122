"""
Mapping between the watched source tree and the mirrored output tree.

The output path keeps the source's position relative to the watch root but
drops the final extension; the strategist appends the extension of whatever
format it decides to write.
"""
from dataclasses import dataclass
from pathlib import Path

from assetopt.pipeline.classifier import Category, classify
from assetopt.utils.config import PipelineConfig


@dataclass(frozen=True)
class TranscodeJob:
    source: Path
    category: Category
    output_base: Path


def map_output_path(source: Path, config: PipelineConfig) -> Path:
    """
    Return the mirrored output path of ``source`` without its extension.

    Raises:
        ValueError: ``source`` is not below the watch root.
    """
    rel = Path(source).relative_to(config.watch_dir)
    return (config.output_dir / rel).with_suffix("")


def with_format(output_base: Path, extension: str) -> Path:
    """Append the chosen output extension, e.g. ``photo`` -> ``photo.avif``."""
    if not extension.startswith("."):
        extension = f".{extension}"
    return output_base.with_name(output_base.name + extension)


def build_job(source: Path, config: PipelineConfig) -> TranscodeJob:
    source = Path(source)
    return TranscodeJob(
        source=source,
        category=classify(source),
        output_base=map_output_path(source, config),
    )


def image_depth(source: Path, config: PipelineConfig) -> int:
    """
    Number of path segments of ``source`` counted from the project root, with
    the watch root itself as the first segment: ``public_dev/icon.png`` is 2.
    """
    return len(Path(source).relative_to(config.watch_dir).parts) + 1


def display_path(path: Path, config: PipelineConfig) -> str:
    """Project-relative path for log output, absolute when outside the project."""
    try:
        return str(Path(path).relative_to(config.base_dir))
    except ValueError:
        return str(path)
