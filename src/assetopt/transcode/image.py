"""
Raster image strategist.

Shallow images (icons and other fixed assets sitting directly in the watch
root) are re-encoded as palette-optimised PNG; everything else becomes AVIF.
Images larger than the configured ceiling are downscaled on their longer
side. Images with an alpha channel are re-packed as raw interleaved RGBA
before encoding so the alpha plane survives chroma subsampling; images
without alpha are encoded as plain RGB and never gain one.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image

from assetopt.pipeline.paths import TranscodeJob, image_depth, with_format
from assetopt.transcode.base import EncodeError, ReadError, TranscodeResult, WriteError
from assetopt.utils import LogLevel, logger
from assetopt.utils.config import ImagePolicy, PipelineConfig
from assetopt.utils.file_util import tentative_output

NAME = "image"


@dataclass
class ImageInfo:
    width: int
    height: int
    has_alpha: bool
    format: str


def probe_image(path: Path) -> ImageInfo:
    """Read dimensions and alpha presence without decoding pixel data."""
    try:
        with Image.open(path) as im:
            w, h = im.size
            has_alpha = ("A" in im.mode) or (im.info.get("transparency") is not None)
            return ImageInfo(w, h, has_alpha, (im.format or "").upper())
    except (OSError, Image.DecompressionBombError) as e:
        raise ReadError(f"cannot read image metadata: {e}") from e


def compute_resize(width: int, height: int, ceiling: int) -> Optional[Tuple[int, int]]:
    """
    Target size for an image, or None when it already fits.

    The larger side is pinned to ``ceiling`` (height wins ties) and the other
    side follows the aspect ratio.
    """
    if width <= ceiling and height <= ceiling:
        return None
    if width > height:
        return ceiling, max(1, round(height * ceiling / width))
    return max(1, round(width * ceiling / height)), ceiling


def choose_format(job: TranscodeJob, config: PipelineConfig) -> str:
    if image_depth(job.source, config) == config.image.lossless_depth:
        return config.image.lossless_format
    return config.image.lossy_format


def _repack_rgba(im: Image.Image) -> Image.Image:
    raw = im.tobytes("raw", "RGBA")
    return Image.frombytes("RGBA", im.size, raw, "raw", "RGBA")


def _encode(im: Image.Image, target: Path, fmt: str, policy: ImagePolicy) -> None:
    if fmt == "avif":
        im.save(
            target,
            "AVIF",
            quality=policy.avif_quality,
            speed=policy.avif_speed,
            subsampling=policy.avif_subsampling,
        )
    elif fmt == "png":
        if policy.png_colors:
            im = im.quantize(colors=policy.png_colors)
        im.save(target, "PNG", optimize=True, compress_level=policy.png_compress_level)
    else:
        im.save(target, fmt.upper())


def _load_pixels(job: TranscodeJob, policy: ImagePolicy) -> Image.Image:
    info = probe_image(job.source)
    size = compute_resize(info.width, info.height, policy.max_dimension)
    logger.log("image.plan", LogLevel.DEBUG,
               file=job.source.name,
               source_res=f"{info.width}x{info.height}",
               target_res=f"{size[0]}x{size[1]}" if size else "unchanged",
               alpha=info.has_alpha)

    try:
        with Image.open(job.source) as src:
            im = src.convert("RGBA" if info.has_alpha else "RGB")
    except OSError as e:
        raise ReadError(f"cannot decode image: {e}") from e

    try:
        if size:
            im = im.resize(size, Image.Resampling.LANCZOS)
        if info.has_alpha:
            im = _repack_rgba(im)
    except (OSError, ValueError) as e:
        raise EncodeError(f"cannot prepare pixels: {e}") from e
    return im


def transcode(job: TranscodeJob, config: PipelineConfig) -> TranscodeResult:
    policy = config.image
    fmt = choose_format(job, config)
    target = with_format(job.output_base, fmt)

    with tentative_output(target):
        im = _load_pixels(job, policy)
        try:
            _encode(im, target, fmt, policy)
        except KeyError as e:
            raise EncodeError(f"no {fmt} encoder available in Pillow") from e
        except ValueError as e:
            raise EncodeError(f"{fmt} encoding failed: {e}") from e
        except OSError as e:
            raise WriteError(f"cannot write {target.name}: {e}") from e

    return TranscodeResult(target)
