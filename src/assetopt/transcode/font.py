"""
Font strategist.

TrueType fonts are converted to WOFF2 in-process with fontTools. Fonts that
are already WOFF2 are copied through unchanged.
"""
import io
import shutil

from fontTools.ttLib import TTFont

from assetopt.pipeline.classifier import Category
from assetopt.pipeline.paths import TranscodeJob, with_format
from assetopt.transcode.base import EncodeError, ReadError, TranscodeResult, WriteError
from assetopt.utils.config import PipelineConfig
from assetopt.utils.constants import FONT_OUTPUT_EXTENSION
from assetopt.utils.file_util import tentative_output

NAME = "font"


def ttf_to_woff2(data: bytes) -> bytes:
    """Convert a TrueType font buffer to a WOFF2 buffer (needs brotli)."""
    font = TTFont(io.BytesIO(data))
    try:
        font.flavor = "woff2"
        out = io.BytesIO()
        font.save(out)
        return out.getvalue()
    finally:
        font.close()


def _copy(job: TranscodeJob) -> TranscodeResult:
    target = with_format(job.output_base, FONT_OUTPUT_EXTENSION)
    with tentative_output(target):
        try:
            shutil.copyfile(job.source, target)
        except OSError as e:
            raise WriteError(f"cannot copy font: {e}") from e
    return TranscodeResult(target, passthrough=True)


def transcode(job: TranscodeJob, config: PipelineConfig) -> TranscodeResult:
    if job.category is Category.FONT_WOFF2:
        return _copy(job)

    target = with_format(job.output_base, FONT_OUTPUT_EXTENSION)
    with tentative_output(target):
        try:
            data = job.source.read_bytes()
        except OSError as e:
            raise ReadError(f"unable to read font: {e}") from e

        try:
            woff2 = ttf_to_woff2(data)
        except Exception as e:
            raise EncodeError(f"unable to convert font: {e}") from e

        try:
            target.write_bytes(woff2)
        except OSError as e:
            raise WriteError(f"unable to write font: {e}") from e
    return TranscodeResult(target)
