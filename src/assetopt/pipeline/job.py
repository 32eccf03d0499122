"""
Runs one asset through its strategist and reports the outcome.

``run_job`` is the job boundary: every failure raised by a strategist is
caught and logged here with the project-relative path, and never reaches
the dispatcher. Strategists have already removed any partial output by the
time an error arrives.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from assetopt.pipeline.classifier import Category
from assetopt.pipeline.paths import TranscodeJob, display_path
from assetopt.pipeline.report import SizeReport, kib
from assetopt.transcode import audio, font, image, vector, video
from assetopt.transcode.base import TranscodeError, describe
from assetopt.utils import STATUS_COPY, STATUS_FAIL, STATUS_OK, STATUS_SKIP, LogLevel, logger
from assetopt.utils.config import PipelineConfig

STRATEGISTS = {
    Category.RASTER_IMAGE: image,
    Category.VECTOR_SVG: vector,
    Category.AUDIO: audio,
    Category.VIDEO: video,
    Category.FONT_TTF: font,
    Category.FONT_WOFF2: font,
}


@dataclass
class JobOutcome:
    source: Path
    output: Optional[Path]
    status: str
    report: Optional[SizeReport] = None


def run_job(job: TranscodeJob, config: PipelineConfig) -> JobOutcome:
    """Transcode a single asset. Never raises."""
    strategist = STRATEGISTS.get(job.category)
    if strategist is None:
        return JobOutcome(job.source, None, STATUS_SKIP)

    rel_src = display_path(job.source, config)
    logger.log("job.queued", LogLevel.INFO, file=rel_src, category=job.category.value)

    try:
        result = strategist.transcode(job, config)
    except TranscodeError as e:
        logger.log(f"{strategist.NAME}.{e.stage}_failed", LogLevel.ERROR,
                   file=rel_src,
                   error=describe(e))
        return JobOutcome(job.source, None, STATUS_FAIL)
    except Exception as e:
        logger.log("job.failed", LogLevel.ERROR,
                   file=rel_src,
                   error=f"{type(e).__name__}: {describe(e)}")
        return JobOutcome(job.source, None, STATUS_FAIL)

    rel_out = display_path(result.output, config)
    if result.passthrough:
        logger.log(f"{strategist.NAME}.copied", LogLevel.INFO, file=rel_src, output=rel_out)
        return JobOutcome(job.source, result.output, STATUS_COPY)

    size_report = SizeReport.measure(job.source, result.output)
    logger.log("job.complete", LogLevel.INFO,
               file=rel_src,
               before=kib(size_report.before),
               output=rel_out,
               after=kib(size_report.after),
               delta=size_report.render())
    return JobOutcome(job.source, result.output, STATUS_OK, size_report)
