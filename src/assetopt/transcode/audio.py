"""
Audio strategist.

Every audio source is encoded to HE-AAC v2 stereo at a fixed sample rate and
bitrate suited to speech and ambience on the web, with a low-pass cutoff and
the source's metadata tags carried over.
"""
from pathlib import Path
from typing import List

from assetopt.pipeline.paths import TranscodeJob, with_format
from assetopt.transcode.base import TranscodeResult, run_encoder
from assetopt.utils.config import AudioPolicy, PipelineConfig
from assetopt.utils.constants import AUDIO_OUTPUT_EXTENSION
from assetopt.utils.file_util import tentative_output

NAME = "audio"


def build_audio_cmd(src: Path, dst: Path, policy: AudioPolicy) -> List[str]:
    """Build the ffmpeg command for a single audio transcode."""
    return [
        "ffmpeg",
        "-hide_banner",
        "-loglevel", "error",
        "-y",
        "-i", str(src),
        "-c:a", policy.codec,
        "-profile:a", policy.profile,
        "-b:a", policy.bitrate,
        "-cutoff", str(policy.cutoff),
        "-ar", str(policy.sample_rate),
        "-ac", str(policy.channels),
        "-map_metadata", "0",
        str(dst),
    ]


def transcode(job: TranscodeJob, config: PipelineConfig) -> TranscodeResult:
    target = with_format(job.output_base, AUDIO_OUTPUT_EXTENSION)
    with tentative_output(target):
        run_encoder(build_audio_cmd(job.source, target, config.audio))
    return TranscodeResult(target)
