"""
Video strategist: AV1 in an MP4 container.

The encoder is chosen per job from what the host's ffmpeg reports, preferring
GPU encoders (NVENC > QSV > AMF) and falling back to libaom. Every encoder
uses constant-quality rate control with the bitrate target disabled.
"""
from pathlib import Path
from typing import List, Optional

from assetopt.pipeline.paths import TranscodeJob, with_format
from assetopt.transcode.base import TranscodeResult, run_encoder
from assetopt.transcode.encoders import (
    Av1Encoder,
    EncoderProbe,
    FfmpegEncoderProbe,
    select_av1_encoder,
)
from assetopt.utils import LogLevel, logger
from assetopt.utils.config import PipelineConfig
from assetopt.utils.constants import VIDEO_OUTPUT_EXTENSION
from assetopt.utils.file_util import tentative_output

NAME = "video"

# Arguments placed before -i (hardware device setup)
_INPUT_ARGS = {
    Av1Encoder.QSV: ["-init_hw_device", "vaapi=va:/dev/dri/renderD128"],
}

_CODEC_ARGS = {
    Av1Encoder.NVENC: ["-c:v", "av1_nvenc", "-preset", "p7", "-cq", "30", "-b:v", "0"],
    Av1Encoder.QSV: ["-c:v", "av1_qsv", "-preset", "veryslow", "-q:v", "30", "-b:v", "0"],
    Av1Encoder.AMF: ["-c:v", "av1_amf", "-usage", "quality", "-rc", "vbr_quality", "-q:v", "20", "-b:v", "0"],
    Av1Encoder.SOFTWARE: ["-c:v", "libaom-av1", "-crf", "30", "-b:v", "0", "-cpu-used", "4"],
}


def build_video_cmd(src: Path, dst: Path, encoder: Av1Encoder) -> List[str]:
    """Build the ffmpeg command for transcoding video to AV1."""
    cmd = ["ffmpeg", "-hide_banner", "-loglevel", "error", "-y"]
    cmd += _INPUT_ARGS.get(encoder, [])
    cmd += ["-i", str(src)]
    cmd += _CODEC_ARGS[encoder]
    cmd += ["-movflags", "+faststart", str(dst)]
    return cmd


def transcode(job: TranscodeJob, config: PipelineConfig,
              probe: Optional[EncoderProbe] = None) -> TranscodeResult:
    probe = probe or FfmpegEncoderProbe()
    target = with_format(job.output_base, VIDEO_OUTPUT_EXTENSION)

    with tentative_output(target):
        encoder = select_av1_encoder(probe.available_encoders())
        logger.log("video.encoder", LogLevel.INFO,
                   file=job.source.name,
                   encoder=encoder.value,
                   hardware=encoder.is_hardware)
        run_encoder(build_video_cmd(job.source, target, encoder))
    return TranscodeResult(target)
