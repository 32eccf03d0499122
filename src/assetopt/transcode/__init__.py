"""Format strategists for asset optimisation.

This package provides one strategist module per asset category. Each exposes
``NAME`` (its log prefix) and ``transcode(job, config) -> TranscodeResult``:
- image: PNG/AVIF re-encoding with resize and alpha handling (Pillow)
- vector: multi-pass SVG minification (scour)
- audio: HE-AAC v2 encoding (ffmpeg)
- video: AV1 encoding with hardware encoder detection (ffmpeg)
- font: TrueType to WOFF2 conversion and WOFF2 pass-through (fontTools)
"""

from . import audio, font, image, vector, video
from .base import (
    CommandError,
    EncodeError,
    ReadError,
    TranscodeError,
    TranscodeResult,
    WriteError,
)
from .encoders import (
    Av1Encoder,
    EncoderProbe,
    FfmpegEncoderProbe,
    StaticEncoderProbe,
    parse_encoder_listing,
    select_av1_encoder,
)

__all__ = [
    # Strategists
    "audio",
    "font",
    "image",
    "vector",
    "video",
    # Results and errors
    "TranscodeResult",
    "TranscodeError",
    "ReadError",
    "EncodeError",
    "WriteError",
    "CommandError",
    # Encoder detection
    "Av1Encoder",
    "EncoderProbe",
    "FfmpegEncoderProbe",
    "StaticEncoderProbe",
    "parse_encoder_listing",
    "select_av1_encoder",
]
