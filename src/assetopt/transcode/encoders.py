"""
AV1 encoder capability detection.

The host's ffmpeg build is asked which encoders it ships and the best AV1
encoder is picked by a fixed vendor priority: NVIDIA NVENC, then Intel Quick
Sync, then AMD AMF, then the libaom software encoder. Probing sits behind
``EncoderProbe`` so the selection can run against canned listings.
"""
import re
from enum import Enum
from typing import Iterable, Set

from assetopt.transcode.base import run_encoder

# Lines look like: " V....D av1_nvenc            NVIDIA NVENC av1 encoder (codec av1)"
_VIDEO_ENCODER_LINE = re.compile(r"^\s*V[A-Z.]{5}\s+(\S+)")


class Av1Encoder(Enum):
    NVENC = "av1_nvenc"
    QSV = "av1_qsv"
    AMF = "av1_amf"
    SOFTWARE = "libaom-av1"

    @property
    def is_hardware(self) -> bool:
        return self is not Av1Encoder.SOFTWARE


HARDWARE_PRIORITY = (Av1Encoder.NVENC, Av1Encoder.QSV, Av1Encoder.AMF)


class EncoderProbe:
    """Reports the encoder names the host can use."""

    def available_encoders(self) -> Set[str]:
        raise NotImplementedError


class FfmpegEncoderProbe(EncoderProbe):
    """Queries ffmpeg on every call; nothing is cached between jobs."""

    def __init__(self, binary: str = "ffmpeg"):
        self.binary = binary

    def available_encoders(self) -> Set[str]:
        out = run_encoder([self.binary, "-hide_banner", "-encoders"])
        return parse_encoder_listing(out)


class StaticEncoderProbe(EncoderProbe):
    """Fixed encoder list, for tests and for hosts with a known toolchain."""

    def __init__(self, names: Iterable[str] = ()):
        self.names = set(names)

    def available_encoders(self) -> Set[str]:
        return set(self.names)


def parse_encoder_listing(text: str) -> Set[str]:
    """Extract video encoder names from ``ffmpeg -encoders`` output."""
    encoders = set()
    for line in text.splitlines():
        match = _VIDEO_ENCODER_LINE.match(line)
        if match and match.group(1) != "=":
            encoders.add(match.group(1))
    return encoders


def select_av1_encoder(encoders: Iterable[str]) -> Av1Encoder:
    """Pick the highest-priority hardware AV1 encoder present, else software."""
    available = set(encoders)
    for encoder in HARDWARE_PRIORITY:
        if encoder.value in available:
            return encoder
    return Av1Encoder.SOFTWARE
