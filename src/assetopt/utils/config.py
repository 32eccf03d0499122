"""
Immutable pipeline configuration.

The project layout (base, watch, output and cache directories) and the
per-format encoder policies are fixed at startup and handed explicitly to
every component. Values default to the module constants and can be
overridden through environment variables (a ``.env`` file is honoured) or
keyword arguments.
"""
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from assetopt.utils import constants


@dataclass(frozen=True)
class ImagePolicy:
    max_dimension: int = constants.MAX_IMAGE_DIMENSION
    lossless_depth: int = constants.LOSSLESS_DEPTH
    lossless_format: str = constants.LOSSLESS_FORMAT
    lossy_format: str = constants.LOSSY_FORMAT
    avif_quality: int = constants.AVIF_QUALITY
    avif_speed: int = constants.AVIF_SPEED
    avif_subsampling: str = constants.AVIF_SUBSAMPLING
    png_compress_level: int = constants.PNG_COMPRESS_LEVEL
    png_colors: Optional[int] = constants.PNG_COLORS


@dataclass(frozen=True)
class SvgPolicy:
    passes: int = constants.SVG_PASSES
    precision: int = constants.SVG_PRECISION


@dataclass(frozen=True)
class AudioPolicy:
    codec: str = constants.AUDIO_CODEC
    profile: str = constants.AUDIO_PROFILE
    bitrate: str = constants.AUDIO_BITRATE
    cutoff: int = constants.AUDIO_CUTOFF
    sample_rate: int = constants.AUDIO_SAMPLE_RATE
    channels: int = constants.AUDIO_CHANNELS


@dataclass(frozen=True)
class PipelineConfig:
    """Process-wide settings, never mutated after startup."""

    base_dir: Path
    watch_dir: Path
    output_dir: Path
    cache_dir: Path
    workers: int = constants.WORKERS
    image: ImagePolicy = field(default_factory=ImagePolicy)
    svg: SvgPolicy = field(default_factory=SvgPolicy)
    audio: AudioPolicy = field(default_factory=AudioPolicy)

    @classmethod
    def for_base(cls, base_dir: Path, **overrides) -> "PipelineConfig":
        """Build a config using the default folder layout under ``base_dir``."""
        base = Path(base_dir).expanduser().resolve()
        config = cls(
            base_dir=base,
            watch_dir=base / constants.WATCH_FOLDER,
            output_dir=base / constants.OUTPUT_FOLDER,
            cache_dir=base / constants.CACHE_FOLDER,
        )
        return config.with_overrides(**overrides)

    @classmethod
    def from_env(cls, base_dir: Optional[Path] = None, **overrides) -> "PipelineConfig":
        """
        Build a config from ``ASSETOPT_*`` environment variables.

        Explicit keyword overrides win over the environment, which wins over
        the default layout. ``None`` overrides are ignored so argparse
        namespaces can be passed straight through.
        """
        base = base_dir or os.getenv("ASSETOPT_BASE_DIR") or Path.cwd()
        env = {
            "watch_dir": os.getenv("ASSETOPT_WATCH_DIR"),
            "output_dir": os.getenv("ASSETOPT_OUTPUT_DIR"),
            "cache_dir": os.getenv("ASSETOPT_CACHE_DIR"),
            "workers": os.getenv("ASSETOPT_WORKERS"),
        }
        env.update({k: v for k, v in overrides.items() if v is not None})
        return cls.for_base(Path(base), **env)

    def with_overrides(self, **overrides) -> "PipelineConfig":
        changes = {}
        for key, value in overrides.items():
            if value is None:
                continue
            if key in ("watch_dir", "output_dir", "cache_dir"):
                path = Path(value).expanduser()
                value = (path if path.is_absolute() else self.base_dir / path).resolve()
            elif key == "workers":
                try:
                    value = max(1, int(value))
                except (TypeError, ValueError):
                    raise ValueError(f"workers must be an integer, got {value!r}") from None
            changes[key] = value
        return replace(self, **changes) if changes else self

    def check_layout(self) -> None:
        """
        Reject layouts where output would land inside the watched tree.

        Raises:
            ValueError: the output folder is the watch folder or below it.
        """
        if self.output_dir == self.watch_dir or self.watch_dir in self.output_dir.parents:
            raise ValueError(f"output folder {self.output_dir} is inside the watch folder {self.watch_dir}")
