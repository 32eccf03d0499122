from pathlib import Path

import pytest

from assetopt.utils.config import PipelineConfig


@pytest.fixture
def config(tmp_path: Path) -> PipelineConfig:
    """A pipeline config rooted in a fresh project folder."""
    cfg = PipelineConfig.for_base(tmp_path, workers=2)
    cfg.watch_dir.mkdir()
    return cfg


@pytest.fixture
def make_source(config):
    """Create a file under the watch root and return its path."""

    def _make(rel: str, data: bytes = b"") -> Path:
        path = config.watch_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _make
