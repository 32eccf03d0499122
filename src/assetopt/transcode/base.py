"""
Shared types for the format strategists.

Every strategist takes a ``TranscodeJob`` plus the pipeline config, writes a
single output file and returns a ``TranscodeResult``. Failures are raised as
``TranscodeError`` subclasses whose ``stage`` names the step that broke, so
the job runner can log read, encode and write failures separately.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from assetopt.utils import system_util


@dataclass
class TranscodeResult:
    output: Path
    passthrough: bool = False


class TranscodeError(Exception):
    stage = "transcode"


class ReadError(TranscodeError):
    stage = "read"


class EncodeError(TranscodeError):
    stage = "encode"


class WriteError(TranscodeError):
    stage = "write"


class CommandError(EncodeError):
    """An external encoder exited with a non-zero status."""

    def __init__(self, cmd: List[str], code: int, stderr: str = ""):
        self.cmd = cmd
        self.code = code
        self.stderr = stderr
        tail = stderr.strip().splitlines()[-1] if stderr.strip() else "no output"
        super().__init__(f"{cmd[0]} exited with code {code}: {tail}")


def run_encoder(cmd: List[str]) -> str:
    """
    Run an external encoder command and return its stdout.

    Raises:
        CommandError: the binary is missing or exited with a non-zero status.
    """
    try:
        code, out, err = system_util.run_cmd(cmd)
    except FileNotFoundError as e:
        raise CommandError(cmd, 127, str(e)) from e
    if code != 0:
        raise CommandError(cmd, code, err)
    return out


def describe(error: BaseException, limit: Optional[int] = 300) -> str:
    text = str(error) or type(error).__name__
    if limit and len(text) > limit:
        text = text[:limit] + "..."
    return text
