"""
Utility functions for running external commands and checking binaries.

Functions:
    - run_cmd: Executes a command and returns its exit code along with its
      standard output and error streams.
    - have_binary: Checks whether a binary is on PATH, logging a warning
      when it is missing. Missing encoders only fail the jobs that need them.
"""
import shutil
import subprocess
from typing import List, Tuple

from assetopt.utils.logger import LogLevel, log


def run_cmd(cmd: List[str]) -> Tuple[int, str, str]:
    """Run a command and return (code, stdout, stderr)."""
    p = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
    return p.returncode, p.stdout, p.stderr


def have_binary(binary: str) -> bool:
    """Check if a binary exists on PATH, warn if not found."""
    if shutil.which(binary) is None:
        log("startup.missing_binary", LogLevel.WARN, binary=binary,
            msg="jobs that need it will fail until it is installed")
        return False
    return True
