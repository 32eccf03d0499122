"""
Before/after size reporting.

A report is only built after an output file was written successfully. Sizes
that cannot be read are kept as ``None`` and rendered as an explicit marker so
a failed lookup is never mistaken for a zero-byte file.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from colorama import Fore, Style

UNAVAILABLE = "[size unavailable]"


def file_size(path: Path) -> Optional[int]:
    """Size of ``path`` in bytes, or None when it cannot be read."""
    try:
        return Path(path).stat().st_size
    except OSError:
        return None


def kib(size: Optional[int]) -> str:
    return "?" if size is None else f"{size / 1024:.3f} KB"


@dataclass(frozen=True)
class SizeReport:
    before: Optional[int]
    after: Optional[int]

    @classmethod
    def measure(cls, source: Path, output: Path) -> "SizeReport":
        return cls(file_size(source), file_size(output))

    @property
    def delta(self) -> Optional[float]:
        """Percentage saved relative to the source; negative when the output grew."""
        if self.before is None or self.after is None or self.before == 0:
            return None
        return (self.before - self.after) / self.before * 100

    @property
    def label(self) -> Optional[str]:
        delta = self.delta
        if delta is None:
            return None
        if delta > 0:
            return "reduced"
        if delta < 0:
            return "gained"
        return "unchanged"

    def render(self, color: bool = True) -> str:
        delta = self.delta
        if delta is None:
            return UNAVAILABLE
        text = f"[{delta:.3f}% {self.label}]"
        if not color or delta == 0:
            return text
        tint = Fore.GREEN if delta > 0 else Fore.RED
        return f"{tint}{text}{Style.RESET_ALL}"


def report(before: Optional[int], after: Optional[int], color: bool = True) -> str:
    """Render the delta between two byte sizes."""
    return SizeReport(before, after).render(color=color)
