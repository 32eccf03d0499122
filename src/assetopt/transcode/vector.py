"""SVG strategist: repeated scour passes at a fixed coordinate precision."""
from scour import scour

from assetopt.pipeline.paths import TranscodeJob, with_format
from assetopt.transcode.base import EncodeError, ReadError, TranscodeResult, WriteError
from assetopt.utils.config import PipelineConfig, SvgPolicy
from assetopt.utils.constants import VECTOR_OUTPUT_EXTENSION
from assetopt.utils.file_util import tentative_output

NAME = "svg"


def _scour_options(policy: SvgPolicy):
    options = scour.sanitizeOptions()
    options.digits = policy.precision
    options.strip_comments = True
    options.remove_metadata = True
    options.strip_xml_prolog = True
    options.strip_xml_space_attribute = True
    options.shorten_ids = True
    options.indent_type = "none"
    options.newlines = False
    options.quiet = True
    return options


def optimize_svg(text: str, policy: SvgPolicy) -> str:
    """
    Minify SVG markup, re-running the optimiser until a pass stops saving
    bytes or ``policy.passes`` is reached. Never returns more bytes than it
    was given.

    Raises:
        EncodeError: the markup could not be parsed.
    """
    options = _scour_options(policy)
    best = text
    for _ in range(max(1, policy.passes)):
        try:
            candidate = scour.scourString(best, options)
        except Exception as e:
            raise EncodeError(f"invalid SVG: {e}") from e
        if len(candidate.encode("utf-8")) >= len(best.encode("utf-8")):
            break
        best = candidate
    return best


def transcode(job: TranscodeJob, config: PipelineConfig) -> TranscodeResult:
    target = with_format(job.output_base, VECTOR_OUTPUT_EXTENSION)
    with tentative_output(target):
        try:
            text = job.source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(f"cannot read SVG: {e}") from e

        optimized = optimize_svg(text, config.svg)

        try:
            target.write_text(optimized, encoding="utf-8")
        except OSError as e:
            raise WriteError(f"cannot write {target.name}: {e}") from e
    return TranscodeResult(target)
