import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

from assetopt.pipeline.job import run_job
from assetopt.pipeline.paths import build_job
from assetopt.utils import STATUS_COPY, STATUS_FAIL, STATUS_OK


def _build_ttf(path):
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((500, 700))
    pen.lineTo((500, 0))
    pen.closePath()

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "A"])
    fb.setupCharacterMap({ord("A"): "A"})
    fb.setupGlyf({".notdef": TTGlyphPen(None).glyph(), "A": pen.glyph()})
    fb.setupHorizontalMetrics({".notdef": (500, 0), "A": (600, 100)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Sample", "styleName": "Regular"})
    fb.setupOS2()
    fb.setupPost()
    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path


def test_ttf_is_converted_to_woff2(config):
    pytest.importorskip("brotli")
    src = _build_ttf(config.watch_dir / "fonts" / "Sample-Regular.ttf")

    outcome = run_job(build_job(src, config), config)

    assert outcome.status == STATUS_OK
    assert outcome.output == config.output_dir / "fonts" / "Sample-Regular.woff2"
    font = TTFont(outcome.output)
    assert font.flavor == "woff2"
    assert font.getGlyphOrder() == [".notdef", "A"]
    assert font.getBestCmap()[ord("A")] == "A"


def test_woff2_is_copied_through(config, make_source, capsys):
    payload = b"wOF2" + bytes(range(64))
    src = make_source("fonts/Body.woff2", payload)

    outcome = run_job(build_job(src, config), config)

    assert outcome.status == STATUS_COPY
    assert outcome.report is None
    assert outcome.output.read_bytes() == payload
    assert "font.copied" in capsys.readouterr().out


def test_corrupt_ttf_fails_without_output(config, make_source):
    src = make_source("fonts/Broken.ttf", b"definitely not sfnt data")

    outcome = run_job(build_job(src, config), config)

    assert outcome.status == STATUS_FAIL
    assert not (config.output_dir / "fonts" / "Broken.woff2").exists()
