from colorama import Fore

from assetopt.pipeline.report import UNAVAILABLE, SizeReport, file_size, kib, report


def test_reduced_report():
    r = SizeReport(1000, 250)
    assert r.delta == 75.0
    assert r.label == "reduced"
    assert r.render(color=False) == "[75.000% reduced]"
    assert r.render().startswith(Fore.GREEN)


def test_gained_report():
    r = SizeReport(1000, 1100)
    assert r.label == "gained"
    assert r.render(color=False) == "[-10.000% gained]"
    assert r.render().startswith(Fore.RED)


def test_unchanged_report_has_no_color():
    r = SizeReport(512, 512)
    assert r.label == "unchanged"
    assert r.render() == "[0.000% unchanged]"


def test_missing_sizes_are_never_zero():
    assert SizeReport(None, 100).delta is None
    assert SizeReport(100, None).render() == UNAVAILABLE
    assert report(None, None) == UNAVAILABLE
    assert SizeReport(0, 10).render() == UNAVAILABLE


def test_zero_byte_output_is_a_real_size():
    assert SizeReport(100, 0).render(color=False) == "[100.000% reduced]"


def test_file_size_lookup(tmp_path):
    path = tmp_path / "a.bin"
    path.write_bytes(b"x" * 2048)
    assert file_size(path) == 2048
    assert file_size(tmp_path / "missing.bin") is None
    assert kib(2048) == "2.000 KB"
    assert kib(None) == "?"


def test_measure(tmp_path):
    src = tmp_path / "src.png"
    out = tmp_path / "out.avif"
    src.write_bytes(b"x" * 400)
    out.write_bytes(b"x" * 100)
    assert SizeReport.measure(src, out) == SizeReport(400, 100)
