import threading
from pathlib import PurePosixPath

import pytest

from assetopt.utils import LogLevel, logger


@pytest.fixture
def restore_level():
    previous = logger.get_log_level()
    yield
    logger.set_log_level(previous)


def test_format_kv():
    text = logger._format_kv({
        "file": "a\nb",
        "quote": 'say "hi"',
        "missing": None,
        "alpha": True,
        "count": 3,
        "path": PurePosixPath("public/a.avif"),
    })
    assert text == ('file="a\\nb" | quote="say \\"hi\\"" | missing=null | alpha=true'
                    ' | count=3 | path="public/a.avif"')


def test_log_line_layout(capsys, restore_level):
    logger.set_log_level(LogLevel.INFO)
    logger.log("job.complete", LogLevel.INFO, file="a.png")

    line = capsys.readouterr().out.strip()
    parts = line.split(" | ")
    assert parts[1:] == ["[INFO]", "job.complete", 'file="a.png"', 'worker="main"']


def test_level_filtering(capsys, restore_level):
    logger.set_log_level(LogLevel.WARN)
    logger.log("image.plan", LogLevel.DEBUG)
    logger.log("job.queued", LogLevel.INFO)
    logger.log("watch.error", LogLevel.ERROR)

    out = capsys.readouterr().out
    assert "watch.error" in out
    assert "job.queued" not in out
    assert "image.plan" not in out


def test_worker_ids_are_stable_per_thread():
    seen = []

    def record():
        seen.append((logger.get_worker_id(), logger.get_worker_id()))

    thread = threading.Thread(target=record)
    thread.start()
    thread.join()

    first, second = seen[0]
    assert first == second
    assert first.startswith("w")
    assert logger.get_worker_id() == "main"
