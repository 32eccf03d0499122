import threading
import time

from watchdog.events import (
    DirCreatedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from assetopt.pipeline.job import JobOutcome
from assetopt.utils import STATUS_OK
from assetopt.watch import AssetEventHandler, EventDispatcher, iter_asset_files


class RecordingRunner:
    """Stands in for run_job and remembers what it was given."""

    def __init__(self, timeline=None, delay=0.0):
        self.jobs = []
        self.timeline = timeline if timeline is not None else []
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self, job, config):
        time.sleep(self.delay)
        with self._lock:
            self.jobs.append(job)
            self.timeline.append(("job", job.source.name))
        return JobOutcome(job.source, None, STATUS_OK)

    @property
    def names(self):
        return sorted(job.source.name for job in self.jobs)


class FakeObserver:
    def __init__(self, timeline, fail=False):
        self.timeline = timeline
        self.fail = fail
        self.started = threading.Event()
        self.scheduled = []

    def schedule(self, handler, path, recursive=False):
        if self.fail:
            raise OSError(28, "inotify watch limit reached")
        self.timeline.append(("schedule", path))
        self.scheduled.append((handler, path, recursive))

    def start(self):
        self.timeline.append(("start", None))
        self.started.set()

    def stop(self):
        self.timeline.append(("stop", None))

    def join(self, timeout=None):
        pass


def _dispatcher(config, runner, observer=None):
    return EventDispatcher(config, runner=runner, observer_factory=lambda: observer)


def test_iter_asset_files_skips_unknown_extensions(config, make_source):
    make_source("a.png")
    make_source("nested/deeper/b.svg")
    make_source("notes.txt")
    make_source(".DS_Store")

    names = [p.name for p in iter_asset_files(config.watch_dir)]

    assert names == ["a.png", "b.svg"]


def test_backfill_processes_every_asset_and_waits(config, make_source):
    for rel in ("a.png", "b/c.svg", "b/d.mp3", "e.woff2", "readme.md"):
        make_source(rel)
    runner = RecordingRunner(delay=0.05)
    dispatcher = _dispatcher(config, runner)

    outcomes = dispatcher.backfill()

    assert len(outcomes) == 4
    assert runner.names == ["a.png", "c.svg", "d.mp3", "e.woff2"]
    dispatcher.stop()


def test_live_watch_starts_only_after_backfill(config, make_source):
    for rel in ("one.png", "two.png", "three/four.svg"):
        make_source(rel)
    timeline = []
    observer = FakeObserver(timeline)
    dispatcher = _dispatcher(config, RecordingRunner(timeline, delay=0.05), observer)

    worker = threading.Thread(target=dispatcher.run)
    worker.start()
    assert observer.started.wait(5)
    dispatcher.stop()
    worker.join(5)

    kinds = [kind for kind, _ in timeline]
    assert kinds[:3] == ["job", "job", "job"]
    assert kinds[3:5] == ["schedule", "start"]
    handler, path, recursive = observer.scheduled[0]
    assert isinstance(handler, AssetEventHandler)
    assert path == str(config.watch_dir)
    assert recursive is True


def test_run_once_never_starts_observer(config, make_source):
    make_source("a.png")
    timeline = []
    dispatcher = _dispatcher(config, RecordingRunner(timeline), FakeObserver(timeline))

    dispatcher.run(once=True)
    dispatcher.stop()

    assert [kind for kind, _ in timeline] == ["job"]


def test_handler_filters_events(config):
    runner = RecordingRunner()
    dispatcher = _dispatcher(config, runner)
    handler = AssetEventHandler(dispatcher)
    root = config.watch_dir

    handler.dispatch(FileCreatedEvent(str(root / "new.png")))
    handler.dispatch(FileModifiedEvent(str(root / "sub" / "edit.mp4")))
    handler.dispatch(FileCreatedEvent(str(root / "draft.psd")))
    handler.dispatch(DirCreatedEvent(str(root / "folder.png")))
    dispatcher.stop()

    assert runner.names == ["edit.mp4", "new.png"]


def test_delete_is_acknowledged_without_a_job(config, capsys):
    runner = RecordingRunner()
    dispatcher = _dispatcher(config, runner)
    handler = AssetEventHandler(dispatcher)

    handler.dispatch(FileDeletedEvent(str(config.watch_dir / "gone.png")))
    dispatcher.stop()

    assert runner.jobs == []
    assert "watch.deleted" in capsys.readouterr().out


def test_move_is_a_delete_plus_add(config, capsys):
    runner = RecordingRunner()
    dispatcher = _dispatcher(config, runner)
    handler = AssetEventHandler(dispatcher)
    root = config.watch_dir

    handler.dispatch(FileMovedEvent(str(root / "old.png"), str(root / "new" / "renamed.png")))
    handler.dispatch(FileMovedEvent(str(root / "upload.tmp"), str(root / "final.svg")))
    dispatcher.stop()

    assert runner.names == ["final.svg", "renamed.png"]
    assert capsys.readouterr().out.count("watch.deleted") == 1


def test_handler_survives_dispatch_errors(config, monkeypatch, capsys):
    dispatcher = _dispatcher(config, RecordingRunner())
    handler = AssetEventHandler(dispatcher)

    def explode(path):
        raise RuntimeError("boom")

    monkeypatch.setattr(dispatcher, "handle", explode)

    handler.dispatch(FileCreatedEvent(str(config.watch_dir / "a.png")))
    dispatcher.stop()

    out = capsys.readouterr().out
    assert "watch.error" in out
    assert "boom" in out


def test_paths_outside_watch_root_are_rejected(config, tmp_path, capsys):
    runner = RecordingRunner()
    dispatcher = _dispatcher(config, runner)

    assert dispatcher.handle(tmp_path / "elsewhere" / "a.png") is None
    assert dispatcher.handle(config.watch_dir / "notes.txt") is None
    dispatcher.stop()

    assert runner.jobs == []
    assert "watch.error" in capsys.readouterr().out


def test_start_live_reports_watch_failure(config, capsys):
    dispatcher = _dispatcher(config, RecordingRunner(), FakeObserver([], fail=True))

    assert dispatcher.start_live() is False
    assert dispatcher.live is False
    dispatcher.stop()
    assert "watch.error" in capsys.readouterr().out


def test_event_after_shutdown_is_logged_not_raised(config, capsys):
    dispatcher = _dispatcher(config, RecordingRunner())
    handler = AssetEventHandler(dispatcher)
    dispatcher.stop()

    handler.dispatch(FileCreatedEvent(str(config.watch_dir / "late.png")))

    out = capsys.readouterr().out
    assert "watch.error" in out
    assert 'event_type="created"' in out
    assert "RuntimeError" in out
