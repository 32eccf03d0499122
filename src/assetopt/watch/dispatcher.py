"""
Backfill and live dispatch of filesystem events.

The dispatcher first walks the whole watch root and optimises every matching
file, waiting until the last one has finished. Only then does it start a
recursive watchdog observer, so live events never race the initial seeding.
Jobs run on a thread pool; the observer thread only classifies and submits.
"""
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, List, Optional

from tqdm import tqdm
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from assetopt.pipeline.classifier import is_watched
from assetopt.pipeline.job import JobOutcome, run_job
from assetopt.pipeline.paths import TranscodeJob, build_job, display_path
from assetopt.utils import STATUS_COPY, STATUS_FAIL, STATUS_OK, LogLevel, logger
from assetopt.utils.config import PipelineConfig

JobRunner = Callable[[TranscodeJob, PipelineConfig], JobOutcome]


def iter_asset_files(root: Path) -> List[Path]:
    """Find all watched asset files recursively, in a stable order."""
    return sorted(p for p in root.rglob("*") if p.is_file() and is_watched(p))


class AssetEventHandler(FileSystemEventHandler):
    """Watchdog handler that forwards asset events to the dispatcher."""

    def __init__(self, dispatcher: "EventDispatcher"):
        super().__init__()
        self.dispatcher = dispatcher

    def dispatch(self, event: FileSystemEvent) -> None:
        # Drop directory churn and non-asset files before any callback runs.
        if event.is_directory:
            return
        dest = getattr(event, "dest_path", "") or ""
        if not (is_watched(event.src_path) or is_watched(dest)):
            return
        try:
            super().dispatch(event)
        except Exception as e:
            logger.log("watch.error", LogLevel.ERROR,
                       event_type=event.event_type,
                       path=str(event.src_path),
                       error=f"{type(e).__name__}: {e}")

    def on_created(self, event: FileSystemEvent) -> None:
        self.dispatcher.handle(Path(event.src_path))

    def on_modified(self, event: FileSystemEvent) -> None:
        self.dispatcher.handle(Path(event.src_path))

    def on_deleted(self, event: FileSystemEvent) -> None:
        self.dispatcher.acknowledge_deletion(Path(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        src = Path(event.src_path)
        dest = Path(event.dest_path)
        if is_watched(src):
            self.dispatcher.acknowledge_deletion(src)
        if is_watched(dest):
            self.dispatcher.handle(dest)


class EventDispatcher:
    """Routes asset files to the job runner, first in backfill, then live."""

    def __init__(
            self,
            config: PipelineConfig,
            runner: JobRunner = run_job,
            observer_factory: Callable[[], object] = Observer,
    ):
        self.config = config
        self.runner = runner
        self.observer_factory = observer_factory
        self.executor = ThreadPoolExecutor(max_workers=config.workers, thread_name_prefix="assetopt")
        self.observer = None
        self.live = False
        self._stopped = threading.Event()

    def handle(self, path: Path) -> Optional[Future]:
        """Submit a job for ``path``. Returns None when the path is not an asset."""
        if not is_watched(path):
            return None
        try:
            job = build_job(path, self.config)
        except ValueError as e:
            logger.log("watch.error", LogLevel.WARN, path=str(path), error=str(e))
            return None
        return self.executor.submit(self.runner, job, self.config)

    def acknowledge_deletion(self, path: Path) -> None:
        logger.log("watch.deleted", LogLevel.INFO, file=display_path(path, self.config))

    def backfill(self) -> List[JobOutcome]:
        """Process every existing asset and wait for all of them to finish."""
        files = iter_asset_files(self.config.watch_dir)
        logger.log("backfill.start", LogLevel.INFO,
                   root=display_path(self.config.watch_dir, self.config),
                   files=len(files),
                   workers=self.config.workers)

        futures = [f for f in (self.handle(p) for p in files) if f is not None]
        outcomes = []
        for fut in tqdm(as_completed(futures), total=len(futures), desc="Initial optimisation pass"):
            outcomes.append(fut.result())

        logger.log("backfill.complete", LogLevel.INFO,
                   ok=sum(1 for o in outcomes if o.status == STATUS_OK),
                   copied=sum(1 for o in outcomes if o.status == STATUS_COPY),
                   fail=sum(1 for o in outcomes if o.status == STATUS_FAIL))
        return outcomes

    def start_live(self) -> bool:
        """Start watching. Returns False when the watch could not be scheduled."""
        self.observer = self.observer_factory()
        try:
            self.observer.schedule(AssetEventHandler(self), str(self.config.watch_dir), recursive=True)
            self.observer.start()
        except OSError as e:
            logger.log("watch.error", LogLevel.ERROR,
                       root=str(self.config.watch_dir),
                       error=f"{type(e).__name__}: {e}")
            return False
        self.live = True
        logger.log("watch.start", LogLevel.INFO, root=display_path(self.config.watch_dir, self.config))
        return True

    def run(self, once: bool = False) -> None:
        """Backfill, then watch until ``stop()`` is called."""
        self.backfill()
        if once or self._stopped.is_set():
            return
        self.start_live()
        self._stopped.wait()

    def stop(self) -> None:
        self._stopped.set()
        if self.observer is not None and self.live:
            self.observer.stop()
            self.observer.join()
            self.live = False
        self.executor.shutdown(wait=True)
        logger.log("shutdown.complete", LogLevel.INFO)
