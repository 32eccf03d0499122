"""
Asset watcher: optimise a static site's media and fonts as they change.

Runs an initial optimisation pass over the development asset tree and then
keeps watching it, mirroring compressed output into the public tree.
"""

import argparse
import atexit
import signal
import sys
import time
from pathlib import Path

import colorama

import assetopt as assetopt_module
from assetopt.pipeline.paths import display_path
from assetopt.utils import LogLevel, logger, system_util
from assetopt.utils.config import PipelineConfig
from assetopt.utils.file_util import set_root_folders
from assetopt.watch import EventDispatcher

_dispatcher: EventDispatcher | None = None


def _signal_handler(signum, frame):
    """Handle termination signals gracefully."""
    try:
        sig_name = signal.Signals(signum).name
    except ValueError:
        sig_name = str(signum)
    logger.log("shutdown.signal", LogLevel.INFO, signal=sig_name)
    logger.safe_print("Waiting for running optimisation jobs to complete...")

    if _dispatcher:
        _dispatcher.stop()
    sys.exit(0)


def _cleanup():
    """Cleanup function called on exit."""
    if _dispatcher:
        _dispatcher.executor.shutdown(wait=False, cancel_futures=True)


def main():
    parser = argparse.ArgumentParser(
        description="Watch a development asset folder and mirror web-optimised images, "
                    "SVGs, audio, video and fonts into the public folder.",
        epilog="Example: assetwatcher ~/sites/blog --workers 2",
    )
    parser.add_argument("base_dir", nargs="?",
                        help="Project root containing public_dev (default: $ASSETOPT_BASE_DIR or cwd)")
    parser.add_argument("--watch-dir", help="Source asset folder (default: <base>/public_dev)")
    parser.add_argument("--output-dir", help="Mirrored output folder (default: <base>/public)")
    parser.add_argument("--cache-dir", help="Cache folder (default: <base>/opt_cache)")
    parser.add_argument("--workers", type=int, help="Concurrent optimisation jobs (default: 4)")
    parser.add_argument("--once", action="store_true", help="Run the initial pass only, then exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {assetopt_module.__version__}")
    args = parser.parse_args()

    logger.set_log_level(LogLevel.DEBUG if args.debug else LogLevel.INFO)
    colorama.just_fix_windows_console()

    try:
        config = PipelineConfig.from_env(
            Path(args.base_dir) if args.base_dir else None,
            watch_dir=args.watch_dir,
            output_dir=args.output_dir,
            cache_dir=args.cache_dir,
            workers=args.workers,
        )
        config.check_layout()
    except ValueError as e:
        logger.log("startup.error", LogLevel.ERROR, msg="Invalid configuration", error=str(e))
        sys.exit(2)

    if not config.watch_dir.is_dir():
        logger.log("startup.error", LogLevel.ERROR, msg="Watch folder does not exist", path=str(config.watch_dir))
        sys.exit(2)

    try:
        set_root_folders(config.output_dir, config.cache_dir)
    except OSError as e:
        logger.log("startup.error", LogLevel.ERROR, msg="Cannot create output folders", error=str(e))
        sys.exit(2)

    system_util.have_binary("ffmpeg")

    global _dispatcher
    _dispatcher = EventDispatcher(config)

    signal.signal(signal.SIGTERM, _signal_handler)
    signal.signal(signal.SIGINT, _signal_handler)
    atexit.register(_cleanup)

    logger.log("startup", LogLevel.INFO,
               version=assetopt_module.__version__,
               watch=display_path(config.watch_dir, config),
               output=display_path(config.output_dir, config),
               cache=display_path(config.cache_dir, config),
               workers=config.workers,
               once=args.once)
    logger.safe_print("Initial optimisation pass... Please wait...")

    start_time = time.time()
    _dispatcher.run(once=args.once)

    if args.once:
        _dispatcher.stop()
        logger.log("assetwatcher.end", LogLevel.INFO, runtime=f"{time.time() - start_time:.1f}s")


if __name__ == "__main__":
    main()
