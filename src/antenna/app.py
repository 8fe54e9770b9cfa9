"""Application entry point: headless monitor printing snapshots as JSON lines."""

import argparse
import logging
import signal
import sys
from datetime import datetime, timedelta

import orjson
from PySide6.QtCore import QCoreApplication

from antenna.errors import AntennaError, StoreUnavailableError
from antenna.services.config_manager import ConfigManager
from antenna.services.dashboard import DashboardAssembler
from antenna.services.session_monitor import SessionMonitor

logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_STORE_UNAVAILABLE = 2

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="antenna",
        description="Aggregate OpenClaw session transcripts into dashboard snapshots.",
    )
    parser.add_argument("--dir", help="OpenClaw root directory (default: $OPENCLAW_DIR or ~/.openclaw)")
    parser.add_argument("--once", action="store_true", help="Print a single snapshot and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _emit(dashboard: dict, activity: list):
    payload = {"dashboard": dashboard, "activity": activity}
    sys.stdout.write(orjson.dumps(payload).decode() + "\n")
    sys.stdout.flush()


def build_assembler(config: ConfigManager, openclaw_dir: str | None = None) -> DashboardAssembler:
    return DashboardAssembler(
        openclaw_dir or config.openclaw_dir(),
        active_window=timedelta(minutes=config.get_int("monitor/activeWindowMinutes")),
        max_workers=config.get_int("monitor/maxWorkers"),
        deadline=config.pass_deadline(),
    )


def run_once(assembler: DashboardAssembler) -> int:
    """Compute and print one snapshot synchronously."""
    now = datetime.now()
    try:
        dashboard = assembler.get_dashboard(now=now)
        activity = assembler.get_hourly_activity(now=now)
    except StoreUnavailableError as e:
        print(str(e), file=sys.stderr)
        return EXIT_STORE_UNAVAILABLE
    except AntennaError as e:
        print(str(e), file=sys.stderr)
        return EXIT_ERROR
    _emit(dashboard.to_dict(), [b.to_dict() for b in activity])
    return 0


def run(argv: list[str] | None = None) -> int:
    """Launch the application."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName("Antenna")
    app.setOrganizationName("antenna")

    config = ConfigManager()
    debug = args.debug or config.get_bool("advanced/debugLogging")
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=LOG_FORMAT)

    assembler = build_assembler(config, args.dir)
    logger.info("OpenClaw dir: %s", assembler.store.openclaw_dir)

    if args.once:
        return run_once(assembler)

    # Allow Ctrl+C to kill the app
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    monitor = SessionMonitor(assembler, poll_interval_ms=config.get_int("monitor/pollInterval"))
    monitor.activity_ready.connect(lambda activity: _emit(monitor.last_snapshot, activity))
    monitor.error_occurred.connect(lambda msg: logger.error("%s", msg))
    monitor.start()

    ret = app.exec()
    monitor.cleanup()
    return ret
