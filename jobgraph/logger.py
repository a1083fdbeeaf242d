"""
Structured logging system for the job graph.

Provides centralized logging with console and file outputs, plus
metrics tracking for ingestion, interaction events and maintenance.
"""

import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from .config import get_settings

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_file_for(log_dir: Path, day: Optional[date] = None) -> Path:
    """Daily log file inside `log_dir`, e.g. logs/jobgraph_20240131.log."""
    day = day or date.today()
    return log_dir / f"jobgraph_{day:%Y%m%d}.log"


def _empty_metrics() -> dict:
    return {
        "jobs_ingested": 0,
        "relationships_created": 0,
        "propagations": 0,
        "lookups_missed": 0,
        "events_by_kind": {},
        "relationships_deleted": 0,
        "nodes_deleted": 0,
    }


class StructuredLogger:
    """
    Logger for graph operations. Messages carry their keyword context as
    JSON; counters track graph mutations for the session summary.
    """

    def __init__(
        self,
        name: str = "jobgraph",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Args:
            name: Logger name
            level: Console threshold (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for the daily log file (default: logs/)
            enable_file: Write every record, DEBUG included, to the log file
            enable_console: Echo records at `level` and above to stdout
        """
        level = level.upper()
        self.logger = logging.getLogger(name)
        # the file handler records DEBUG whatever the console level
        self.logger.setLevel(logging.DEBUG if enable_file else level)
        self.close()

        self.metrics = _empty_metrics()
        self.log_file: Optional[Path] = None

        if enable_console:
            self._attach(logging.StreamHandler(sys.stdout), level, CONSOLE_FORMAT)
        if enable_file:
            log_dir = Path(log_dir or "logs")
            log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = log_file_for(log_dir)
            self._attach(logging.FileHandler(self.log_file, encoding="utf-8"), logging.DEBUG, FILE_FORMAT)

    def _attach(self, handler: logging.Handler, level, fmt: str) -> None:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=DATE_FORMAT))
        self.logger.addHandler(handler)

    def close(self) -> None:
        """Detach and close every handler of the underlying logger."""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    def debug(self, message: str, **context):
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context):
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context):
        self._log(logging.WARNING, message, context)

    def error(self, message: str, **context):
        self._log(logging.ERROR, message, context)

    def critical(self, message: str, **context):
        self._log(logging.CRITICAL, message, context)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Counters

    def record_ingest(self, relationships: int):
        """Record one inserted job and the relationships wired to it."""
        self.metrics["jobs_ingested"] += 1
        self.metrics["relationships_created"] += relationships

    def record_propagation(self):
        self.metrics["propagations"] += 1

    def record_event(self, kind: str):
        """Record an interaction event by kind."""
        events = self.metrics["events_by_kind"]
        events[kind] = events.get(kind, 0) + 1

    def record_lookup_miss(self):
        self.metrics["lookups_missed"] += 1

    def record_cleanup(self, relationships: int, nodes: int):
        """Record a maintenance pass."""
        self.metrics["relationships_deleted"] += relationships
        self.metrics["nodes_deleted"] += nodes

    def get_metrics(self) -> dict:
        """Snapshot of the counters, with `events_total` derived from the per-kind counts."""
        events = dict(self.metrics["events_by_kind"])
        return {**self.metrics, "events_by_kind": events, "events_total": sum(events.values())}

    def summary_lines(self) -> list:
        m = self.get_metrics()
        lines = [
            "=== Job Graph Session Metrics ===",
            f"Jobs: {m['jobs_ingested']} ingested, {m['relationships_created']} relationships created",
            f"Events: {m['events_total']} ({m['lookups_missed']} missed lookups, {m['propagations']} propagations)",
        ]
        if m["events_by_kind"]:
            lines.append("Events by kind:")
            lines.extend(f"  {kind}: {count}" for kind, count in m["events_by_kind"].items())
        if m["nodes_deleted"] or m["relationships_deleted"]:
            lines.append(f"Deleted: {m['nodes_deleted']} nodes, {m['relationships_deleted']} relationships")
        return lines

    def log_metrics_summary(self):
        for line in self.summary_lines():
            self.info(line)


_global_logger: Optional[StructuredLogger] = None


def get_logger(name: str = "jobgraph", level: Optional[str] = None, **kwargs) -> StructuredLogger:
    """
    Process-wide logger, created on first use.

    Options left unset come from JOBGRAPH_LOG_LEVEL, JOBGRAPH_LOG_DIR and
    JOBGRAPH_LOG_TO_FILE. Later calls return the existing instance and
    ignore their arguments.
    """
    global _global_logger

    if _global_logger is None:
        settings = get_settings()
        kwargs.setdefault("log_dir", settings.log_dir)
        kwargs.setdefault("enable_file", settings.log_to_file)
        _global_logger = StructuredLogger(name=name, level=level or settings.log_level, **kwargs)

    return _global_logger


def reset_logger():
    """Close the process-wide logger's handlers and forget it."""
    global _global_logger
    if _global_logger is not None:
        _global_logger.close()
    _global_logger = None
