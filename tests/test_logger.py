"""
Tests for logger functionality.
"""

from datetime import date

from jobgraph.logger import StructuredLogger, get_logger, log_file_for, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with default settings."""
        logger = StructuredLogger(
            name="test",
            level="INFO",
            log_dir=tmp_path,
            enable_console=False,
        )

        assert logger.logger.name == "test"
        assert logger.metrics["jobs_ingested"] == 0

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.critical("Critical message")

    def test_log_with_context(self, tmp_path):
        """Context is appended to the message as JSON."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Event applied", job_id="Google: IT", weight=20.0)

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert 'Event applied | Context: {"job_id": "Google: IT", "weight": 20.0}' in log_content

    def test_metrics_tracking(self, tmp_path):
        """Metrics should be tracked correctly."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_file=False,
            enable_console=False,
        )

        logger.record_ingest(0)
        logger.record_ingest(1)
        logger.record_ingest(2)
        logger.record_event("like")
        logger.record_event("like")
        logger.record_event("dislike")
        logger.record_lookup_miss()
        logger.record_cleanup(3, 1)

        metrics = logger.get_metrics()

        assert metrics["jobs_ingested"] == 3
        assert metrics["relationships_created"] == 3
        assert metrics["events_by_kind"] == {"like": 2, "dislike": 1}
        assert metrics["events_total"] == 3
        assert metrics["lookups_missed"] == 1
        assert metrics["relationships_deleted"] == 3
        assert metrics["nodes_deleted"] == 1

    def test_get_metrics_is_a_copy(self, tmp_path):
        logger = StructuredLogger(name="test", enable_file=False, enable_console=False)
        logger.record_event("click")

        metrics = logger.get_metrics()
        metrics["events_by_kind"]["click"] = 99

        assert logger.metrics["events_by_kind"]["click"] == 1

    def test_metrics_summary(self, tmp_path):
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )
        logger.record_ingest(4)
        logger.record_event("click")

        logger.log_metrics_summary()

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert "Job Graph Session Metrics" in log_content
        assert "Jobs: 1 ingested, 4 relationships created" in log_content
        assert "click: 1" in log_content

    def test_log_file_creation(self, tmp_path):
        """Log file should be created in specified directory."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Test message")

        log_files = list(tmp_path.glob("*.log"))
        assert len(log_files) == 1
        assert log_files[0].name.startswith("jobgraph_")
        assert "Test message" in log_files[0].read_text()

    def test_log_file_named_by_day(self, tmp_path):
        assert log_file_for(tmp_path, date(2024, 1, 31)) == tmp_path / "jobgraph_20240131.log"

    def test_file_receives_debug_below_console_level(self, tmp_path):
        logger = StructuredLogger(name="test", level="WARNING", log_dir=tmp_path, enable_console=False)

        logger.debug("Propagated", neighbours=3)

        assert logger.log_file == log_file_for(tmp_path)
        assert 'Propagated | Context: {"neighbours": 3}' in logger.log_file.read_text()

    def test_no_file_without_file_output(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_file=False, enable_console=False)

        logger.info("Not written")

        assert logger.log_file is None
        assert list(tmp_path.iterdir()) == []

    def test_summary_lines(self):
        logger = StructuredLogger(name="test", enable_file=False, enable_console=False)
        logger.record_ingest(2)
        logger.record_event("dislike")
        logger.record_propagation()
        logger.record_cleanup(2, 1)

        assert logger.summary_lines() == [
            "=== Job Graph Session Metrics ===",
            "Jobs: 1 ingested, 2 relationships created",
            "Events: 1 (0 missed lookups, 1 propagations)",
            "Events by kind:",
            "  dislike: 1",
            "Deleted: 1 nodes, 2 relationships",
        ]

    def test_recreating_logger_replaces_handlers(self, tmp_path):
        StructuredLogger(name="test", log_dir=tmp_path)
        logger = StructuredLogger(name="test", log_dir=tmp_path)

        assert len(logger.logger.handlers) == 2

        logger.close()

        assert logger.logger.handlers == []


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        """get_logger should return same instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        """reset_logger should create new instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_lookup_miss()

        reset_logger()

        logger2 = get_logger(log_dir=tmp_path, enable_console=False)

        assert logger2.metrics["lookups_missed"] == 0

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("JOBGRAPH_LOG_LEVEL", "WARNING")
        reset_logger()

        logger = get_logger(enable_console=False, enable_file=False)

        assert logger.logger.level == 30

    def test_reset_logger_closes_handlers(self, tmp_path):
        reset_logger()
        logger = get_logger(log_dir=tmp_path, enable_console=False, enable_file=True)
        assert logger.logger.handlers

        reset_logger()

        assert logger.logger.handlers == []
