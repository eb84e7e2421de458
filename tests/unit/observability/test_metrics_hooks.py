import logging

import pytest

from manuscript_kit.observability import LoggingMetricsHook, NoOpMetricsHook, names


class TestLoggingMetricsHook:
    def test_logs_each_metric_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        hook = LoggingMetricsHook()

        with caplog.at_level(logging.DEBUG, logger="manuscript_kit.metrics"):
            hook.record_latency(names.CHUNKING_DURATION, 12.345)
            hook.increment(
                names.ANALYSIS_RUNS_TOTAL, labels={"kind": "grammar", "chunked": "true"}
            )
            hook.record_gauge(names.ANALYSIS_INPUT_WORDS, 4500)

        assert [r.getMessage().strip() for r in caplog.records] == [
            "chunking_duration=12.3ms",
            "analysis_runs_total+=1 chunked=true,kind=grammar",
            "analysis_input_words=4500",
        ]

    def test_custom_logger_name(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="app.metrics"):
            LoggingMetricsHook("app.metrics").increment("x")

        assert caplog.records[0].name == "app.metrics"


class TestNoOpMetricsHook:
    def test_accepts_all_calls(self) -> None:
        hook = NoOpMetricsHook()

        hook.record_latency("a", 1.0)
        hook.increment("b", labels={"k": "v"})
        hook.record_gauge("c", 2.0)
