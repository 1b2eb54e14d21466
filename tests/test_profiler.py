"""Tests for the stage profiler."""

import time

from stroke_engine.profiler import PipelineProfiler


class TestPipelineProfiler:
    def test_stage_timing(self):
        profiler = PipelineProfiler()
        with profiler.stage("matching"):
            time.sleep(0.001)

        stats = profiler.get_stage_stats("matching")
        assert stats is not None
        assert stats.call_count == 1
        assert stats.avg_ms >= 0.5

    def test_multiple_calls(self):
        profiler = PipelineProfiler()
        for _ in range(10):
            with profiler.stage("normalization"):
                pass
        assert profiler.get_stage_stats("normalization").call_count == 10

    def test_custom_stage(self):
        profiler = PipelineProfiler()
        with profiler.stage("dispatch"):
            pass
        assert "dispatch" in profiler.summary()

    def test_window(self):
        profiler = PipelineProfiler(window_size=5)
        for _ in range(20):
            with profiler.stage("total"):
                pass
        stats = profiler.get_stage_stats("total")
        assert stats.call_count == 20
        assert len(profiler._timings["total"]) == 5

    def test_summary_skips_empty(self):
        profiler = PipelineProfiler()
        with profiler.stage("total"):
            pass
        summary = profiler.summary()
        assert list(summary) == ["total"]
        assert "p95_ms" in summary["total"]

    def test_disabled(self):
        profiler = PipelineProfiler()
        profiler.enabled = False
        with profiler.stage("matching"):
            pass
        assert profiler.get_stage_stats("matching") is None

    def test_reset(self):
        profiler = PipelineProfiler()
        with profiler.stage("matching"):
            pass
        profiler.reset()
        assert profiler.get_stage_stats("matching") is None
