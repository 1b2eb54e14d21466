"""Stress tests for StrokeEngine."""

import threading

import numpy as np

from stroke_engine.defaults import CHECK_STROKE, X_STROKE
from stroke_engine.errors import LibraryFrozenError
from stroke_engine.recognizer import Recognizer
from stroke_engine.strategies import Strategy
from stroke_engine.templates import TemplateLibrary


class TestHighVolume:
    def test_many_random_strokes(self):
        recognizer = Recognizer()
        rng = np.random.default_rng(42)
        for _ in range(200):
            stroke = rng.random((rng.integers(2, 80), 2)) * 500
            result = recognizer.recognize(stroke, strategy=Strategy.FAST)
            assert result.label in ("x", "check")
            assert 0.0 <= result.score <= 1.0

    def test_large_library(self):
        library = TemplateLibrary()
        rng = np.random.default_rng(7)
        for i in range(100):
            library.register_raw(f"noise_{i}", rng.random((30, 2)) * 100)
        library.register_raw("x", X_STROKE)
        recognizer = Recognizer(library)
        assert recognizer.recognize(X_STROKE).label == "x"
        assert recognizer.recognize(X_STROKE, strategy=Strategy.FAST).label == "x"


class TestConcurrentAccess:
    def test_register_during_recognition(self):
        library = TemplateLibrary.with_defaults()
        recognizer = Recognizer(library)
        errors = []
        stop = threading.Event()

        def recognize_loop():
            try:
                while not stop.is_set():
                    result = recognizer.recognize(CHECK_STROKE, strategy=Strategy.FAST)
                    assert result.label == "check"
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=recognize_loop) for _ in range(3)]
        for t in threads:
            t.start()
        for i in range(20):
            library.register_raw(f"line_{i}", [(0, 0), (100 + i, 5 * i)])
        stop.set()
        for t in threads:
            t.join()

        assert errors == []
        assert len(library) == 22

    def test_freeze_after_setup(self):
        library = TemplateLibrary.with_defaults()
        library.freeze()
        errors = []

        def try_register():
            try:
                library.register_raw("late", X_STROKE)
            except LibraryFrozenError as e:
                errors.append(e)

        threads = [threading.Thread(target=try_register) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(errors) == 5
        assert library.names == ["x", "check"]
