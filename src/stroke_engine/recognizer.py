"""Unistroke recognizer.

Usage:
    recognizer = Recognizer()  # built-in "x" / "check" vocabulary
    result = recognizer.recognize([(87, 142), (89, 145), ...])
    if result.label == "x" and result.score > 0.85:
        reject()

    # Protractor is faster and fully rotation invariant:
    result = recognizer.recognize(points, strategy=Strategy.FAST)
"""

from __future__ import annotations

import logging
import time
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from stroke_engine.config import RecognizerConfig
from stroke_engine.pipeline import normalize
from stroke_engine.profiler import PipelineProfiler
from stroke_engine.strategies import DistanceStrategy, Strategy, get_strategy
from stroke_engine.templates import TemplateLibrary

logger = logging.getLogger("stroke_engine.recognizer")

NO_MATCH = "No match."

StrategyLike = Union[Strategy, str, DistanceStrategy]


@dataclass(frozen=True)
class Match:
    """Score of the candidate against a single template."""
    name: str
    distance: float
    score: float


@dataclass(frozen=True)
class Result:
    """Best match for a stroke."""
    label: str
    score: float  # 0–1, higher = better match
    elapsed_ms: float
    strategy: str = Strategy.ACCURATE.value
    matches: tuple[Match, ...] = ()

    @property
    def matched(self) -> bool:
        return self.label != NO_MATCH


class Recognizer:
    """Classifies strokes against a template library.

    The library is injected; a recognizer never mutates it. Recognition
    is read-only and can run from several threads against the same
    library.
    """

    def __init__(
        self,
        library: Optional[TemplateLibrary] = None,
        profiler: Optional[PipelineProfiler] = None,
    ):
        self._library = library if library is not None else TemplateLibrary.with_defaults()
        self._profiler = profiler

    @property
    def library(self) -> TemplateLibrary:
        return self._library

    @property
    def config(self) -> RecognizerConfig:
        return self._library.config

    def recognize(
        self,
        points: Iterable,
        strategy: StrategyLike = Strategy.ACCURATE,
        include_scores: bool = False,
    ) -> Result:
        """Return the best-matching template for a raw stroke.

        Ties go to the earliest-registered template. An empty library
        yields a ``NO_MATCH`` result with score 0.

        Raises:
            InvalidInputError: fewer than 2 points or zero path length.
        """
        impl = get_strategy(strategy)
        t0 = time.perf_counter()
        with self._stage("total"):
            matches = self._score(points, impl)

            best: Optional[Match] = None
            for m in matches:
                if best is None or m.distance < best.distance:
                    best = m

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        if best is None:
            result = Result(NO_MATCH, 0.0, elapsed_ms, impl.name)
        else:
            result = Result(
                label=best.name,
                score=best.score,
                elapsed_ms=elapsed_ms,
                strategy=impl.name,
                matches=tuple(matches) if include_scores else (),
            )

        logger.debug(
            "Recognized %s (score=%.3f, strategy=%s, %.2f ms)",
            result.label, result.score, result.strategy, result.elapsed_ms,
        )
        return result

    def score_all(
        self, points: Iterable, strategy: StrategyLike = Strategy.ACCURATE
    ) -> list[Match]:
        """Score a stroke against every template, in registration order."""
        return self._score(points, get_strategy(strategy))

    def _score(self, points: Iterable, impl: DistanceStrategy) -> list[Match]:
        config = self.config
        with self._stage("normalization"):
            candidate = normalize(points, config)

        with self._stage("matching"):
            matches = []
            for template in self._library.snapshot():
                d = impl.distance(candidate, template, config)
                matches.append(Match(template.name, d, impl.score(d, config)))
        return matches

    def _stage(self, name: str):
        if self._profiler is None:
            return nullcontext()
        return self._profiler.stage(name)
