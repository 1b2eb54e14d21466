"""StrokeEngine - Unistroke gesture recognition ($1 / Protractor)."""

__version__ = "0.1.0"

from stroke_engine.config import RecognizerConfig
from stroke_engine.errors import (
    StrokeEngineError,
    InvalidInputError,
    ConfigError,
    PipelineMismatchError,
    LibraryFrozenError,
    TemplateNotFoundError,
)
from stroke_engine.geometry import Point, Rect
from stroke_engine.pipeline import NormalizedStroke, normalize
from stroke_engine.templates import Template, TemplateLibrary
from stroke_engine.strategies import (
    Strategy,
    DistanceStrategy,
    GoldenSectionStrategy,
    ProtractorStrategy,
    get_strategy,
    register_strategy,
)
from stroke_engine.recognizer import Recognizer, Result, Match, NO_MATCH
from stroke_engine.profiler import PipelineProfiler
from stroke_engine.actions import ActionMapper, GestureMapping
