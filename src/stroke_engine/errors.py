"""Exception types raised by the stroke recognition engine."""

from __future__ import annotations


class StrokeEngineError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(StrokeEngineError, ValueError):
    """Stroke cannot be normalized (too few points, zero length, non-finite)."""


class ConfigError(StrokeEngineError, ValueError):
    """Recognizer configuration is out of range."""


class PipelineMismatchError(StrokeEngineError):
    """Template was normalized with different constants than its library."""


class LibraryFrozenError(StrokeEngineError):
    """Attempt to mutate a library after freeze()."""


class TemplateNotFoundError(StrokeEngineError, KeyError):
    """No template registered under the requested name."""
