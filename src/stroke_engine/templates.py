"""Gesture templates and the library that holds them."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

import numpy as np

from stroke_engine.config import RecognizerConfig
from stroke_engine.defaults import DEFAULT_STROKES
from stroke_engine.errors import (
    LibraryFrozenError,
    PipelineMismatchError,
    TemplateNotFoundError,
)
from stroke_engine.pipeline import normalize

logger = logging.getLogger("stroke_engine.templates")


@dataclass(frozen=True, eq=False)
class Template:
    """A named gesture class, stored in normalized form.

    ``points`` is (num_points, 2) and ``vector`` is the unit-length
    flattening of those points. Both arrays are read-only.
    """
    name: str
    points: np.ndarray
    vector: np.ndarray
    config: RecognizerConfig

    @classmethod
    def from_points(
        cls,
        name: str,
        raw_points: Iterable,
        config: Optional[RecognizerConfig] = None,
    ) -> Template:
        """Normalize a reference stroke into a template.

        Raises:
            InvalidInputError: fewer than 2 points or zero path length.
        """
        config = config or RecognizerConfig()
        stroke = normalize(raw_points, config)
        return cls(name=name, points=stroke.points, vector=stroke.vector, config=config)


class TemplateLibrary:
    """Ordered collection of templates.

    Iteration follows registration order, which is also the tie-break
    order during recognition. Mutations and snapshots share one lock, so
    a recognizer always scores against a consistent set. Call
    ``freeze()`` after setup to make the library read-only.
    """

    def __init__(self, config: Optional[RecognizerConfig] = None):
        self._config = config or RecognizerConfig()
        self._templates: list[Template] = []
        self._lock = threading.RLock()
        self._frozen = False

    @property
    def config(self) -> RecognizerConfig:
        return self._config

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self):
        """Disallow further register/remove calls."""
        with self._lock:
            self._frozen = True
        logger.info("Template library frozen with %d templates", len(self._templates))

    def register(self, template: Template) -> Template:
        """Append a template built with this library's config."""
        if template.config != self._config:
            raise PipelineMismatchError(
                f"template '{template.name}' was normalized with {template.config}, "
                f"library uses {self._config}"
            )
        with self._lock:
            self._check_mutable()
            if any(t.name == template.name for t in self._templates):
                logger.warning("Template '%s' already registered, adding another example", template.name)
            self._templates.append(template)
        logger.info("Registered template: %s", template.name)
        return template

    def register_raw(self, name: str, raw_points: Iterable) -> Template:
        """Normalize ``raw_points`` with this library's config and register the result."""
        return self.register(Template.from_points(name, raw_points, self._config))

    def remove(self, name: str) -> Template:
        """Remove the earliest-registered template called ``name``."""
        with self._lock:
            self._check_mutable()
            for i, template in enumerate(self._templates):
                if template.name == name:
                    del self._templates[i]
                    break
            else:
                raise TemplateNotFoundError(name)
        logger.info("Removed template: %s", name)
        return template

    def get(self, name: str) -> Template:
        with self._lock:
            for template in self._templates:
                if template.name == name:
                    return template
        raise TemplateNotFoundError(name)

    def snapshot(self) -> tuple[Template, ...]:
        """Immutable view of the templates in registration order."""
        with self._lock:
            return tuple(self._templates)

    @property
    def names(self) -> list[str]:
        return [t.name for t in self.snapshot()]

    def _check_mutable(self):
        if self._frozen:
            raise LibraryFrozenError("template library is frozen")

    @classmethod
    def with_defaults(cls, config: Optional[RecognizerConfig] = None) -> TemplateLibrary:
        """Create a library with the built-in "x" and "check" templates."""
        library = cls(config)
        for name, stroke in DEFAULT_STROKES.items():
            library.register_raw(name, stroke)
        return library

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[Template]:
        return iter(self.snapshot())

    def __contains__(self, name: object) -> bool:
        return any(t.name == name for t in self.snapshot())
