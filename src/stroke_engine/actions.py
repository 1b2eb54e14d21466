"""Map recognition results to application actions.

The recognizer only reports the best label and its score. Which labels
mean something, and how confident a match must be, is decided here by
the host application:

    mapper = ActionMapper.with_defaults()  # x -> reject, check -> accept
    mapper.on("reject", discard_edit)
    mapper.on("accept", apply_edit)

    if mapper.dispatch(recognizer.recognize(points)) is None:
        interpret_as_drawing(points)

Mappings can be loaded from YAML:

    mappings:
      - trigger: x
        action: reject
        min_confidence: 0.85
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import yaml

from stroke_engine.recognizer import Result

logger = logging.getLogger("stroke_engine.actions")

DEFAULT_MIN_CONFIDENCE = 0.85


@dataclass
class GestureMapping:
    """Maps a gesture label to a named action."""
    trigger: str  # gesture label
    action: str
    min_confidence: float = DEFAULT_MIN_CONFIDENCE
    enabled: bool = True

    def to_dict(self) -> dict:
        return {
            "trigger": self.trigger,
            "action": self.action,
            "min_confidence": self.min_confidence,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GestureMapping:
        return cls(
            trigger=data["trigger"],
            action=data["action"],
            min_confidence=data.get("min_confidence", DEFAULT_MIN_CONFIDENCE),
            enabled=data.get("enabled", True),
        )


class ActionMapper:
    """Dispatches recognition results to callbacks bound to action names."""

    def __init__(self):
        self._mappings: dict[str, GestureMapping] = {}
        self._handlers: dict[str, list[Callable[[Result], None]]] = {}

    def add_mapping(self, mapping: GestureMapping):
        self._mappings[mapping.trigger] = mapping

    def on(self, action: str, callback: Callable[[Result], None]):
        """Call ``callback(result)`` whenever ``action`` fires."""
        self._handlers.setdefault(action, []).append(callback)

    def resolve(self, result: Result) -> Optional[str]:
        """Action name for a result, or None if it should fall through."""
        mapping = self._mappings.get(result.label)
        if not mapping or not mapping.enabled:
            return None
        if result.score <= mapping.min_confidence:
            return None
        return mapping.action

    def dispatch(self, result: Result) -> Optional[str]:
        """Fire the action mapped to ``result`` and return its name.

        Returns None when the label is unmapped, disabled or not confident
        enough; the caller should then try a different interpretation.
        """
        action = self.resolve(result)
        if action is None:
            return None

        logger.info("Gesture %s (score=%.3f) -> %s", result.label, result.score, action)
        for callback in self._handlers.get(action, []):
            callback(result)
        return action

    @classmethod
    def with_defaults(cls) -> ActionMapper:
        """"x" rejects and "check" accepts, both above 0.85."""
        mapper = cls()
        mapper.add_mapping(GestureMapping(trigger="x", action="reject"))
        mapper.add_mapping(GestureMapping(trigger="check", action="accept"))
        return mapper

    @classmethod
    def from_yaml(cls, path: str | Path) -> ActionMapper:
        with open(path) as f:
            config = yaml.safe_load(f) or {}

        mapper = cls()
        for entry in config.get("mappings", []):
            mapper.add_mapping(GestureMapping.from_dict(entry))
        return mapper

    def to_yaml(self, path: str | Path):
        entries = [m.to_dict() for m in self._mappings.values()]
        with open(path, "w") as f:
            yaml.dump({"mappings": entries}, f, default_flow_style=False, sort_keys=False)

    @property
    def triggers(self) -> list[str]:
        return list(self._mappings.keys())
