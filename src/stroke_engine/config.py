"""Recognizer configuration.

All constants of the normalization pipeline live in one frozen dataclass.
Templates remember the config they were built with, and a library only
accepts templates whose config equals its own, so candidates and
templates are always produced by the identical pipeline.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from stroke_engine.errors import ConfigError


@dataclass(frozen=True)
class RecognizerConfig:
    num_points: int = 64
    square_size: float = 250.0
    origin: tuple[float, float] = (0.0, 0.0)
    angle_range_deg: float = 45.0  # golden-section search bound, +/-
    angle_precision_deg: float = 2.0  # stop once the bracket is this narrow

    def __post_init__(self):
        if int(self.num_points) != self.num_points or self.num_points < 2:
            raise ConfigError(f"num_points must be an integer >= 2, got {self.num_points!r}")
        if not self.square_size > 0:
            raise ConfigError(f"square_size must be positive, got {self.square_size!r}")
        if not self.angle_precision_deg > 0:
            raise ConfigError(
                f"angle_precision_deg must be positive, got {self.angle_precision_deg!r}"
            )
        if not self.angle_range_deg >= 0:
            raise ConfigError(
                f"angle_range_deg must be non-negative, got {self.angle_range_deg!r}"
            )
        if len(self.origin) != 2:
            raise ConfigError(f"origin must be an (x, y) pair, got {self.origin!r}")
        # Normalize types so equality does not depend on how values were spelled
        object.__setattr__(self, "num_points", int(self.num_points))
        object.__setattr__(self, "square_size", float(self.square_size))
        object.__setattr__(self, "origin", (float(self.origin[0]), float(self.origin[1])))
        object.__setattr__(self, "angle_range_deg", float(self.angle_range_deg))
        object.__setattr__(self, "angle_precision_deg", float(self.angle_precision_deg))

    @property
    def half_diagonal(self) -> float:
        return 0.5 * math.sqrt(2.0 * self.square_size * self.square_size)

    @property
    def angle_range(self) -> float:
        return math.radians(self.angle_range_deg)

    @property
    def angle_precision(self) -> float:
        return math.radians(self.angle_precision_deg)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["origin"] = list(self.origin)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> RecognizerConfig:
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        if "origin" in kwargs:
            kwargs["origin"] = tuple(kwargs["origin"])
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str | Path) -> RecognizerConfig:
        """Load a config from YAML, either flat or under a `recognizer:` key."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping at top level")
        section = data.get("recognizer", data)
        if not isinstance(section, dict):
            raise ConfigError(f"{path}: 'recognizer' must be a mapping")
        return cls.from_dict(section)
