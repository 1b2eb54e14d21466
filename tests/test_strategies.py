"""Tests for the golden-section and Protractor distance strategies."""

import math

import numpy as np
import pytest

from stroke_engine.config import RecognizerConfig
from stroke_engine.defaults import CHECK_STROKE, X_STROKE
from stroke_engine.pipeline import normalize, vectorize
from stroke_engine.strategies import (
    DistanceStrategy,
    GoldenSectionStrategy,
    ProtractorStrategy,
    Strategy,
    distance_at_angle,
    distance_at_best_angle,
    get_strategy,
    optimal_cosine_distance,
    path_distance,
    register_strategy,
)
from stroke_engine.templates import Template


def rotate_about_origin(points, degrees):
    theta = math.radians(degrees)
    rot = np.array([[math.cos(theta), -math.sin(theta)], [math.sin(theta), math.cos(theta)]])
    return points @ rot.T


class TestPathDistance:
    def test_identical(self):
        pts = normalize(X_STROKE).points
        assert path_distance(pts, pts) == 0.0

    def test_offset(self):
        pts = np.zeros((4, 2))
        assert path_distance(pts, pts + [3.0, 4.0]) == pytest.approx(5.0)


class TestGoldenSection:
    def test_recovers_rotation(self):
        config = RecognizerConfig()
        template = normalize(CHECK_STROKE).points
        rotated = rotate_about_origin(template, 20.0)
        unaligned = distance_at_angle(rotated, template, 0.0)
        best = distance_at_best_angle(
            rotated, template, -config.angle_range, config.angle_range, config.angle_precision
        )
        assert best < unaligned / 5

    def test_zero_range(self):
        pts = normalize(X_STROKE).points
        assert distance_at_best_angle(pts, pts, 0.0, 0.0, 0.01) == pytest.approx(0.0, abs=1e-9)

    def test_self_distance_small(self):
        config = RecognizerConfig()
        template = Template.from_points("x", X_STROKE)
        d = GoldenSectionStrategy().distance(normalize(X_STROKE), template, config)
        assert d < 0.03 * config.half_diagonal

    def test_zero_range_override(self):
        config = RecognizerConfig()
        template = Template.from_points("check", CHECK_STROKE)
        candidate = normalize(X_STROKE)
        d = GoldenSectionStrategy(angle_range_deg=0.0).distance(candidate, template, config)
        assert d == pytest.approx(path_distance(candidate.points, template.points))

    def test_score(self):
        config = RecognizerConfig()
        strategy = GoldenSectionStrategy()
        assert strategy.score(0.0, config) == 1.0
        assert strategy.score(config.half_diagonal / 2, config) == pytest.approx(0.5)
        assert strategy.score(config.half_diagonal * 3, config) == 0.0


class TestProtractor:
    def test_identical_vectors(self):
        vec = normalize(X_STROKE).vector
        assert optimal_cosine_distance(vec, vec) == pytest.approx(0.0, abs=1e-6)

    @pytest.mark.parametrize("degrees", [-80, -30, 10, 60])
    def test_rotation_is_factored_out(self, degrees):
        pts = normalize(CHECK_STROKE).points
        v1 = vectorize(pts)
        v2 = vectorize(rotate_about_origin(pts, degrees))
        assert optimal_cosine_distance(v1, v2) == pytest.approx(0.0, abs=1e-6)

    def test_different_shapes(self):
        d = optimal_cosine_distance(normalize(X_STROKE).vector, normalize(CHECK_STROKE).vector)
        assert 0.0 < d <= math.pi

    def test_orthogonal(self):
        v1 = np.array([1.0, 0.0, 0.0, 0.0])
        v2 = np.array([0.0, 0.0, 1.0, 0.0])
        assert optimal_cosine_distance(v1, v2) == pytest.approx(math.pi / 2)

    def test_score(self):
        config = RecognizerConfig()
        strategy = ProtractorStrategy()
        assert strategy.score(0.0, config) == 1.0
        assert strategy.score(math.pi, config) == 0.0


class TestStrategyLookup:
    def test_enum(self):
        assert isinstance(get_strategy(Strategy.ACCURATE), GoldenSectionStrategy)
        assert isinstance(get_strategy(Strategy.FAST), ProtractorStrategy)

    def test_names_and_aliases(self):
        assert isinstance(get_strategy("fast"), ProtractorStrategy)
        assert isinstance(get_strategy("Protractor"), ProtractorStrategy)
        assert isinstance(get_strategy("golden_section"), GoldenSectionStrategy)

    def test_instance_passthrough(self):
        strategy = GoldenSectionStrategy(angle_range_deg=10.0)
        assert get_strategy(strategy) is strategy

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown strategy"):
            get_strategy("dtw")

    def test_register_custom(self):
        class EndpointDistance(DistanceStrategy):
            name = "endpoints"

            def distance(self, candidate, template, config):
                return float(np.linalg.norm(candidate.points[-1] - template.points[-1]))

            def score(self, distance, config):
                return max(0.0, 1.0 - distance / config.square_size)

        register_strategy("endpoints", EndpointDistance())
        assert get_strategy("endpoints").name == "endpoints"
