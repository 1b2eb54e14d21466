#!/usr/bin/env python3
"""StrokeEngine Benchmark — recognition latency and accuracy per strategy.

Feeds jittered, rotated and rescaled copies of the built-in strokes
through both strategies. No input device required.

Usage:
    python examples/benchmark.py
    python examples/benchmark.py --iterations 5000 --jitter 3
"""

from __future__ import annotations

import argparse
import gc
import math
import sys
import time
from pathlib import Path

import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stroke_engine.defaults import DEFAULT_STROKES
from stroke_engine.recognizer import Recognizer
from stroke_engine.strategies import Strategy


def generate_strokes(n: int, jitter: float, max_degrees: float, seed: int = 0) -> list[tuple[str, np.ndarray]]:
    """Distorted copies of the default strokes, labelled with their source."""
    rng = np.random.default_rng(seed)
    names = list(DEFAULT_STROKES)
    strokes = []

    for i in range(n):
        name = names[i % len(names)]
        pts = np.array(DEFAULT_STROKES[name], dtype=np.float64)
        c = pts.mean(axis=0)
        theta = math.radians(rng.uniform(-max_degrees, max_degrees))
        rot = np.array([[math.cos(theta), -math.sin(theta)], [math.sin(theta), math.cos(theta)]])
        pts = (pts - c) @ rot.T * rng.uniform(0.3, 3.0) + rng.uniform(-500, 500, size=2)
        pts += rng.normal(0.0, jitter, size=pts.shape)
        strokes.append((name, pts))

    return strokes


def benchmark_strategy(recognizer: Recognizer, strokes: list, strategy: Strategy) -> dict:
    # Warmup
    for _, pts in strokes[:10]:
        recognizer.recognize(pts, strategy=strategy)

    gc.collect()
    times = []
    correct = 0
    scores = []

    for name, pts in strokes:
        t0 = time.perf_counter()
        result = recognizer.recognize(pts, strategy=strategy)
        times.append(time.perf_counter() - t0)
        correct += result.label == name
        scores.append(result.score)

    times_ms = np.array(times) * 1000
    return {
        "mean_ms": float(np.mean(times_ms)),
        "p95_ms": float(np.percentile(times_ms, 95)),
        "max_ms": float(np.max(times_ms)),
        "throughput": 1000.0 / float(np.mean(times_ms)),
        "accuracy": correct / len(strokes),
        "mean_score": float(np.mean(scores)),
    }


def print_table(title: str, rows: list[tuple[str, str]]):
    """Print a formatted table."""
    max_key = max(len(r[0]) for r in rows)
    max_val = max(len(r[1]) for r in rows)
    width = max_key + max_val + 7

    print()
    print(f"  ╭{'─' * width}╮")
    print(f"  │ {title:<{width-2}} │")
    print(f"  ├{'─' * width}┤")
    for key, val in rows:
        print(f"  │ {key:<{max_key}}   {val:>{max_val}} │")
    print(f"  ╰{'─' * width}╯")


def main():
    parser = argparse.ArgumentParser(description="StrokeEngine Benchmark")
    parser.add_argument("-n", "--iterations", type=int, default=1000, help="Number of strokes")
    parser.add_argument("--jitter", type=float, default=2.0, help="Gaussian noise in pixels")
    parser.add_argument("--rotation", type=float, default=30.0, help="Max rotation in degrees")
    args = parser.parse_args()

    recognizer = Recognizer()
    print(f"\n  Generating {args.iterations} distorted strokes...")
    strokes = generate_strokes(args.iterations, args.jitter, args.rotation)

    for strategy in (Strategy.ACCURATE, Strategy.FAST):
        print(f"  Running {strategy.value} strategy...")
        r = benchmark_strategy(recognizer, strokes, strategy)
        print_table(f"Strategy: {strategy.value}", [
            ("Mean latency", f"{r['mean_ms']:.3f} ms"),
            ("P95 latency", f"{r['p95_ms']:.3f} ms"),
            ("Max latency", f"{r['max_ms']:.3f} ms"),
            ("Throughput", f"{r['throughput']:.0f} strokes/s"),
            ("Accuracy", f"{r['accuracy']:.1%}"),
            ("Mean score", f"{r['mean_score']:.3f}"),
        ])
    print()


if __name__ == "__main__":
    main()
