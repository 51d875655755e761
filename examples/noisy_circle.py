"""Witness complex of a noisy circle.

Landmarks are a handful of points picked from the sample, every sample point
is a witness. Increasing alpha^2 fills in edges, then triangles.

Usage:
    python examples/noisy_circle.py
"""

from __future__ import annotations

import logging

import numpy as np

from witness_complex import EuclideanWitnessComplex, print_complex_summary


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    rng = np.random.default_rng(0)

    angles = rng.uniform(0.0, 2.0 * np.pi, size=500)
    points = np.stack([np.cos(angles), np.sin(angles)], axis=1)
    points += rng.normal(scale=0.05, size=points.shape)
    landmarks = points[rng.choice(len(points), size=20, replace=False)]

    wc = EuclideanWitnessComplex(landmarks, points)
    for alpha2 in (0.0, 0.05, 0.2):
        print(f"\nalpha^2 = {alpha2}")
        sink = wc.create_simplex_tree(alpha2, limit_dimension=2)
        print_complex_summary(sink)


if __name__ == "__main__":
    main()
