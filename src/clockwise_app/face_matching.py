from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

DEFAULT_MATCH_THRESHOLD = 0.6


@dataclass(frozen=True)
class FaceMatch:
    similarity: float
    threshold: float
    passed: bool

    @property
    def failure_message(self) -> str | None:
        if self.passed:
            return None
        return (
            f"Similarity too low: {self.similarity * 100:.1f}% "
            f"(required: {self.threshold * 100:g}%)"
        )


def euclidean_distance(first: Sequence[float], second: Sequence[float]) -> float:
    if len(first) != len(second):
        raise ValueError(f"Descriptor length mismatch: {len(first)} != {len(second)}")
    return math.dist(first, second)


def match_face(
    captured: Sequence[float],
    enrolled: Sequence[float] | None,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> FaceMatch:
    if not enrolled:
        raise LookupError("No enrolled face found for this user")
    similarity = 1 - euclidean_distance(captured, enrolled)
    return FaceMatch(similarity=similarity, threshold=threshold, passed=similarity >= threshold)
