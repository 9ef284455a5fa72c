"""Selection strategies applied to multi-label predictions.

A filter receives the full list of :class:`~textbayes.models.Probability`
objects for a text and returns the subset to report. Filters are plain
objects exposing ``filter(probabilities)``; they are also callable so a
lambda can stand in for one.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from .models import Probability


@runtime_checkable
class PredictionFilter(Protocol):
    """Strategy deciding which categories a multi-label prediction keeps."""

    def filter(self, probabilities: Sequence[Probability]) -> list[Probability]:
        ...


class _BaseFilter:
    def filter(self, probabilities: Sequence[Probability]) -> list[Probability]:
        raise NotImplementedError

    def __call__(self, probabilities: Sequence[Probability]) -> list[Probability]:
        return self.filter(probabilities)


class ThresholdFilter(_BaseFilter):
    """Keep categories whose decimal probability is at least ``threshold``.

    Args:
        threshold: Minimum probability in the 0-1 range.
    """

    def __init__(self, threshold: float = 0.3) -> None:
        self.threshold = threshold

    def filter(self, probabilities: Sequence[Probability]) -> list[Probability]:
        return [p for p in probabilities if p.decimal >= self.threshold]

    def __repr__(self) -> str:
        return f"ThresholdFilter(threshold={self.threshold})"


class TopKFilter(_BaseFilter):
    """Keep the ``k`` most probable categories, highest first.

    Equal log probabilities keep their relative input order.

    Args:
        k: Number of categories to keep.

    Raises:
        ValueError: If ``k`` is negative.
    """

    def __init__(self, k: int = 3) -> None:
        if k < 0:
            raise ValueError("k must be zero or positive")
        self.k = k

    def filter(self, probabilities: Sequence[Probability]) -> list[Probability]:
        if not probabilities or self.k == 0:
            return []
        ranked = sorted(probabilities, key=lambda p: p.log_probability, reverse=True)
        return ranked[: self.k]

    def __repr__(self) -> str:
        return f"TopKFilter(k={self.k})"


class AboveMeanFilter(_BaseFilter):
    """Keep categories strictly above the mean log probability."""

    def filter(self, probabilities: Sequence[Probability]) -> list[Probability]:
        if not probabilities:
            return []
        mean = sum(p.log_probability for p in probabilities) / len(probabilities)
        return [p for p in probabilities if p.log_probability > mean]

    def __repr__(self) -> str:
        return "AboveMeanFilter()"
