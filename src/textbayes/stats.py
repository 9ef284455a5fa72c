"""Descriptive statistics over a classifier's training data.

Read-only views: nothing here changes the training state, except that
asking for the stats of an unknown category creates it, as
:meth:`TrainingState.category` always does.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass

from .models import Category, TrainingState
from .preprocessing import Vocabulary


def _top(frequencies: dict[str, int], limit: int) -> dict[str, int]:
    """Highest counts first; equal counts keep insertion order."""
    if limit <= 0:
        return {}
    ranked = sorted(frequencies.items(), key=lambda item: item[1], reverse=True)
    return dict(ranked[:limit])


@dataclass(frozen=True)
class CategoryStats:
    """Statistics for a single category.

    Attributes:
        name: Category name.
        category: The category record being described.
        total_documents: Document total across all categories.
    """

    name: str
    category: Category
    total_documents: int

    @property
    def doc_count(self) -> int:
        return self.category.doc_count

    @property
    def word_count(self) -> int:
        return self.category.word_count

    @property
    def percentage(self) -> float:
        """Share of all documents in this category (0-100)."""
        if self.total_documents == 0:
            return 0.0
        return self.category.doc_count / self.total_documents * 100.0

    @property
    def average_doc_length(self) -> float:
        """Mean number of tokens per document."""
        if self.category.doc_count == 0:
            return 0.0
        return self.category.word_count / self.category.doc_count

    @property
    def unique_token_count(self) -> int:
        return len(self.category.word_frequency)

    def top_tokens(self, limit: int = 10) -> dict[str, int]:
        """Most frequent tokens, sorted by frequency descending."""
        return _top(self.category.word_frequency, limit)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "doc_count": self.doc_count,
            "word_count": self.word_count,
            "percentage": round(self.percentage, 4),
            "average_doc_length": round(self.average_doc_length, 4),
            "unique_tokens": self.unique_token_count,
        }


class TrainingStats:
    """Global and per-category statistics for a training state.

    Args:
        state: The training state to describe.
        vocabulary: The vocabulary collected alongside it.
    """

    def __init__(self, state: TrainingState, vocabulary: Vocabulary) -> None:
        self._state = state
        self._vocabulary = vocabulary

    @property
    def total_documents(self) -> int:
        return self._state.total_documents

    @property
    def vocabulary_size(self) -> int:
        return self._vocabulary.size()

    @property
    def num_categories(self) -> int:
        return len(self._state.categories())

    def class_balance_ratio(self) -> float:
        """Largest over smallest category by document count.

        1.0 is perfectly balanced. Returns 0.0 without categories and
        ``inf`` when some category has no documents.
        """
        categories = self._state.categories()
        if not categories:
            return 0.0

        doc_counts = [category.doc_count for category in categories.values()]
        smallest = min(doc_counts)
        if smallest == 0:
            return math.inf
        return max(doc_counts) / smallest

    def is_balanced(self, threshold: float = 2.0) -> bool:
        """Whether the balance ratio is within ``threshold``."""
        ratio = self.class_balance_ratio()
        if ratio == 0.0:
            return True
        return ratio <= threshold

    def most_common_tokens(self, limit: int = 10) -> dict[str, int]:
        """Token counts summed over every category, highest first."""
        aggregated: Counter[str] = Counter()
        for category in self._state.categories().values():
            aggregated.update(category.word_frequency)
        return _top(dict(aggregated), limit)

    def category_stats(self, name: str) -> CategoryStats:
        return CategoryStats(name, self._state.category(name), self.total_documents)

    def all_category_stats(self) -> list[CategoryStats]:
        total = self.total_documents
        return [
            CategoryStats(name, category, total)
            for name, category in self._state.categories().items()
        ]

    def to_dict(self) -> dict:
        ratio = self.class_balance_ratio()
        return {
            "total_documents": self.total_documents,
            "vocabulary_size": self.vocabulary_size,
            "num_categories": self.num_categories,
            "class_balance_ratio": None if math.isinf(ratio) else round(ratio, 4),
            "is_balanced": self.is_balanced(),
            "categories": [stats.to_dict() for stats in self.all_category_stats()],
            "most_common_tokens": self.most_common_tokens(),
        }

    def to_text(self) -> str:
        """Human-readable multi-line report."""
        lines = [
            "Training Statistics",
            "=" * 50,
            f"Total Documents: {self.total_documents}",
            f"Vocabulary Size: {self.vocabulary_size}",
            f"Number of Categories: {self.num_categories}",
            f"Class Balance Ratio: {self.class_balance_ratio():.2f}",
            f"Is Balanced: {'Yes' if self.is_balanced() else 'No'}",
            "",
        ]

        if self.num_categories > 0:
            lines.append("Categories:")
            lines.append("-" * 50)
            for stats in self.all_category_stats():
                lines.append(f"  {stats.name} ({stats.percentage:.1f}%)")
                lines.append(f"    Documents: {stats.doc_count}")
                lines.append(f"    Average Length: {stats.average_doc_length:.2f} words")
                lines.append("")

        most_common = self.most_common_tokens(10)
        if most_common:
            lines.append("Most Common Tokens:")
            lines.append("-" * 50)
            for rank, (token, frequency) in enumerate(most_common.items(), 1):
                lines.append(f"  {rank}. {token}: {frequency}")

        return "\n".join(lines)
