"""Data models for naive-Bayes training state and predictions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Probability:
    """A category paired with its (natural) log probability."""

    category: str
    log_probability: float

    @property
    def decimal(self) -> float:
        """The probability in the 0-1 range."""
        return math.exp(self.log_probability)

    @classmethod
    def from_decimal(cls, category: str, decimal: float) -> "Probability":
        """Build from a 0-1 probability. Zero maps to ``-inf``."""
        if decimal == 0:
            return cls(category, -math.inf)
        return cls(category, math.log(decimal))

    def to_dict(self) -> dict:
        """JSON-safe view; a non-finite log probability becomes ``None``."""
        log_probability = self.log_probability if math.isfinite(self.log_probability) else None
        return {
            "category": self.category,
            "log_probability": log_probability,
            "probability": self.decimal,
        }


@dataclass
class Category:
    """Per-label aggregate of training statistics.

    ``word_count`` always equals the sum of ``word_frequency`` after
    mutations made through :meth:`add_word_frequency`. The ``set_*``
    methods write the fields independently and are meant for restoring
    exported state.
    """

    _doc_count: int = 0
    _word_count: int = 0
    _word_frequency: dict[str, int] = field(default_factory=dict)

    @property
    def doc_count(self) -> int:
        return self._doc_count

    @property
    def word_count(self) -> int:
        return self._word_count

    @property
    def word_frequency(self) -> dict[str, int]:
        return self._word_frequency

    def set_doc_count(self, doc_count: int) -> "Category":
        self._doc_count = doc_count
        return self

    def set_word_count(self, word_count: int) -> "Category":
        self._word_count = word_count
        return self

    def set_word_frequency(self, word_frequency: dict[str, int]) -> "Category":
        self._word_frequency = dict(word_frequency)
        return self

    def increment_doc_count(self) -> None:
        self._doc_count += 1

    def add_word_frequency(self, token: str, count: int) -> None:
        """Add ``count`` occurrences of ``token`` to this category."""
        self._word_frequency[token] = self._word_frequency.get(token, 0) + count
        self._word_count += count

    def reset(self) -> None:
        self._doc_count = 0
        self._word_count = 0
        self._word_frequency = {}

    def to_dict(self) -> dict:
        return {
            "docCount": self._doc_count,
            "wordCount": self._word_count,
            "wordFrequencyCount": dict(self._word_frequency),
        }


@dataclass
class TrainingState:
    """Categories keyed by name (first-seen order) plus the document total."""

    _categories: dict[str, Category] = field(default_factory=dict)
    _total_documents: int = 0

    def category(self, name: str) -> Category:
        """Return the category called ``name``, creating it if needed."""
        if name not in self._categories:
            self._categories[name] = Category()
        return self._categories[name]

    def categories(self) -> dict[str, Category]:
        return self._categories

    @property
    def total_documents(self) -> int:
        return self._total_documents

    def set_total_documents(self, total_documents: int) -> "TrainingState":
        self._total_documents = total_documents
        return self

    def increment_total_documents(self) -> None:
        self._total_documents += 1

    def reset(self) -> None:
        self._categories = {}
        self._total_documents = 0
