"""Tests for training statistics."""

from __future__ import annotations

import math

import pytest

from textbayes.classifier import SingleLabelClassifier
from textbayes.stats import CategoryStats, TrainingStats


@pytest.fixture
def spam_classifier() -> SingleLabelClassifier:
    classifier = SingleLabelClassifier()
    classifier.train("cheap pills cheap offer", "spam")
    classifier.train("cheap watches", "spam")
    classifier.train("cheap loans now", "spam")
    classifier.train("meeting at noon", "ham")
    return classifier


class TestTrainingStats:

    def test_totals(self, spam_classifier) -> None:
        stats = spam_classifier.training_stats()
        assert stats.total_documents == 4
        assert stats.num_categories == 2
        assert stats.vocabulary_size == 9

    def test_class_balance_ratio(self, spam_classifier) -> None:
        stats = spam_classifier.training_stats()
        assert stats.class_balance_ratio() == pytest.approx(3.0)
        assert not stats.is_balanced()
        assert stats.is_balanced(threshold=3.0)

    def test_balanced_dataset(self, animal_classifier) -> None:
        stats = animal_classifier.training_stats()
        assert stats.class_balance_ratio() == pytest.approx(2.0)
        assert stats.is_balanced()

    def test_empty_classifier(self) -> None:
        stats = SingleLabelClassifier().training_stats()
        assert stats.total_documents == 0
        assert stats.class_balance_ratio() == 0.0
        assert stats.is_balanced()
        assert stats.all_category_stats() == []
        assert stats.most_common_tokens() == {}

    def test_zero_doc_category_gives_infinite_ratio(self, animal_classifier) -> None:
        animal_classifier.state.category("plant")
        stats = animal_classifier.training_stats()
        assert math.isinf(stats.class_balance_ratio())
        assert stats.to_dict()["class_balance_ratio"] is None

    def test_most_common_tokens(self, spam_classifier) -> None:
        common = spam_classifier.training_stats().most_common_tokens(2)
        assert list(common.items())[0] == ("cheap", 4)
        assert len(common) == 2

    def test_most_common_tokens_sums_across_categories(self) -> None:
        classifier = SingleLabelClassifier()
        classifier.train("shared alpha", "a")
        classifier.train("shared beta", "b")
        assert classifier.most_common_tokens(1) == {"shared": 2}

    def test_non_positive_limit(self, spam_classifier) -> None:
        assert spam_classifier.most_common_tokens(0) == {}

    def test_to_dict(self, spam_classifier) -> None:
        data = spam_classifier.training_stats().to_dict()
        assert data["total_documents"] == 4
        assert data["num_categories"] == 2
        assert data["class_balance_ratio"] == 3.0
        assert data["is_balanced"] is False
        assert [c["name"] for c in data["categories"]] == ["spam", "ham"]

    def test_to_text(self, spam_classifier) -> None:
        text = spam_classifier.training_stats().to_text()
        assert "Training Statistics" in text
        assert "Total Documents: 4" in text
        assert "Vocabulary Size: 9" in text
        assert "Class Balance Ratio: 3.00" in text
        assert "Is Balanced: No" in text
        assert "spam (75.0%)" in text
        assert "1. cheap: 4" in text

    def test_stats_do_not_mutate_state(self, spam_classifier) -> None:
        before = spam_classifier.export()
        spam_classifier.training_stats().to_dict()
        spam_classifier.training_stats().to_text()
        assert spam_classifier.export() == before


class TestCategoryStats:

    def test_values(self, spam_classifier) -> None:
        stats = spam_classifier.training_stats().category_stats("spam")
        assert isinstance(stats, CategoryStats)
        assert stats.doc_count == 3
        assert stats.word_count == 9
        assert stats.percentage == pytest.approx(75.0)
        assert stats.average_doc_length == pytest.approx(3.0)
        assert stats.unique_token_count == 6

    def test_top_tokens(self, spam_classifier) -> None:
        top = spam_classifier.top_tokens("spam", 2)
        assert top == {"cheap": 4, "pills": 1}

    def test_unknown_category_is_empty(self, spam_classifier) -> None:
        stats = spam_classifier.training_stats().category_stats("unknown")
        assert stats.doc_count == 0
        assert stats.average_doc_length == 0.0
        assert stats.top_tokens() == {}

    def test_zero_total_documents(self) -> None:
        stats = TrainingStats(SingleLabelClassifier().state, SingleLabelClassifier().vocabulary)
        assert stats.category_stats("x").percentage == 0.0

    def test_to_dict(self, spam_classifier) -> None:
        data = spam_classifier.training_stats().category_stats("ham").to_dict()
        assert data == {
            "name": "ham",
            "doc_count": 1,
            "word_count": 3,
            "percentage": 25.0,
            "average_doc_length": 3.0,
            "unique_tokens": 3,
        }
