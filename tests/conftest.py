"""Shared test fixtures for textbayes tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from textbayes.classifier import MultiLabelClassifier, SingleLabelClassifier

REVIEW = "amazing, awesome movie!! Yeah!! Oh boy."


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handlers and levels set on the textbayes logger by a test."""
    logger = logging.getLogger("textbayes")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


@pytest.fixture
def review_text() -> str:
    """A short review whose tokens are all distinct."""
    return REVIEW


@pytest.fixture
def sentiment_classifier() -> SingleLabelClassifier:
    """Single-label classifier trained on three tiny reviews."""
    classifier = SingleLabelClassifier()
    classifier.train(REVIEW, "positive")
    classifier.train("Sweet, this is incredibly, amazing, perfect, great!!", "positive")
    classifier.train("terrible, shitty thing. Damn. Sucks!!", "negative")
    return classifier


@pytest.fixture
def animal_classifier() -> SingleLabelClassifier:
    """animal: "cat", "dog"; vehicle: "car"."""
    classifier = SingleLabelClassifier()
    classifier.train("cat", "animal")
    classifier.train("dog", "animal")
    classifier.train("car", "vehicle")
    return classifier


@pytest.fixture
def topic_classifier() -> MultiLabelClassifier:
    """Multi-label classifier over overlapping news topics."""
    classifier = MultiLabelClassifier()
    classifier.train("laptop computer", ["electronics", "computers"])
    classifier.train("phone mobile", ["electronics", "mobile"])
    classifier.train("tablet device", ["electronics", "mobile"])
    return classifier


@pytest.fixture
def dataset_file(tmp_path: Path) -> Path:
    """JSON-lines training file with single labels."""
    file = tmp_path / "reviews.jsonl"
    file.write_text(
        '{"sample": "amazing awesome movie", "label": "positive"}\n'
        '{"sample": "great perfect acting", "label": "positive"}\n'
        '{"sample": "terrible boring plot", "label": "negative"}\n',
        encoding="utf-8",
    )
    return file
