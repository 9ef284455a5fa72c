"""Multinomial naive-Bayes text classification.

Provides two classifiers built on one shared estimation core:

- :class:`SingleLabelClassifier` trains one label per sample and predicts
  the single most probable category.
- :class:`MultiLabelClassifier` trains a set of labels per sample and
  returns the categories selected by a prediction filter.

Both keep per-category token counts, apply Laplace (add-one) smoothing
with the global vocabulary size in the denominator, and normalize the
per-category joint log-likelihoods with the log-sum-exp trick so the
reported probabilities sum to 1.0.

Example::

    classifier = SingleLabelClassifier()
    classifier.train("amazing, awesome movie!!", "positive")
    classifier.train("terrible, boring plot", "negative")

    classifier.predict("what an awesome plot")   # "positive"
    classifier.save("model.json")
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Union

from .filters import PredictionFilter
from .models import Category, Probability, TrainingState
from .preprocessing import (
    DefaultTokenizer,
    FrequencyTable,
    TokenizerLike,
    Vocabulary,
    tokenize_with,
)
from .serialization import Document, export_state, import_state, load_state, save_state
from .stats import TrainingStats

logger = logging.getLogger(__name__)

FilterLike = Union[PredictionFilter, Callable[[Sequence[Probability]], list[Probability]]]


# ---------------------------------------------------------------------------
# Estimation core
# ---------------------------------------------------------------------------

def frequency_table_from_sample(tokenizer: TokenizerLike, sample: str) -> FrequencyTable:
    """Tokenize ``sample`` once and count its tokens."""
    return FrequencyTable(tokenize_with(tokenizer, sample))


def accumulate(
    state: TrainingState,
    vocabulary: Vocabulary,
    table: FrequencyTable,
    labels: Iterable[str],
) -> None:
    """Add one sample's token counts to every category in ``labels``.

    The document total is not touched here; callers count each sample once.
    """
    frequencies = table.frequencies()
    for label in labels:
        category = state.category(label)
        category.increment_doc_count()
        for token, frequency in frequencies.items():
            vocabulary.add(token)
            category.add_word_frequency(token, frequency)


def token_probability(token: str, category: Category, vocabulary: Vocabulary) -> float:
    """Laplace-smoothed probability of ``token`` within ``category``."""
    token_frequency = category.word_frequency.get(token, 0)
    return (token_frequency + 1) / (category.word_count + vocabulary.size())


def joint_log_likelihoods(
    state: TrainingState,
    vocabulary: Vocabulary,
    table: FrequencyTable,
) -> dict[str, float]:
    """Unnormalized ``log P(category) + log P(text | category)`` per category."""
    total_documents = state.total_documents
    # An empty vocabulary means no category has seen a token; only the prior applies
    frequencies = table.frequencies() if vocabulary.size() > 0 else {}

    scores: dict[str, float] = {}
    for name, category in state.categories().items():
        if category.doc_count <= 0:
            # Categories created lazily or imported with no documents carry no prior mass
            scores[name] = -math.inf
            continue
        score = math.log(category.doc_count / total_documents)
        for token, frequency in frequencies.items():
            score += frequency * math.log(token_probability(token, category, vocabulary))
        scores[name] = score
    return scores


def normalize(log_likelihoods: Mapping[str, float]) -> list[Probability]:
    """Turn joint log-likelihoods into posterior log probabilities.

    Uses log-sum-exp for numerical stability.
    """
    if not log_likelihoods:
        return []

    max_score = max(log_likelihoods.values())
    if max_score == -math.inf:
        return [Probability(name, -math.inf) for name in log_likelihoods]

    sum_exp = sum(math.exp(score - max_score) for score in log_likelihoods.values())
    log_sum_exp = max_score + math.log(sum_exp)

    return [Probability(name, score - log_sum_exp) for name, score in log_likelihoods.items()]


def compute_probabilities(
    tokenizer: TokenizerLike,
    state: TrainingState,
    vocabulary: Vocabulary,
    text: str,
) -> list[Probability]:
    """Posterior probabilities for ``text``, one per category in state order.

    Returns an empty list when nothing has been trained.
    """
    if state.total_documents <= 0 or not state.categories():
        return []
    table = frequency_table_from_sample(tokenizer, text)
    return normalize(joint_log_likelihoods(state, vocabulary, table))


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _apply_filter(prediction_filter: FilterLike, probabilities: list[Probability]) -> list[Probability]:
    if isinstance(prediction_filter, PredictionFilter):
        return list(prediction_filter.filter(probabilities))
    return list(prediction_filter(probabilities))


# ---------------------------------------------------------------------------
# Model: the state both front-ends hold
# ---------------------------------------------------------------------------

class NaiveBayesModel:
    """Tokenizer, training state and vocabulary, plus the operations on them.

    Each classifier front-end owns one model and forwards to it; the model
    knows nothing about labels-per-sample or prediction filters.

    Args:
        tokenizer: Object with ``tokenize(text)`` or a callable returning
            a token list. Defaults to :class:`DefaultTokenizer`.
    """

    def __init__(self, tokenizer: Optional[TokenizerLike] = None) -> None:
        self.tokenizer: TokenizerLike = tokenizer if tokenizer is not None else DefaultTokenizer()
        self.state = TrainingState()
        self.vocabulary = Vocabulary()

    @property
    def is_trained(self) -> bool:
        return self.state.total_documents > 0

    @property
    def categories(self) -> list[str]:
        return list(self.state.categories())

    def learn(self, sample: str, labels: Iterable[str]) -> None:
        """Count ``sample`` once and add its tokens to every label."""
        self.state.increment_total_documents()
        table = frequency_table_from_sample(self.tokenizer, sample)
        accumulate(self.state, self.vocabulary, table, labels)

    def probabilities(self, text: str) -> list[Probability]:
        return compute_probabilities(self.tokenizer, self.state, self.vocabulary, text)

    def reset(self) -> None:
        self.state = TrainingState()
        self.vocabulary = Vocabulary()

    def export(self) -> dict:
        return export_state(self.state, self.vocabulary)

    def import_state(self, document: Document) -> None:
        import_state(document, self.state, self.vocabulary)

    def save(self, path: str | Path) -> None:
        save_state(path, self.state, self.vocabulary)
        logger.debug("Saved model with %d documents to %s", self.state.total_documents, path)

    def load(self, path: str | Path) -> None:
        load_state(path, self.state, self.vocabulary)

    def training_stats(self) -> TrainingStats:
        return TrainingStats(self.state, self.vocabulary)

    def describe(self, owner: str) -> str:
        return (
            f"{owner}(documents={self.state.total_documents}, "
            f"categories={len(self.state.categories())}, "
            f"vocabulary={self.vocabulary.size()})"
        )


# ---------------------------------------------------------------------------
# Front-ends
# ---------------------------------------------------------------------------

class SingleLabelClassifier:
    """Naive-Bayes classifier assigning exactly one category per sample.

    Args:
        tokenizer: Object with ``tokenize(text)`` or a callable returning
            a token list. Defaults to :class:`DefaultTokenizer`.
    """

    def __init__(self, tokenizer: Optional[TokenizerLike] = None) -> None:
        self._model = NaiveBayesModel(tokenizer)

    @property
    def model(self) -> NaiveBayesModel:
        return self._model

    @property
    def tokenizer(self) -> TokenizerLike:
        return self._model.tokenizer

    @property
    def state(self) -> TrainingState:
        return self._model.state

    @property
    def vocabulary(self) -> Vocabulary:
        return self._model.vocabulary

    @property
    def is_trained(self) -> bool:
        """Whether any document has been trained or imported."""
        return self._model.is_trained

    @property
    def categories(self) -> list[str]:
        """Known category names in first-seen order."""
        return self._model.categories

    def train(self, sample: str, label: str) -> "SingleLabelClassifier":
        """Train on one sample labelled with one category."""
        self._model.learn(sample, [label])
        return self

    def train_on(
        self,
        dataset: Iterable[Any],
        sample_key: str = "sample",
        label_key: str = "label",
    ) -> "SingleLabelClassifier":
        """Train on a sequence of records.

        Missing or non-string samples and labels are treated as empty
        strings; malformed records never raise.
        """
        count = 0
        for record in dataset:
            if not isinstance(record, Mapping):
                record = {}
            self.train(_as_text(record.get(sample_key)), _as_text(record.get(label_key)))
            count += 1
        logger.debug("Trained on %d records", count)
        return self

    def probabilities(self, text: str) -> list[Probability]:
        """Posterior probability of every category for ``text``.

        Args:
            text: Raw text to score.

        Returns:
            One Probability per category, in first-seen category order,
            whose decimal values sum to 1.0. Empty when untrained.
        """
        return self._model.probabilities(text)

    def predict(self, text: str) -> Optional[str]:
        """Most probable category for ``text``, or ``None`` when untrained.

        Ties go to the category seen first during training.
        """
        chosen: Optional[str] = None
        best = -math.inf
        for probability in self.probabilities(text):
            if chosen is None or probability.log_probability > best:
                chosen = probability.category
                best = probability.log_probability
        return chosen

    def reset(self) -> "SingleLabelClassifier":
        """Forget all training. The tokenizer is kept."""
        self._model.reset()
        return self

    def export(self) -> dict:
        """Serializable snapshot of the training state (tokenizer excluded)."""
        return self._model.export()

    def import_state(self, document: Document) -> "SingleLabelClassifier":
        """Restore training state from an exported mapping or its JSON text.

        Raises:
            StateCorruptedError: If the document is unparseable or lacks
                ``totalDocuments`` or ``vocabulary``.
        """
        self._model.import_state(document)
        return self

    def save(self, path: str | Path) -> None:
        """Save the training state to a JSON file."""
        self._model.save(path)

    @classmethod
    def load(cls, path: str | Path, tokenizer: Optional[TokenizerLike] = None) -> "SingleLabelClassifier":
        """Load a classifier from a JSON file written by :meth:`save`.

        Args:
            path: Path to the saved model file.
            tokenizer: Tokenizer for the restored classifier. It must
                match the one used in training for sensible results.
        """
        classifier = cls(tokenizer=tokenizer)
        classifier._model.load(path)
        return classifier

    def training_stats(self) -> TrainingStats:
        return self._model.training_stats()

    def top_tokens(self, category: str, limit: int = 10) -> dict[str, int]:
        """Most frequent tokens in one category."""
        return self._model.training_stats().category_stats(category).top_tokens(limit)

    def most_common_tokens(self, limit: int = 10) -> dict[str, int]:
        """Most frequent tokens across all categories."""
        return self._model.training_stats().most_common_tokens(limit)

    def __repr__(self) -> str:
        return self._model.describe(self.__class__.__name__)


class MultiLabelClassifier:
    """Naive-Bayes classifier where each sample may carry several labels.

    Args:
        tokenizer: Object with ``tokenize(text)`` or a callable returning
            a token list. Defaults to :class:`DefaultTokenizer`.
    """

    def __init__(self, tokenizer: Optional[TokenizerLike] = None) -> None:
        self._model = NaiveBayesModel(tokenizer)

    @property
    def model(self) -> NaiveBayesModel:
        return self._model

    @property
    def tokenizer(self) -> TokenizerLike:
        return self._model.tokenizer

    @property
    def state(self) -> TrainingState:
        return self._model.state

    @property
    def vocabulary(self) -> Vocabulary:
        return self._model.vocabulary

    @property
    def is_trained(self) -> bool:
        return self._model.is_trained

    @property
    def categories(self) -> list[str]:
        return self._model.categories

    def train(self, sample: str, labels: Iterable[str]) -> "MultiLabelClassifier":
        """Train on one sample belonging to every category in ``labels``.

        The sample is counted once in the document total no matter how
        many labels it has, and is tokenized once.
        """
        if isinstance(labels, str):
            labels = [labels]
        self._model.learn(sample, labels)
        return self

    def train_on(
        self,
        dataset: Iterable[Any],
        sample_key: str = "sample",
        labels_key: str = "labels",
    ) -> "MultiLabelClassifier":
        """Train on a sequence of records carrying a list of labels each.

        Labels that are not a list, tuple or set count as no labels;
        non-string entries inside the list are dropped.
        """
        count = 0
        for record in dataset:
            if not isinstance(record, Mapping):
                record = {}
            raw_labels = record.get(labels_key)
            if not isinstance(raw_labels, (list, tuple, set, frozenset)):
                raw_labels = []
            labels = [label for label in raw_labels if isinstance(label, str)]
            self.train(_as_text(record.get(sample_key)), labels)
            count += 1
        logger.debug("Trained on %d multi-label records", count)
        return self

    def probabilities(self, text: str) -> list[Probability]:
        """Posterior probability of every category, before any filtering."""
        return self._model.probabilities(text)

    def predict(self, text: str, prediction_filter: FilterLike) -> list[Probability]:
        """Probabilities for ``text`` passed through ``prediction_filter``."""
        return _apply_filter(prediction_filter, self.probabilities(text))

    def reset(self) -> "MultiLabelClassifier":
        self._model.reset()
        return self

    def export(self) -> dict:
        return self._model.export()

    def import_state(self, document: Document) -> "MultiLabelClassifier":
        """Restore training state; see :meth:`SingleLabelClassifier.import_state`."""
        self._model.import_state(document)
        return self

    def save(self, path: str | Path) -> None:
        self._model.save(path)

    @classmethod
    def load(cls, path: str | Path, tokenizer: Optional[TokenizerLike] = None) -> "MultiLabelClassifier":
        classifier = cls(tokenizer=tokenizer)
        classifier._model.load(path)
        return classifier

    def training_stats(self) -> TrainingStats:
        return self._model.training_stats()

    def top_tokens(self, category: str, limit: int = 10) -> dict[str, int]:
        return self._model.training_stats().category_stats(category).top_tokens(limit)

    def most_common_tokens(self, limit: int = 10) -> dict[str, int]:
        return self._model.training_stats().most_common_tokens(limit)

    def __repr__(self) -> str:
        return self._model.describe(self.__class__.__name__)
