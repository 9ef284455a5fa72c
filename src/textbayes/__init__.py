"""textbayes -- multinomial naive-Bayes text classification."""

__version__ = "0.1.0"

from .classifier import (
    MultiLabelClassifier,
    NaiveBayesModel,
    SingleLabelClassifier,
    compute_probabilities,
    joint_log_likelihoods,
    normalize,
    token_probability,
)
from .exceptions import StateCorruptedError, TextBayesError
from .filters import AboveMeanFilter, PredictionFilter, ThresholdFilter, TopKFilter
from .models import Category, Probability, TrainingState
from .preprocessing import DefaultTokenizer, FrequencyTable, Tokenizer, Vocabulary
from .serialization import dumps_state, export_state, import_state
from .stats import CategoryStats, TrainingStats

__all__ = [
    "__version__",
    # Classifiers
    "SingleLabelClassifier",
    "MultiLabelClassifier",
    "NaiveBayesModel",
    "compute_probabilities",
    "joint_log_likelihoods",
    "normalize",
    "token_probability",
    # Data model
    "Category",
    "Probability",
    "TrainingState",
    "FrequencyTable",
    "Vocabulary",
    # Tokenization
    "DefaultTokenizer",
    "Tokenizer",
    # Selection strategies
    "PredictionFilter",
    "ThresholdFilter",
    "TopKFilter",
    "AboveMeanFilter",
    # Serialization
    "export_state",
    "import_state",
    "dumps_state",
    # Statistics
    "CategoryStats",
    "TrainingStats",
    # Errors
    "TextBayesError",
    "StateCorruptedError",
]
