"""Export and import of classifier training state.

The exported document is a JSON object with these fields::

    {
        "categories": ["spam", "ham"],
        "totalDocuments": 12,
        "vocabulary": ["cheap", "pills", ...],
        "vocabularySize": 250,
        "categoriesState": {
            "spam": {"docCount": 5, "wordCount": 80, "wordFrequencyCount": {...}},
            ...
        }
    }

Field names are part of the compatibility surface and must not change.

Import runs three decoders in order. ``totalDocuments`` and ``vocabulary``
are mandatory and raise :class:`~textbayes.exceptions.StateCorruptedError`
when missing or mis-shaped. ``categoriesState`` is best effort: malformed
entries are skipped. A failure in a later decoder leaves the fields set by
earlier decoders in place.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

from .exceptions import StateCorruptedError
from .models import TrainingState
from .preprocessing import Vocabulary

logger = logging.getLogger(__name__)

Document = Union[Mapping, str, bytes, bytearray]


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def export_state(state: TrainingState, vocabulary: Vocabulary) -> dict:
    """Build the serializable document for a state and its vocabulary."""
    categories = state.categories()
    return {
        "categories": list(categories),
        "totalDocuments": state.total_documents,
        "vocabulary": vocabulary.tokens(),
        "vocabularySize": vocabulary.size(),
        "categoriesState": {
            name: category.to_dict() for name, category in categories.items()
        },
    }


def dumps_state(state: TrainingState, vocabulary: Vocabulary, indent: int | None = None) -> str:
    """Render the exported document as JSON text."""
    return json.dumps(export_state(state, vocabulary), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------

def _is_numeric(value: Any) -> bool:
    """Numbers and numeric strings count; booleans do not."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return math.isfinite(float(value))
        except ValueError:
            return False
    return False


def _to_int(value: Any) -> int:
    return int(float(value)) if isinstance(value, str) else int(value)


def parse_document(document: Document) -> Mapping:
    """Turn raw JSON text (or an already decoded mapping) into a mapping.

    Raises:
        StateCorruptedError: If the text is not valid JSON or does not
            decode to an object.
    """
    if isinstance(document, (str, bytes, bytearray)):
        try:
            document = json.loads(document)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StateCorruptedError(f"Classifier state is not valid JSON: {exc}") from exc

    if not isinstance(document, Mapping):
        raise StateCorruptedError(
            f"Classifier state must be a JSON object, got {type(document).__name__}"
        )
    return document


def decode_total_documents(data: Mapping, state: TrainingState) -> None:
    value = data.get("totalDocuments")
    if value is None or not _is_numeric(value):
        raise StateCorruptedError("Classifier state is missing a numeric 'totalDocuments'.")
    state.set_total_documents(_to_int(value))


def decode_vocabulary(data: Mapping, vocabulary: Vocabulary) -> None:
    tokens = data.get("vocabulary")
    if not isinstance(tokens, (list, tuple)):
        raise StateCorruptedError("Classifier state is missing a 'vocabulary' list.")

    skipped = 0
    for token in tokens:
        if isinstance(token, str):
            vocabulary.add(token)
        else:
            skipped += 1
    if skipped:
        logger.debug("Skipped %d non-string vocabulary entries", skipped)


def _extract_count(body: Mapping, key: str) -> int:
    value = body.get(key)
    return _to_int(value) if _is_numeric(value) else 0


def _extract_frequencies(body: Mapping) -> dict[str, int]:
    raw = body.get("wordFrequencyCount")
    if not isinstance(raw, Mapping):
        return {}
    return {str(token): _to_int(count) for token, count in raw.items() if _is_numeric(count)}


def decode_categories(data: Mapping, state: TrainingState) -> None:
    categories = data.get("categoriesState")
    if not isinstance(categories, Mapping):
        return

    for name, body in categories.items():
        if not isinstance(name, str) or not isinstance(body, Mapping):
            logger.debug("Skipping malformed category entry %r", name)
            continue
        category = state.category(name)
        category.set_doc_count(_extract_count(body, "docCount"))
        category.set_word_count(_extract_count(body, "wordCount"))
        category.set_word_frequency(_extract_frequencies(body))


def import_state(document: Document, state: TrainingState, vocabulary: Vocabulary) -> None:
    """Decode an exported document into ``state`` and ``vocabulary``.

    Args:
        document: The exported mapping, or its JSON text.
        state: Training state to write into.
        vocabulary: Vocabulary to add tokens to.

    Raises:
        StateCorruptedError: If the payload cannot be parsed or a mandatory
            field is missing.
    """
    data = parse_document(document)
    decode_total_documents(data, state)
    decode_vocabulary(data, vocabulary)
    decode_categories(data, state)
    logger.debug(
        "Imported state: %d documents, %d categories, %d tokens",
        state.total_documents,
        len(state.categories()),
        vocabulary.size(),
    )


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def save_state(path: str | Path, state: TrainingState, vocabulary: Vocabulary) -> None:
    """Write the exported document to ``path`` as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(export_state(state, vocabulary), f, indent=2, ensure_ascii=False)


def load_state(path: str | Path, state: TrainingState, vocabulary: Vocabulary) -> None:
    """Read a JSON document from ``path`` and import it."""
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    import_state(content, state, vocabulary)
