"""Tokenization, token counting and vocabulary tracking.

The classifier only needs a tokenizer to turn raw text into an ordered
list of tokens. Anything with a ``tokenize(text)`` method, or a plain
callable taking the text, can be plugged in. :class:`DefaultTokenizer`
lowercases the input and keeps maximal runs of Unicode letters.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Callable, Iterable, Protocol, Union, runtime_checkable


@runtime_checkable
class Tokenizer(Protocol):
    """Anything that splits text into an ordered sequence of tokens."""

    def tokenize(self, text: str) -> list[str]:
        ...


TokenizerLike = Union[Tokenizer, Callable[[str], list[str]]]

# Letters only: \w without digits and underscore.
_ALPHA_RE = re.compile(r"[^\W\d_]+")


class DefaultTokenizer:
    """Lowercase the text, then extract runs of alphabetic characters.

    Digits and punctuation are discarded::

        >>> DefaultTokenizer().tokenize("Hello, World 42!")
        ['hello', 'world']
    """

    def tokenize(self, text: str) -> list[str]:
        if not text:
            return []
        return _ALPHA_RE.findall(text.lower())

    def __call__(self, text: str) -> list[str]:
        return self.tokenize(text)

    def __repr__(self) -> str:
        return "DefaultTokenizer()"


def tokenize_with(tokenizer: TokenizerLike, text: str) -> list[str]:
    """Run ``tokenizer`` on ``text`` whichever shape it has."""
    if isinstance(tokenizer, Tokenizer):
        return list(tokenizer.tokenize(text))
    return list(tokenizer(text))


class FrequencyTable:
    """Token counts for a single tokenized sample."""

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        self._frequencies: Counter[str] = Counter()
        self.add_tokens(tokens)

    def add(self, token: str, count: int = 1) -> None:
        self._frequencies[token] += count

    def add_tokens(self, tokens: Iterable[str]) -> None:
        for token in tokens:
            self.add(token)

    def frequency(self, token: str) -> int:
        return self._frequencies.get(token, 0)

    def frequencies(self) -> dict[str, int]:
        """Token counts in first-seen order."""
        return dict(self._frequencies)

    def total_count(self) -> int:
        return sum(self._frequencies.values())

    def __len__(self) -> int:
        return len(self._frequencies)

    def __iter__(self):
        return iter(self._frequencies.items())


class Vocabulary:
    """Set of distinct tokens seen during training.

    Enumeration follows insertion order so exported state is reproducible.
    """

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        self._tokens: dict[str, None] = {}
        for token in tokens:
            self.add(token)

    def add(self, token: str) -> None:
        self._tokens.setdefault(token, None)

    def contains(self, token: str) -> bool:
        return token in self._tokens

    def size(self) -> int:
        return len(self._tokens)

    def tokens(self) -> list[str]:
        return list(self._tokens)

    def reset(self) -> None:
        self._tokens = {}

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self):
        return iter(self._tokens)
