"""
Language-model scorers used as the "source" model.

The search only needs ``score(sentence) -> float`` (natural-log
probability). NGramLanguageModel reads existing n-gram counts from a
CountDictionary; it does not estimate or store a model of its own.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from cscorrect.models import Sentence
from cscorrect.resources.dictionary import CountDictionary

logger = logging.getLogger(__name__)


@runtime_checkable
class LanguageModel(Protocol):
    """Scores a whole sentence with a log-probability."""

    def score(self, sentence: Sentence) -> float: ...


class NGramLanguageModel:
    """
    Character n-gram scorer with add-one smoothing.

    For each token the longest history (up to ``order - 1`` preceding
    tokens) present in the dictionary is used:

        log P(w | h) = log((count(h + w) + 1) / (count(h) + V))

    where V is the unigram vocabulary size. With no known history the
    unigram estimate ``(count(w) + 1) / (N + V)`` is used, N being the
    total unigram count.

    Example:
        >>> counts = CountDictionary({"我": 10, "买": 5, "我买": 4})
        >>> lm = NGramLanguageModel(counts, order=2)
        >>> lm.score(Sentence.from_text("我买")) < 0
        True
    """

    def __init__(self, dictionary: CountDictionary, order: int = 3):
        """
        Initialize the scorer.

        Args:
            dictionary: Counts for unigrams and the higher-order n-grams.
            order: Maximum n-gram order to consult.
        """
        if order < 1:
            raise ValueError(f"order must be >= 1, got {order}")
        self.dictionary = dictionary
        self.order = order
        self._vocabulary = max(dictionary.unigram_vocabulary_size, 1)
        self._total = dictionary.total_unigram_count
        logger.debug(
            "N-gram scorer: order=%d, V=%d, N=%d", order, self._vocabulary, self._total
        )

    def _count(self, token: str) -> int:
        return self.dictionary.get_count(token) if token in self.dictionary else 0

    def token_log_prob(self, history: tuple[str, ...], token: str) -> float:
        """Log-probability of ``token`` after ``history`` (oldest first)."""
        for start in range(max(0, len(history) - self.order + 1), len(history)):
            context = "".join(history[start:])
            if context in self.dictionary:
                return math.log(
                    (self._count(context + token) + 1.0)
                    / (self.dictionary.get_count(context) + self._vocabulary)
                )
        return math.log((self._count(token) + 1.0) / (self._total + self._vocabulary))

    def score(self, sentence: Sentence) -> float:
        """Sum of token log-probabilities over the sentence."""
        tokens = sentence.tokens
        return sum(
            self.token_log_prob(tokens[:index], token) for index, token in enumerate(tokens)
        )


class CallableLanguageModel:
    """Adapts a plain ``str -> float`` scoring function, e.g. a KenLM model's score."""

    def __init__(self, score_text: Callable[[str], float]):
        self.score_text = score_text

    def score(self, sentence: Sentence) -> float:
        return float(self.score_text(str(sentence)))
