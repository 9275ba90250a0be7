"""
Candidate-count statistics for channel likelihoods.

Both totals aggregate over the whole candidate set, not just the
candidate being scored, and start from 1.0 so they are never zero.
"""

from __future__ import annotations

from collections.abc import Iterable

from cscorrect.models import Sentence
from cscorrect.resources.dictionary import Dictionary

SMOOTHING = 1.0


def count_or_zero(token: str, dictionary: Dictionary) -> int:
    """Count of ``token``, or 0 when the dictionary does not contain it."""
    if token in dictionary:
        return dictionary.get_count(token)
    return 0


def neighbours(sentence: Sentence, index: int) -> tuple[str, str]:
    """Tokens before and after ``index``; "" at the sentence edges."""
    previous = sentence.get_token(index - 1) if index > 0 else ""
    following = sentence.get_token(index + 1) if index < sentence.size() - 1 else ""
    return previous, following


def total_character_count(candidates: Iterable[str], dictionary: Dictionary) -> float:
    """
    Total unigram count of a candidate set, plus one.

    Args:
        candidates: Candidate tokens for one position.
        dictionary: Token counts.

    Returns:
        ``1.0 + sum(count(c))`` over candidates present in the dictionary.

    Example:
        >>> total_character_count(("买", "卖"), CountDictionary({"买": 3}))
        4.0
    """
    total = SMOOTHING
    for candidate in candidates:
        total += count_or_zero(candidate, dictionary)
    return total


def total_prefix_suffix_bigram_count(
    sentence: Sentence,
    index: int,
    candidates: Iterable[str],
    dictionary: Dictionary,
) -> float:
    """
    Product of the prefix-bigram and suffix-bigram totals of a candidate set.

    For each candidate ``c`` the prefix bigram is ``sentence[index - 1] + c``
    and the suffix bigram is ``c + sentence[index + 1]``. At the first and
    last positions the missing neighbour is the empty string, so the bigram
    degenerates to ``c`` itself. Each family is summed separately, starting
    from 1.0, and the two sums are multiplied.

    Args:
        sentence: Sentence providing the neighbours.
        index: Position being corrected.
        candidates: Candidate tokens for that position.
        dictionary: Token counts.

    Returns:
        ``(1.0 + sum prefix counts) * (1.0 + sum suffix counts)``, always >= 1.0.
    """
    previous, following = neighbours(sentence, index)

    total_prefix = SMOOTHING
    total_suffix = SMOOTHING
    for candidate in candidates:
        total_prefix += count_or_zero(previous + candidate, dictionary)
        total_suffix += count_or_zero(candidate + following, dictionary)

    return total_prefix * total_suffix
