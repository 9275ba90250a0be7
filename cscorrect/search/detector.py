"""
Heuristic error-location detection.

Two independent heuristics flag positions worth correcting:
- Bigram scan: a character is suspect when one of the two bigrams it
  takes part in is missing from the dictionary
- Single-character words: after word segmentation, runs of one-character
  words often hide a multi-character word containing an error

Neither is a classifier. They produce candidate positions only, and the
beam search decides whether substituting anything there pays off.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from cscorrect.models import Sentence
from cscorrect.resources.dictionary import Dictionary
from cscorrect.text import is_hanzi

logger = logging.getLogger(__name__)


def generate_bigrams(tokens: Sequence[str]) -> list[str]:
    """
    Split a token sequence into overlapping two-token windows.

    Example:
        >>> generate_bigrams(["我", "买", "苹", "果"])
        ['我买', '买苹', '苹果']
    """
    return [tokens[i] + tokens[i + 1] for i in range(len(tokens) - 1)]


def error_locations_by_bigrams(dictionary: Dictionary, sentence: Sentence) -> list[int]:
    """
    Flag characters whose surrounding bigrams are not in the dictionary.

    For each pair of adjacent bigrams ``(i, i + 1)``, if either is absent
    the token at ``i + 1`` (shared by both bigrams) is flagged, provided it
    is a Han character. The first and last tokens are never flagged.

    Args:
        dictionary: Token counts containing bigram entries.
        sentence: Sentence to scan.

    Returns:
        Flagged indices in ascending order; empty when every bigram is known.

    Example:
        >>> d = CountDictionary({"我买": 1, "买苹": 1, "苹果": 1})
        >>> error_locations_by_bigrams(d, Sentence.from_text("我买苹果"))
        []
    """
    bigrams = generate_bigrams(sentence.tokens)
    locations = []

    for index in range(len(bigrams) - 1):
        current_bigram = bigrams[index]
        next_bigram = bigrams[index + 1]

        if current_bigram in dictionary and next_bigram in dictionary:
            continue

        # Non-Han characters are never corrected
        if is_hanzi(sentence.get_token(index + 1)):
            locations.append(index + 1)

    logger.debug("Bigram scan flagged %s in %r", locations, str(sentence))
    return locations


def locations_of_single_words(words: Iterable[str]) -> list[int]:
    """
    Sentence indices of one-character Han words.

    Args:
        words: Segmented words, in order, covering the sentence.

    Returns:
        Character offsets of every single-character Han word.

    Example:
        >>> locations_of_single_words(["我", "买", "苹果", "。"])
        [0, 1]
    """
    locations = []
    index = 0
    for word in words:
        if len(word) == 1 and is_hanzi(word):
            locations.append(index)
        index += len(word)
    return locations


def max_continue_single_words_length(locations: Sequence[int]) -> int:
    """
    Length of the longest run of consecutive indices.

    Example:
        >>> max_continue_single_words_length([2, 3, 4, 7])
        3
        >>> max_continue_single_words_length([2, 5, 9])
        1
    """
    if len(locations) < 2:
        return len(locations)

    longest = 0
    run = 1
    for i in range(1, len(locations)):
        if locations[i] - locations[i - 1] == 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1

    return max(longest, run)


def continuous_single_word_locations(locations: Sequence[int], min_run: int = 2) -> list[int]:
    """
    Keep only indices that belong to runs of at least ``min_run``.

    Isolated single-character words are usually genuine words; runs of
    them are more often a segmentation artefact around a misspelling.

    Example:
        >>> continuous_single_word_locations([0, 2, 3, 4, 7], min_run=2)
        [2, 3, 4]
    """
    kept: list[int] = []
    run: list[int] = []
    for location in locations:
        if run and location - run[-1] != 1:
            if len(run) >= min_run:
                kept.extend(run)
            run = []
        run.append(location)
    if len(run) >= min_run:
        kept.extend(run)
    return kept
