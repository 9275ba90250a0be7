"""
Beam search over sentence variants under a noisy channel model.

A noisy channel model ranks an intended sentence c for an observed
sentence s by combining a source score p(c) (fluency, from a language
model) with a channel score p(s|c) (how plausibly c's characters were
turned into s's). The search substitutes confusable characters at the
flagged positions one position at a time, keeping a bounded frontier of
the best partial hypotheses.

Each round expands only the ``beam_width`` best hypotheses of the
previous round, and every expanded hypothesis is also carried forward
unchanged, so leaving a position alone is always an option. This is not
guaranteed to find the global optimum when positions interact.
"""

from __future__ import annotations

import heapq
import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence as SequenceABC
from operator import attrgetter

from cscorrect.exceptions import InvalidPositionError
from cscorrect.models import SearchStats, Sentence, Sequence
from cscorrect.resources.confusion import ConfusionSet
from cscorrect.text import is_hanzi

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_BEAM_WIDTH = 150
MAX_RESULTS = 5


# =============================================================================
# SCORE COMBINATION
# =============================================================================


def multiply_scores(source_score: float, channel_score: float) -> float:
    """
    Combine scores as ``source * channel``.

    The source score is a log-probability while the channel score is a
    linear count ratio, so the product is not a log-probability. This is
    the default combination and the ranking depends on it.
    """
    return source_score * channel_score


def add_log_scores(source_score: float, channel_score: float) -> float:
    """
    Combine scores as ``source + log(channel)``.

    A zero channel score yields ``-inf``, which the search drops.
    """
    if channel_score <= 0.0:
        return -math.inf
    return source_score + math.log(channel_score)


SCORE_COMBINERS: dict[str, Callable[[float, float], float]] = {
    "product": multiply_scores,
    "log_sum": add_log_scores,
}


# =============================================================================
# MODEL INTERFACE
# =============================================================================


class NoisyChannelModel(ABC):
    """
    Abstract noisy channel model.

    Subclasses provide the two scores; the search itself is shared.

    Attributes:
        confusion_set: Source of candidate characters per position.
        beam_width: Hypotheses expanded per round.
        include_shapes: Also use similar-shape confusions.
        combine: Function merging (source, channel) into one score.
    """

    def __init__(
        self,
        confusion_set: ConfusionSet,
        beam_width: int = DEFAULT_BEAM_WIDTH,
        include_shapes: bool = False,
        combine: Callable[[float, float], float] = multiply_scores,
    ):
        self.confusion_set = confusion_set
        self.beam_width = beam_width
        self.include_shapes = include_shapes
        self.combine = combine

    @abstractmethod
    def source_score(self, candidate: Sentence) -> float:
        """Return p(c) of the noisy channel p(s|c) * p(c), as a log-probability."""
        pass

    @abstractmethod
    def channel_score(
        self,
        sentence: Sentence,
        location: int,
        candidate: str,
        candidates: tuple[str, ...],
    ) -> float:
        """
        Return p(s|c) of the noisy channel p(s|c) * p(c).

        Args:
            sentence: The original (observed) sentence.
            location: Position being substituted.
            candidate: Token proposed for that position.
            candidates: The whole candidate set for that position.
        """
        pass

    def candidates_at(self, character: str) -> tuple[str, ...]:
        """Candidate set for an observed character."""
        return self.confusion_set.candidates(character, include_shapes=self.include_shapes)

    def search(
        self,
        sentence: Sentence,
        locations: SequenceABC[int],
        max_results: int = MAX_RESULTS,
    ) -> list[Sentence]:
        """
        Return up to ``max_results`` corrected sentences, best first.

        Raises:
            InvalidPositionError: If any location is outside the sentence.
        """
        hypotheses = beam_search(self, sentence, locations, self.beam_width, max_results)
        return [hypothesis.sentence for hypothesis in hypotheses]


# =============================================================================
# BEAM SEARCH
# =============================================================================


def _best(frontier: list[Sequence], n: int) -> list[Sequence]:
    # Stable: equal scores keep insertion order
    return heapq.nlargest(n, frontier, key=attrgetter("score"))


def beam_search(
    model: NoisyChannelModel,
    sentence: Sentence,
    locations: SequenceABC[int],
    beam_width: int,
    max_results: int = MAX_RESULTS,
) -> list[Sequence]:
    """
    Search for the best corrections of ``sentence`` at ``locations``.

    Args:
        model: Supplies candidates and both scores.
        sentence: Observed sentence.
        locations: Positions to try, processed in the given order.
        beam_width: Hypotheses expanded per round.
        max_results: Maximum number of hypotheses returned.

    Returns:
        Up to ``max_results`` hypotheses sorted by descending score.

    Raises:
        InvalidPositionError: If any location is outside the sentence.

    Example:
        >>> results = beam_search(model, Sentence.from_text("我买苹果"), [], beam_width=10)
        >>> [str(r.sentence) for r in results]
        ['我买苹果']
    """
    results, _ = beam_search_with_stats(model, sentence, locations, beam_width, max_results)
    return results


def beam_search_with_stats(
    model: NoisyChannelModel,
    sentence: Sentence,
    locations: SequenceABC[int],
    beam_width: int,
    max_results: int = MAX_RESULTS,
) -> tuple[list[Sequence], SearchStats]:
    """
    Run beam_search and return statistics alongside the results.

    Returns:
        Tuple of (hypotheses, statistics).
    """
    if beam_width < 1:
        raise ValueError(f"beam_width must be >= 1, got {beam_width}")

    for location in locations:
        if not 0 <= location < sentence.size():
            raise InvalidPositionError(
                f"location {location} out of range for sentence of length {sentence.size()}"
            )

    stats = SearchStats(positions_total=len(locations))

    seed_score = model.source_score(sentence)
    if not math.isfinite(seed_score):
        logger.warning("Non-finite source score %r for %r; ranking it last", seed_score, str(sentence))
        seed_score = -math.inf
    frontier = [Sequence(sentence, seed_score)]

    for location in locations:
        character = sentence.get_token(location)
        if not character or not is_hanzi(character):
            stats.positions_skipped += 1
            continue

        candidates = model.candidates_at(character)
        next_frontier: list[Sequence] = []

        for top in _best(frontier, min(beam_width, len(frontier))):
            next_frontier.append(top)

            for candidate in candidates:
                candidate_sentence = top.sentence.set_token(location, candidate)
                score = model.combine(
                    model.source_score(candidate_sentence),
                    model.channel_score(sentence, location, candidate, candidates),
                )
                stats.hypotheses_generated += 1

                if not math.isfinite(score):
                    stats.hypotheses_dropped += 1
                    continue
                next_frontier.append(Sequence(candidate_sentence, score))

        frontier = next_frontier
        stats.rounds += 1
        logger.debug(
            "Location %d (%s): %d candidates, frontier size %d",
            location,
            character,
            len(candidates),
            len(frontier),
        )

    if stats.hypotheses_dropped:
        logger.warning(
            "Dropped %d hypotheses with non-finite scores for %r",
            stats.hypotheses_dropped,
            str(sentence),
        )

    return _best(frontier, min(max_results, len(frontier))), stats
