"""
Concrete noisy channel models.

Both take the source score from a language model and estimate the
channel score from dictionary counts relative to the whole candidate
set at the position:

- UnigramChannelModel: how frequent the candidate is among its confusables
- BigramContextChannelModel: how well the candidate fits its neighbours,
  relative to how well all the confusables fit them
"""

from __future__ import annotations

from collections.abc import Callable

from cscorrect.models import Sentence
from cscorrect.resources.confusion import ConfusionSet
from cscorrect.resources.dictionary import Dictionary
from cscorrect.resources.language_model import LanguageModel
from cscorrect.search.beam import (
    DEFAULT_BEAM_WIDTH,
    NoisyChannelModel,
    multiply_scores,
)
from cscorrect.search.statistics import (
    SMOOTHING,
    count_or_zero,
    neighbours,
    total_character_count,
    total_prefix_suffix_bigram_count,
)


class _LanguageModelSource(NoisyChannelModel):
    """Source score delegated to a LanguageModel; channel counts from a Dictionary."""

    def __init__(
        self,
        confusion_set: ConfusionSet,
        language_model: LanguageModel,
        dictionary: Dictionary,
        beam_width: int = DEFAULT_BEAM_WIDTH,
        include_shapes: bool = False,
        combine: Callable[[float, float], float] = multiply_scores,
    ):
        super().__init__(
            confusion_set,
            beam_width=beam_width,
            include_shapes=include_shapes,
            combine=combine,
        )
        self.language_model = language_model
        self.dictionary = dictionary

    def source_score(self, candidate: Sentence) -> float:
        return self.language_model.score(candidate)


class UnigramChannelModel(_LanguageModelSource):
    """
    Channel score from candidate frequency.

        channel(c) = (count(c) + 1) / (1 + sum of counts over the candidate set)

    Example:
        >>> model = UnigramChannelModel(confusions, lm, CountDictionary({"买": 3, "卖": 1}))
        >>> model.channel_score(Sentence.from_text("我买"), 1, "买", ("卖", "买"))
        0.8
    """

    def channel_score(
        self,
        sentence: Sentence,
        location: int,
        candidate: str,
        candidates: tuple[str, ...],
    ) -> float:
        total = total_character_count(candidates, self.dictionary)
        return (count_or_zero(candidate, self.dictionary) + SMOOTHING) / total


class BigramContextChannelModel(_LanguageModelSource):
    """
    Channel score from how well the candidate fits its neighbours.

        channel(c) = (prefix(c) + 1) * (suffix(c) + 1) / bigram mass of the candidate set

    where prefix(c) is the count of the previous token followed by c and
    suffix(c) the count of c followed by the next token.
    """

    def channel_score(
        self,
        sentence: Sentence,
        location: int,
        candidate: str,
        candidates: tuple[str, ...],
    ) -> float:
        previous, following = neighbours(sentence, location)
        fit = (count_or_zero(previous + candidate, self.dictionary) + SMOOTHING) * (
            count_or_zero(candidate + following, self.dictionary) + SMOOTHING
        )
        return fit / total_prefix_suffix_bigram_count(
            sentence, location, candidates, self.dictionary
        )


CHANNEL_MODEL_CLASSES: dict[str, type[_LanguageModelSource]] = {
    "unigram": UnigramChannelModel,
    "bigram_context": BigramContextChannelModel,
}
