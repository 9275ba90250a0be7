"""
Correction pipeline orchestrator.

Wires the stages together for whole sentences:
1. Error location (bigram scan and/or single-character-word runs)
2. Beam search over confusable substitutions at those locations
3. Result assembly (best text, ranked candidates, statistics)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cscorrect.config import CorrectionConfig
from cscorrect.models import CorrectionResult, Sentence
from cscorrect.resources.confusion import ConfusionSet
from cscorrect.resources.dictionary import CountDictionary, Dictionary
from cscorrect.resources.language_model import LanguageModel, NGramLanguageModel
from cscorrect.search.beam import SCORE_COMBINERS, NoisyChannelModel, beam_search_with_stats
from cscorrect.search.channel_models import CHANNEL_MODEL_CLASSES
from cscorrect.search.detector import (
    continuous_single_word_locations,
    error_locations_by_bigrams,
    locations_of_single_words,
)

logger = logging.getLogger(__name__)

Segmenter = Callable[[str], list[str]]


def jieba_segmenter(text: str) -> list[str]:
    """Segment text into words with jieba (loaded on first use)."""
    import jieba

    return jieba.lcut(text)


# =============================================================================
# CORRECTOR
# =============================================================================


@dataclass
class Corrector:
    """
    Main spelling-correction pipeline.

    The dictionary, confusion set and language model are read-only, so one
    Corrector can serve many sentences, including from several threads.

    Attributes:
        dictionary: Token counts for detection and channel statistics.
        confusion_set: Confusable characters.
        language_model: Source-model scorer.
        config: Search and detection options.
        segmenter: Word segmenter for single-word detection (jieba by default).
        model: Noisy channel model; built from config when not given. Its
            beam_width is the one the search uses.

    Example:
        >>> corrector = create_corrector("counts.tsv", "confusion.yaml")
        >>> result = corrector.correct("我卖苹果")
        >>> result.error_locations
        [1]
    """

    dictionary: Dictionary
    confusion_set: ConfusionSet
    language_model: LanguageModel
    config: CorrectionConfig = field(default_factory=CorrectionConfig)
    segmenter: Segmenter = field(default=jieba_segmenter)
    model: NoisyChannelModel | None = field(default=None)

    def __post_init__(self) -> None:
        """Build the channel model from config if not provided."""
        if self.model is None:
            model_class = CHANNEL_MODEL_CLASSES[self.config.channel_model]
            self.model = model_class(
                self.confusion_set,
                self.language_model,
                self.dictionary,
                beam_width=self.config.beam_width,
                include_shapes=self.config.use_shape_confusions,
                combine=SCORE_COMBINERS[self.config.score_combination],
            )

    def locate_errors(self, sentence: Sentence) -> list[int]:
        """
        Candidate error positions for a sentence, per config.detection.

        Returns:
            Sorted, duplicate-free sentence indices.
        """
        detection = self.config.detection
        locations: set[int] = set()

        if detection in ("bigram", "all"):
            locations.update(error_locations_by_bigrams(self.dictionary, sentence))

        if detection in ("single_words", "all"):
            words = self.segmenter(str(sentence))
            single = locations_of_single_words(words)
            locations.update(
                continuous_single_word_locations(single, self.config.min_single_word_run)
            )

        return sorted(locations)

    def correct(self, text: str, locations: Iterable[int] | None = None) -> CorrectionResult:
        """
        Correct one sentence.

        Args:
            text: Sentence to correct.
            locations: Positions to try; detected automatically when None.

        Returns:
            CorrectionResult with the best text and ranked candidates.

        Raises:
            ValueError: If text is None.
            InvalidPositionError: If a supplied location is out of range.
        """
        if text is None:
            raise ValueError("Input text cannot be None")

        start_time = time.time()
        sentence = Sentence.from_text(text)

        if locations is None:
            error_locations = self.locate_errors(sentence)
        else:
            error_locations = list(locations)

        candidates, stats = beam_search_with_stats(
            self.model,
            sentence,
            error_locations,
            self.model.beam_width,
            self.config.max_results,
        )

        best = candidates[0].sentence if candidates else sentence
        changed = [i for i, (a, b) in enumerate(zip(sentence, best)) if a != b]
        processing_time_ms = (time.time() - start_time) * 1000

        if changed:
            logger.debug("Corrected %r -> %r at %s", text, str(best), changed)

        return CorrectionResult(
            original_text=text,
            corrected_text=str(best),
            candidates=candidates,
            error_locations=error_locations,
            search_stats=stats,
            processing_time_ms=processing_time_ms,
            changed_positions=changed,
        )

    def correct_batch(
        self,
        texts: Iterable[str],
        parallel: bool = False,
        max_workers: int = 4,
    ) -> list[CorrectionResult]:
        """
        Correct several independent sentences.

        Args:
            texts: Sentences to correct.
            parallel: Run sentences on a thread pool.
            max_workers: Pool size when parallel.

        Returns:
            Results in input order.
        """
        texts = list(texts)
        if not parallel or len(texts) < 2:
            return [self.correct(text) for text in texts]

        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(self.correct, texts))

    def get_info(self) -> dict[str, Any]:
        """Get pipeline configuration information."""
        return {
            "model": type(self.model).__name__,
            "beam_width": self.model.beam_width,
            "max_results": self.config.max_results,
            "detection": self.config.detection,
            "score_combination": self.config.score_combination,
            "use_shape_confusions": self.config.use_shape_confusions,
        }


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def create_corrector(
    dictionary_path: str | Path,
    confusion_path: str | Path,
    config: CorrectionConfig | None = None,
) -> Corrector:
    """
    Create a Corrector from a counts file and a confusion-set file.

    The language model is an NGramLanguageModel over the same counts.

    Args:
        dictionary_path: ``token<TAB>count`` file with unigram and n-gram counts.
        confusion_path: YAML or text confusion-set file.
        config: Optional configuration.

    Returns:
        Configured Corrector instance.
    """
    config = config or CorrectionConfig()
    dictionary = CountDictionary.load(dictionary_path)
    confusion_set = ConfusionSet.load(confusion_path)

    return Corrector(
        dictionary=dictionary,
        confusion_set=confusion_set,
        language_model=NGramLanguageModel(dictionary, order=config.order),
        config=config,
    )
