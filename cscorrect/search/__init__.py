"""
Noisy-channel correction search.

This package provides:
- Beam search over confusable-character substitutions
- Candidate-count statistics for channel scores
- Heuristic error-location detection
- Corrector: pipeline tying detection and search together

Example:
    >>> from cscorrect.search import create_corrector
    >>> corrector = create_corrector("counts.tsv", "confusion.yaml")
    >>> corrector.correct("我卖苹果").candidates[0]
"""

from cscorrect.search.beam import (
    SCORE_COMBINERS,
    NoisyChannelModel,
    add_log_scores,
    beam_search,
    beam_search_with_stats,
    multiply_scores,
)
from cscorrect.search.channel_models import (
    BigramContextChannelModel,
    UnigramChannelModel,
)
from cscorrect.search.detector import (
    continuous_single_word_locations,
    error_locations_by_bigrams,
    generate_bigrams,
    locations_of_single_words,
    max_continue_single_words_length,
)
from cscorrect.search.pipeline import (
    Corrector,
    create_corrector,
    jieba_segmenter,
)
from cscorrect.search.statistics import (
    total_character_count,
    total_prefix_suffix_bigram_count,
)

__all__ = [
    # Beam search
    "NoisyChannelModel",
    "beam_search",
    "beam_search_with_stats",
    "multiply_scores",
    "add_log_scores",
    "SCORE_COMBINERS",
    # Channel models
    "UnigramChannelModel",
    "BigramContextChannelModel",
    # Statistics
    "total_character_count",
    "total_prefix_suffix_bigram_count",
    # Detection
    "generate_bigrams",
    "error_locations_by_bigrams",
    "locations_of_single_words",
    "max_continue_single_words_length",
    "continuous_single_word_locations",
    # Pipeline
    "Corrector",
    "create_corrector",
    "jieba_segmenter",
]
