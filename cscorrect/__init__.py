"""
cscorrect: noisy-channel Chinese spelling correction.

Given a sentence that may contain wrongly substituted characters, cscorrect
finds likely error positions and searches confusable replacements with a
beam search, ranking variants by a language-model score combined with a
channel score estimated from dictionary counts.

Example:
    >>> import cscorrect
    >>> corrector = cscorrect.create_corrector("counts.tsv", "confusion.yaml")
    >>> result = corrector.correct("我卖苹果")
    >>> print(result.corrected_text)
    >>> for candidate in result.candidates:
    ...     print(candidate.sentence, candidate.score)
"""

from cscorrect.config import CorrectionConfig, load_config
from cscorrect.exceptions import (
    ConfigurationError,
    CSCError,
    InvalidPositionError,
    ResourceLoadError,
)
from cscorrect.models import (
    CorrectionResult,
    SearchStats,
    Sentence,
    Sequence,
)
from cscorrect.resources import (
    CallableLanguageModel,
    ConfusionSet,
    CountDictionary,
    Dictionary,
    LanguageModel,
    NGramLanguageModel,
    WordFreqDictionary,
)
from cscorrect.search import (
    BigramContextChannelModel,
    Corrector,
    NoisyChannelModel,
    UnigramChannelModel,
    beam_search,
    create_corrector,
)
from cscorrect.text import is_hanzi

__version__ = "0.1.0"
__all__ = [
    # Main API
    "Corrector",
    "create_corrector",
    "beam_search",
    # Configuration
    "CorrectionConfig",
    "load_config",
    # Models
    "Sentence",
    "Sequence",
    "SearchStats",
    "CorrectionResult",
    # Channel models
    "NoisyChannelModel",
    "UnigramChannelModel",
    "BigramContextChannelModel",
    # Resources
    "Dictionary",
    "CountDictionary",
    "WordFreqDictionary",
    "ConfusionSet",
    "LanguageModel",
    "NGramLanguageModel",
    "CallableLanguageModel",
    # Utilities
    "is_hanzi",
    # Exceptions
    "CSCError",
    "InvalidPositionError",
    "ConfigurationError",
    "ResourceLoadError",
]
