"""
External resources consumed by the correction search.

- Dictionary / CountDictionary / WordFreqDictionary: token counts
- ConfusionSet: similar-pronunciation and similar-shape characters
- LanguageModel / NGramLanguageModel: sentence log-probability scorers
"""

from cscorrect.resources.confusion import ConfusionSet
from cscorrect.resources.dictionary import (
    CountDictionary,
    Dictionary,
    WordFreqDictionary,
)
from cscorrect.resources.language_model import (
    CallableLanguageModel,
    LanguageModel,
    NGramLanguageModel,
)

__all__ = [
    # Dictionaries
    "Dictionary",
    "CountDictionary",
    "WordFreqDictionary",
    # Confusion sets
    "ConfusionSet",
    # Language models
    "LanguageModel",
    "NGramLanguageModel",
    "CallableLanguageModel",
]
