"""
Token-count dictionaries for channel statistics and error location.

A dictionary maps a token string (a character, or an n-gram of
characters concatenated without separators) to an occurrence count.
Callers must check membership before asking for a count: an absent
token is distinct from a token counted zero times.

Two implementations are provided:
- CountDictionary: explicit counts, loadable from a tab-separated file
- WordFreqDictionary: read-only view over wordfreq frequency estimates
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Protocol, runtime_checkable

from wordfreq import word_frequency

from cscorrect.exceptions import ResourceLoadError

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

COMMENT_PREFIX = "#"

# Frequencies are per-token probabilities; scale them to pseudo-counts
DEFAULT_WORDFREQ_SCALE = 1e9


# =============================================================================
# PROTOCOL
# =============================================================================


@runtime_checkable
class Dictionary(Protocol):
    """Read-only token -> count accessor."""

    def __contains__(self, token: object) -> bool: ...

    def get_count(self, token: str) -> int: ...


# =============================================================================
# COUNT DICTIONARY
# =============================================================================


@dataclass
class CountDictionary:
    """
    In-memory token counts.

    Counts are treated as immutable once the dictionary is built, so a
    single instance can be shared by concurrent searches.

    Attributes:
        counts: Mapping of token to non-negative occurrence count.

    Example:
        >>> d = CountDictionary({"买": 120, "卖": 80, "买苹": 3})
        >>> "买" in d
        True
        >>> d.get_count("卖")
        80
        >>> "麦" in d
        False
    """

    counts: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate counts and precompute unigram totals."""
        for token, count in self.counts.items():
            if not isinstance(count, int) or isinstance(count, bool) or count < 0:
                raise ValueError(f"Count for {token!r} must be a non-negative integer, got {count!r}")

        unigrams = [count for token, count in self.counts.items() if len(token) == 1]
        self._total_unigram_count = sum(unigrams)
        self._unigram_vocabulary_size = len(unigrams)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, int]]) -> CountDictionary:
        """Build from (token, count) pairs; repeated tokens are summed."""
        counts: dict[str, int] = {}
        for token, count in pairs:
            counts[token] = counts.get(token, 0) + count
        return cls(counts)

    @classmethod
    def load(cls, path: str | Path) -> CountDictionary:
        """
        Load counts from a text file with one ``token<TAB>count`` per line.

        Blank lines and lines starting with ``#`` are ignored. Whitespace
        other than a tab is accepted as the separator when no tab is present.

        Args:
            path: Path to the counts file (UTF-8).

        Returns:
            Loaded CountDictionary.

        Raises:
            ResourceLoadError: If the file cannot be read or a line is malformed.
        """
        path = Path(path)
        pairs = []
        try:
            with open(path, encoding="utf-8") as f:
                for line_no, line in enumerate(f, start=1):
                    line = line.rstrip("\n")
                    if not line.strip() or line.startswith(COMMENT_PREFIX):
                        continue
                    pairs.append(_parse_count_line(line, path, line_no))
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to load dictionary %s: %s", path, e)
            raise ResourceLoadError(f"Cannot read dictionary {path}: {e}") from e

        dictionary = cls.from_pairs(pairs)
        logger.info("Loaded %d dictionary entries from %s", len(dictionary), path)
        return dictionary

    def __contains__(self, token: object) -> bool:
        return token in self.counts

    def __len__(self) -> int:
        return len(self.counts)

    def get_count(self, token: str) -> int:
        """
        Return the count for a token.

        Raises:
            KeyError: If the token is absent. Check ``token in d`` first.
        """
        return self.counts[token]

    @property
    def total_unigram_count(self) -> int:
        """Sum of counts over single-character tokens."""
        return self._total_unigram_count

    @property
    def unigram_vocabulary_size(self) -> int:
        """Number of distinct single-character tokens."""
        return self._unigram_vocabulary_size


def _parse_count_line(line: str, path: Path, line_no: int) -> tuple[str, int]:
    if "\t" in line:
        token, _, raw_count = line.rpartition("\t")
    else:
        parts = line.rsplit(None, 1)
        if len(parts) != 2:
            raise ResourceLoadError(f"{path}:{line_no}: expected 'token<TAB>count', got {line!r}")
        token, raw_count = parts

    try:
        count = int(raw_count.strip())
    except ValueError as e:
        raise ResourceLoadError(f"{path}:{line_no}: invalid count {raw_count!r}") from e

    if not token or count < 0:
        raise ResourceLoadError(f"{path}:{line_no}: invalid entry {line!r}")
    return token, count


# =============================================================================
# WORDFREQ DICTIONARY
# =============================================================================


@lru_cache(maxsize=65536)
def _scaled_frequency(token: str, lang: str, scale: float) -> int:
    return int(round(word_frequency(token, lang) * scale))


@dataclass(frozen=True)
class WordFreqDictionary:
    """
    Dictionary backed by wordfreq frequency estimates.

    Pseudo-counts are ``round(word_frequency(token, lang) * scale)``; a
    token is present when its pseudo-count is positive. Useful when no
    corpus counts are available. wordfreq segments multi-character Chinese
    strings itself, so n-gram membership is looser than with real counts.

    Example:
        >>> d = WordFreqDictionary()
        >>> "苹果" in d
        True
    """

    lang: str = "zh"
    scale: float = DEFAULT_WORDFREQ_SCALE

    def __contains__(self, token: object) -> bool:
        if not isinstance(token, str) or not token:
            return False
        return _scaled_frequency(token, self.lang, self.scale) > 0

    def get_count(self, token: str) -> int:
        """
        Return the pseudo-count for a token.

        Raises:
            KeyError: If the token has no frequency estimate.
        """
        count = _scaled_frequency(token, self.lang, self.scale) if token else 0
        if count <= 0:
            raise KeyError(token)
        return count

