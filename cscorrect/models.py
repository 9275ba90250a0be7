"""
Data models for cscorrect.

Sentence and Sequence are the values the beam search works on;
SearchStats and CorrectionResult are what the pipeline returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cscorrect.exceptions import InvalidPositionError
from cscorrect.text import split_characters


@dataclass(frozen=True)
class Sentence:
    """
    Immutable, indexable sequence of tokens.

    Tokens are usually single Han characters but any string is allowed.
    set_token() returns a new Sentence so that hypotheses branching from
    a shared prefix never see each other's substitutions.

    Example:
        >>> s = Sentence.from_text("我买苹果")
        >>> s.get_token(1)
        '买'
        >>> str(s.set_token(1, "卖"))
        '我卖苹果'
        >>> str(s)
        '我买苹果'
    """

    tokens: tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> Sentence:
        """Build a sentence with one token per character."""
        return cls(tuple(split_characters(text)))

    @classmethod
    def from_tokens(cls, tokens) -> Sentence:
        """Build a sentence from an iterable of token strings."""
        return cls(tuple(tokens))

    def size(self) -> int:
        """Number of tokens."""
        return len(self.tokens)

    def get_token(self, index: int) -> str:
        """
        Return the token at index.

        Raises:
            InvalidPositionError: If index is outside [0, size()).
        """
        self._check_index(index)
        return self.tokens[index]

    def set_token(self, index: int, token: str) -> Sentence:
        """
        Return a copy of this sentence with one token replaced.

        Args:
            index: Position to replace.
            token: Replacement token.

        Returns:
            New Sentence of the same length.

        Raises:
            InvalidPositionError: If index is outside [0, size()).
        """
        self._check_index(index)
        tokens = list(self.tokens)
        tokens[index] = token
        return Sentence(tuple(tokens))

    def _check_index(self, index: int) -> None:
        # Negative indexes are rejected rather than wrapped
        if not 0 <= index < len(self.tokens):
            raise InvalidPositionError(
                f"location {index} out of range for sentence of length {len(self.tokens)}"
            )

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> str:
        return self.get_token(index)

    def __iter__(self):
        return iter(self.tokens)

    def __str__(self) -> str:
        return "".join(self.tokens)


@dataclass(frozen=True)
class Sequence:
    """A scored sentence hypothesis in the beam."""

    sentence: Sentence
    score: float

    def __str__(self) -> str:
        return f"{self.sentence} ({self.score:.4f})"


@dataclass
class SearchStats:
    """Statistics for one beam search call."""

    positions_total: int = 0
    positions_skipped: int = 0
    rounds: int = 0
    hypotheses_generated: int = 0
    hypotheses_dropped: int = 0  # Non-finite scores


@dataclass
class CorrectionResult:
    """Result of correcting a single sentence."""

    original_text: str
    corrected_text: str
    candidates: list[Sequence]
    error_locations: list[int]
    search_stats: SearchStats
    processing_time_ms: float
    changed_positions: list[int] = field(default_factory=list)

    @property
    def has_corrections(self) -> bool:
        """True if the best candidate differs from the input."""
        return self.corrected_text != self.original_text

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the result
        """
        return {
            "original": self.original_text,
            "corrected": self.corrected_text,
            "candidates": [
                {"text": str(candidate.sentence), "score": candidate.score}
                for candidate in self.candidates
            ],
            "error_locations": self.error_locations,
            "changed_positions": self.changed_positions,
            "processing_time_ms": self.processing_time_ms,
        }
