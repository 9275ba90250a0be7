"""
Configuration for cscorrect spelling correction.

All options have defaults; load_config() reads overrides from YAML.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Literal

import yaml

from cscorrect.exceptions import ConfigurationError, ResourceLoadError

logger = logging.getLogger(__name__)

DETECTION_STRATEGIES = ("bigram", "single_words", "all")
SCORE_COMBINATIONS = ("product", "log_sum")
CHANNEL_MODELS = ("unigram", "bigram_context")


@dataclass
class CorrectionConfig:
    """
    Configuration for noisy-channel correction.

    Example:
        >>> config = CorrectionConfig(beam_width=20, detection="single_words")
        >>> corrector = create_corrector("counts.tsv", "confusion.yaml", config)
    """

    # Search options
    beam_width: int = 150
    max_results: int = 5
    order: int = 3  # n-gram order of the language model

    # Error location
    detection: Literal["bigram", "single_words", "all"] = "bigram"
    min_single_word_run: int = 2  # Shorter runs are treated as real words

    # Candidates
    use_shape_confusions: bool = False  # Pronunciation confusions only by default

    # Scoring
    score_combination: Literal["product", "log_sum"] = "product"
    channel_model: Literal["unigram", "bigram_context"] = "bigram_context"

    def __post_init__(self):
        """Validate configuration."""
        for name in ("beam_width", "max_results", "order", "min_single_word_run"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigurationError(f"{name} must be an integer >= 1, got {value!r}")

        if self.detection not in DETECTION_STRATEGIES:
            raise ConfigurationError(
                f"detection must be one of {DETECTION_STRATEGIES}, got {self.detection!r}"
            )
        if self.score_combination not in SCORE_COMBINATIONS:
            raise ConfigurationError(
                f"score_combination must be one of {SCORE_COMBINATIONS}, "
                f"got {self.score_combination!r}"
            )
        if self.channel_model not in CHANNEL_MODELS:
            raise ConfigurationError(
                f"channel_model must be one of {CHANNEL_MODELS}, got {self.channel_model!r}"
            )


def load_config(path: str | Path) -> CorrectionConfig:
    """
    Load a CorrectionConfig from a YAML mapping.

    Args:
        path: YAML file whose top-level keys are CorrectionConfig fields.

    Returns:
        Validated CorrectionConfig.

    Raises:
        ResourceLoadError: If the file cannot be read or parsed.
        ConfigurationError: If keys are unknown or values invalid.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.error("Failed to load config %s: %s", path, e)
        raise ResourceLoadError(f"Cannot load config {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config {path} must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(CorrectionConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    logger.debug("Loaded config from %s: %s", path, data)
    return CorrectionConfig(**data)
