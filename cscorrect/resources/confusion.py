"""
Confusion sets: characters commonly mistaken for one another.

Two kinds are kept separately, matching how they are usually compiled:
similar pronunciation (homophones and near-homophones) and similar shape.
Lookups return tuples in file order so that candidate iteration, and
therefore tie-breaking in the search, is reproducible.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from cscorrect.exceptions import ResourceLoadError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
PRONUNCIATION_KEY = "pronunciation"
SHAPE_KEY = "shape"


def _normalize_entries(raw: Mapping[str, str | Iterable[str]] | None) -> dict[str, tuple[str, ...]]:
    """Turn char -> "abc" / ["a", "b"] into char -> ("a", "b", "c") without duplicates."""
    entries: dict[str, tuple[str, ...]] = {}
    for char, similar in (raw or {}).items():
        if isinstance(similar, str):
            similar = list(similar)
        # dict.fromkeys keeps first-seen order
        entries[str(char)] = tuple(dict.fromkeys(s for s in similar if s and s != char))
    return entries


@dataclass
class ConfusionSet:
    """
    Character -> similar characters lookup.

    Attributes:
        pronunciations: Characters with similar pronunciation, per character.
        shapes: Characters with similar shape, per character.

    Example:
        >>> cs = ConfusionSet.from_mapping({"买": "卖麦"})
        >>> cs.similar_pronunciations("买")
        ('卖', '麦')
        >>> cs.similar_pronunciations("苹")
        ()
    """

    pronunciations: dict[str, tuple[str, ...]] = field(default_factory=dict)
    shapes: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls,
        pronunciations: Mapping[str, str | Iterable[str]],
        shapes: Mapping[str, str | Iterable[str]] | None = None,
    ) -> ConfusionSet:
        """Build from plain mappings of char -> string or list of chars."""
        return cls(_normalize_entries(pronunciations), _normalize_entries(shapes))

    @classmethod
    def load(cls, path: str | Path) -> ConfusionSet:
        """
        Load a confusion set from YAML or plain text.

        YAML files (``.yaml``/``.yml``) hold ``pronunciation:`` and optional
        ``shape:`` mappings. A YAML mapping without those keys is read as
        pronunciation entries. Any other file is read as plain text with one
        ``char<TAB>candidates`` line per character (pronunciation only).

        Args:
            path: Path to the confusion-set file (UTF-8).

        Returns:
            Loaded ConfusionSet.

        Raises:
            ResourceLoadError: If the file cannot be read or parsed.
        """
        path = Path(path)
        try:
            if path.suffix.lower() in YAML_SUFFIXES:
                confusion_set = cls._load_yaml(path)
            else:
                confusion_set = cls._load_text(path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.error("Failed to load confusion set %s: %s", path, e)
            raise ResourceLoadError(f"Cannot load confusion set {path}: {e}") from e

        logger.info(
            "Loaded confusion set from %s: %d pronunciation, %d shape entries",
            path,
            len(confusion_set.pronunciations),
            len(confusion_set.shapes),
        )
        return confusion_set

    @classmethod
    def _load_yaml(cls, path: Path) -> ConfusionSet:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ResourceLoadError(f"{path}: expected a mapping, got {type(data).__name__}")

        if PRONUNCIATION_KEY in data or SHAPE_KEY in data:
            pronunciations = data.get(PRONUNCIATION_KEY) or {}
            shapes = data.get(SHAPE_KEY) or {}
        else:
            pronunciations, shapes = data, {}

        for section in (pronunciations, shapes):
            if not isinstance(section, dict):
                raise ResourceLoadError(f"{path}: confusion entries must be mappings")
        return cls.from_mapping(pronunciations, shapes)

    @classmethod
    def _load_text(cls, path: Path) -> ConfusionSet:
        pronunciations: dict[str, str] = {}
        with open(path, encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                parts = line.split(None, 1)
                if len(parts) != 2:
                    raise ResourceLoadError(
                        f"{path}:{line_no}: expected 'char<TAB>candidates', got {line!r}"
                    )
                char, similar = parts
                pronunciations[char] = pronunciations.get(char, "") + "".join(similar.split())
        return cls.from_mapping(pronunciations)

    def similar_pronunciations(self, character: str) -> tuple[str, ...]:
        """Characters pronounced like ``character``; empty if unknown."""
        return self.pronunciations.get(character, ())

    def similar_shapes(self, character: str) -> tuple[str, ...]:
        """Characters shaped like ``character``; empty if unknown."""
        return self.shapes.get(character, ())

    def candidates(self, character: str, include_shapes: bool = False) -> tuple[str, ...]:
        """
        Candidate set for one position.

        Pronunciation confusions come first, then shape confusions (when
        requested), then the observed character itself. Duplicates collapse
        to their first occurrence.

        Args:
            character: Observed character.
            include_shapes: Also include similar-shape characters.

        Returns:
            Ordered, duplicate-free candidates always containing ``character``.
        """
        similar = list(self.similar_pronunciations(character))
        if include_shapes:
            similar.extend(self.similar_shapes(character))
        similar.append(character)
        return tuple(dict.fromkeys(similar))
