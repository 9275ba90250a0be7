"""
Pytest configuration and fixtures for cscorrect tests.
"""

from pathlib import Path

import pytest

from cscorrect.resources import ConfusionSet, CountDictionary, NGramLanguageModel

# Unigram and n-gram counts for a tiny corpus around "我买苹果"
SAMPLE_COUNTS = {
    "我": 10,
    "买": 5,
    "卖": 1,
    "苹": 2,
    "果": 3,
    "我买": 4,
    "买苹": 1,
    "苹果": 2,
}

SAMPLE_CONFUSIONS = {"卖": "买", "买": "卖"}


@pytest.fixture
def counts() -> CountDictionary:
    """Return the sample count dictionary."""
    return CountDictionary(dict(SAMPLE_COUNTS))


@pytest.fixture
def confusion_set() -> ConfusionSet:
    """Return a confusion set pairing 买 and 卖."""
    return ConfusionSet.from_mapping(SAMPLE_CONFUSIONS)


@pytest.fixture
def language_model(counts) -> NGramLanguageModel:
    """Return a trigram scorer over the sample counts."""
    return NGramLanguageModel(counts, order=3)


@pytest.fixture
def resource_files(tmp_path) -> tuple[Path, Path]:
    """Write the sample counts and confusion set to disk."""
    dictionary_path = tmp_path / "counts.tsv"
    dictionary_path.write_text(
        "# token\tcount\n" + "".join(f"{t}\t{c}\n" for t, c in SAMPLE_COUNTS.items()),
        encoding="utf-8",
    )

    confusion_path = tmp_path / "confusion.yaml"
    confusion_path.write_text(
        "pronunciation:\n  卖: 买\n  买: 卖\n",
        encoding="utf-8",
    )
    return dictionary_path, confusion_path
