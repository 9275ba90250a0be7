"""Tests for dictionaries, confusion sets and language models."""

import math

import pytest

from cscorrect.exceptions import ResourceLoadError
from cscorrect.models import Sentence
from cscorrect.resources import (
    CallableLanguageModel,
    ConfusionSet,
    CountDictionary,
    Dictionary,
    LanguageModel,
    NGramLanguageModel,
    WordFreqDictionary,
)

INVALID_UTF8 = b"\xff\xfe\x80abc\t1\n"

# =============================================================================
# CountDictionary Tests
# =============================================================================


class TestCountDictionary:
    """Tests for CountDictionary."""

    def test_contains_and_count(self):
        d = CountDictionary({"买": 3, "买苹": 0})
        assert "买" in d
        assert d.get_count("买") == 3
        assert "买苹" in d  # present with count zero
        assert d.get_count("买苹") == 0
        assert "卖" not in d

    def test_absent_count_raises(self):
        """Absent tokens must be checked with `in` first."""
        with pytest.raises(KeyError):
            CountDictionary().get_count("买")

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            CountDictionary({"买": -1})

    def test_unigram_totals(self, counts):
        """Only single-character tokens count towards unigram totals."""
        assert counts.total_unigram_count == 21
        assert counts.unigram_vocabulary_size == 5

    def test_from_pairs_sums_duplicates(self):
        d = CountDictionary.from_pairs([("买", 2), ("买", 3), ("卖", 1)])
        assert d.get_count("买") == 5
        assert len(d) == 2

    def test_satisfies_protocol(self, counts):
        assert isinstance(counts, Dictionary)

    def test_load(self, tmp_path):
        """Tab and whitespace separators, comments and blank lines are handled."""
        path = tmp_path / "counts.tsv"
        path.write_text("# comment\n买\t3\n\n卖 1\n买苹\t2\n", encoding="utf-8")

        d = CountDictionary.load(path)
        assert d.get_count("买") == 3
        assert d.get_count("卖") == 1
        assert d.get_count("买苹") == 2
        assert len(d) == 3

    @pytest.mark.parametrize("content", ["买\n", "买\tmany\n", "买\t-2\n"])
    def test_load_malformed(self, tmp_path, content):
        path = tmp_path / "bad.tsv"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ResourceLoadError):
            CountDictionary.load(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ResourceLoadError):
            CountDictionary.load(tmp_path / "missing.tsv")

    def test_load_invalid_utf8(self, tmp_path):
        """Undecodable bytes are reported as a load error."""
        path = tmp_path / "counts.tsv"
        path.write_bytes(INVALID_UTF8)
        with pytest.raises(ResourceLoadError):
            CountDictionary.load(path)


class TestWordFreqDictionary:
    """Tests for WordFreqDictionary."""

    def test_common_word_present(self):
        d = WordFreqDictionary()
        assert "苹果" in d
        assert d.get_count("苹果") > 0

    def test_empty_token_absent(self):
        d = WordFreqDictionary()
        assert "" not in d
        with pytest.raises(KeyError):
            d.get_count("")

    def test_satisfies_protocol(self):
        assert isinstance(WordFreqDictionary(), Dictionary)


# =============================================================================
# ConfusionSet Tests
# =============================================================================


class TestConfusionSet:
    """Tests for ConfusionSet."""

    def test_from_mapping_string_and_list(self):
        cs = ConfusionSet.from_mapping({"买": "卖麦", "在": ["再", "载"]})
        assert cs.similar_pronunciations("买") == ("卖", "麦")
        assert cs.similar_pronunciations("在") == ("再", "载")

    def test_unknown_character_empty(self):
        assert ConfusionSet().similar_pronunciations("买") == ()
        assert ConfusionSet().similar_shapes("买") == ()

    def test_duplicates_and_self_removed(self):
        cs = ConfusionSet.from_mapping({"买": "卖买卖麦"})
        assert cs.similar_pronunciations("买") == ("卖", "麦")

    def test_candidates_order(self):
        """Pronunciations, then shapes, then the observed character."""
        cs = ConfusionSet.from_mapping({"买": "卖麦"}, shapes={"买": "头卖"})
        assert cs.candidates("买") == ("卖", "麦", "买")
        assert cs.candidates("买", include_shapes=True) == ("卖", "麦", "头", "买")

    def test_candidates_without_confusions(self):
        assert ConfusionSet().candidates("苹") == ("苹",)

    def test_load_yaml_sections(self, tmp_path):
        path = tmp_path / "confusion.yaml"
        path.write_text(
            "pronunciation:\n  买: 卖麦\nshape:\n  买: [头]\n",
            encoding="utf-8",
        )
        cs = ConfusionSet.load(path)
        assert cs.similar_pronunciations("买") == ("卖", "麦")
        assert cs.similar_shapes("买") == ("头",)

    def test_load_yaml_plain_mapping(self, tmp_path):
        path = tmp_path / "confusion.yml"
        path.write_text("买: 卖\n", encoding="utf-8")
        assert ConfusionSet.load(path).similar_pronunciations("买") == ("卖",)

    def test_load_text(self, tmp_path):
        path = tmp_path / "confusion.txt"
        path.write_text("# char\tcandidates\n买\t卖麦\n在\t再 载\n", encoding="utf-8")

        cs = ConfusionSet.load(path)
        assert cs.similar_pronunciations("买") == ("卖", "麦")
        assert cs.similar_pronunciations("在") == ("再", "载")

    @pytest.mark.parametrize(
        "name,content",
        [
            ("bad.yaml", "买: [卖\n"),
            ("list.yaml", "- 买\n- 卖\n"),
            ("bad.txt", "买\n"),
        ],
    )
    def test_load_malformed(self, tmp_path, name, content):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ResourceLoadError):
            ConfusionSet.load(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ResourceLoadError):
            ConfusionSet.load(tmp_path / "missing.yaml")

    @pytest.mark.parametrize("name", ["confusion.yaml", "confusion.txt"])
    def test_load_invalid_utf8(self, tmp_path, name):
        """Undecodable bytes are reported as a load error for both formats."""
        path = tmp_path / name
        path.write_bytes(INVALID_UTF8)
        with pytest.raises(ResourceLoadError):
            ConfusionSet.load(path)


# =============================================================================
# Language Model Tests
# =============================================================================


class TestNGramLanguageModel:
    """Tests for NGramLanguageModel."""

    def test_bigram_score(self, counts):
        """Known histories use the conditional estimate, otherwise unigram."""
        lm = NGramLanguageModel(counts, order=2)
        # V = 5, N = 21
        expected = math.log(11 / 26) + math.log(5 / 15)
        assert lm.score(Sentence.from_text("我买")) == pytest.approx(expected)

    def test_unigram_only(self, counts):
        lm = NGramLanguageModel(counts, order=1)
        expected = math.log(11 / 26) + math.log(6 / 26)
        assert lm.score(Sentence.from_text("我买")) == pytest.approx(expected)

    def test_backs_off_to_shorter_history(self, counts):
        """An unknown two-token history falls back to the one-token history."""
        lm = NGramLanguageModel(counts, order=3)
        # 我卖 is unknown, 卖 is known: P(苹 | 卖) = (0 + 1) / (1 + 5)
        assert lm.token_log_prob(("我", "卖"), "苹") == pytest.approx(math.log(1 / 6))

    def test_fluent_sentence_scores_higher(self, language_model):
        fluent = language_model.score(Sentence.from_text("我买苹果"))
        garbled = language_model.score(Sentence.from_text("我卖苹果"))
        assert fluent > garbled

    def test_empty_sentence_scores_zero(self, language_model):
        assert language_model.score(Sentence.from_text("")) == 0.0

    def test_invalid_order(self, counts):
        with pytest.raises(ValueError):
            NGramLanguageModel(counts, order=0)

    def test_satisfies_protocol(self, language_model):
        assert isinstance(language_model, LanguageModel)


class TestCallableLanguageModel:
    """Tests for CallableLanguageModel."""

    def test_wraps_text_scorer(self):
        lm = CallableLanguageModel(lambda text: -len(text))
        assert lm.score(Sentence.from_text("我买")) == -2.0
