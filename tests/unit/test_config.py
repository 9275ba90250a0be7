"""Tests for CorrectionConfig and load_config."""

import pytest

from cscorrect.config import CorrectionConfig, load_config
from cscorrect.exceptions import ConfigurationError, ResourceLoadError


class TestCorrectionConfig:
    """Test CorrectionConfig dataclass."""

    def test_default_values(self):
        """Config has sensible defaults."""
        config = CorrectionConfig()

        assert config.beam_width == 150
        assert config.max_results == 5
        assert config.order == 3
        assert config.detection == "bigram"
        assert config.min_single_word_run == 2
        assert config.use_shape_confusions is False
        assert config.score_combination == "product"
        assert config.channel_model == "bigram_context"

    def test_custom_values(self):
        config = CorrectionConfig(beam_width=10, detection="all", score_combination="log_sum")
        assert config.beam_width == 10
        assert config.detection == "all"
        assert config.score_combination == "log_sum"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"beam_width": 0},
            {"max_results": -1},
            {"order": 0},
            {"min_single_word_run": 0},
            {"beam_width": True},
            {"beam_width": 2.5},
        ],
    )
    def test_invalid_integers(self, kwargs):
        with pytest.raises(ConfigurationError):
            CorrectionConfig(**kwargs)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"detection": "trigram"},
            {"score_combination": "sum"},
            {"channel_model": "neural"},
        ],
    )
    def test_invalid_choices(self, kwargs):
        with pytest.raises(ConfigurationError):
            CorrectionConfig(**kwargs)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            CorrectionConfig(beam_width=0)


class TestLoadConfig:
    """Test loading config from YAML."""

    def test_load(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("beam_width: 20\ndetection: single_words\n", encoding="utf-8")

        config = load_config(path)
        assert config.beam_width == 20
        assert config.detection == "single_words"
        assert config.max_results == 5

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == CorrectionConfig()

    def test_unknown_keys(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("beam_size: 20\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="beam_size"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- 20\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("beam_width: 0\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceLoadError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_utf8(self, tmp_path):
        """Undecodable bytes are reported as a load error."""
        path = tmp_path / "config.yaml"
        path.write_bytes(b"\xff\xfe\x80beam_width: 3\n")
        with pytest.raises(ResourceLoadError):
            load_config(path)
