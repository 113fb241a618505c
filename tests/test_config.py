"""
Unit Tests for Search Defaults Configuration
"""

from unittest.mock import patch

from lexical_memory.config import MemoryConfig, get_config, reset_config


class TestMemoryConfig:
    """Test configuration loading."""

    def setup_method(self):
        reset_config()

    def teardown_method(self):
        reset_config()

    def test_config_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            config = MemoryConfig.from_env()

            assert config.default_top_k == 5
            assert config.default_min_score == 0.05

    def test_config_from_env(self):
        with patch.dict("os.environ", {"MEMORY_TOP_K": "12", "MEMORY_MIN_SCORE": "0.2"}):
            config = MemoryConfig.from_env()

            assert config.default_top_k == 12
            assert config.default_min_score == 0.2

    def test_invalid_values_fall_back(self, caplog):
        with patch.dict("os.environ", {"MEMORY_TOP_K": "many", "MEMORY_MIN_SCORE": "low"}):
            config = MemoryConfig.from_env()

        assert config.default_top_k == 5
        assert config.default_min_score == 0.05
        assert "MEMORY_TOP_K" in caplog.text

    def test_non_finite_min_score_falls_back(self, caplog):
        for raw in ("nan", "inf", "-inf"):
            with patch.dict("os.environ", {"MEMORY_MIN_SCORE": raw}):
                assert MemoryConfig.from_env().default_min_score == 0.05

        assert "MEMORY_MIN_SCORE" in caplog.text

    def test_blank_value_uses_default(self):
        with patch.dict("os.environ", {"MEMORY_TOP_K": "  "}):
            assert MemoryConfig.from_env().default_top_k == 5

    def test_get_config_singleton(self):
        assert get_config() is get_config()

    def test_reset_config_reloads(self):
        with patch.dict("os.environ", {"MEMORY_TOP_K": "3"}):
            reset_config()
            assert get_config().default_top_k == 3

        reset_config()
        with patch.dict("os.environ", {"MEMORY_TOP_K": "7"}):
            assert get_config().default_top_k == 7
