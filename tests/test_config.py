"""Tests for the config module."""

from argparse import Namespace

import pytest

from tailer.config import LOG_LEVELS, TailConfig, _parse_bool, load_config, load_yaml_config
from tailer.errors import ConfigError

ENV_VARS = ("TAIL_LINES", "TAIL_FOLLOW", "TAIL_CHUNK_SIZE",
            "TAIL_USE_POLLING", "TAIL_POLL_INTERVAL", "TAIL_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestParseBool:
    def test_true_values(self):
        for val in ("true", "True", "1", "yes", " YES ", True):
            assert _parse_bool(val) is True

    def test_false_values(self):
        for val in ("false", "0", "no", "", "random", False):
            assert _parse_bool(val) is False


class TestTailConfigDefaults:
    def test_defaults(self):
        cfg = TailConfig()
        assert cfg.line_count == 10
        assert cfg.follow is False
        assert cfg.chunk_size == 8192
        assert cfg.use_polling is False
        assert cfg.log_level == "WARNING"

    def test_frozen(self):
        cfg = TailConfig()
        with pytest.raises(AttributeError):
            cfg.line_count = 5

    def test_log_levels(self):
        assert LOG_LEVELS == ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TestValidate:
    @pytest.mark.parametrize("n", [0, -1, -100])
    def test_rejects_non_positive_line_count(self, n):
        with pytest.raises(ConfigError):
            TailConfig(line_count=n).validate()

    def test_rejects_bad_chunk_size(self):
        with pytest.raises(ConfigError):
            TailConfig(chunk_size=0).validate()

    def test_rejects_bad_poll_interval(self):
        with pytest.raises(ConfigError):
            TailConfig(poll_interval=0).validate()

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ConfigError):
            TailConfig(log_level="LOUD").validate()

    def test_returns_self(self):
        cfg = TailConfig(line_count=3)
        assert cfg.validate() is cfg


class TestLoadConfig:
    def test_defaults(self):
        assert load_config() == TailConfig()

    def test_cli_overrides_env(self, monkeypatch):
        monkeypatch.setenv("TAIL_LINES", "7")
        cfg = load_config(Namespace(line_count=3, follow=None))
        assert cfg.line_count == 3

    def test_env_overrides_yaml(self, monkeypatch):
        monkeypatch.setenv("TAIL_LINES", "7")
        cfg = load_config(None, {"line_count": 4})
        assert cfg.line_count == 7

    def test_yaml_values(self):
        cfg = load_config(None, {"line_count": 4, "follow": True,
                                 "use_polling": "yes", "poll_interval": 0.25,
                                 "log_level": "debug"})
        assert cfg.line_count == 4
        assert cfg.follow is True
        assert cfg.use_polling is True
        assert cfg.poll_interval == 0.25
        assert cfg.log_level == "DEBUG"

    def test_env_bool(self, monkeypatch):
        monkeypatch.setenv("TAIL_FOLLOW", "true")
        assert load_config().follow is True

    def test_zero_lines_rejected(self):
        with pytest.raises(ConfigError):
            load_config(Namespace(line_count=0))

    def test_non_numeric_env_rejected(self, monkeypatch):
        monkeypatch.setenv("TAIL_LINES", "ten")
        with pytest.raises(ConfigError):
            load_config()

    @pytest.mark.parametrize("value", [True, False, 2.7])
    def test_yaml_non_integer_line_count_rejected(self, value):
        with pytest.raises(ConfigError):
            load_config(None, {"line_count": value})

    def test_yaml_whole_float_line_count_accepted(self):
        assert load_config(None, {"line_count": 4.0}).line_count == 4

    def test_yaml_bool_chunk_size_rejected(self):
        with pytest.raises(ConfigError):
            load_config(None, {"chunk_size": True})


class TestLoadYamlConfig:
    def test_no_path(self):
        assert load_yaml_config(None) == {}

    def test_missing_file(self, tmp_path):
        assert load_yaml_config(str(tmp_path / "missing.yml")) == {}

    def test_reads_mapping(self, tmp_path):
        path = tmp_path / "tail.yml"
        path.write_text("line_count: 3\nfollow: true\n")
        assert load_yaml_config(str(path)) == {"line_count": 3, "follow": True}

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "tail.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_yaml_config(str(path))
