"""Tests for config loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cli.config import DEFAULT_CONFIG, get_paths, load_config, load_config_model
from cli.config_models import ClassifierConfig, LLMConfig, PeacePulseConfig


class TestDefaults:
    def test_defaults(self):
        config = PeacePulseConfig()
        assert config.classifier.strategy == "auto"
        assert config.classifier.confidence_threshold == 0.7
        assert config.similarity.overlap_threshold == 0.7
        assert config.classifier.classify_timeout == 10.0
        assert config.classifier.intent_timeout == 8.0
        assert config.replies.timeout == 20.0
        assert config.persistence.debounce_seconds == 0.1
        assert config.notifications.ttl_seconds == 5.0
        assert config.llm.temperature == 0.6
        assert config.llm.top_p == 0.9
        assert config.seed_defaults is True

    def test_default_paths_expanded(self):
        paths = get_paths(DEFAULT_CONFIG)
        assert paths["db"] == Path("~/.peacepulse/state.db").expanduser()
        assert paths["log_file"] is None


class TestValidation:
    def test_bad_provider(self):
        with pytest.raises(ValidationError):
            LLMConfig(provider="llama")

    def test_bad_strategy(self):
        with pytest.raises(ValidationError):
            ClassifierConfig(strategy="magic")

    @pytest.mark.parametrize("value", [-0.1, 1.5])
    def test_threshold_range(self, value):
        with pytest.raises(ValidationError):
            ClassifierConfig(confidence_threshold=value)

    def test_timeout_positive(self):
        with pytest.raises(ValidationError):
            ClassifierConfig(classify_timeout=0)

    def test_log_level_normalized(self):
        config = PeacePulseConfig.from_dict({"logging": {"level": "debug"}})
        assert config.logging.level == "DEBUG"

    def test_thresholds_independent(self):
        config = PeacePulseConfig.from_dict(
            {"classifier": {"confidence_threshold": 0.8}, "similarity": {"overlap_threshold": 0.5}}
        )
        assert config.classifier.confidence_threshold == 0.8
        assert config.similarity.overlap_threshold == 0.5


class TestEnvExpansion:
    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("MY_KEY", "sk-ant-secret")
        config = PeacePulseConfig.from_dict({"llm": {"api_key": "${MY_KEY}"}})
        assert config.llm.api_key == "sk-ant-secret"

    def test_missing_env_is_none(self, monkeypatch):
        monkeypatch.delenv("MISSING_KEY", raising=False)
        config = PeacePulseConfig.from_dict({"llm": {"api_key": "${MISSING_KEY}"}})
        assert config.llm.api_key is None


class TestLoading:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(f"paths:\n  db: {tmp_path / 'x.db'}\nclassifier:\n  strategy: rules\n")
        config = load_config(path)
        assert config["classifier"]["strategy"] == "rules"
        assert get_paths(config)["db"] == tmp_path / "x.db"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config_model(path).classifier.strategy == "auto"

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config_model(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("llm: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config_model(path)

    def test_found_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text("replies:\n  seed: 42\n")
        assert load_config_model().replies.seed == 42

    def test_round_trip(self):
        config = PeacePulseConfig()
        assert PeacePulseConfig.from_dict(config.to_dict()) == config
