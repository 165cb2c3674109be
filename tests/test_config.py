"""Tests for configuration loading and validation."""

import json

import pytest
import yaml

from chat_reveal.config import load_config, validate_config
from chat_reveal.types import ConfigError


class TestLoadConfig:
    def test_load_defaults(self):
        config = load_config(config_dict={})
        assert config.version == "1.0"
        assert config.reveal.mode == "character"
        assert config.reveal.interval_ms == 30
        assert config.reveal.word_tick_multiplier == 4
        assert config.reveal.animation_enabled is True
        assert config.chain.split_blocks is True
        assert config.chain.max_blocks == 12

    def test_load_from_dict(self):
        config = load_config(config_dict={
            "reveal": {"mode": "word", "interval_ms": 20, "word_tick_multiplier": 3},
            "chain": {"split_blocks": False},
        })
        assert config.reveal.mode == "word"
        assert config.reveal.tick_seconds == pytest.approx(0.06)
        assert config.chain.split_blocks is False

    def test_load_from_yaml_file(self, tmp_path):
        path = tmp_path / "chat-reveal.yaml"
        path.write_text(yaml.dump({"reveal": {"interval_ms": 50}}))
        config = load_config(config_path=path)
        assert config.reveal.interval_ms == 50

    def test_load_from_json_file(self, tmp_path):
        path = tmp_path / "chat-reveal.json"
        path.write_text(json.dumps({"reveal": {"animation_enabled": False}}))
        config = load_config(config_path=path)
        assert config.reveal.animation_enabled is False

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "chat-reveal.yaml"
        path.write_text("")
        assert load_config(config_path=path).reveal.interval_ms == 30

    def test_null_sections_give_defaults(self):
        config = load_config(config_dict={"reveal": None, "chain": None})
        assert config.reveal.mode == "character"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "nope.yaml")

    def test_malformed_yaml_raises_config_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("reveal: [unclosed")
        with pytest.raises(ConfigError) as exc:
            load_config(config_path=path)
        assert exc.value.path == str(path)

    def test_non_mapping_raises_config_error(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(config_path=path)

    def test_discovers_config_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "chat-reveal.yaml").write_text("reveal:\n  interval_ms: 77\n")
        monkeypatch.chdir(tmp_path)
        assert load_config().reveal.interval_ms == 77

    def test_discovers_config_in_parent(self, tmp_path, monkeypatch):
        (tmp_path / "chat-reveal.yml").write_text("reveal:\n  mode: word\n")
        child = tmp_path / "nested" / "deeper"
        child.mkdir(parents=True)
        monkeypatch.chdir(child)
        assert load_config().reveal.mode == "word"


class TestValidateConfig:
    def test_defaults_are_valid(self):
        assert validate_config(load_config(config_dict={})) == []

    def test_bad_mode(self):
        errors = validate_config(load_config(config_dict={"reveal": {"mode": "sentence"}}))
        assert any("reveal.mode" in e for e in errors)

    def test_bad_interval(self):
        errors = validate_config(load_config(config_dict={"reveal": {"interval_ms": 0}}))
        assert any("interval_ms" in e for e in errors)

    def test_bad_multiplier(self):
        errors = validate_config(load_config(config_dict={"reveal": {"word_tick_multiplier": 0}}))
        assert any("word_tick_multiplier" in e for e in errors)

    def test_bad_chain_values(self):
        errors = validate_config(load_config(config_dict={
            "chain": {"max_blocks": 0, "min_block_chars": -1},
        }))
        assert len(errors) == 2
