"""
Tests for Configuration Loading
=================================
"""

import os

import pytest

from inertia_scanner.effects.bubbles import load_quotes
from inertia_scanner.utils.config import (
    BASE_DIR,
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    validate_config,
)


class TestLoadConfig:
    """Test suite for load_config."""

    def test_missing_file_uses_defaults(self, tmp_path):
        defaults = {"recognition": {"cooldown": 0.4}}
        config = load_config(tmp_path / "absent.yaml", defaults=defaults)

        assert config == defaults

    def test_file_merged_over_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("recognition:\n  cooldown: 1.0\n", encoding="utf-8")

        config = load_config(path, defaults={"recognition": {"cooldown": 0.4, "num_slots": 2}})

        assert config["recognition"] == {"cooldown": 1.0, "num_slots": 2}

    def test_non_mapping_root_ignored(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")

        assert load_config(path) == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == {}

    def test_shipped_config(self):
        config = load_config(DEFAULT_CONFIG_PATH)

        assert validate_config(config) == []
        assert config["recognition"]["cooldown"] == 0.4
        assert config["bubbles"]["ttl"] == 8.0


class TestValidateConfig:
    """Test suite for validate_config."""

    def test_valid(self):
        assert validate_config({"camera": {"width": 640}, "bubbles": {"ttl": 5}}) == []

    def test_wrong_type(self):
        warnings = validate_config({"recognition": {"cooldown": "fast"}})

        assert len(warnings) == 1
        assert "recognition.cooldown" in warnings[0]

    def test_bool_is_not_a_float(self):
        assert len(validate_config({"bubbles": {"ttl": True}})) == 1

    def test_section_not_mapping(self):
        warnings = validate_config({"camera": 5})
        assert "camera" in warnings[0]

    def test_unknown_keys_ignored(self):
        assert validate_config({"extra": {"thing": 1}, "camera": {"exposure": "auto"}}) == []


class TestAppConfig:
    """Test suite for AppConfig."""

    def test_defaults_from_empty_dict(self):
        config = AppConfig.from_dict({})

        assert config.recognition.cooldown == 0.4
        assert config.bubbles.ttl == 8.0
        assert config.camera.flip_horizontal is True
        assert config.window_title == "Inertia Scanner"
        assert os.path.isabs(config.quotes_path)

    def test_relative_quotes_path_resolved(self):
        config = AppConfig.from_dict({"quotes_path": "config/quotes.yaml"})
        assert config.quotes_path == str(BASE_DIR / "config" / "quotes.yaml")

    def test_absolute_quotes_path_kept(self, tmp_path):
        path = str(tmp_path / "q.yaml")
        assert AppConfig.from_dict({"quotes_path": path}).quotes_path == path

    def test_sections(self):
        config = AppConfig.from_dict({
            "recognition": {"cooldown": 0.8, "slot_by_handedness": True},
            "bubbles": {"seed": 3},
            "skeleton": {"colors": {"active": [0, 0, 255]}},
        })

        assert config.recognition.cooldown == 0.8
        assert config.recognition.slot_by_handedness is True
        assert config.bubbles.seed == 3
        assert config.skeleton.active_color == (0, 0, 255)

    def test_shipped_quotes_load(self):
        config = AppConfig.from_dict(load_config(DEFAULT_CONFIG_PATH))
        quotes = load_quotes(config.quotes_path)

        assert len(quotes) > 0
        assert all(q.strip() == q and q for q in quotes)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
