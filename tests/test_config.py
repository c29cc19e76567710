"""Unit tests for configuration loading."""

import pytest

from nuget_feed_tools.config import Config, get_default_config_path, load_config
from nuget_feed_tools.exceptions import ConfigurationError


class TestLoadConfig:
    """Test YAML configuration loading."""

    def test_defaults(self):
        config = load_config()
        assert isinstance(config, Config)
        assert config.feed.timeout is None
        assert config.export.output_dir is None
        assert not hasattr(config.export, "text_delimiter")
        assert config.deletion.executable == "nuget"
        assert config.console.rule_width == 116
        assert config.logging.level == "WARNING"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config.deletion.executable == "nuget"

    def test_values_loaded(self, tmp_path):
        path = tmp_path / "nuget_feed_tools.yaml"
        path.write_text(
            "feed:\n"
            "  timeout: 30\n"
            "  user_agent: my-agent/1.0\n"
            "export:\n"
            "  output_dir: out\n"
            "deletion:\n"
            "  executable: /usr/local/bin/nuget\n"
            "console:\n"
            "  use_colors: false\n"
            "logging:\n"
            "  level: DEBUG\n"
        )
        config = load_config(str(path))
        assert config.feed.timeout == 30
        assert config.feed.user_agent == "my-agent/1.0"
        assert config.export.output_dir == "out"
        assert config.deletion.executable == "/usr/local/bin/nuget"
        assert config.console.use_colors is False
        assert config.logging.level == "DEBUG"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)).feed.timeout is None

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("feed: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_wrong_type(self, tmp_path):
        path = tmp_path / "bad_type.yaml"
        path.write_text("console:\n  rule_width: wide\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_bool_is_not_a_timeout(self, tmp_path):
        path = tmp_path / "bool.yaml"
        path.write_text("feed:\n  timeout: true\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_template_requires_package_placeholder(self, tmp_path):
        path = tmp_path / "template.yaml"
        path.write_text("deletion:\n  command_template: ['nuget', 'delete']\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "unknown.yaml"
        path.write_text("feed:\n  colour: blue\nextras:\n  a: 1\n")
        config = load_config(str(path))
        assert not hasattr(config.feed, 'colour')

    def test_export_delimiters_not_configurable(self, tmp_path):
        path = tmp_path / "delimiters.yaml"
        path.write_text("export:\n  text_delimiter: ';'\n  csv_delimiter: ';'\n")
        config = load_config(str(path))
        assert not hasattr(config.export, 'text_delimiter')
        assert not hasattr(config.export, 'csv_delimiter')


class TestDefaultConfigPath:
    """Test configuration discovery."""

    def test_found_in_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        (tmp_path / "nuget_feed_tools.yml").write_text("")
        assert get_default_config_path() == "nuget_feed_tools.yml"

    def test_none_when_absent(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        assert get_default_config_path() is None
