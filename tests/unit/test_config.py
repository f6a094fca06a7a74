"""Unit tests for config.py"""

import pytest

from mdpost.config import load_config


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run from an empty directory with no MDPOST_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("CONTENT_DIR", "OUTPUT_DIR", "OUTPUT_FORMAT", "PARSER_CONFIG", "REQUIRED_KEYS"):
        monkeypatch.delenv(f"MDPOST_{name}", raising=False)


def test_load_config_defaults():
    """Settings defaults apply when no config.yaml, env var, or CLI override exists."""
    settings = load_config()
    assert settings.content_dir == "_posts"
    assert settings.output_dir == "_site"
    assert settings.output_format == "html"
    assert settings.required_keys == ["layout", "title"]


def test_load_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("content_dir: posts\nrequired_keys: [layout, title, date]\n")
    settings = load_config()
    assert settings.content_dir == "posts"
    assert settings.required_keys == ["layout", "title", "date"]


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MDPOST_OUTPUT_DIR takes precedence over config.yaml output_dir."""
    (tmp_path / "config.yaml").write_text("output_dir: public\n")
    monkeypatch.setenv("MDPOST_OUTPUT_DIR", "build")
    assert load_config().output_dir == "build"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("MDPOST_OUTPUT_DIR", "build")
    assert load_config(overrides={"output_dir": "cli"}).output_dir == "cli"
    assert load_config(overrides={"output_dir": None}).output_dir == "build"


def test_load_config_env_required_keys(monkeypatch):
    """List settings are comma-separated in the environment."""
    monkeypatch.setenv("MDPOST_REQUIRED_KEYS", "layout, title,author")
    assert load_config().required_keys == ["layout", "title", "author"]


def test_load_config_env_output_format(monkeypatch):
    monkeypatch.setenv("MDPOST_OUTPUT_FORMAT", "md")
    assert load_config().output_format == "md"


def test_load_config_rejects_unknown_format():
    with pytest.raises(ValueError):
        load_config(overrides={"output_format": "pdf"})


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


@pytest.mark.parametrize("preset", ["commonmark", "default", "gfm-like", "js-default", "zero"])
def test_load_config_accepts_markdown_it_presets(preset):
    assert load_config(overrides={"parser_config": preset}).parser_config == preset


def test_load_config_rejects_unknown_preset(monkeypatch):
    monkeypatch.setenv("MDPOST_PARSER_CONFIG", "bogus")
    with pytest.raises(ValueError):
        load_config()
