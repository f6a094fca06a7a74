"""Integration tests for the mdpost CLI commands"""

import json

import pytest
from typer.testing import CliRunner

from mdpost.cli.cli import app


@pytest.fixture(name="runner")
def runner_fixture():
    return CliRunner()


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each command from a clean tmp directory so relative paths are isolated."""
    monkeypatch.chdir(tmp_path)
    for name in ("CONTENT_DIR", "OUTPUT_DIR", "OUTPUT_FORMAT", "PARSER_CONFIG", "REQUIRED_KEYS"):
        monkeypatch.delenv(f"MDPOST_{name}", raising=False)


def test_check_sample_store(runner, posts_dir):
    result = runner.invoke(app, ["check", str(posts_dir)])
    assert result.exit_code == 0, result.output
    assert "All posts OK." in result.output


def test_check_reports_and_fails(runner, write_post):
    write_post("good.md", "---\nlayout: post\ntitle: T\n---\nBody\n")
    write_post("open.md", "---\nlayout: post\ntitle: Never closed\n")
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 1
    assert "open.md:1: MalformedMetadata" in result.output
    assert "Found 1 issue(s)." in result.output


def test_check_missing_path(runner):
    result = runner.invoke(app, ["check", "nowhere"])
    assert result.exit_code == 1
    assert "Path not found" in result.output


def test_build_cmd_writes_html_and_json(runner, tmp_path, write_post):
    """build renders posts from the default content_dir into --out-dir."""
    write_post("2017-04-18-unit-testing.md", "---\nlayout: post\ntitle: Unit Testing\n---\n\n```ruby\nputs 1\n```\n")
    result = runner.invoke(app, ["build", "--out-dir", str(tmp_path / "site")])
    assert result.exit_code == 0, result.output
    assert "unit-testing ->" in result.output
    html = next((tmp_path / "site").rglob("*.html")).read_text(encoding="utf-8")
    assert 'class="language-ruby"' in html
    assert any((tmp_path / "site").rglob("*.json"))


def test_build_cmd_md_format(runner, tmp_path, posts_dir):
    result = runner.invoke(app, ["build", str(posts_dir), "--out-dir", "out", "--format", "md"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "out" / "unit-testing.md").exists()


def test_build_cmd_fails_on_bad_post(runner, write_post):
    write_post("p.md", "---\ntitle: T\n---\nBody\n")
    result = runner.invoke(app, ["build"])
    assert result.exit_code == 1
    assert "Failed to build" in result.output


def test_build_cmd_rejects_bad_format(runner, posts_dir):
    result = runner.invoke(app, ["build", str(posts_dir), "--format", "pdf"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_show_cmd(runner, sample_post):
    result = runner.invoke(app, ["show", str(sample_post)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["layout"] == "post"
    assert data["title"] == "Unit Testing"
    assert data["date"] == "2017-04-18T23:53:42-07:00"


def test_show_cmd_malformed(runner, write_post):
    p = write_post("p.md", "layout: post\n")
    result = runner.invoke(app, ["show", str(p)])
    assert result.exit_code == 1
    assert "MalformedMetadata" not in result.output
    assert "missing opening" in result.output


def test_render_cmd(runner, sample_post):
    result = runner.invoke(app, ["render", str(sample_post)])
    assert result.exit_code == 0, result.output
    assert result.output.startswith("<p>Most arguments about unit testing")
    assert '<pre><code class="language-ruby">' in result.output


def test_render_cmd_missing_file(runner):
    result = runner.invoke(app, ["render", "missing.md"])
    assert result.exit_code == 1
    assert "Cannot open missing.md" in result.output


def test_verbose_flag(runner, posts_dir):
    result = runner.invoke(app, ["-v", "check", str(posts_dir)])
    assert result.exit_code == 0, result.output


@pytest.mark.parametrize("command", ["render", "show", "check"])
def test_unknown_parser_config_fails_cleanly(runner, monkeypatch, sample_post, command):
    """An unknown markdown-it preset is a configuration error, not a crash."""
    monkeypatch.setenv("MDPOST_PARSER_CONFIG", "bogus")
    result = runner.invoke(app, [command, str(sample_post)])
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert not isinstance(result.exception, KeyError)


def test_render_cmd_parser_config_option(runner, sample_post):
    result = runner.invoke(app, ["render", str(sample_post), "--parser-config", "bogus"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_check_reports_undecodable_file(runner, write_post, tmp_path):
    """A non-UTF-8 post becomes an issue line; the rest of the store is still checked."""
    write_post("good.md", "---\nlayout: post\ntitle: T\n---\nBody\n")
    (tmp_path / "_posts" / "bad.md").write_bytes(b"title: \xff")
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)
    assert "bad.md: Unreadable:" in result.output
    assert "Found 1 issue(s)." in result.output


def test_render_cmd_undecodable_file(runner, tmp_path):
    p = tmp_path / "bad.md"
    p.write_bytes(b"---\ntitle: \xff\n---\n")
    result = runner.invoke(app, ["render", str(p)])
    assert result.exit_code == 1
    assert "Error: Cannot open" in result.output
