"""Root test configuration: paths to the sample content store"""

from pathlib import Path

import pytest


FIXTURES_DIR = Path(__file__).parent / "fixtures"
POSTS_DIR = FIXTURES_DIR / "_posts"
SAMPLE_POST = POSTS_DIR / "2017-04-18-unit-testing.md"


@pytest.fixture(name="posts_dir")
def posts_dir_fixture():
    return POSTS_DIR


@pytest.fixture(name="sample_post")
def sample_post_fixture():
    return SAMPLE_POST


@pytest.fixture(name="write_post")
def write_post_fixture(tmp_path):
    """Write a post under tmp_path/_posts and return its path."""
    def _write(name: str, text: str) -> Path:
        posts = tmp_path / "_posts"
        posts.mkdir(exist_ok=True)
        p = posts / name
        p.write_text(text, encoding="utf-8")
        return p
    return _write
