"""Shared fixtures for core unit tests"""

import pytest
from markdown_it import MarkdownIt


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```ruby
puts "hello"
```

---

Footer paragraph.
"""

SAMPLE_POST = """\
---
layout: post
title: "Unit Testing"
date: 2017-04-18 23:53:42 -0700
---

Intro paragraph.

```ruby
expect(order.total).to eq(108)
```
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return MarkdownIt("gfm-like", options_update={"linkify": False})


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture(parser):
    return parser.parse(SAMPLE_MD)


@pytest.fixture(name="sample_lines")
def sample_lines_fixture():
    return SAMPLE_MD.splitlines(keepends=True)


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="post_text")
def post_text_fixture():
    return SAMPLE_POST
