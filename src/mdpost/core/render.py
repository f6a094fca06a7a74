"""HTML rendering of post bodies and the text round-trip used to verify it"""

import re

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt


CODE_TOKENS = {'fence', 'code_block'}
BREAK_TOKENS = {'softbreak', 'hardbreak'}
RAW_TEXT_OPEN_RE = re.compile(r'^<(script|style)\b', re.IGNORECASE)
RAW_TEXT_CLOSE_RE = re.compile(r'^</(script|style)\s*>', re.IGNORECASE)


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def render_html(body: str, parser_config: str = 'gfm-like') -> str:
    """Render a markdown body to an HTML fragment.

    Fenced code keeps its info string as a language-<lang> class on <code>,
    so a highlighter downstream can pick it up.
    """
    return make_parser(parser_config).render(body)


def strip_html(html: str) -> str:
    """Return the text content of an HTML fragment with entities decoded."""
    return BeautifulSoup(html, "html.parser").get_text()


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def _inline_text(children: list) -> str:
    parts = []
    raw_tag = None      # inside an inline <script>/<style>, whose text is not displayed
    for child in children or []:
        if raw_tag is not None:
            close = RAW_TEXT_CLOSE_RE.match(child.content) if child.type == 'html_inline' else None
            if close and close.group(1).lower() == raw_tag:
                raw_tag = None
            continue
        if child.type == 'html_inline' and (opened := RAW_TEXT_OPEN_RE.match(child.content)):
            if not child.content.rstrip().endswith('/>'):
                raw_tag = opened.group(1).lower()
            continue
        if child.type in ('text', 'code_inline'):
            parts.append(child.content)
        elif child.type in BREAK_TOKENS:
            parts.append(' ')
        elif child.type == 'html_inline':
            parts.append(strip_html(child.content))
        # images render as an alt attribute, which carries no text content
    return ''.join(parts)


def plain_text(tokens: list) -> str:
    """Collect the displayable text of a token stream, block by block."""
    parts = []
    for tok in tokens:
        if tok.type == 'inline':
            parts.append(_inline_text(tok.children))
        elif tok.type in CODE_TOKENS:
            parts.append(tok.content)
        elif tok.type == 'html_block':
            parts.append(strip_html(tok.content))
    return '\n'.join(parts)


def text_round_trips(tokens: list, html: str) -> bool:
    """True if stripping the rendered markup recovers the token text up to whitespace."""
    return normalize_whitespace(strip_html(html)) == normalize_whitespace(plain_text(tokens))
