"""Token-to-Block conversion and code fence integrity checks"""

import re
from typing import Optional

from mdpost.core.errors import BrokenCodeFence
from mdpost.core.models import Block, BlockEnum


CODE_TOKENS = {'fence', 'code_block'}
SKIPPED_TOKENS = {'hr'}
FENCE_RE = re.compile(r'^ {0,3}(`{3,}|~{3,})(.*)$')
BLOCKQUOTE_PREFIX_RE = re.compile(r'^(\s*>)+')


def _fence_lang(token) -> Optional[str]:
    """Return the language hint (first word of the fence info string), else None."""
    info = (token.info or '').strip()
    return info.split()[0] if info else None


def _is_closing_fence(line: str, markup: str) -> bool:
    """True if line closes a fence opened with markup (same char, at least as long, nothing else)."""
    stripped = BLOCKQUOTE_PREFIX_RE.sub('', line).strip()
    return (
        len(stripped) >= len(markup)
        and stripped[0] == markup[0]
        and stripped == stripped[0] * len(stripped)
    )


def _source_slice(token, source_lines: list[str]) -> str:
    """Extract raw source for a block via token.map; fallback to token.content."""
    if token.map:
        start, end = token.map
        return ''.join(source_lines[start:end]).rstrip()
    return token.content.rstrip()


def check_fence(token, source_lines: list[str], line_offset: int = 0, path: Optional[str] = None) -> None:
    """Raise BrokenCodeFence if a fence token runs to end of input without a closing marker."""
    if token.type != 'fence' or not token.map:
        return
    start, end = token.map
    if end - start >= 2 and end <= len(source_lines) and _is_closing_fence(source_lines[end - 1], token.markup):
        return
    raise BrokenCodeFence(
        f"code fence {token.markup}{token.info or ''} is never closed",
        path=path,
        line=line_offset + start + 1,
    )


def tokens_to_blocks(
    tokens: list,
    source_lines: list[str],
    line_offset: int = 0,
    path: Optional[str] = None,
    ) -> list[Block]:
    """Convert a body's token stream into ordered top-level prose/code Blocks."""
    for tok in tokens:
        check_fence(tok, source_lines, line_offset, path)

    blocks: list[Block] = []
    for tok in tokens:
        if tok.level != 0 or tok.nesting == -1 or not tok.block or tok.map is None:
            continue
        if tok.type in SKIPPED_TOKENS:
            continue
        is_code = tok.type in CODE_TOKENS
        blocks.append(Block(
            type=BlockEnum.code if is_code else BlockEnum.prose,
            content=tok.content.rstrip('\n') if is_code else _source_slice(tok, source_lines),
            lang=_fence_lang(tok) if tok.type == 'fence' else None,
            position=len(blocks),
            line=line_offset + tok.map[0] + 1,
        ))
    return blocks


def count_fence_markers(body: str) -> int:
    """Count lines that open or close a fenced code block; even for a well-formed body."""
    count = 0
    open_markup = None
    for line in body.splitlines():
        m = FENCE_RE.match(line)
        if not m:
            continue
        markup, rest = m.group(1), m.group(2)
        if open_markup is None:
            if markup[0] == '`' and '`' in rest:
                continue    # inline code span, not a fence
            open_markup = markup
            count += 1
        elif markup[0] == open_markup[0] and len(markup) >= len(open_markup) and not rest.strip():
            open_markup = None
            count += 1
    return count
