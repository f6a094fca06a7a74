"""File discovery, front matter extraction, and markdown-it tokenization"""

import hashlib
import logging
from pathlib import Path
from typing import Any

from mdpost.core.blocks import tokens_to_blocks
from mdpost.core.frontmatter import load_frontmatter, split_frontmatter
from mdpost.core.models import Document, Metadata, ParsedDoc
from mdpost.core.render import make_parser
from mdpost.core.utils.slug import slugify, strip_date_prefix


logger = logging.getLogger(__name__)

MD_EXTENSIONS = {'.md', '.markdown'}


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def content_hash(raw: str) -> str:
    """SHA-256 hex digest of the full file text, front matter included."""
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def slug_for(path: Path, metadata: dict[str, Any]) -> str:
    """Front matter slug if set, else the filename stem without its date prefix."""
    if metadata.get('slug'):
        return slugify(str(metadata['slug']))
    return slugify(strip_date_prefix(path.stem))


def parse_text(raw: str, path: Path, parser_config: str = 'gfm-like') -> ParsedDoc:
    """Parse raw post text into a ParsedDoc with token stream."""
    fm_text, body, offset = split_frontmatter(raw, str(path))
    metadata = load_frontmatter(fm_text, str(path))
    tokens = make_parser(parser_config).parse(body)
    return ParsedDoc(
        path=path,
        slug=slug_for(path, metadata),
        raw=raw,
        body=body,
        body_offset=offset,
        metadata=metadata,
        tokens=tokens,
    )


def parse_file(path: Path, parser_config: str = 'gfm-like') -> ParsedDoc:
    """Parse a single post file into a ParsedDoc."""
    return parse_text(path.read_text(encoding='utf-8'), path, parser_config)


def to_document(parsed: ParsedDoc) -> Document:
    """Build the immutable Document, extracting blocks and verifying code fences."""
    blocks = tokens_to_blocks(
        parsed.tokens,
        parsed.body.splitlines(keepends=True),
        parsed.body_offset,
        str(parsed.path),
    )
    return Document(
        path=str(parsed.path),
        slug=parsed.slug,
        raw=parsed.raw,
        body=parsed.body,
        hash=content_hash(parsed.raw),
        metadata=Metadata.model_validate({str(k): v for k, v in parsed.metadata.items()}),
        blocks=blocks,
    )


def load_document(path: Path, parser_config: str = 'gfm-like') -> Document:
    """Parse a post file into a Document; raises MalformedMetadata or BrokenCodeFence."""
    doc = to_document(parse_file(path, parser_config))
    logger.debug("loaded %s: slug=%s blocks=%d", path, doc.slug, len(doc.blocks))
    return doc
