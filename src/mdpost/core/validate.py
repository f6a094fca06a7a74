"""Structural checks a site build relies on: required keys, dates, fences, render round-trip"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from mdpost.core.blocks import count_fence_markers
from mdpost.core.errors import MdpostError
from mdpost.core.models import Document, ParsedDoc
from mdpost.core.parse import discover_files, parse_file, to_document
from mdpost.core.render import render_html, text_round_trips


logger = logging.getLogger(__name__)

DEFAULT_REQUIRED_KEYS = ('layout', 'title')


class Issue(BaseModel):
    """A single authoring problem found in a post."""
    path: str
    code: str
    message: str
    line: Optional[int] = None

    def __str__(self) -> str:
        where = f"{self.path}:{self.line}" if self.line is not None else self.path
        return f"{where}: {self.code}: {self.message}"


def check_required_keys(doc: Document, required_keys=DEFAULT_REQUIRED_KEYS) -> list[Issue]:
    """Each required key must be a non-empty string."""
    issues = []
    meta = doc.metadata.model_dump()
    for key in required_keys:
        value = meta.get(key)
        if value is None:
            issues.append(Issue(path=doc.path, code="MissingKey", message=f"'{key}' is missing"))
        elif not isinstance(value, str) or not value.strip():
            issues.append(Issue(path=doc.path, code="MissingKey", message=f"'{key}' must be a non-empty string"))
    return issues


def check_date(doc: Document) -> list[Issue]:
    """An absent date is allowed; a present one must parse with a timezone offset."""
    if doc.metadata.date is None:
        return []
    try:
        doc.metadata.timestamp()
    except ValueError as e:
        return [Issue(path=doc.path, code="InvalidDate", message=str(e))]
    return []


def check_fences(doc: Document) -> list[Issue]:
    count = count_fence_markers(doc.body)
    if count % 2:
        return [Issue(path=doc.path, code="UnbalancedFences", message=f"{count} fence markers (expected an even count)")]
    return []


def check_round_trip(parsed: ParsedDoc, parser_config: str = 'gfm-like') -> list[Issue]:
    html = render_html(parsed.body, parser_config)
    if not text_round_trips(parsed.tokens, html):
        return [Issue(path=str(parsed.path), code="RoundTrip", message="rendered HTML text differs from source text")]
    return []


def check_document(
    doc: Document,
    parsed: Optional[ParsedDoc] = None,
    required_keys=DEFAULT_REQUIRED_KEYS,
    parser_config: str = 'gfm-like',
    ) -> list[Issue]:
    """Run every document-level check; the round-trip check needs the parsed token stream."""
    issues = check_required_keys(doc, required_keys) + check_date(doc) + check_fences(doc)
    if parsed is not None:
        issues += check_round_trip(parsed, parser_config)
    return issues


def check_file(path: Path, required_keys=DEFAULT_REQUIRED_KEYS, parser_config: str = 'gfm-like') -> list[Issue]:
    """Check one post file, reporting load failures as issues instead of raising."""
    try:
        parsed = parse_file(path, parser_config)
        doc = to_document(parsed)
    except MdpostError as e:
        logger.debug("failed to load %s", path, exc_info=True)
        return [Issue(path=str(path), code=type(e).__name__, message=e.message, line=e.line)]
    except (UnicodeDecodeError, OSError) as e:
        logger.debug("failed to read %s", path, exc_info=True)
        return [Issue(path=str(path), code="Unreadable", message=str(e))]
    return check_document(doc, parsed, required_keys, parser_config)


def check_path(path: Path, required_keys=DEFAULT_REQUIRED_KEYS, parser_config: str = 'gfm-like') -> list[Issue]:
    """Check every post under path (file or directory)."""
    issues = []
    for p in discover_files(path):
        found = check_file(p, required_keys, parser_config)
        logger.info("checked %s: %d issue(s)", p, len(found))
        issues.extend(found)
    return issues
