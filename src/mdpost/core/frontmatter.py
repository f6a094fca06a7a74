"""Front matter splitting, YAML loading, and canonical re-serialization"""

import logging
from typing import Any, Optional

import yaml

from mdpost.core.errors import MalformedMetadata


logger = logging.getLogger(__name__)

OPEN_DELIMITER = "---"
CLOSE_DELIMITERS = ("---", "...")


def split_frontmatter(raw: str, path: Optional[str] = None) -> tuple[str, str, int]:
    """Return (yaml_text, body, body_offset) where body_offset counts the lines consumed.

    Raises MalformedMetadata when the opening or closing delimiter is missing.
    """
    text = raw.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != OPEN_DELIMITER:
        raise MalformedMetadata("missing opening '---' delimiter", path=path, line=1)

    end_idx = None
    for i in range(1, len(lines)):
        if lines[i].rstrip() in CLOSE_DELIMITERS:
            end_idx = i
            break
    if end_idx is None:
        raise MalformedMetadata("unterminated front matter: no closing '---' delimiter", path=path, line=1)

    fm_text = "".join(lines[1:end_idx])
    rest = lines[end_idx + 1:]
    offset = end_idx + 1
    while rest and not rest[0].strip():
        rest = rest[1:]
        offset += 1
    return fm_text, "".join(rest), offset


def load_frontmatter(fm_text: str, path: Optional[str] = None) -> dict[str, Any]:
    """Load a YAML front matter block; anything other than a mapping is malformed."""
    try:
        fm = yaml.safe_load(fm_text) if fm_text.strip() else {}
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 2    # +1 for 1-based, +1 for the opening delimiter
        raise MalformedMetadata(f"invalid YAML front matter: {e}", path=path, line=line) from e
    if fm is None:
        return {}
    if not isinstance(fm, dict):
        raise MalformedMetadata(
            f"front matter must be a mapping of keys to values, got {type(fm).__name__}", path=path, line=2,
        )
    return fm


def parse_frontmatter(raw: str, path: Optional[str] = None) -> tuple[dict[str, Any], str]:
    """Split raw post text into (metadata, body)."""
    fm_text, body, _ = split_frontmatter(raw, path)
    metadata = load_frontmatter(fm_text, path)
    logger.debug("front matter keys for %s: %s", path or "<text>", sorted(map(str, metadata)))
    return metadata, body


def dump_frontmatter(metadata: dict[str, Any], body: str) -> str:
    """Return body with a YAML front matter block prepended, key order preserved."""
    header = yaml.dump(metadata, default_flow_style=False, allow_unicode=True, sort_keys=False) if metadata else ""
    return f"---\n{header}---\n\n{body.lstrip()}"
