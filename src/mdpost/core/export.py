"""Export: HTML fragment or canonical markdown, plus a JSON metadata sidecar"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

from mdpost.core.frontmatter import dump_frontmatter
from mdpost.core.models import Document
from mdpost.core.render import render_html


logger = logging.getLogger(__name__)

EXPORT_FORMATS = ('html', 'md')


def _json_safe(value: Any) -> Any:
    """Convert YAML-loaded values (dates, nested containers) to JSON-serializable ones."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def build_sidecar(doc: Document) -> dict:
    """Build the sidecar JSON dict: slug, path, hash, metadata, normalized date, block outline."""
    try:
        published = doc.metadata.timestamp().isoformat()
    except ValueError:
        published = None
    return {
        "slug": doc.slug,
        "path": doc.path,
        "hash": doc.hash,
        "layout": _json_safe(doc.metadata.layout),
        "title": _json_safe(doc.metadata.title),
        "date": published,
        "metadata": _json_safe(doc.metadata.as_dict()),
        "blocks": [
            {"type": b.type.value, "lang": b.lang, "line": b.line}
            for b in doc.blocks
        ],
    }


def build_output(doc: Document, fmt: str = 'html', parser_config: str = 'gfm-like') -> str:
    """Return the rendered HTML fragment, or the post re-serialized as canonical markdown."""
    if fmt == 'html':
        return render_html(doc.body, parser_config)
    if fmt == 'md':
        return dump_frontmatter(doc.metadata.as_dict(), doc.body)
    raise ValueError(f"Unknown export format {fmt!r}; expected one of {', '.join(EXPORT_FORMATS)}")


def write_doc(
    doc: Document,
    output_dir: Path,
    fmt: str = 'html',
    parser_config: str = 'gfm-like',
    ) -> tuple[Path, Path]:
    """Write the rendered post + sidecar JSON.

    Output path mirrors the source directory structure:
      output_dir / Path(doc.path).parent / doc.slug.{fmt|json}

    Returns (out_path, json_path).
    """
    content = build_output(doc, fmt, parser_config)
    src = Path(doc.path)
    dest_dir = output_dir / (src.parent if not src.is_absolute() else Path())
    dest_dir.mkdir(parents=True, exist_ok=True)

    out_path = dest_dir / f"{doc.slug}.{fmt}"
    json_path = dest_dir / f"{doc.slug}.json"
    out_path.write_text(content, encoding='utf-8')
    json_path.write_text(json.dumps(build_sidecar(doc), indent=2, ensure_ascii=False), encoding='utf-8')
    logger.debug("wrote %s and %s", out_path, json_path)
    return out_path, json_path
