"""Pipeline step functions: check and build orchestration"""

import logging
from pathlib import Path

from mdpost.config import Settings
from mdpost.core.export import write_doc
from mdpost.core.parse import discover_files, load_document
from mdpost.core.validate import Issue, check_path, check_required_keys


logger = logging.getLogger(__name__)


def run_check(path: str, settings: Settings) -> list[Issue]:
    """Check every post under path. Returns all issues found, in file order."""
    return check_path(Path(path), settings.required_keys, settings.parser_config)


def run_build(path: str, settings: Settings) -> list[tuple[str, Path]]:
    """Render every post under path to settings.output_dir. Returns (slug, out_path) pairs.

    A post that cannot be loaded, or lacks a required key, stops the build.
    """
    output_dir = Path(settings.output_dir)
    results = []
    for p in discover_files(Path(path)):
        try:
            doc = load_document(p, settings.parser_config)
            missing = check_required_keys(doc, settings.required_keys)
            if missing:
                raise ValueError("; ".join(i.message for i in missing))
            out_path, _ = write_doc(doc, output_dir, settings.output_format, settings.parser_config)
            results.append((doc.slug, out_path))
        except Exception as e:
            raise RuntimeError(f"Failed to build {p}: {e}") from e
        logger.info("built %s -> %s", p, out_path)
    return results
