"""Data models for parsed posts"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%d %H:%M %z",
)


def parse_timestamp(value: Any) -> datetime:
    """Return a timezone-aware datetime for a front matter date value.

    Accepts datetime objects (as PyYAML resolves them) and strings such as
    '2017-04-18 23:53:42 -0700' that PyYAML leaves unresolved. Values without
    a UTC offset are rejected.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        raise ValueError(f"date {value.isoformat()} has no time or timezone offset")
    elif isinstance(value, str):
        text = value.strip()
        parsed = None
        for fmt in TIMESTAMP_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
        if parsed is None:
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError as e:
                raise ValueError(f"unrecognized timestamp {value!r}") from e
    else:
        raise ValueError(f"expected a timestamp, got {type(value).__name__}")

    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise ValueError(f"timestamp {value!s} has no timezone offset")
    return parsed


class BlockEnum(str, Enum):
    prose = "prose"
    code = "code"


class Block(BaseModel):
    """A single top-level content block of a post body."""
    model_config = ConfigDict(frozen=True)

    type: BlockEnum
    content: str
    lang: Optional[str] = None      # fence language hint; None for prose or untagged fences
    position: int
    line: int                       # 1-based line in the source file


class Metadata(BaseModel):
    """Front matter keys the site generator recognizes; anything else is kept as an extra."""
    model_config = ConfigDict(frozen=True, extra="allow")

    layout: Any = None
    title: Any = None
    date: Any = None

    def timestamp(self) -> datetime:
        if self.date is None:
            raise ValueError("date is not set")
        return parse_timestamp(self.date)

    def as_dict(self) -> dict[str, Any]:
        """Return all keys (recognized and extra) with unset recognized keys dropped."""
        data = self.model_dump()
        return {k: v for k, v in data.items() if v is not None or k not in ("layout", "title", "date")}


class Document(BaseModel):
    """An authored post: front matter plus an ordered list of prose/code blocks."""
    model_config = ConfigDict(frozen=True)

    path: str
    slug: str
    raw: str                        # full file content (includes front matter)
    body: str                       # text after the closing delimiter
    hash: str
    metadata: Metadata = Field(default_factory=Metadata)
    blocks: list[Block] = Field(default_factory=list)

    def code_blocks(self) -> list[Block]:
        return [b for b in self.blocks if b.type == BlockEnum.code]


@dataclass
class ParsedDoc:
    """Internal parse result carrying markdown-it tokens; not exported."""
    path:        Path
    slug:        str
    raw:         str
    body:        str
    body_offset: int           # number of file lines before the body starts
    metadata:    dict[str, Any]
    tokens:      list          # markdown-it Token objects
