"""Front-matter parsing — turns a raw post document into a Post.

A document looks like:

    ---
    layout: post
    title: "Akka cluster, part 1"
    tags: [scala, akka]
    comments: true
    ---
    Intro paragraph.
    <!-- more -->
    The rest of the post.

The identifier comes from the file name (``2014-03-02-akka-cluster``) and
carries the publication date.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler
from pydantic import ValidationError

from src.common.models import Post

from .renderer import find_excerpt

_IDENTIFIER_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)$")

# Keys mapped onto Post fields; everything else lands in Post.extra
_KNOWN_KEYS = {"layout", "title", "tags", "categories", "comments", "date"}


class ParseError(ValueError):
    """A document's front-matter or identifier could not be parsed."""

    def __init__(self, path: str | Path, message: str):
        self.path = str(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


def split_front_matter(text: str, path: str | Path = "<string>") -> tuple[dict[str, Any], str]:
    """Split a document into its front-matter mapping and markdown body.

    Args:
        text: Full document text
        path: Source path, used in error messages

    Returns:
        (front-matter dict, body text with surrounding whitespace stripped)

    Raises:
        ParseError: missing or unterminated block, invalid YAML,
            or YAML that is not a mapping
    """
    text = text.lstrip("\ufeff")
    handler = YAMLHandler()

    if not handler.detect(text):
        raise ParseError(path, "missing front-matter block")

    try:
        header, _ = handler.split(text)
    except ValueError as exc:
        raise ParseError(path, "unterminated front-matter block") from exc

    try:
        document = frontmatter.loads(text, handler=handler)
    except yaml.YAMLError as exc:
        raise ParseError(path, f"invalid front-matter YAML: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ParseError(path, "front-matter must be a mapping") from exc

    # frontmatter.loads drops non-mapping metadata instead of failing
    if not document.metadata and header.strip():
        if not isinstance(handler.load(header), dict):
            raise ParseError(path, "front-matter must be a mapping")

    return dict(document.metadata), document.content


def parse_identifier(post_id: str, path: str | Path = "<string>") -> tuple[date, str]:
    """Parse ``YYYY-MM-DD-slug`` into (publication date, slug)."""
    match = _IDENTIFIER_RE.match(post_id)
    if not match:
        raise ParseError(path, f"identifier {post_id!r} does not start with YYYY-MM-DD-")

    year, month, day, slug = match.groups()
    try:
        published = date(int(year), int(month), int(day))
    except ValueError as exc:
        raise ParseError(path, f"identifier {post_id!r} has an invalid date: {exc}") from exc

    return published, slug


def parse_post(
    text: str,
    path: str | Path,
    break_marker: str = "<!-- more -->",
    default_layout: str = "post",
) -> Post:
    """Parse a raw document into a validated Post.

    Args:
        text: Full document text
        path: Source file path; its stem is the post identifier
        break_marker: Marker separating excerpt from the rest of the body
        default_layout: Layout used when front-matter has none

    Returns:
        Post

    Raises:
        ParseError: on any malformed front-matter or identifier
    """
    path = Path(path)
    post_id = path.stem
    published, slug = parse_identifier(post_id, path)
    meta, body = split_front_matter(text, path)

    if "title" not in meta or meta["title"] is None:
        raise ParseError(path, "missing required field 'title'")

    if "date" in meta:
        declared = _coerce_date(meta["date"], path)
        if declared != published:
            raise ParseError(
                path,
                f"front-matter date {declared.isoformat()} does not match "
                f"identifier date {published.isoformat()}",
            )

    fields: dict[str, Any] = {
        "post_id": post_id,
        "slug": slug,
        "title": _coerce_title(meta["title"]),
        "date": published,
        "tags": _coerce_tags(meta),
        "layout": meta.get("layout") or default_layout,
        "body": body,
        "excerpt_offset": find_excerpt(body, break_marker),
        "source_path": str(path),
        "extra": {k: v for k, v in meta.items() if k not in _KNOWN_KEYS},
    }
    if meta.get("comments") is not None:
        fields["comments"] = meta["comments"]

    try:
        return Post(**fields)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise ParseError(path, f"invalid front-matter: {problems}") from exc


def _coerce_title(value: Any) -> Any:
    """YAML reads titles like `1984` as numbers or dates; keep them as text."""
    if isinstance(value, (int, float, date)) and not isinstance(value, bool):
        return str(value)
    return value


def _coerce_tags(meta: dict[str, Any]) -> Any:
    """Normalize ``tags`` (or the ``categories`` alias) to a list."""
    if meta.get("tags") is not None:
        tags = meta["tags"]
        return [tags] if isinstance(tags, str) else tags

    categories = meta.get("categories")
    if categories is None:
        return []
    if isinstance(categories, str):
        return [c.strip() for c in categories.split(",")]
    return categories


def _coerce_date(value: Any, path: Path) -> date:
    """Front-matter dates may come back from YAML as date, datetime or str."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise ParseError(path, f"unparseable front-matter date {value!r}")
