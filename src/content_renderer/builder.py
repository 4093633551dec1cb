"""Content builder — one batch pass from source documents to a BuildResult.

Each document is read, parsed and rendered on its own. A document that
fails is logged, recorded on the result and skipped; the rest of the
batch carries on. The tag index is built once every document is parsed.

Usage:
    builder = ContentBuilder()
    result = builder.build_from_directory(Path("source/_posts"))
    if not result.success:
        ...
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from src.common.config import RendererSettings, settings
from src.common.logging import setup_logging
from src.common.models import BuildResult, DocumentError, ErrorKind, Post

from .front_matter import ParseError, parse_post
from .renderer import PostRenderer
from .tag_index import build_tag_index, post_sort_key

logger = setup_logging(module_name="content_renderer.builder")


class ContentBuilder:
    """Parses, renders and indexes a set of post documents."""

    def __init__(self, config: RendererSettings | None = None):
        self.config = config or settings.renderer
        self.renderer = PostRenderer(
            break_marker=self.config.break_marker,
            extensions=self.config.markdown_extensions,
        )

    def discover(self, source_dir: Path) -> list[Path]:
        """List post files in a directory, sorted by name."""
        suffixes = {s.lower() for s in self.config.suffixes}
        return sorted(
            p for p in source_dir.iterdir()
            if p.is_file() and p.suffix.lower() in suffixes
        )

    def build_from_directory(self, source_dir: Path | None = None) -> BuildResult:
        """Build every post document found in a directory.

        Args:
            source_dir: Directory of post files. Defaults to the configured one.

        Returns:
            BuildResult
        """
        source_dir = Path(source_dir or self.config.source_dir)
        paths = self.discover(source_dir)
        logger.info("Found %d documents in %s", len(paths), source_dir)

        documents: list[tuple[Path, str]] = []
        errors: list[DocumentError] = []
        for path in paths:
            try:
                documents.append((path, path.read_text(encoding="utf-8")))
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping unreadable document %s: %s", path, exc)
                errors.append(
                    DocumentError(path=str(path), kind=ErrorKind.IO, message=str(exc))
                )

        result = self.build(documents)
        result.errors[:0] = errors
        if not result.success:
            logger.warning("Build failed: %d document(s) skipped", len(result.errors))
        return result

    def build(self, documents: Iterable[tuple[str | Path, str]]) -> BuildResult:
        """Build from in-memory (path, text) pairs.

        Args:
            documents: Source path and full document text for each post

        Returns:
            BuildResult with rendered posts (newest first), tag index and errors
        """
        posts: list[Post] = []
        seen: set[str] = set()
        errors: list[DocumentError] = []

        for path, text in documents:
            try:
                post = parse_post(
                    text,
                    path,
                    break_marker=self.config.break_marker,
                    default_layout=self.config.default_layout,
                )
                if post.post_id in seen:
                    raise ParseError(path, f"duplicate identifier {post.post_id!r}")
            except ParseError as exc:
                logger.warning("Skipping %s", exc)
                errors.append(
                    DocumentError(path=exc.path, kind=ErrorKind.PARSE, message=exc.message)
                )
                continue
            seen.add(post.post_id)
            posts.append(post)

        posts.sort(key=post_sort_key)
        result = BuildResult(
            posts=[self.renderer.render(post) for post in posts],
            tag_index=build_tag_index(posts),
            errors=errors,
        )

        logger.info(
            "Rendered %d posts across %d tags (%d errors)",
            len(result.posts), len(result.tag_index), len(errors),
        )
        return result
