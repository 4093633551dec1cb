"""
Site writer for rendered posts.
Handles Jinja2 template loading and writes the static site tree.
"""

import re
from pathlib import Path
from typing import Any, Iterable, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.common.config import SiteSettings, settings
from src.common.logging import setup_logging
from src.common.models import BuildResult

logger = setup_logging(module_name="content_renderer.writer")


def slugify_tag(tag: str) -> str:
    """Lower-case a tag and collapse non-alphanumerics to single dashes."""
    slug = re.sub(r"[^\w]+", "-", tag.lower()).strip("-")
    return slug or "tag"


def assign_tag_slugs(tags: Iterable[str]) -> dict[str, str]:
    """
    Give every tag its own path segment.

    Tags are taken in sorted order; a tag whose slug is already taken
    gets the first free ``-2``, ``-3``... suffix.

    Args:
        tags: Tag labels

    Returns:
        Tag label → unique slug
    """
    slugs: dict[str, str] = {}
    used: set[str] = set()
    for tag in sorted(set(tags)):
        base = slugify_tag(tag)
        slug, n = base, 1
        while slug in used:
            n += 1
            slug = f"{base}-{n}"
        used.add(slug)
        slugs[tag] = slug
    return slugs


class SiteWriter:
    """
    Writes a BuildResult as static HTML using Jinja2 templates.

    Files left over from an earlier build in the output directory are
    removed, so the tree always matches the latest BuildResult.

    Usage:
        writer = SiteWriter(Path("public"))
        written = writer.write(result)
    """

    def __init__(
        self,
        output_dir: Optional[Path] = None,
        templates_dir: Optional[Path] = None,
        site: Optional[SiteSettings] = None,
    ):
        """
        Initialize the site writer.

        Args:
            output_dir: Root of the generated site. Defaults to settings.
            templates_dir: Path to templates directory.
                          Defaults to ./templates relative to this file.
            site: Site metadata. Defaults to settings.site.
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.site = site or settings.site
        self.output_dir = Path(output_dir or self.site.output_dir)
        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def write(self, result: BuildResult) -> list[Path]:
        """
        Write every artifact for a build and prune stale files.

        Args:
            result: Build to publish; failed documents are never in it

        Returns:
            Paths written, in write order
        """
        written: list[Path] = []
        tag_slugs = assign_tag_slugs(result.tag_index.tags)

        for rendered in result.posts:
            context = rendered.to_template_context()
            target = self.output_dir / context["url"].strip("/") / "index.html"
            written.append(
                self._write(target, self.render_page("post.html", post=context, tag_slugs=tag_slugs))
            )

        for tag in result.tag_index.tags:
            posts = [
                result.get_post(post_id).to_template_context()
                for post_id in result.tag_index.posts_for(tag)
            ]
            target = self.output_dir / "tags" / tag_slugs[tag] / "index.html"
            written.append(
                self._write(
                    target,
                    self.render_page("tag.html", tag=tag, posts=posts, tag_slugs=tag_slugs),
                )
            )

        posts = [rendered.to_template_context() for rendered in result.posts]
        written.append(
            self._write(
                self.output_dir / "index.html",
                self.render_page(
                    "index.html",
                    posts=posts,
                    tags=result.tag_index.tags,
                    tag_slugs=tag_slugs,
                ),
            )
        )
        written.append(
            self._write(
                self.output_dir / "atom.xml",
                self.render_page(
                    "atom.xml",
                    posts=posts[: self.site.feed_limit],
                    updated=posts[0]["date"] if posts else "1970-01-01",
                ),
            )
        )

        removed = self._prune(written)
        logger.info(
            "Wrote %d files to %s (%d stale removed)", len(written), self.output_dir, removed
        )
        return written

    def render_page(self, template_name: str, **context: Any) -> str:
        """
        Render a single template with site metadata in scope.

        Args:
            template_name: Template file name (e.g., "post.html")
            context: Template variables

        Returns:
            Rendered text
        """
        template = self.env.get_template(template_name)
        return template.render(site=self.site.model_dump(), **context)

    def _write(self, target: Path, content: str) -> Path:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        return target

    def _prune(self, keep: list[Path]) -> int:
        """Delete files under output_dir that this build did not write."""
        keep_set = {p.resolve() for p in keep}
        removed = 0
        for path in sorted(self.output_dir.rglob("*"), reverse=True):
            if path.is_file() and path.resolve() not in keep_set:
                path.unlink()
                removed += 1
                logger.debug("Removed stale file %s", path)
            elif path.is_dir() and not any(path.iterdir()):
                path.rmdir()
        return removed
