"""
Post renderer — markdown to HTML, plus excerpt extraction.
Rendering is a pure function of the post: same input, same bytes out.
"""

from typing import Optional

import markdown as md

from src.common.models import Post, RenderedPost

DEFAULT_EXTENSIONS = ("tables", "fenced_code")


def find_excerpt(body: str, marker: str) -> Optional[int]:
    """
    Locate the break marker in a post body.

    Args:
        body: Raw markdown body
        marker: Break marker text (e.g. "<!-- more -->")

    Returns:
        Offset of the first occurrence, or None when absent
    """
    if not marker:
        return None
    offset = body.find(marker)
    return offset if offset >= 0 else None


def render_markdown(text: str, extensions: Optional[list[str]] = None) -> str:
    """Convert markdown text to an HTML fragment."""
    if extensions is None:
        extensions = list(DEFAULT_EXTENSIONS)
    return md.markdown(text, extensions=extensions)


class PostRenderer:
    """
    Renders parsed posts to HTML.

    Usage:
        renderer = PostRenderer(break_marker="<!-- more -->")
        rendered = renderer.render(post)
    """

    def __init__(
        self,
        break_marker: str = "<!-- more -->",
        extensions: Optional[list[str]] = None,
    ):
        self.break_marker = break_marker
        self.extensions = list(DEFAULT_EXTENSIONS if extensions is None else extensions)

    def render(self, post: Post) -> RenderedPost:
        """
        Render a post body and its excerpt.

        Args:
            post: Parsed post

        Returns:
            RenderedPost with full and excerpt HTML
        """
        body = post.body
        if post.excerpt_offset is not None:
            end = post.excerpt_offset + len(self.break_marker)
            body = body[: post.excerpt_offset] + body[end:]

        return RenderedPost(
            post=post,
            html=render_markdown(body, self.extensions),
            excerpt_html=render_markdown(post.excerpt, self.extensions),
        )
