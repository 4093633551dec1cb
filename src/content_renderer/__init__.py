# Content Renderer Module
# Front-matter parsing, excerpts, markdown rendering, tag index, site output

from .builder import ContentBuilder
from .front_matter import ParseError, parse_identifier, parse_post, split_front_matter
from .renderer import PostRenderer, find_excerpt, render_markdown
from .tag_index import build_tag_index, post_sort_key
from .writer import SiteWriter, assign_tag_slugs, slugify_tag

__all__ = [
    "ContentBuilder",
    "ParseError",
    "PostRenderer",
    "SiteWriter",
    "assign_tag_slugs",
    "build_tag_index",
    "find_excerpt",
    "parse_identifier",
    "parse_post",
    "post_sort_key",
    "render_markdown",
    "slugify_tag",
    "split_front_matter",
]
