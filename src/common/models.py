"""Shared Pydantic data models for the blog content renderer.

These models define the data contracts between the content renderer
(parsing, excerpting, tag indexing) and the site writer. All modules
import from here.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, StrictBool, StrictStr, field_validator


# === Enums ===

class ErrorKind(str, Enum):
    """Why a source document was skipped."""
    PARSE = "parse"
    IO = "io"


# === Posts ===

class Post(BaseModel):
    """A single parsed post: front-matter metadata plus raw markdown body."""

    model_config = {"frozen": True}

    post_id: str
    slug: str
    title: StrictStr
    date: date
    tags: list[StrictStr] = Field(default_factory=list)
    layout: str = "post"
    comments: StrictBool = True
    body: str = ""
    excerpt_offset: int | None = Field(default=None, ge=0)
    source_path: str = ""
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: list[str]) -> list[str]:
        seen: list[str] = []
        for tag in value:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen

    @property
    def has_more(self) -> bool:
        """True when the body carries a break marker."""
        return self.excerpt_offset is not None

    @property
    def excerpt(self) -> str:
        """Markdown before the break marker, or the whole body."""
        if self.excerpt_offset is None:
            return self.body
        return self.body[: self.excerpt_offset]

    @property
    def url(self) -> str:
        return f"/{self.date:%Y/%m/%d}/{self.slug}/"


class RenderedPost(BaseModel):
    """A post together with its HTML renditions."""

    model_config = {"frozen": True}

    post: Post
    html: str
    excerpt_html: str

    def to_template_context(self) -> dict[str, Any]:
        """Convert to a Jinja2 template context dictionary."""
        post = self.post
        return {
            "post_id": post.post_id,
            "slug": post.slug,
            "title": post.title,
            "date": post.date.isoformat(),
            "date_display": f"{post.date:%b} {post.date.day}, {post.date.year}",
            "tags": list(post.tags),
            "layout": post.layout,
            "comments": post.comments,
            "url": post.url,
            "has_more": post.has_more,
            "content": self.html,
            "excerpt": self.excerpt_html,
            "extra": dict(post.extra),
        }


# === Build Output ===

class TagIndex(BaseModel):
    """Tag label → post identifiers, newest first."""

    entries: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def tags(self) -> list[str]:
        return sorted(self.entries)

    def posts_for(self, tag: str) -> list[str]:
        return list(self.entries.get(tag, []))

    def __contains__(self, tag: object) -> bool:
        return tag in self.entries

    def __len__(self) -> int:
        return len(self.entries)


class DocumentError(BaseModel):
    """A source document that failed to read or parse."""
    path: str
    kind: ErrorKind
    message: str


class BuildResult(BaseModel):
    """Outcome of one build over a set of source documents."""

    posts: list[RenderedPost] = Field(default_factory=list)
    tag_index: TagIndex = Field(default_factory=TagIndex)
    errors: list[DocumentError] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def get_post(self, post_id: str) -> RenderedPost | None:
        for rendered in self.posts:
            if rendered.post.post_id == post_id:
                return rendered
        return None
