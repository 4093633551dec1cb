"""Tests for shared common modules — models, config, logging."""

import logging
from datetime import date
from pathlib import Path

import pytest

from src.common.config import RendererSettings, Settings
from src.common.logging import set_log_level, setup_logging
from src.common.models import (
    BuildResult,
    DocumentError,
    ErrorKind,
    Post,
    RenderedPost,
    TagIndex,
)


def _post(**overrides) -> Post:
    data = {
        "post_id": "2014-03-02-akka-cluster",
        "slug": "akka-cluster",
        "title": "Akka cluster",
        "date": date(2014, 3, 2),
        "body": "Intro.\n<!-- more -->\nRest.\n",
    }
    data.update(overrides)
    return Post(**data)


class TestPost:
    def test_defaults(self):
        post = _post()
        assert post.layout == "post"
        assert post.comments is True
        assert post.tags == []
        assert post.excerpt_offset is None

    def test_excerpt_without_offset_is_full_body(self):
        post = _post()
        assert post.has_more is False
        assert post.excerpt == post.body

    def test_excerpt_with_offset(self):
        post = _post(excerpt_offset=7)
        assert post.has_more is True
        assert post.excerpt == "Intro.\n"

    def test_url(self):
        assert _post().url == "/2014/03/02/akka-cluster/"

    def test_tags_are_deduplicated(self):
        post = _post(tags=["scala", "akka", "scala", " akka "])
        assert post.tags == ["scala", "akka"]

    def test_blank_title_rejected(self):
        with pytest.raises(Exception):
            _post(title="   ")

    def test_comments_must_be_boolean(self):
        with pytest.raises(Exception):
            _post(comments="yes")

    def test_post_is_frozen(self):
        post = _post()
        with pytest.raises(Exception):
            post.title = "changed"


class TestRenderedPost:
    def test_template_context(self):
        rendered = RenderedPost(post=_post(tags=["scala"]), html="<p>x</p>", excerpt_html="<p>e</p>")
        context = rendered.to_template_context()
        assert context["title"] == "Akka cluster"
        assert context["date"] == "2014-03-02"
        assert context["date_display"] == "Mar 2, 2014"
        assert context["content"] == "<p>x</p>"
        assert context["excerpt"] == "<p>e</p>"
        assert context["tags"] == ["scala"]


class TestBuildResult:
    def test_success_without_errors(self):
        assert BuildResult().success is True

    def test_failed_with_errors(self):
        result = BuildResult(
            errors=[DocumentError(path="a.md", kind=ErrorKind.PARSE, message="bad")]
        )
        assert result.success is False

    def test_get_post(self):
        rendered = RenderedPost(post=_post(), html="", excerpt_html="")
        result = BuildResult(posts=[rendered])
        assert result.get_post("2014-03-02-akka-cluster") is rendered
        assert result.get_post("missing") is None


class TestTagIndex:
    def test_tags_sorted_and_lookup(self):
        index = TagIndex(entries={"scala": ["b"], "akka": ["a"]})
        assert index.tags == ["akka", "scala"]
        assert index.posts_for("scala") == ["b"]
        assert index.posts_for("nope") == []
        assert "akka" in index
        assert len(index) == 2


class TestSettings:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch):
        for var in ("BLOG_SOURCE_DIR", "BLOG_OUTPUT_DIR", "BLOG_BREAK_MARKER", "BLOG_BASE_URL"):
            monkeypatch.delenv(var, raising=False)
        config = Settings.load(tmp_path / "missing.yaml")
        assert config.renderer.break_marker == "<!-- more -->"
        assert config.renderer.markdown_extensions == ["tables", "fenced_code"]
        assert config.site.feed_limit == 20

    def test_load_yaml(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("BLOG_BREAK_MARKER", raising=False)
        settings_path = tmp_path / "settings.yaml"
        settings_path.write_text(
            "renderer:\n  break_marker: '<!--break-->'\nsite:\n  title: My Blog\n",
            encoding="utf-8",
        )
        config = Settings.load(settings_path)
        assert config.renderer.break_marker == "<!--break-->"
        assert config.site.title == "My Blog"

    def test_env_overrides(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("BLOG_SOURCE_DIR", "/tmp/posts")
        monkeypatch.setenv("BLOG_BASE_URL", "https://example.org")
        config = Settings.load(tmp_path / "missing.yaml")
        assert config.renderer.source_dir == "/tmp/posts"
        assert config.site.base_url == "https://example.org"

    def test_empty_env_marker_disables_excerpts(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("BLOG_BREAK_MARKER", "")
        config = Settings.load(tmp_path / "missing.yaml")
        assert config.renderer.break_marker == ""

    def test_renderer_settings_suffixes(self):
        assert RendererSettings().suffixes == [".md", ".markdown"]


class TestLogging:
    def test_setup_logging_is_idempotent(self):
        logger = setup_logging(module_name="content_renderer.test")
        again = setup_logging(module_name="content_renderer.test")
        assert logger is again
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO

    def test_renderer_loggers_do_not_propagate(self):
        logger = setup_logging(module_name="content_renderer.test_propagate")
        assert logger.propagate is False

    def test_set_log_level_updates_prefixed_loggers(self):
        logger = setup_logging(module_name="content_renderer.test_level")
        other = logging.getLogger("unrelated.test_level")
        other.setLevel(logging.WARNING)
        try:
            set_log_level(logging.DEBUG)
            assert logger.level == logging.DEBUG
            assert logger.handlers[0].level == logging.DEBUG
            assert other.level == logging.WARNING
        finally:
            set_log_level(logging.INFO)
