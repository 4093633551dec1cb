"""Shared test fixtures for the blog content renderer."""

import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.config import RendererSettings, SiteSettings


AKKA_POST = """---
layout: post
title: "Distributed actors with Akka, part 1"
tags: [scala, akka]
comments: true
---
Actors talk to each other by **message passing**.

<!-- more -->

## Remoting

Enable remoting in `application.conf`.
"""

UNREAL_POST = """---
layout: post
title: "Game engine diary: week one"
tags: [gamedev]
comments: false
---
Compiled the engine from source.
"""

ASPECTJ_POST = """---
layout: post
title: "Persistence with AspectJ"
tags: [java, scala]
---
Weaving a repository aspect.
<!-- more -->
The rest.
"""

MISSING_TITLE_POST = """---
layout: post
tags: [linux]
---
Installing packages the hard way.
"""


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def renderer_settings(tmp_path) -> RendererSettings:
    """Renderer settings pointing at a temporary source directory."""
    return RendererSettings(source_dir=str(tmp_path / "_posts"))


@pytest.fixture
def site_settings(tmp_path) -> SiteSettings:
    """Site settings writing into a temporary output directory."""
    return SiteSettings(
        title="Test Blog",
        author="Tester",
        base_url="https://blog.example.com",
        output_dir=str(tmp_path / "public"),
    )


@pytest.fixture
def sample_documents() -> dict[str, str]:
    """Return valid sample post documents keyed by file name."""
    return {
        "2014-03-02-akka-cluster.markdown": AKKA_POST,
        "2015-06-10-unreal-week-one.md": UNREAL_POST,
        "2014-03-02-aspectj-persistence.markdown": ASPECTJ_POST,
    }


@pytest.fixture
def posts_dir(tmp_path, sample_documents) -> Path:
    """Write the sample documents into a temporary _posts directory."""
    directory = tmp_path / "_posts"
    directory.mkdir()
    for name, text in sample_documents.items():
        (directory / name).write_text(text, encoding="utf-8")
    return directory
