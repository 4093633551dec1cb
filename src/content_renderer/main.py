"""CLI entry point for the blog content renderer.

Usage:
    python -m src.content_renderer.main
    python -m src.content_renderer.main --source source/_posts --output public
    python -m src.content_renderer.main --source source/_posts --marker "<!--break-->" -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from src.common.config import Settings
from src.common.logging import set_log_level

from .builder import ContentBuilder
from .writer import SiteWriter

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Blog content renderer — markdown posts to static HTML")
    parser.add_argument(
        "--source",
        type=str,
        help="Directory of post documents (default: renderer.source_dir setting)",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output directory for the generated site (default: site.output_dir setting)",
    )
    parser.add_argument(
        "--marker",
        type=str,
        help="Break marker separating the excerpt from the rest of a post",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to a settings.yaml file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        set_log_level(logging.DEBUG)

    config = Settings.load(Path(args.config)) if args.config else Settings.load()
    if args.source:
        config.renderer.source_dir = args.source
    if args.marker is not None:
        config.renderer.break_marker = args.marker
    if args.output:
        config.site.output_dir = args.output

    source_dir = Path(config.renderer.source_dir)
    if not source_dir.is_dir():
        parser.error(f"source directory not found: {source_dir}")

    result = ContentBuilder(config.renderer).build_from_directory(source_dir)
    written = SiteWriter(site=config.site).write(result)

    logger.info("=== Build: %s ===", "OK" if result.success else "FAILED")
    logger.info("Posts: %d, tags: %d, files: %d", len(result.posts), len(result.tag_index), len(written))
    for error in result.errors:
        logger.error("  [%s] %s: %s", error.kind.value, error.path, error.message)

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
