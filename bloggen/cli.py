from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .config import (
    DEFAULT_ARTICLES,
    DEFAULT_CATEGORIES,
    DEFAULT_OUTPUT,
    DEFAULT_SITE_BASE,
    DEFAULT_TEMPLATES,
    load_categories,
    load_config,
    load_version,
)
from .pages import BuildContext, build_articles
from .render import TemplateError, load_templates
from .tree import walk_source
from .utils import parse_int, resolve_workers


class BuildError(Exception):
    pass


@dataclass
class BuildResult:
    rendered: int
    failed: int


def build_site(args: argparse.Namespace) -> BuildResult:
    articles_dir = Path(args.articles)
    output_dir = Path(args.output)
    templates_dir = Path(args.templates)
    categories_path = Path(args.categories)

    try:
        version = load_version()
        templates = load_templates(templates_dir)
    except (OSError, TemplateError) as exc:
        raise BuildError(f"generator: {exc}") from exc
    try:
        categories = load_categories(categories_path)
    except (OSError, ValueError) as exc:
        raise BuildError(f"generator: read {categories_path}: {exc}") from exc

    ctx = BuildContext.create(
        version=version,
        categories=categories,
        templates=templates,
        dest_root=output_dir,
        site_base=args.site_base,
    )

    try:
        articles = walk_source(articles_dir, output_dir)
    except OSError as exc:
        raise BuildError(str(exc)) from exc

    written, failures = build_articles(ctx, articles, workers=resolve_workers(args.build_workers))
    return BuildResult(rendered=len(written), failed=len(failures))


def main(argv: Optional[Sequence[str]] = None) -> int:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="bloggen.toml",
        help="Path to config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))

    def cfg_str(key: str, default: object) -> str:
        value = config.get(key)
        return str(default) if value is None else str(value)

    parser = argparse.ArgumentParser(description="Render markdown articles into the docs site.")
    parser.add_argument("--config", default=pre_args.config, help="Path to config file (TOML/YAML/JSON).")
    parser.add_argument(
        "--articles",
        default=cfg_str("articles", DEFAULT_ARTICLES),
        help="Directory containing the markdown articles and their assets.",
    )
    parser.add_argument("--output", default=cfg_str("output", DEFAULT_OUTPUT), help="Output directory.")
    parser.add_argument(
        "--templates",
        default=cfg_str("templates", DEFAULT_TEMPLATES),
        help="Directory containing _layout.html and article.html.",
    )
    parser.add_argument(
        "--categories",
        default=cfg_str("categories", DEFAULT_CATEGORIES),
        help="Path to the generated categories.json.",
    )
    parser.add_argument(
        "--site-base",
        default=cfg_str("site_base", DEFAULT_SITE_BASE),
        help="Absolute URL the output directory is served from.",
    )
    parser.add_argument(
        "--build-workers",
        default=parse_int(config.get("build_workers"), 0),
        type=int,
        help="Number of worker threads for rendering (0 = auto).",
    )
    args = parser.parse_args(argv)

    start = time.perf_counter()
    try:
        result = build_site(args)
    except BuildError as exc:
        print(exc, file=sys.stderr)
        return 1
    elapsed = time.perf_counter() - start
    print(f"Rendered {result.rendered} articles ({result.failed} failed) in {elapsed:.2f}s.")
    return 0


def run() -> None:
    sys.exit(main())
