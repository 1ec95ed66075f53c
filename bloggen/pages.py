from __future__ import annotations

import datetime as dt
import html
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Mapping

from .content import (
    derive_title,
    extract_description,
    find_hero_image,
    format_article_date,
    parse_article_date,
    render_markdown,
)
from .render import Templates, build_category_list, write_text
from .tree import article_destination
from .utils import rfc822_date


@dataclass(frozen=True)
class BuildContext:
    """Everything an article job reads. Built once before rendering starts."""

    version: str
    categories: Mapping[str, Mapping]
    templates: Templates
    dest_root: Path
    site_base: str
    category_html: str

    @classmethod
    def create(
        cls,
        version: str,
        categories: Mapping[str, Mapping],
        templates: Templates,
        dest_root: Path,
        site_base: str,
    ) -> "BuildContext":
        return cls(
            version=version,
            categories=categories,
            templates=templates,
            dest_root=dest_root,
            site_base=site_base,
            category_html=build_category_list(categories, site_base),
        )


@dataclass(frozen=True)
class ArticleFailure:
    src: Path
    error: Exception

    def __str__(self) -> str:
        return f"{self.src}: {self.error}"


def render_article(ctx: BuildContext, dest_rel: PurePosixPath, src: Path) -> Path:
    article_date = parse_article_date(dest_rel)
    text = src.read_bytes().decode("utf-8")
    context = {
        "version": html.escape(ctx.version),
        "last_updated": html.escape(rfc822_date(dt.datetime.now().astimezone())),
        "categories": ctx.category_html,
        "path": html.escape(dest_rel.as_posix()),
        "article_date": html.escape(format_article_date(article_date)),
        "title": html.escape(derive_title(src)),
        "description": html.escape(extract_description(text)),
        "image_url": html.escape(find_hero_image(text, dest_rel, ctx.site_base)),
        "html": render_markdown(text),
    }
    page = ctx.templates.render(context)
    dest = ctx.dest_root / dest_rel
    write_text(dest, page)
    return dest


def build_articles(
    ctx: BuildContext, articles: Mapping[Path, PurePosixPath], workers: int = 1
) -> tuple[list[Path], list[ArticleFailure]]:
    """Render every article, returning the written pages and the failures.

    A failing article is reported and skipped; the others still render.
    """
    jobs = [(src, article_destination(rel)) for src, rel in sorted(articles.items())]
    written: list[Path] = []
    failures: list[ArticleFailure] = []
    if not jobs:
        return written, failures

    max_workers = max(1, min(int(workers or 1), len(jobs)))
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(render_article, ctx, dest_rel, src): (src, dest_rel) for src, dest_rel in jobs}
        for future in as_completed(futures):
            src, dest_rel = futures[future]
            try:
                written.append(future.result())
            except Exception as exc:
                failure = ArticleFailure(src=src, error=exc)
                failures.append(failure)
                print(failure, file=sys.stderr)
            else:
                print(dest_rel.as_posix())
    written.sort()
    failures.sort(key=lambda failure: failure.src)
    return written, failures
