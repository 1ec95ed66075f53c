from __future__ import annotations

import json
from pathlib import Path

import pytest

LAYOUT = """<!doctype html>
<html>
<head>
<title>{{title}} - xbar</title>
<meta name="description" content="{{description}}">
<meta property="og:image" content="{{image_url}}">
</head>
<body>
<nav><ul>{{categories}}</ul></nav>
{{content}}
<footer>xbar {{version}} &middot; updated {{last_updated}}</footer>
</body>
</html>
"""

ARTICLE = """<article data-path="{{path}}">
<h1>{{title}}</h1>
<time>{{article_date}}</time>
{{html}}
</article>
"""

CATEGORIES = {
    "Categories": [
        {"path": "dev", "text": "Dev", "children": []},
        {"path": "aws", "text": "AWS"},
    ]
}


@pytest.fixture
def site(tmp_path: Path) -> dict:
    articles = tmp_path / "articles"
    templates = tmp_path / "templates"
    output = tmp_path / "public" / "docs"
    categories = output / "plugins" / "categories.json"

    templates.mkdir()
    (templates / "_layout.html").write_text(LAYOUT, encoding="utf-8")
    (templates / "article.html").write_text(ARTICLE, encoding="utf-8")
    categories.parent.mkdir(parents=True)
    categories.write_text(json.dumps(CATEGORIES), encoding="utf-8")

    post_dir = articles / "2023" / "04"
    post_dir.mkdir(parents=True)
    (post_dir / "My-Great-Post.md").write_text(
        "Write plugins in any language.\n\n![hero](images/hero.png)\n\n# Hello\n\nSome *text*.\n",
        encoding="utf-8",
    )
    (post_dir / "images").mkdir()
    (post_dir / "images" / "hero.png").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    (articles / "2021" / "11").mkdir(parents=True)
    (articles / "2021" / "11" / "plain.md").write_text("No pictures here.\n\nJust text.\n", encoding="utf-8")
    (articles / ".DS_Store").write_bytes(b"junk")

    return {
        "root": tmp_path,
        "articles": articles,
        "templates": templates,
        "output": output,
        "categories": categories,
    }


@pytest.fixture
def argv(site: dict) -> list:
    return [
        "--config",
        str(site["root"] / "missing.toml"),
        "--articles",
        str(site["articles"]),
        "--output",
        str(site["output"]),
        "--templates",
        str(site["templates"]),
        "--categories",
        str(site["categories"]),
        "--build-workers",
        "4",
    ]
