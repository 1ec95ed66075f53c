from __future__ import annotations

import html
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .utils import join_url

PLACEHOLDER_RE = re.compile(r"\{\{\s*([^{}]*?)\s*\}\}")
FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
LAYOUT_NAME = "_layout.html"
ARTICLE_NAME = "article.html"
CONTENT_FIELD = "content"


class TemplateError(Exception):
    pass


@dataclass(frozen=True)
class Template:
    name: str
    text: str
    fields: frozenset


@dataclass(frozen=True)
class Templates:
    """The outer page layout and the article body rendered inside it."""

    layout: Template
    article: Template

    def render(self, context: Mapping[str, str]) -> str:
        if CONTENT_FIELD in context:
            raise TemplateError(f"'{CONTENT_FIELD}' is reserved for the article body")
        content = render_template(self.article, **context)
        return render_template(self.layout, **context, content=content)


def parse_template(name: str, text: str) -> Template:
    matches = list(PLACEHOLDER_RE.finditer(text))
    # A stray "}}" is plain text, every "{{" must open a placeholder.
    if text.count("{{") != len(matches):
        raise TemplateError(f"{name}: unbalanced '{{{{'")
    fields = set()
    for match in matches:
        field = match.group(1)
        if not FIELD_RE.match(field):
            raise TemplateError(f"{name}: bad field name {field!r}")
        fields.add(field)
    return Template(name=name, text=text, fields=frozenset(fields))


def read_template(path: Path) -> Template:
    return parse_template(path.name, path.read_text(encoding="utf-8"))


def load_templates(templates_dir: Path) -> Templates:
    layout = read_template(templates_dir / LAYOUT_NAME)
    if CONTENT_FIELD not in layout.fields:
        raise TemplateError(f"{layout.name}: layout has no {{{{{CONTENT_FIELD}}}}} field")
    article = read_template(templates_dir / ARTICLE_NAME)
    return Templates(layout=layout, article=article)


def render_template(template: Template, **context: str) -> str:
    missing = sorted(template.fields - context.keys())
    if missing:
        raise TemplateError(f"{template.name}: missing template field {', '.join(missing)}")
    # One pass, so inserted values are never scanned for placeholders.
    return PLACEHOLDER_RE.sub(lambda match: context[match.group(1)], template.text)


def build_category_list(categories: Mapping[str, Mapping], root: str) -> str:
    items = []
    for path in sorted(categories):
        label = categories[path].get("text") or path
        href = join_url(root, f"plugins/{path}.html")
        items.append(f'<li><a href="{html.escape(href)}">{html.escape(str(label))}</a></li>')
    return "\n".join(items)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        handle.write(text)
