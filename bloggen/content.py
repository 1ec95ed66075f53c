from __future__ import annotations

import datetime as dt
import posixpath
import re
from pathlib import Path, PurePosixPath

import markdown

from .utils import join_url

YEAR_RE = re.compile(r"^\d{4}$")
MONTH_RE = re.compile(r"^\d{2}$")
IMAGE_START = "!["
ABSOLUTE_URL_PREFIXES = ("http://", "https://", "//")
ARTICLE_DATE_FMT = "%B %Y"


def parse_article_date(dest_rel: PurePosixPath) -> dt.date:
    """Read the publish month from a ``<year>/<month>/...`` path."""
    parts = PurePosixPath(dest_rel).parts
    if len(parts) < 3:
        raise ValueError(f"parse time from path: {dest_rel} does not start with <year>/<month>/")
    year, month = parts[0], parts[1]
    if not YEAR_RE.match(year) or not MONTH_RE.match(month):
        raise ValueError(f"parse time from path: bad year/month {year!r}/{month!r}")
    try:
        return dt.datetime.strptime(f"{month}/{year}", "%m/%Y").date()
    except ValueError as exc:
        raise ValueError(f"parse time from path: {exc}") from exc


def format_article_date(value: dt.date) -> str:
    return value.strftime(ARTICLE_DATE_FMT)


def extract_description(text: str) -> str:
    return text.split("\n", 1)[0]


def find_hero_image(text: str, dest_rel: PurePosixPath, site_base: str) -> str:
    """Return the absolute URL of the first markdown image line, or ``""``."""
    for line in text.splitlines():
        line = line.strip()
        if not line.startswith(IMAGE_START):
            continue
        if "](" not in line:
            return ""
        url = line.split("](", 1)[1].split(")", 1)[0].strip()
        if not url:
            return ""
        if url.startswith(ABSOLUTE_URL_PREFIXES):
            return url
        folder = posixpath.dirname(PurePosixPath(dest_rel).as_posix())
        return join_url(site_base, posixpath.normpath(posixpath.join(folder, url.lstrip("/"))))
    return ""


def derive_title(src: Path) -> str:
    return Path(src).stem.replace("-", " ")


def render_markdown(text: str) -> str:
    return markdown.markdown(text)
