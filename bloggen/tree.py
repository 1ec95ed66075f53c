from __future__ import annotations

import shutil
from pathlib import Path, PurePosixPath

ARTICLE_SUFFIX = ".md"


def is_hidden(rel: PurePosixPath) -> bool:
    return rel.name.startswith(".")


def copy_file(src: Path, dest: Path) -> int:
    if not src.is_file():
        raise OSError(f"{src} is not a regular file")
    dest.parent.mkdir(parents=True, exist_ok=True)
    with src.open("rb") as source, dest.open("wb") as destination:
        shutil.copyfileobj(source, destination)
        return destination.tell()


def walk_source(source_root: Path, dest_root: Path) -> dict[Path, PurePosixPath]:
    """Copy assets into ``dest_root`` and return the markdown articles found.

    The result maps each article's source path to its path relative to
    ``source_root``. Dotfiles are ignored; dot-directories are still
    walked.
    """
    if not source_root.is_dir():
        raise FileNotFoundError(f"Articles directory not found: {source_root}")
    articles = {}
    for path in sorted(source_root.rglob("*"), key=lambda p: p.as_posix()):
        rel = PurePosixPath(path.relative_to(source_root).as_posix())
        if is_hidden(rel) or path.is_dir():
            continue
        if path.suffix == ARTICLE_SUFFIX:
            articles[path] = rel
            continue
        copy_file(path, dest_root / rel)
    return articles


def article_destination(rel: PurePosixPath) -> PurePosixPath:
    name = rel.name[: -len(ARTICLE_SUFFIX)] + ".html"
    return rel.parent / name.lower()
