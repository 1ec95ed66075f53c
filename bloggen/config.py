from __future__ import annotations

import json
import sys
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

try:
    import tomllib as toml
except ImportError:
    try:
        import tomli as toml
    except ImportError:  # pragma: no cover - optional dependency
        toml = None

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

SITE_ROOT = Path("..") / ".." / "xbarapp.com"
DEFAULT_ARTICLES = SITE_ROOT / "articles"
DEFAULT_OUTPUT = SITE_ROOT / "public" / "docs"
DEFAULT_TEMPLATES = SITE_ROOT / "templates"
# Generated by the plugin site build; it has to exist before this tool runs.
DEFAULT_CATEGORIES = DEFAULT_OUTPUT / "plugins" / "categories.json"
DEFAULT_SITE_BASE = "https://xbarapp.com/docs/"
VERSION_FILE = Path(__file__).with_name(".version")


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        if toml is None:
            print("TOML config requires tomllib (Python 3.11+) or tomli.", file=sys.stderr)
            sys.exit(1)
        try:
            data = toml.loads(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if not isinstance(data, dict):
            print(f"TOML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        if yaml is None:
            print("YAML config requires PyYAML.", file=sys.stderr)
            sys.exit(1)
        try:
            data = yaml.safe_load(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def load_version(path: Path = VERSION_FILE) -> str:
    return path.read_text(encoding="utf-8").strip()


def load_categories(path: Path) -> Mapping[str, Mapping]:
    """Load the category index keyed by category path.

    The file is produced by the plugin site build and looks like
    ``{"Categories": [{"path": "...", ...}]}``. Any problem reading or
    decoding it is raised to the caller.
    """
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict) or not isinstance(payload.get("Categories"), list):
        raise ValueError(f"{path}: expected a 'Categories' list")
    categories = {}
    for category in payload["Categories"]:
        if not isinstance(category, dict) or not isinstance(category.get("path"), str):
            raise ValueError(f"{path}: category without a 'path': {category!r}")
        categories[category["path"]] = MappingProxyType(category)
    return MappingProxyType(categories)
