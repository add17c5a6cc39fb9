"""Caller-owned slug -> content path index."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any, Iterable, Optional
from urllib.parse import unquote

import yaml

from text_utils import slugify, strip_markdown_extension

logger = logging.getLogger(__name__)


_INDEX_NAMES = frozenset(("index", "readme"))


@dataclass
class NavigationEntry:
    path: str
    slug: Optional[str] = None


def load_navigation_yaml(yaml_path: Path) -> list[NavigationEntry]:
    """Read ``[{path, slug?}]`` rows.

    A missing file or a document that is not a list yields ``[]``; invalid
    YAML raises ``yaml.YAMLError``.
    """
    if not yaml_path.exists():
        return []

    loaded: Any = yaml.safe_load(yaml_path.read_text(encoding="utf-8"))
    if not isinstance(loaded, list):
        return []

    entries: list[NavigationEntry] = []
    for row in loaded:
        if not isinstance(row, dict):
            continue
        path_value = str(row.get("path") or "").strip()
        if not path_value:
            continue
        slug_value = row.get("slug")
        entries.append(
            NavigationEntry(
                path=path_value,
                slug=normalize_slug(str(slug_value)) if slug_value is not None else None,
            )
        )
    return entries


def path_to_slug(path: str, root: str = "") -> str:
    """Derive the URL slug of a content file.

    ``public/content/Getting Started/Install.mdx`` with root ``public/content``
    becomes ``getting-started/install``; ``index``/``README`` files map to their
    directory.
    """
    relative = path.strip().replace("\\", "/").strip("/")
    root = root.strip().replace("\\", "/").strip("/")
    if root and (relative == root or relative.startswith(root + "/")):
        relative = relative[len(root):].lstrip("/")

    segments = [segment for segment in strip_markdown_extension(relative).split("/") if segment]
    if segments and segments[-1].lower() in _INDEX_NAMES:
        segments.pop()
    return "/".join(slug for slug in (slugify(segment) for segment in segments) if slug)


def normalize_slug(slug: str) -> str:
    parts = [part for part in unquote(slug).strip().split("/") if part and part != "."]
    return "/".join(parts)


class SlugIndex:
    """Maps slugs to content paths.

    The index is empty until :meth:`build` (or :meth:`build_from_navigation`)
    runs, and stays as built until :meth:`invalidate`. Nothing else mutates it.
    """

    def __init__(self) -> None:
        self._by_slug: Optional[dict[str, str]] = None

    @property
    def is_built(self) -> bool:
        return self._by_slug is not None

    def __len__(self) -> int:
        return len(self._by_slug or {})

    def build(self, paths: Iterable[str], root: str = "") -> "SlugIndex":
        """Index ``paths``; on a slug collision the first path wins."""
        by_slug: dict[str, str] = {}
        for path in paths:
            self._add(by_slug, path_to_slug(path, root), path)
        self._by_slug = by_slug
        logger.debug(f"Slug index built with {len(by_slug)} entries")
        return self

    def build_from_navigation(self, yaml_path: Path, root: str = "") -> "SlugIndex":
        """Index the entries of a navigation file; explicit slugs override derived ones."""
        by_slug: dict[str, str] = {}
        for entry in load_navigation_yaml(yaml_path):
            slug = entry.slug if entry.slug is not None else path_to_slug(entry.path, root)
            self._add(by_slug, slug, entry.path)
        self._by_slug = by_slug
        logger.debug(f"Slug index built from {yaml_path} with {len(by_slug)} entries")
        return self

    def resolve(self, slug: str) -> Optional[str]:
        """Return the content path for ``slug`` or None."""
        if self._by_slug is None:
            raise RuntimeError("SlugIndex.resolve() called before build()")
        return self._by_slug.get(normalize_slug(slug))

    def slugs(self) -> list[str]:
        return sorted(self._by_slug or {})

    def invalidate(self) -> None:
        self._by_slug = None

    @staticmethod
    def _add(by_slug: dict[str, str], slug: str, path: str) -> None:
        existing = by_slug.get(slug)
        if existing is not None:
            logger.warning(f"Slug '{slug}' of {path} already maps to {existing}; keeping the first")
            return
        by_slug[slug] = path
