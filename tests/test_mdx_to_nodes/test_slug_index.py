import logging
from pathlib import Path

import pytest
import yaml

from mdx_to_nodes.slug_index import SlugIndex, load_navigation_yaml, path_to_slug


def test_path_to_slug():
    assert path_to_slug("public/content/Getting Started/Install.mdx", root="public/content") == "getting-started/install"
    assert path_to_slug("guides/index.md") == "guides"
    assert path_to_slug("index.mdx") == ""
    assert path_to_slug("releases/11.5.0.mdx") == "releases/11.5.0"
    assert path_to_slug("guides/first_steps.md") == "guides/first-steps"


def test_build_and_resolve():
    index = SlugIndex().build(["guides/install.mdx", "guides/index.mdx", "help.md"])
    assert index.is_built
    assert len(index) == 3
    assert index.resolve("guides/install") == "guides/install.mdx"
    assert index.resolve("/guides/install/") == "guides/install.mdx"
    assert index.resolve("guides") == "guides/index.mdx"
    assert index.resolve("missing") is None
    assert index.slugs() == ["guides", "guides/install", "help"]


def test_collision_keeps_first_path(caplog):
    with caplog.at_level(logging.WARNING):
        index = SlugIndex().build(["a/Foo.md", "a/foo.mdx"])
    assert index.resolve("a/foo") == "a/Foo.md"
    assert "already maps to a/Foo.md" in caplog.text


def test_resolve_before_build_raises():
    with pytest.raises(RuntimeError):
        SlugIndex().resolve("x")


def test_invalidate_clears_index():
    index = SlugIndex().build(["a.md"])
    index.invalidate()
    assert not index.is_built
    assert len(index) == 0
    index.build(["b.md"])
    assert index.resolve("a") is None
    assert index.resolve("b") == "b.md"


def test_navigation_yaml(tmp_path: Path):
    nav = tmp_path / "navigation.yaml"
    nav.write_text(
        """
- path: public/content/guides/install.mdx
  slug: /setup/
- path: public/content/help.mdx
- title: no path
""".strip(),
        encoding="utf-8",
    )
    entries = load_navigation_yaml(nav)
    assert [e.slug for e in entries] == ["setup", None]

    index = SlugIndex().build_from_navigation(nav, root="public/content")
    assert index.resolve("setup") == "public/content/guides/install.mdx"
    assert index.resolve("help") == "public/content/help.mdx"


def test_navigation_yaml_missing_or_not_a_list(tmp_path: Path):
    assert load_navigation_yaml(tmp_path / "missing.yaml") == []
    other = tmp_path / "other.yaml"
    other.write_text("key: value\n", encoding="utf-8")
    assert load_navigation_yaml(other) == []


def test_navigation_yaml_invalid_raises(tmp_path: Path):
    nav = tmp_path / "nav.yaml"
    nav.write_text("[{path: a.mdx\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        load_navigation_yaml(nav)
