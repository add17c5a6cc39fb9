#!/usr/bin/env python3
"""Hybrid document -> node tree CLI.

Subcommands:
  compile   Compile a document file to JSON ({"title", "frontmatter", "nodes"})
  sections  List the sections of a document with their kinds
  fetch     Load a document from the GitHub content repository and compile it
  slugs     List or resolve the slugs of a local content directory

Usage examples:
  bin/docs_compile_cli.py compile public/content/getting-started.mdx -o out.json
  bin/docs_compile_cli.py --mixed-threshold 3 sections public/content/help.mdx
  bin/docs_compile_cli.py fetch --owner acme --repo docs --path getting-started.mdx --branch draft
  bin/docs_compile_cli.py slugs public/content --resolve guides/install
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import yaml

# 스크립트 위치 기반 경로 상수
_SCRIPT_DIR = Path(__file__).resolve().parent   # bin/

# Ensure bin/ is on sys.path so local package imports resolve without PYTHONPATH
if str(_SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(_SCRIPT_DIR))

from content_source import ContentSourceError, GitHubContentClient, LocalContentSource, SourceConfig
from mdx_to_nodes import ParserConfig, SlugIndex, compile_sections, nodes_to_list, parse_document
from text_utils import first_line


def _compile_payload(text: str, config: ParserConfig) -> dict[str, Any]:
    document = parse_document(text, config)
    nodes = compile_sections(document, config)
    return {
        "title": document.title,
        "frontmatter": document.frontmatter,
        "nodes": nodes_to_list(nodes),
    }


def _write_json(payload: dict[str, Any], output: Optional[Path], label: str) -> None:
    rendered = json.dumps(payload, ensure_ascii=False, indent=2, default=str) + "\n"
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        print(f"[{label}] wrote: {output}")
    else:
        print(rendered, end="")


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compile hybrid Markdown/component documents into node trees",
    )
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Set the logging level (default: %(default)s)")
    parser.add_argument("--mixed-threshold", type=int, default=None,
                        help="Prose lines allowed beside a single component before a section is mixed "
                             "(default: $DOCS_MIXED_PROSE_THRESHOLD or 0)")
    sub = parser.add_subparsers(dest="command", required=True)

    # --- compile ---
    compile_cmd = sub.add_parser("compile", help="Compile a document file to JSON")
    compile_cmd.add_argument("input", type=Path, help="Input .md/.mdx file")
    compile_cmd.add_argument("-o", "--output", type=Path, help="Output JSON file")

    # --- sections ---
    sections = sub.add_parser("sections", help="List the sections of a document")
    sections.add_argument("input", type=Path, help="Input .md/.mdx file")

    # --- fetch ---
    fetch = sub.add_parser("fetch", help="Fetch a document from GitHub and compile it")
    fetch.add_argument("--path", required=True, help="Content path, relative to the content root")
    fetch.add_argument("--branch", help="Branch name (default: repository default branch setting)")
    fetch.add_argument("--owner", help="Repository owner (default: $DOCS_GITHUB_OWNER)")
    fetch.add_argument("--repo", help="Repository name (default: $DOCS_GITHUB_REPO)")
    fetch.add_argument("--base-url", default=SourceConfig.base_url, help="GitHub API base URL (default: %(default)s)")
    fetch.add_argument("-o", "--output", type=Path, help="Output JSON file")

    # --- slugs ---
    slugs = sub.add_parser("slugs", help="List or resolve slugs of a local content directory")
    slugs.add_argument("content_dir", type=Path, help="Content directory")
    slugs.add_argument("--navigation", type=Path, help="Navigation YAML ([{path, slug}]) to index instead")
    slugs.add_argument("--resolve", help="Print only the path of this slug")

    return parser


# ---------------------------------------------------------------------------
# Subcommand runners
# ---------------------------------------------------------------------------


def _run_compile(args: argparse.Namespace, config: ParserConfig) -> int:
    if not args.input.exists():
        print(f"Error: input file not found: {args.input}", file=sys.stderr)
        return 2
    text = args.input.read_text(encoding="utf-8")
    _write_json(_compile_payload(text, config), args.output, "compile")
    return 0


def _run_sections(args: argparse.Namespace, config: ParserConfig) -> int:
    if not args.input.exists():
        print(f"Error: input file not found: {args.input}", file=sys.stderr)
        return 2
    document = parse_document(args.input.read_text(encoding="utf-8"), config)
    for section in document.sections:
        print(f"{section.source_index}\t{section.kind}\t{first_line(section.raw_text)}")
    return 0


def _run_fetch(args: argparse.Namespace, config: ParserConfig) -> int:
    source_config = SourceConfig(base_url=args.base_url, owner=args.owner, repo=args.repo)
    client = GitHubContentClient(source_config, logging.getLogger(__name__))
    try:
        text = client.get_text(args.path, args.branch)
    except ContentSourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    _write_json(_compile_payload(text, config), args.output, "fetch")
    return 0


def _run_slugs(args: argparse.Namespace) -> int:
    index = SlugIndex()
    if args.navigation:
        if not args.navigation.exists():
            print(f"Error: navigation file not found: {args.navigation}", file=sys.stderr)
            return 2
        try:
            index.build_from_navigation(args.navigation)
        except yaml.YAMLError as e:
            print(f"Error: invalid navigation file {args.navigation}: {e}", file=sys.stderr)
            return 1
    else:
        try:
            paths = LocalContentSource(args.content_dir).list_markdown_files()
        except ContentSourceError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        index.build(paths)

    if args.resolve is not None:
        path = index.resolve(args.resolve)
        if path is None:
            print(f"Error: unknown slug: {args.resolve}", file=sys.stderr)
            return 1
        print(path)
        return 0

    for slug in index.slugs():
        print(f"{slug or '/'}\t{index.resolve(slug)}")
    return 0


# ---------------------------------------------------------------------------
# main dispatch
# ---------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        stream=sys.stderr
    )
    config = ParserConfig(mixed_prose_threshold=args.mixed_threshold)

    if args.command == "compile":
        return _run_compile(args, config)
    if args.command == "sections":
        return _run_sections(args, config)
    if args.command == "fetch":
        return _run_fetch(args, config)
    if args.command == "slugs":
        return _run_slugs(args)
    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
